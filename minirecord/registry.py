import logging
import threading

from minirecord.errors import ConfigurationError
from minirecord.naming import tableize

logger = logging.getLogger("MiniRecord.registry")


class _KeyedLocks:
    """One lock per key, so a slow first population of one model never blocks another."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}

    def for_key(self, key):
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock


class SchemaRegistry:
    """Table name and column list per model class.

    Columns are discovered once per class and kept for the life of the process.
    ``set_table_name`` only matters before the first ``columns_for`` call.
    """

    def __init__(self):
        self._table_names = {}
        self._columns = {}
        self._locks = _KeyedLocks()

    def set_table_name(self, model, table_name):
        self._table_names[model] = table_name

    def table_name_for(self, model):
        table_name = self._table_names.get(model)
        if table_name is None:
            table_name = tableize(model.__name__)
        return table_name

    def is_cached(self, model):
        return model in self._columns

    def columns_for(self, model, engine):
        columns = self._columns.get(model)
        if columns is not None:
            return columns

        with self._locks.for_key(model):
            columns = self._columns.get(model)
            if columns is None:
                if engine is None:
                    raise ConfigurationError(f"{model.__name__} is not bound to a DatabaseEngine")
                table_name = self.table_name_for(model)
                columns = tuple(engine.discover_columns(table_name))
                logger.debug("Discovered columns of %s (%s): %s", model.__name__, table_name, columns)
                self._columns[model] = columns
        return columns


class AssociationRegistry:
    def __init__(self):
        self._by_model = {}
        self._locks = _KeyedLocks()

    def for_model(self, model):
        associations = self._by_model.get(model)
        if associations is not None:
            return associations

        with self._locks.for_key(model):
            associations = self._by_model.get(model)
            if associations is None:
                associations = self._by_model[model] = {}
        return associations

    def add(self, model, name, descriptor):
        associations = self.for_model(model)
        with self._locks.for_key(model):
            associations[name] = descriptor
        logger.debug("Declared association %s.%s: %r", model.__name__, name, descriptor)

    def get(self, model, name):
        try:
            return self.for_model(model)[name]
        except KeyError:
            raise ConfigurationError(f"{model.__name__} has no association named '{name}'") from None


class TypeRegistry:
    """Process-wide class-name -> model class table used for late binding."""

    def __init__(self):
        self._types = {}
        self._guard = threading.Lock()

    def register(self, model):
        with self._guard:
            self._types[model.__name__] = model

    def resolve(self, class_name):
        return self._types.get(class_name)

    def clear(self):
        with self._guard:
            self._types.clear()
