from minirecord.associations import BelongsTo, HasMany, HasOneThrough
from minirecord.attributes import AttributeStore, ColumnAttribute
from minirecord.builder import QueryBuilder
from minirecord.errors import ConfigurationError, RecordStateError, UnknownAttributeError
from minirecord.mapper import RecordMapper
from minirecord.registry import AssociationRegistry, SchemaRegistry, TypeRegistry
from minirecord.resolver import AssociationResolver


def _is_data_descriptor(cls, name):
    for klass in cls.__mro__:
        if name in klass.__dict__:
            return hasattr(type(klass.__dict__[name]), "__set__")
    return False


class MiniRecord:
    """Base class for models. One subclass per table.

        class Cat(MiniRecord):
            owner = BelongsTo(class_name="Human")

        MiniRecord.bind(DatabaseEngine("cats.sqlite"))
        Cat.finalize()
        Cat.where(name="Haskell")
    """

    primary_key = "id"

    _engine = None
    _abstract = True
    _query_builder = QueryBuilder()
    _record_mapper = RecordMapper()
    _association_resolver = AssociationResolver(_query_builder, _record_mapper)
    _schema_registry = SchemaRegistry()
    _association_registry = AssociationRegistry()
    _type_registry = TypeRegistry()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        meta_cls = cls.__dict__.get("Meta")
        meta_attrs = {}
        if meta_cls:
            for attr in dir(meta_cls):
                if not attr.startswith('_'):
                    meta_attrs[attr] = getattr(meta_cls, attr)

        cls._abstract = meta_attrs.get("abstract", False)
        if cls._abstract:
            return

        if "table_name" in meta_attrs:
            cls.set_table_name(meta_attrs["table_name"])
        MiniRecord._type_registry.register(cls)

    def __init__(self, params=None, **kwargs):
        self._init_attributes()
        params = dict(params or {}, **kwargs)
        columns = type(self).columns()
        for key, value in params.items():
            if key not in columns:
                raise UnknownAttributeError(type(self).__name__, key)
            self._write_attribute(key, value)

    def __repr__(self):
        pk_val = self._attributes.get(self.primary_key)
        return f"<{self.__class__.__name__}({self.primary_key}={pk_val if pk_val is not None else 'New'})>"

    def _init_attributes(self):
        object.__setattr__(self, '_attributes', AttributeStore())

    def _write_attribute(self, name, value):
        if isinstance(getattr(type(self), name, None), ColumnAttribute):
            setattr(self, name, value)
        else:
            self._attributes.set(name, value)

    def __getattr__(self, name):
        # only reached before finalize() has installed the column accessors
        cls = type(self)
        if not name.startswith('_') and cls._schema_registry.is_cached(cls) and name in cls.columns():
            return self._attributes.get(name)
        raise AttributeError(f"'{cls.__name__}' object has no attribute '{name}'")

    def __setattr__(self, name, value):
        cls = type(self)
        if name.startswith('_') or _is_data_descriptor(cls, name):
            object.__setattr__(self, name, value)
            return
        if name not in cls.columns():
            raise UnknownAttributeError(cls.__name__, name)
        self._attributes.set(name, value)

    # -- declaration ---------------------------------------------------------

    @classmethod
    def bind(cls, engine):
        cls._engine = engine
        return engine

    @classmethod
    def engine(cls):
        if cls._engine is None:
            raise ConfigurationError(f"{cls.__name__} is not bound to a DatabaseEngine")
        return cls._engine

    @classmethod
    def set_table_name(cls, table_name):
        cls._schema_registry.set_table_name(cls, table_name)

    @classmethod
    def table_name(cls):
        return cls._schema_registry.table_name_for(cls)

    @classmethod
    def columns(cls):
        if cls._abstract:
            raise ConfigurationError(f"{cls.__name__} is abstract and has no table")
        return cls._schema_registry.columns_for(cls, cls._engine)

    @classmethod
    def finalize(cls):
        """Discover columns and install one accessor per column. Call last in a model's declaration."""
        for column in cls.columns():
            if not hasattr(cls, column):
                setattr(cls, column, ColumnAttribute(column))
            elif not isinstance(getattr(cls, column), ColumnAttribute):
                raise ConfigurationError(
                    f"column '{column}' of {cls.table_name()} clashes with {cls.__name__}.{column}"
                )
        MiniRecord._type_registry.register(cls)
        return cls

    @classmethod
    def belongs_to(cls, name, **options):
        return cls._declare(name, BelongsTo(name, **options))

    @classmethod
    def has_many(cls, name, **options):
        return cls._declare(name, HasMany(name, **options))

    @classmethod
    def has_one_through(cls, name, through_name, source_name):
        return cls._declare(name, HasOneThrough(name, through_name, source_name))

    @classmethod
    def _declare(cls, name, descriptor):
        setattr(cls, name, descriptor)
        descriptor.__set_name__(cls, name)
        return descriptor

    @classmethod
    def associations(cls):
        return dict(cls._association_registry.for_model(cls))

    @classmethod
    def association(cls, name):
        return cls._association_registry.get(cls, name)

    # -- queries -------------------------------------------------------------

    @classmethod
    def all(cls):
        sql, params = cls._query_builder.build_select_all(cls.table_name())
        rows = cls.engine().execute(sql, params)
        return cls._record_mapper.hydrate_all(cls, rows)

    @classmethod
    def find(cls, pk):
        return cls._find_by(cls.primary_key, pk)

    @classmethod
    def _find_by(cls, column, value):
        sql, params = cls._query_builder.build_select_by_key(cls.table_name(), column, value)
        rows = cls.engine().execute(sql, params)
        if not rows:
            return None
        return cls._record_mapper.hydrate(cls, rows[0])

    @classmethod
    def where(cls, predicates=None, **kwargs):
        """Rows whose columns equal every given value. No predicates returns every row."""
        predicates = dict(predicates or {}, **kwargs)
        columns = cls.columns()
        for key in predicates:
            if key not in columns:
                raise UnknownAttributeError(cls.__name__, key)

        sql, params = cls._query_builder.build_select_where(cls.table_name(), predicates)
        rows = cls.engine().execute(sql, params)
        return cls._record_mapper.hydrate_all(cls, rows)

    # -- persistence ---------------------------------------------------------

    @property
    def attributes(self):
        return self._attributes

    def attribute_values(self):
        return [self._attributes.get(col) for col in type(self).columns()]

    def to_dict(self):
        return {col: self._attributes.get(col) for col in type(self).columns()}

    def is_new_record(self):
        return self._attributes.get(self.primary_key) is None

    def insert(self):
        cls = type(self)
        if not self.is_new_record():
            raise RecordStateError(
                f"cannot insert {cls.__name__}: {self.primary_key} is already set to "
                f"{self._attributes.get(self.primary_key)!r}"
            )
        sql, params = cls._query_builder.build_insert(cls.table_name(), cls.columns(), self.attribute_values())
        new_id = cls.engine().execute_insert(sql, params)
        self._attributes.set(self.primary_key, new_id)
        return self

    def update(self):
        cls = type(self)
        if self.is_new_record():
            raise RecordStateError(f"cannot update {cls.__name__}: {self.primary_key} is not set")
        sql, params = cls._query_builder.build_update(
            cls.table_name(), cls.columns(), self.attribute_values(),
            self.primary_key, self._attributes.get(self.primary_key)
        )
        cls.engine().execute(sql, params)
        return self

    def save(self):
        if self.is_new_record():
            return self.insert()
        return self.update()

    def destroy(self):
        cls = type(self)
        if self.is_new_record():
            raise RecordStateError(f"cannot destroy {cls.__name__}: {self.primary_key} is not set")
        sql, params = cls._query_builder.build_delete(
            cls.table_name(), self.primary_key, self._attributes.get(self.primary_key)
        )
        cls.engine().execute(sql, params)
        return self

    def reload(self):
        cls = type(self)
        if self.is_new_record():
            raise RecordStateError(f"cannot reload {cls.__name__}: {self.primary_key} is not set")
        fresh = cls.find(self._attributes.get(self.primary_key))
        if fresh is None:
            raise RecordStateError(
                f"cannot reload {cls.__name__}: no row with {self.primary_key}="
                f"{self._attributes.get(self.primary_key)!r}"
            )
        for name, value in fresh.attributes.items():
            self._attributes.set(name, value)
        return self
