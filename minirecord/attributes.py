class AttributeStore:
    """Column values of one model instance, in assignment order.

    An unset column and a column holding SQL NULL both read as ``None``;
    use ``has`` (or ``in``) to tell them apart.
    """

    def __init__(self):
        self._values = {}

    def get(self, column, default=None):
        return self._values.get(column, default)

    def set(self, column, value):
        self._values[column] = value

    def has(self, column):
        return column in self._values

    def items(self):
        return self._values.items()

    def as_dict(self):
        return dict(self._values)

    def __contains__(self, column):
        return column in self._values

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"<AttributeStore {self._values}>"


class ColumnAttribute:
    """Getter/setter pair for one column, backed by the instance's AttributeStore."""

    def __init__(self, column):
        self.column = column

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return instance._attributes.get(self.column)

    def __set__(self, instance, value):
        instance._attributes.set(self.column, value)

    def __repr__(self):
        return f"<ColumnAttribute {self.column}>"
