# MiniRecord - a small active-record style ORM
from minirecord.base import MiniRecord
from minirecord.associations import BelongsTo, HasMany, HasOneThrough
from minirecord.attributes import AttributeStore
from minirecord.builder import QueryBuilder
from minirecord.database import DatabaseEngine
from minirecord.errors import (
    MiniRecordError,
    SchemaError,
    UnknownAttributeError,
    ConfigurationError,
    RecordStateError,
)

__version__ = "0.1.0"
__all__ = [
    "MiniRecord", "BelongsTo", "HasMany", "HasOneThrough", "AttributeStore", "QueryBuilder",
    "DatabaseEngine", "MiniRecordError", "SchemaError", "UnknownAttributeError",
    "ConfigurationError", "RecordStateError",
]
