from .exceptions import (
    DbException,
    DuplicateKeyError,
    InvalidArgumentError,
    TupleNotFoundError,
    SpaceNotFoundError,
    SpaceDisabledError,
    ConfigError,
    ParsingException,
)
from .tuple import Tuple, RecordId, KeyBuilder, FieldUpdate, UpdateOperator
from .types import FieldType, Field

__all__ = [
    "DbException",
    "DuplicateKeyError",
    "InvalidArgumentError",
    "TupleNotFoundError",
    "SpaceNotFoundError",
    "SpaceDisabledError",
    "ConfigError",
    "ParsingException",
    "Tuple",
    "RecordId",
    "KeyBuilder",
    "FieldUpdate",
    "UpdateOperator",
    "FieldType",
    "Field",
]
