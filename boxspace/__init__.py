"""
boxspace: in-memory object spaces with unique and non-unique indexes.
"""
from .core import (
    DbException,
    DuplicateKeyError,
    InvalidArgumentError,
    TupleNotFoundError,
    SpaceNotFoundError,
    SpaceDisabledError,
    ConfigError,
    ParsingException,
    Tuple,
    FieldType,
    FieldUpdate,
    UpdateOperator,
)
from .index import IndexSpec, IndexType, KeyField
from .space import IndexedSpace, SpaceState
from .catalog import SpaceRegistry, ConfigLoader, BoxConfig

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
    "FieldType",
    "FieldUpdate",
    "UpdateOperator",
    "IndexSpec",
    "IndexType",
    "KeyField",
    "IndexedSpace",
    "SpaceState",
    "SpaceRegistry",
    "ConfigLoader",
    "BoxConfig",
]
