"""Custom exceptions for the object space system."""


class DbException(Exception):
    """Base exception for object space errors."""
    pass


class DuplicateKeyError(DbException):
    """Raised when a mutation would violate a unique index."""

    def __init__(self, index_no: int, key):
        self.index_no = index_no
        self.key = key
        rendered = ", ".join(str(field) for field in key)
        super().__init__(
            f"Duplicate key ({rendered}) exists in unique index {index_no}")


class InvalidArgumentError(DbException):
    """Raised when a caller passes a malformed key, tuple or index selector."""
    pass


class TupleNotFoundError(DbException):
    """Raised when an operation requires an existing tuple that is absent."""
    pass


class SpaceNotFoundError(DbException):
    """Raised when a space number is not configured."""
    pass


class SpaceDisabledError(DbException):
    """Raised when a configured space is accessed while disabled."""
    pass


class ConfigError(DbException):
    """Raised when a configuration is well-formed but invalid."""
    pass


class ParsingException(Exception):
    """Raised when configuration text cannot be parsed."""
    pass
