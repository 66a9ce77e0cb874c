from .field import Field
from ..type_enum import FieldType


class UnsignedField(Field[int]):
    """
    Base for fixed-width unsigned integer keys.

    Subclasses set BITS and FIELD_TYPE. Range: 0 to 2**BITS - 1.
    """

    BITS = 0
    FIELD_TYPE: FieldType = None

    def __init__(self, value):
        """
        Initialize integer field with validation.

        Raises:
            TypeError: If value is not an integer (bool is rejected too)
            ValueError: If value is out of range
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{type(self).__name__} requires int, got {type(value).__name__}")

        max_value = 2 ** self.BITS - 1
        if not (0 <= value <= max_value):
            raise ValueError(
                f"Integer value {value} out of range [0, {max_value}]")

        self.value = value

    def get_value(self) -> int:
        return self.value

    def get_type(self) -> FieldType:
        return self.FIELD_TYPE

    def sort_key(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value})"


class Num16Field(UnsignedField):
    """Unsigned 16-bit key (NUM16)."""
    BITS = 16
    FIELD_TYPE = FieldType.NUM16


class Num32Field(UnsignedField):
    """Unsigned 32-bit key (NUM)."""
    BITS = 32
    FIELD_TYPE = FieldType.NUM


class Num64Field(UnsignedField):
    """Unsigned 64-bit key (NUM64)."""
    BITS = 64
    FIELD_TYPE = FieldType.NUM64
