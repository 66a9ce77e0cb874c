from .field import Field
from ..type_enum import FieldType


class StringField(Field[str]):
    """
    Field implementation for STR keys.

    Values may be given as str (encoded as UTF-8) or bytes. Ordering and
    equality are defined on the encoded bytes, so keys sort in byte
    lexicographic order and "x" equals b"x".
    """
    MAX_LENGTH_IN_BYTES = 0xFFFF

    def __init__(self, value):
        """
        Initialize string field with validation.

        Args:
            value: str or bytes

        Raises:
            TypeError: If value is None or not str/bytes
            ValueError: If the value cannot be encoded or is too long
        """
        if value is None:
            raise TypeError("StringField cannot accept None value")

        if isinstance(value, (bytes, bytearray)):
            encoded = bytes(value)
        elif isinstance(value, str):
            try:
                encoded = value.encode('utf-8')
            except UnicodeEncodeError as e:
                raise ValueError(
                    f"StringField cannot encode value as UTF-8: {e}")
        else:
            raise TypeError(
                f"StringField requires str or bytes, got {type(value).__name__}")

        if len(encoded) > self.MAX_LENGTH_IN_BYTES:
            raise ValueError(
                f"String too long: {len(encoded)} bytes > {self.MAX_LENGTH_IN_BYTES}")

        self.value = value
        self._encoded = encoded

    def get_value(self) -> str:
        """Return the value exactly as it was given."""
        return self.value

    def get_type(self) -> FieldType:
        return FieldType.STR

    def sort_key(self) -> bytes:
        return self._encoded

    def __str__(self) -> str:
        if isinstance(self.value, str):
            return self.value
        return self._encoded.decode('utf-8', errors='replace')

    def __repr__(self) -> str:
        return f"StringField({self.value!r})"
