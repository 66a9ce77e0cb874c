from typing import Any, Iterator, Optional, Sequence

from .record_id import RecordId


class Tuple:
    """
    Represents a single tuple stored in a space.

    A Tuple contains:
    1. An ordered sequence of raw field values (str, bytes or int)
    2. Optional RecordId: assigned by the space when the tuple is stored

    Tuples are never mutated once built. Only key positions have a declared
    type; the remaining fields are carried as given.
    """

    ALLOWED_TYPES = (str, bytes, int)

    def __init__(self, values: Sequence[Any]):
        if isinstance(values, (str, bytes)):
            raise TypeError("Tuple values must be a sequence of fields")

        values = tuple(values)
        if not values:
            raise ValueError("Tuple must have at least one field")

        for i, value in enumerate(values):
            if isinstance(value, bool) or not isinstance(value, self.ALLOWED_TYPES):
                raise TypeError(
                    f"Field {i} has unsupported type {type(value).__name__}")

        self._values = values
        self.record_id: RecordId | None = None

    @property
    def cardinality(self) -> int:
        """Number of fields in this tuple."""
        return len(self._values)

    def num_fields(self) -> int:
        return len(self._values)

    def get_field(self, field_index: int) -> Any:
        """Get the raw value of the field at the given index."""
        if not (0 <= field_index < len(self._values)):
            raise IndexError(f"Field index {field_index} out of range")
        return self._values[field_index]

    def values(self) -> tuple:
        """Return the field values as a plain Python tuple."""
        return self._values

    def get_record_id(self) -> Optional[RecordId]:
        """Return the record id assigned at insert time (may be None)."""
        return self.record_id

    def set_record_id(self, record_id: RecordId) -> None:
        """Assign the record id. A tuple is stored at most once."""
        if self.record_id is not None:
            raise ValueError(f"Tuple already stored as {self.record_id}")
        self.record_id = record_id

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __getitem__(self, field_index: int) -> Any:
        return self._values[field_index]

    def __str__(self) -> str:
        """Tab-separated string representation."""
        return '\t'.join(str(value) for value in self._values)

    def __repr__(self) -> str:
        return f"Tuple({list(self._values)!r}, record_id={self.record_id})"

    def __eq__(self, other: object) -> bool:
        """
        Two tuples are equal if their field values are equal.
        RecordId is NOT considered for equality. A str value equals its
        UTF-8 bytes, the same way STR keys compare.
        """
        if not isinstance(other, Tuple):
            return False
        return self._canonical() == other._canonical()

    def __hash__(self) -> int:
        return hash(self._canonical())

    def _canonical(self) -> tuple:
        return tuple(value.encode("utf-8", "surrogatepass") if isinstance(value, str) else value
                     for value in self._values)
