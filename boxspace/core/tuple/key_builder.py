from typing import Any, Sequence

from ..exceptions import InvalidArgumentError
from .tuple import Tuple


class KeyBuilder:
    """
    Builds composite keys for one index.

    A composite key is a Python tuple of typed Fields, one per key field in
    declared order. Python tuple ordering then gives the lexicographic key
    order TREE indexes rely on.
    """

    def __init__(self, key_fields: Sequence):
        """
        Args:
            key_fields: objects with `fieldno` and `type` (a FieldType)
        """
        if not key_fields:
            raise ValueError("An index needs at least one key field")
        self.key_fields = tuple(key_fields)

    @property
    def arity(self) -> int:
        return len(self.key_fields)

    def from_tuple(self, tuple_obj: Tuple) -> tuple:
        """
        Extract the key of a tuple.

        Raises:
            InvalidArgumentError: If the tuple is too short or a key value
                does not fit its declared type
        """
        values = []
        for key_field in self.key_fields:
            if key_field.fieldno >= tuple_obj.cardinality:
                raise InvalidArgumentError(
                    f"Tuple of {tuple_obj.cardinality} fields has no key field {key_field.fieldno}")
            values.append(tuple_obj.get_field(key_field.fieldno))
        return self._convert(values)

    def from_values(self, values: Sequence[Any]) -> tuple:
        """
        Build a key from caller-supplied values, one per key field.

        Raises:
            InvalidArgumentError: On arity mismatch or a badly typed value
        """
        if len(values) != self.arity:
            raise InvalidArgumentError(
                f"Key has {len(values)} parts, index expects {self.arity}")
        return self._convert(values)

    def _convert(self, values: Sequence[Any]) -> tuple:
        key = []
        for key_field, value in zip(self.key_fields, values):
            try:
                key.append(key_field.type.make_field(value))
            except (TypeError, ValueError) as e:
                raise InvalidArgumentError(
                    f"Bad value for key field {key_field.fieldno} ({key_field.type.value}): {e}")
        return tuple(key)
