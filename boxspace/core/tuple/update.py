from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from ..exceptions import InvalidArgumentError


class UpdateOperator(Enum):
    """Field operations applied by an in-place update."""
    SET = "set"
    ADD = "add"
    AND = "and"
    XOR = "xor"
    OR = "or"
    SPLICE = "splice"
    DELETE = "delete"
    INSERT = "insert"

    @classmethod
    def from_name(cls, name) -> 'UpdateOperator':
        if isinstance(name, UpdateOperator):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"Unknown update operator: {name}")


_ARITHMETIC = {
    UpdateOperator.ADD: lambda value, arg: value + arg,
    UpdateOperator.AND: lambda value, arg: value & arg,
    UpdateOperator.XOR: lambda value, arg: value ^ arg,
    UpdateOperator.OR: lambda value, arg: value | arg,
}


@dataclass(frozen=True)
class FieldUpdate:
    """
    One operation of an update: `op` applied to field `fieldno`.

    The argument depends on the operator:
    - SET, INSERT: the new value
    - ADD, AND, XOR, OR: an int (ADD may be negative)
    - SPLICE: (offset, length, replacement) on a str or bytes field
    - DELETE: ignored
    """
    fieldno: int
    op: UpdateOperator
    arg: Any = None

    @classmethod
    def of(cls, item) -> 'FieldUpdate':
        """Accept a FieldUpdate or a plain (fieldno, op[, arg]) sequence."""
        if isinstance(item, FieldUpdate):
            return item
        if not isinstance(item, (tuple, list)) or len(item) not in (2, 3):
            raise InvalidArgumentError(
                f"Update operation must be (fieldno, op[, arg]), got {item!r}")
        fieldno, op = item[0], item[1]
        if isinstance(fieldno, bool) or not isinstance(fieldno, int) or fieldno < 0:
            raise InvalidArgumentError(f"Update fieldno must be a non-negative int, got {fieldno!r}")
        return cls(fieldno, UpdateOperator.from_name(op), item[2] if len(item) == 3 else None)

    def apply(self, values: list) -> None:
        """Apply this operation to a list of raw field values in place."""
        if self.op == UpdateOperator.INSERT:
            if self.fieldno > len(values):
                raise InvalidArgumentError(
                    f"Cannot insert at field {self.fieldno} of a {len(values)}-field tuple")
            values.insert(self.fieldno, self.arg)
            return

        if self.fieldno >= len(values):
            raise InvalidArgumentError(
                f"Field {self.fieldno} does not exist in a {len(values)}-field tuple")

        if self.op == UpdateOperator.SET:
            values[self.fieldno] = self.arg
        elif self.op == UpdateOperator.DELETE:
            del values[self.fieldno]
        elif self.op == UpdateOperator.SPLICE:
            values[self.fieldno] = self._splice(values[self.fieldno])
        else:
            values[self.fieldno] = self._arithmetic(values[self.fieldno])

    def _arithmetic(self, value):
        if not _is_int(value):
            raise InvalidArgumentError(
                f"'{self.op.value}' needs an int in field {self.fieldno}, got {value!r}")
        if not _is_int(self.arg):
            raise InvalidArgumentError(f"'{self.op.value}' needs an int argument, got {self.arg!r}")

        result = _ARITHMETIC[self.op](value, self.arg)
        if result < 0:
            raise InvalidArgumentError(
                f"'{self.op.value}' would make field {self.fieldno} negative ({result})")
        return result

    def _splice(self, value):
        if not isinstance(value, (str, bytes)):
            raise InvalidArgumentError(
                f"'splice' needs a str or bytes field {self.fieldno}, got {value!r}")
        if not isinstance(self.arg, (tuple, list)) or len(self.arg) != 3:
            raise InvalidArgumentError(
                f"'splice' argument must be (offset, length, replacement), got {self.arg!r}")

        offset, length, replacement = self.arg
        if not (_is_int(offset) and _is_int(length)) or offset < 0 or length < 0:
            raise InvalidArgumentError(
                f"'splice' offset and length must be non-negative ints, got {offset!r}, {length!r}")
        if type(replacement) is not type(value):
            raise InvalidArgumentError(
                f"'splice' replacement must be {type(value).__name__}, got {replacement!r}")

        offset = min(offset, len(value))
        return value[:offset] + replacement + value[offset + length:]


def apply_updates(values: Sequence[Any], updates: Sequence[FieldUpdate]) -> list:
    """Apply operations in order, each seeing the result of the previous ones."""
    result = list(values)
    for update in updates:
        update.apply(result)
    return result


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
