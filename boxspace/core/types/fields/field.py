from abc import ABC, abstractmethod
from typing import TypeVar, Generic
from ..type_enum import FieldType

T = TypeVar('T')


class Field(ABC, Generic[T]):
    """
    Abstract base class for all key field types.

    A field wraps a single value taken out of a tuple at an index's
    key position. Each field has:
    - A type (STR, NUM, ...)
    - A value
    - A total order, used by TREE indexes, and a hash, used by HASH indexes

    Subclasses only provide the ordering key; three-way comparison and the
    rich comparison operators are defined here on top of it.
    """

    @abstractmethod
    def get_value(self) -> T:
        """
        Get the value stored in this field.

        Returns:
            The value of the field with its appropriate type
        """
        pass

    @abstractmethod
    def get_type(self) -> FieldType:
        """
        Return the type of this field.
        """
        pass

    @abstractmethod
    def sort_key(self):
        """
        Return the value this field is ordered and hashed by.
        """
        pass

    def compare_to(self, other: 'Field') -> int:
        """
        Three-way comparison with another field of the same type.

        Returns:
            -1, 0 or 1

        Raises:
            TypeError: If other is a field of a different type
        """
        self._check_comparable(other)
        mine, theirs = self.sort_key(), other.sort_key()
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0

    def _check_comparable(self, other: object) -> None:
        if not isinstance(other, Field) or other.get_type() != self.get_type():
            raise TypeError(
                f"Cannot compare {type(self).__name__} with {type(other).__name__}")

    def __lt__(self, other: 'Field') -> bool:
        return self.compare_to(other) < 0

    def __le__(self, other: 'Field') -> bool:
        return self.compare_to(other) <= 0

    def __gt__(self, other: 'Field') -> bool:
        return self.compare_to(other) > 0

    def __ge__(self, other: 'Field') -> bool:
        return self.compare_to(other) >= 0

    def __eq__(self, other: object) -> bool:
        return (isinstance(other, Field)
                and other.get_type() == self.get_type()
                and self.sort_key() == other.sort_key())

    def __hash__(self) -> int:
        return hash((self.get_type(), self.sort_key()))

    @abstractmethod
    def __str__(self) -> str:
        """
        String representation of the field value.
        """
        pass

    @abstractmethod
    def __repr__(self) -> str:
        """
        Unambiguous string representation for debugging.
        """
        pass
