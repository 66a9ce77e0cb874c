from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from ..core.tuple import Tuple, KeyBuilder
from .index_spec import IndexSpec


class Index(ABC):
    """
    Abstract base class for in-memory indexes over a space.

    An Index provides:
    1. Key-based lookup: find tuples for a given composite key
    2. Range queries: find tuples for key ranges (ordered indexes only)
    3. Iteration over all stored tuples
    4. Maintenance: insert/delete entries

    Keys are composite keys built by the index's KeyBuilder.

    Implementations:
    - TreeIndex: ordered index, unique or non-unique
    - HashIndex: unique point-lookup index
    """

    def __init__(self, index_no: int, spec: IndexSpec):
        """
        Create an index.

        Args:
            index_no: Position of this index within its space
            spec: Resolved index declaration
        """
        self.index_no = index_no
        self.spec = spec
        self.key_builder = KeyBuilder(spec.key_fields)

    @property
    def unique(self) -> bool:
        return self.spec.unique

    def key_of(self, tuple_obj: Tuple) -> tuple:
        """Composite key of a tuple under this index."""
        return self.key_builder.from_tuple(tuple_obj)

    @abstractmethod
    def find_equal(self, key: tuple) -> List[Tuple]:
        """
        Find all tuples with the given key.

        Returns:
            Matching tuples; at most one for unique indexes, insertion
            order for non-unique ones. Empty if the key is absent.
        """
        pass

    @abstractmethod
    def find_range(self, min_key: Optional[tuple], max_key: Optional[tuple],
                   include_min: bool = True, include_max: bool = True,
                   limit: Optional[int] = None, reverse: bool = False) -> List[Tuple]:
        """
        Find all tuples with keys in the given range.

        Args:
            min_key: Minimum key (None for no lower bound)
            max_key: Maximum key (None for no upper bound)
            include_min: Whether to include min_key in results
            include_max: Whether to include max_key in results
            limit: Maximum number of tuples to return
            reverse: Return tuples in descending key order
        """
        pass

    @abstractmethod
    def insert_entry(self, key: tuple, tuple_obj: Tuple) -> None:
        """
        Insert a key-tuple pair.

        Raises:
            DuplicateKeyError: If the index is unique and the key exists
        """
        pass

    @abstractmethod
    def delete_entry(self, key: tuple, tuple_obj: Tuple) -> bool:
        """
        Delete a key-tuple pair.

        Returns:
            True if the entry was present
        """
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[Tuple]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def contains_key(self, key: tuple) -> bool:
        return bool(self.find_equal(key))

    def get_statistics(self) -> dict:
        """
        Get statistics about the index.
        """
        return {
            "index_no": self.index_no,
            "index_type": self.spec.type.value,
            "unique": self.unique,
            "key_fields": [kf.fieldno for kf in self.spec.key_fields],
            "entries": len(self),
        }

    def __str__(self) -> str:
        kind = "unique" if self.unique else "non-unique"
        return f"{type(self).__name__}(#{self.index_no}, {kind}, {len(self)} entries)"

    def __repr__(self) -> str:
        return self.__str__()
