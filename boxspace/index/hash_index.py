from typing import Iterator, List, Optional

from ..core.exceptions import DuplicateKeyError, InvalidArgumentError
from ..core.tuple import Tuple
from .index import Index
from .index_spec import IndexSpec


class HashIndex(Index):
    """
    Unique point-lookup index backed by a dict.

    Iteration follows insertion order of the current entries.
    """

    def __init__(self, index_no: int, spec: IndexSpec):
        if not spec.unique:
            raise ValueError("HASH indexes must be unique")
        super().__init__(index_no, spec)
        self._buckets: dict[tuple, Tuple] = {}

    def find_equal(self, key: tuple) -> List[Tuple]:
        found = self._buckets.get(key)
        return [found] if found is not None else []

    def find_range(self, min_key: Optional[tuple], max_key: Optional[tuple],
                   include_min: bool = True, include_max: bool = True,
                   limit: Optional[int] = None, reverse: bool = False) -> List[Tuple]:
        raise InvalidArgumentError(
            f"Index {self.index_no} is a HASH index and does not support range scans")

    def insert_entry(self, key: tuple, tuple_obj: Tuple) -> None:
        if key in self._buckets:
            raise DuplicateKeyError(self.index_no, key)
        self._buckets[key] = tuple_obj

    def delete_entry(self, key: tuple, tuple_obj: Tuple) -> bool:
        if self._buckets.get(key) is tuple_obj:
            del self._buckets[key]
            return True
        return False

    def __iter__(self) -> Iterator[Tuple]:
        return iter(list(self._buckets.values()))

    def __len__(self) -> int:
        return len(self._buckets)
