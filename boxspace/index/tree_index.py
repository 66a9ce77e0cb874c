import bisect
from typing import Iterator, List, Optional

from ..core.exceptions import DuplicateKeyError
from ..core.tuple import Tuple
from .index import Index
from .index_spec import IndexSpec

# sentinels bracketing every real sequence number within a key group
_BEFORE_ALL = -1
_AFTER_ALL = float("inf")


class TreeIndex(Index):
    """
    Ordered index over composite keys.

    Entries are kept in a sorted list of (key, sequence) pairs with the
    tuples in a parallel list; lookups are binary searches. Ordering by
    sequence inside a key group keeps tuples sharing a key in insertion
    order, which is what a non-unique index returns for that key.
    """

    def __init__(self, index_no: int, spec: IndexSpec):
        super().__init__(index_no, spec)
        self._entries: list[tuple[tuple, int]] = []
        self._tuples: list[Tuple] = []

    def find_equal(self, key: tuple) -> List[Tuple]:
        start = bisect.bisect_left(self._entries, (key, _BEFORE_ALL))
        end = bisect.bisect_right(self._entries, (key, _AFTER_ALL), lo=start)
        return self._tuples[start:end]

    def find_range(self, min_key: Optional[tuple], max_key: Optional[tuple],
                   include_min: bool = True, include_max: bool = True,
                   limit: Optional[int] = None, reverse: bool = False) -> List[Tuple]:
        if min_key is None:
            start = 0
        elif include_min:
            start = bisect.bisect_left(self._entries, (min_key, _BEFORE_ALL))
        else:
            start = bisect.bisect_right(self._entries, (min_key, _AFTER_ALL))

        if max_key is None:
            end = len(self._entries)
        elif include_max:
            end = bisect.bisect_right(self._entries, (max_key, _AFTER_ALL))
        else:
            end = bisect.bisect_left(self._entries, (max_key, _BEFORE_ALL))

        if end <= start:
            return []

        if reverse:
            if limit is not None:
                start = max(start, end - limit)
            return self._tuples[start:end][::-1]

        if limit is not None:
            end = min(end, start + limit)
        return self._tuples[start:end]

    def insert_entry(self, key: tuple, tuple_obj: Tuple) -> None:
        if self.unique and self.contains_key(key):
            raise DuplicateKeyError(self.index_no, key)

        entry = (key, tuple_obj.get_record_id().get_sequence())
        position = bisect.bisect_right(self._entries, entry)
        self._entries.insert(position, entry)
        self._tuples.insert(position, tuple_obj)

    def delete_entry(self, key: tuple, tuple_obj: Tuple) -> bool:
        entry = (key, tuple_obj.get_record_id().get_sequence())
        position = bisect.bisect_left(self._entries, entry)
        if position < len(self._entries) and self._entries[position] == entry:
            del self._entries[position]
            del self._tuples[position]
            return True
        return False

    def __iter__(self) -> Iterator[Tuple]:
        return iter(list(self._tuples))

    def __len__(self) -> int:
        return len(self._entries)
