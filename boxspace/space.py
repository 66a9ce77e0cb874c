import itertools
import logging
from enum import Enum
from typing import Any, Iterator, List, Optional, Sequence

from .concurrency import ReadWriteLock
from .core.exceptions import (
    DuplicateKeyError,
    InvalidArgumentError,
    TupleNotFoundError,
)
from .core.tuple import Tuple, RecordId, FieldUpdate, apply_updates
from .index import Index, IndexSpec, build_index

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, bytes, int)


class SpaceState(Enum):
    """Lifecycle of a space."""
    UNCONFIGURED = "unconfigured"
    ACTIVE = "active"


class IndexedSpace:
    """
    A numbered collection of tuples with a fixed set of indexes.

    The space keeps every declared index consistent with its tuples:

    1. **Atomic mutations**: insert, replace, put, update and delete
       either update every index or leave all of them untouched
    2. **Unique indexes**: at most one tuple per composite key
    3. **Non-unique indexes**: tuples sharing a key are kept in insertion
       order
    4. **Isolation**: mutations hold the exclusive side of a ReadWriteLock,
       reads the shared side, so a reader never sees a tuple that is in
       some indexes but not others

    Index 0 is the primary key. Index declarations are fixed when the
    space is created; the space moves from UNCONFIGURED to ACTIVE on
    open() or on its first mutation.

    Example:
        space = IndexedSpace([
            IndexSpec.tree((0, FieldType.STR)),
            IndexSpec.tree((1, FieldType.STR), unique=False),
        ])
        space.insert(["0", "x"])
        space.select(["0", "1"])          # point lookups on index 0
        space.select("x", index=1)        # every tuple whose field 1 is "x"
    """

    MAX_INDEXES = 10

    def __init__(self, index_specs: Sequence[IndexSpec], n: int = 0,
                 cardinality: Optional[int] = None):
        """
        Create a space from its index declarations.

        Args:
            index_specs: Ordered index declarations, primary first
            n: Space number
            cardinality: Fixed number of fields every tuple must have
                (None accepts any arity that covers the key fields)

        Raises:
            ValueError: If the declarations cannot form a valid space
        """
        if not index_specs:
            raise ValueError("A space needs at least a primary index")
        if len(index_specs) > self.MAX_INDEXES:
            raise ValueError(
                f"A space supports at most {self.MAX_INDEXES} indexes, got {len(index_specs)}")
        if not index_specs[0].unique:
            raise ValueError("Primary index (index 0) must be unique")
        if cardinality is not None and cardinality <= 0:
            raise ValueError(f"Cardinality must be positive, got {cardinality}")

        self.n = n
        self.cardinality = cardinality
        self._indexes: list[Index] = [
            build_index(index_no, spec) for index_no, spec in enumerate(index_specs)
        ]
        self._state = SpaceState.UNCONFIGURED
        self._sequence = itertools.count()
        self._lock = ReadWriteLock()

    # ------------------------------------------------------------------
    # lifecycle and introspection

    @property
    def state(self) -> SpaceState:
        return self._state

    def open(self) -> 'IndexedSpace':
        """Mark the space ready to serve requests."""
        if self._state == SpaceState.UNCONFIGURED:
            self._state = SpaceState.ACTIVE
            logger.info("Space %d active with %d indexes", self.n, len(self._indexes))
        return self

    @property
    def index_count(self) -> int:
        return len(self._indexes)

    @property
    def primary(self) -> Index:
        return self._indexes[0]

    def index(self, index_no: int) -> Index:
        """Return an index by number."""
        return self._resolve_index(index_no)

    def count(self) -> int:
        """Number of tuples in the space."""
        with self._lock.shared():
            return len(self.primary)

    def __len__(self) -> int:
        return self.count()

    def iterate(self) -> List[Tuple]:
        """Snapshot of all tuples in primary key order."""
        with self._lock.shared():
            return list(self.primary)

    def __iter__(self) -> Iterator[Tuple]:
        return iter(self.iterate())

    # ------------------------------------------------------------------
    # mutations

    def insert(self, values: Sequence[Any]) -> Tuple:
        """
        Store a new tuple.

        Returns:
            The stored Tuple, with its RecordId assigned

        Raises:
            DuplicateKeyError: If any unique index already holds the key
            InvalidArgumentError: If the tuple does not fit the space
        """
        tuple_obj, keys = self._prepare(values)
        with self._lock.exclusive():
            self.open()
            self._check_unique(keys)
            self._store(tuple_obj, keys)

        logger.debug("space %d: inserted %r", self.n, tuple_obj)
        return tuple_obj

    def replace(self, values: Sequence[Any]) -> Tuple:
        """
        Replace the tuple holding the same primary key.

        Returns:
            The tuple that was replaced

        Raises:
            TupleNotFoundError: If no tuple has this primary key
            DuplicateKeyError: If the new tuple collides with another tuple
                on a unique secondary index
        """
        tuple_obj, keys = self._prepare(values)
        with self._lock.exclusive():
            self.open()
            existing = self.primary.find_equal(keys[0])
            if not existing:
                raise TupleNotFoundError(
                    f"No tuple with primary key {_render(keys[0])} in space {self.n}")
            old = existing[0]
            self._swap(old, tuple_obj, keys)

        logger.debug("space %d: replaced %r with %r", self.n, old, tuple_obj)
        return old

    def put(self, values: Sequence[Any]) -> Optional[Tuple]:
        """
        Insert a tuple, replacing the one with the same primary key if any.

        Returns:
            The replaced tuple, or None if this was a plain insert
        """
        tuple_obj, keys = self._prepare(values)
        with self._lock.exclusive():
            self.open()
            existing = self.primary.find_equal(keys[0])
            if existing:
                old = existing[0]
                self._swap(old, tuple_obj, keys)
            else:
                old = None
                self._check_unique(keys)
                self._store(tuple_obj, keys)

        logger.debug("space %d: put %r (replaced %r)", self.n, tuple_obj, old)
        return old

    def delete(self, key: Any) -> Optional[Tuple]:
        """
        Remove the tuple with the given primary key.

        Returns:
            The removed tuple, or None if the key was absent
        """
        parts = self._normalize_key(key)
        primary_key = self.primary.key_builder.from_values(parts)
        with self._lock.exclusive():
            self.open()
            existing = self.primary.find_equal(primary_key)
            if not existing:
                return None
            old = existing[0]
            self._remove(old, self._keys_of(old))

        logger.debug("space %d: deleted %r", self.n, old)
        return old

    def update(self, key: Any, ops: Sequence[Any]) -> Optional[Tuple]:
        """
        Modify the fields of the tuple with the given primary key in place.

        Args:
            key: Primary key of the tuple to update
            ops: FieldUpdate objects or (fieldno, op, arg) sequences, applied
                in order; see FieldUpdate for the operators

        Returns:
            The updated tuple, or None if the key was absent

        Raises:
            DuplicateKeyError: If the updated tuple collides with another
                tuple on a unique index
            InvalidArgumentError: If an operation does not apply, or the
                result no longer fits the space
        """
        if not isinstance(ops, (list, tuple)) or not ops:
            raise InvalidArgumentError("update needs a non-empty list of operations")
        updates = [FieldUpdate.of(op) for op in ops]
        primary_key = self.primary.key_builder.from_values(self._normalize_key(key))

        with self._lock.exclusive():
            self.open()
            existing = self.primary.find_equal(primary_key)
            if not existing:
                return None
            old = existing[0]
            tuple_obj, keys = self._prepare(apply_updates(old.values(), updates))
            self._swap(old, tuple_obj, keys)

        logger.debug("space %d: updated %r to %r", self.n, old, tuple_obj)
        return tuple_obj

    # ------------------------------------------------------------------
    # reads

    def select(self, keys: Any, index: int = 0, offset: int = 0,
               limit: Optional[int] = None) -> List[Tuple]:
        """
        Point lookups through one index.

        Args:
            keys: A scalar (one single-field key), a Python tuple (one
                composite key) or a list of such keys
            index: Index number to search
            offset: Number of leading results to skip
            limit: Maximum number of results

        Returns:
            Matches concatenated in the order the keys were given. A key
            with no match contributes nothing.

        Raises:
            InvalidArgumentError: On a key of the wrong arity or type, an
                unknown index, or a negative offset/limit
        """
        target = self._resolve_index(index)
        _check_window(offset, limit)
        parsed = [target.key_builder.from_values(parts)
                  for parts in self._normalize_keys(keys)]

        results: list[Tuple] = []
        with self._lock.shared():
            for key in parsed:
                results.extend(target.find_equal(key))

        end = None if limit is None else offset + limit
        return results[offset:end]

    def get(self, key: Any, index: int = 0) -> Optional[Tuple]:
        """
        Single lookup through a unique index.

        Raises:
            InvalidArgumentError: If the index is not unique
        """
        target = self._resolve_index(index)
        if not target.unique:
            raise InvalidArgumentError(
                f"get() needs a unique index, index {index} is non-unique")
        found = self.select([self._normalize_key(key)], index=index)
        return found[0] if found else None

    def select_range(self, index: int = 0, start: Any = None, end: Any = None,
                     include_start: bool = True, include_end: bool = True,
                     limit: Optional[int] = None, reverse: bool = False) -> List[Tuple]:
        """
        Ordered scan of a TREE index between two keys.

        Args:
            index: Index number to scan
            start: Lower bound key (None for open)
            end: Upper bound key (None for open)
            include_start: Whether tuples with the start key are included
            include_end: Whether tuples with the end key are included
            limit: Maximum number of results
            reverse: Scan from the upper bound down

        Raises:
            InvalidArgumentError: If the index is HASH, or a bound is malformed
        """
        target = self._resolve_index(index)
        _check_window(0, limit)
        min_key = None if start is None else target.key_builder.from_values(
            self._normalize_key(start))
        max_key = None if end is None else target.key_builder.from_values(
            self._normalize_key(end))

        with self._lock.shared():
            return target.find_range(min_key, max_key, include_start, include_end,
                                     limit=limit, reverse=reverse)

    # ------------------------------------------------------------------
    # internals

    def _resolve_index(self, index_no: int) -> Index:
        if isinstance(index_no, bool) or not isinstance(index_no, int):
            raise InvalidArgumentError(f"Index number must be int, got {index_no!r}")
        if not (0 <= index_no < len(self._indexes)):
            raise InvalidArgumentError(
                f"No index {index_no} in space {self.n} ({len(self._indexes)} indexes)")
        return self._indexes[index_no]

    def _prepare(self, values: Sequence[Any]) -> tuple[Tuple, list[tuple]]:
        """Build the tuple and its key under every index, before locking."""
        try:
            tuple_obj = Tuple(values)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(str(e))

        if self.cardinality is not None and tuple_obj.cardinality != self.cardinality:
            raise InvalidArgumentError(
                f"Space {self.n} expects {self.cardinality} fields, got {tuple_obj.cardinality}")

        return tuple_obj, self._keys_of(tuple_obj)

    def _keys_of(self, tuple_obj: Tuple) -> list[tuple]:
        return [idx.key_of(tuple_obj) for idx in self._indexes]

    def _check_unique(self, keys: list[tuple], ignore: Optional[Tuple] = None) -> None:
        for idx, key in zip(self._indexes, keys):
            if not idx.unique:
                continue
            for found in idx.find_equal(key):
                if found is not ignore:
                    raise DuplicateKeyError(idx.index_no, key)

    def _store(self, tuple_obj: Tuple, keys: list[tuple]) -> None:
        """Insert into every index; undo the indexes already touched on failure."""
        tuple_obj.set_record_id(RecordId(next(self._sequence)))
        done: list[tuple[Index, tuple]] = []
        try:
            for idx, key in zip(self._indexes, keys):
                idx.insert_entry(key, tuple_obj)
                done.append((idx, key))
        except Exception:
            for idx, key in reversed(done):
                idx.delete_entry(key, tuple_obj)
            raise

    def _remove(self, tuple_obj: Tuple, keys: list[tuple]) -> None:
        for idx, key in zip(self._indexes, keys):
            idx.delete_entry(key, tuple_obj)

    def _swap(self, old: Tuple, new: Tuple, new_keys: list[tuple]) -> None:
        self._check_unique(new_keys, ignore=old)
        old_keys = self._keys_of(old)
        self._remove(old, old_keys)
        try:
            self._store(new, new_keys)
        except Exception:
            for idx, key in zip(self._indexes, old_keys):
                idx.insert_entry(key, old)
            raise

    @staticmethod
    def _normalize_key(key: Any) -> tuple:
        """One key: a scalar or a tuple/list of parts."""
        if isinstance(key, _SCALAR_TYPES) and not isinstance(key, bool):
            return (key,)
        if isinstance(key, (tuple, list)):
            return tuple(key)
        raise InvalidArgumentError(f"Unsupported key: {key!r}")

    @classmethod
    def _normalize_keys(cls, keys: Any) -> list[tuple]:
        """Scalar or tuple: one key. List: one key per element."""
        if isinstance(keys, list):
            return [cls._normalize_key(key) for key in keys]
        return [cls._normalize_key(keys)]

    def get_statistics(self) -> dict:
        with self._lock.shared():
            return {
                "n": self.n,
                "state": self._state.value,
                "tuples": len(self.primary),
                "indexes": [idx.get_statistics() for idx in self._indexes],
            }

    def __str__(self) -> str:
        return (f"IndexedSpace(n={self.n}, {len(self._indexes)} indexes, "
                f"state={self._state.value})")

    def __repr__(self) -> str:
        return self.__str__()


def _check_window(offset: int, limit: Optional[int]) -> None:
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise InvalidArgumentError(f"Offset must be a non-negative int, got {offset!r}")
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 0):
        raise InvalidArgumentError(f"Limit must be a non-negative int, got {limit!r}")


def _render(key: tuple) -> str:
    return "(" + ", ".join(str(field) for field in key) + ")"
