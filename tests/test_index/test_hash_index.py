import pytest
from boxspace.core.exceptions import DuplicateKeyError, InvalidArgumentError
from boxspace.core.tuple import Tuple, RecordId
from boxspace.core.types import FieldType
from boxspace.index import IndexSpec, IndexType, HashIndex, KeyField


def stored(sequence, *values):
    tuple_obj = Tuple(values)
    tuple_obj.set_record_id(RecordId(sequence))
    return tuple_obj


class TestHashIndex:
    """Tests for HashIndex."""

    def setup_method(self):
        self.index = HashIndex(0, IndexSpec.hashed((0, FieldType.NUM)))

    def test_must_be_unique(self):
        with pytest.raises(ValueError, match="HASH indexes must be unique"):
            HashIndex(0, IndexSpec(IndexType.HASH, False, (KeyField(0, FieldType.NUM),)))

    def test_insert_find_delete(self):
        tuple_obj = stored(0, 42, "answer")
        key = self.index.key_of(tuple_obj)
        self.index.insert_entry(key, tuple_obj)

        assert self.index.find_equal(key) == [tuple_obj]
        assert self.index.contains_key(key)
        assert self.index.delete_entry(key, tuple_obj) is True
        assert self.index.find_equal(key) == []
        assert len(self.index) == 0

    def test_duplicate_rejected(self):
        first = stored(0, 1, "a")
        self.index.insert_entry(self.index.key_of(first), first)
        with pytest.raises(DuplicateKeyError):
            self.index.insert_entry(self.index.key_of(first), stored(1, 1, "b"))

    def test_delete_other_tuple_is_noop(self):
        first = stored(0, 1, "a")
        self.index.insert_entry(self.index.key_of(first), first)
        assert self.index.delete_entry(self.index.key_of(first), stored(1, 1, "a")) is False
        assert len(self.index) == 1

    def test_range_not_supported(self):
        with pytest.raises(InvalidArgumentError, match="does not support range scans"):
            self.index.find_range(None, None)
