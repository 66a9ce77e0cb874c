import pytest
from boxspace.core.exceptions import DuplicateKeyError
from boxspace.core.tuple import Tuple, RecordId
from boxspace.core.types import FieldType
from boxspace.index import IndexSpec, TreeIndex


def stored(sequence, *values):
    tuple_obj = Tuple(values)
    tuple_obj.set_record_id(RecordId(sequence))
    return tuple_obj


class TestUniqueTreeIndex:
    """Tests for a unique TREE index on one STR field."""

    def setup_method(self):
        self.index = TreeIndex(0, IndexSpec.tree((0, FieldType.STR)))
        self.tuples = [stored(i, key, "v") for i, key in enumerate(["b", "a", "c"])]
        for tuple_obj in self.tuples:
            self.index.insert_entry(self.index.key_of(tuple_obj), tuple_obj)

    def key(self, value):
        return self.index.key_builder.from_values((value,))

    def test_find_equal(self):
        assert self.index.find_equal(self.key("a")) == [Tuple(["a", "v"])]
        assert self.index.find_equal(self.key("zz")) == []

    def test_duplicate_rejected(self):
        with pytest.raises(DuplicateKeyError, match=r"Duplicate key \(a\) exists in unique index 0"):
            self.index.insert_entry(self.key("a"), stored(9, "a", "w"))
        assert len(self.index) == 3

    def test_iterates_in_key_order(self):
        assert [t[0] for t in self.index] == ["a", "b", "c"]

    def test_range_inclusive(self):
        found = self.index.find_range(self.key("a"), self.key("b"))
        assert [t[0] for t in found] == ["a", "b"]

    def test_range_exclusive(self):
        found = self.index.find_range(self.key("a"), self.key("c"),
                                      include_min=False, include_max=False)
        assert [t[0] for t in found] == ["b"]

    def test_range_open_bounds(self):
        assert [t[0] for t in self.index.find_range(None, self.key("b"))] == ["a", "b"]
        assert [t[0] for t in self.index.find_range(self.key("b"), None)] == ["b", "c"]
        assert len(self.index.find_range(None, None)) == 3

    def test_range_between_keys(self):
        found = self.index.find_range(self.key("aa"), self.key("bb"))
        assert [t[0] for t in found] == ["b"]

    def test_range_empty_when_inverted(self):
        assert self.index.find_range(self.key("c"), self.key("a")) == []

    def test_range_limit_and_reverse(self):
        assert [t[0] for t in self.index.find_range(None, None, limit=2)] == ["a", "b"]
        assert [t[0] for t in self.index.find_range(None, None, reverse=True)] == ["c", "b", "a"]
        assert [t[0] for t in self.index.find_range(None, None, limit=2, reverse=True)] == ["c", "b"]

    def test_delete_entry(self):
        target = self.tuples[0]
        assert self.index.delete_entry(self.key("b"), target) is True
        assert self.index.find_equal(self.key("b")) == []
        assert self.index.delete_entry(self.key("b"), target) is False
        assert len(self.index) == 2

    def test_statistics(self):
        stats = self.index.get_statistics()
        assert stats["index_type"] == "TREE"
        assert stats["unique"] is True
        assert stats["entries"] == 3


class TestNonUniqueTreeIndex:
    """Tests for a non-unique TREE index."""

    def setup_method(self):
        self.index = TreeIndex(1, IndexSpec.tree((1, FieldType.STR), unique=False))

    def add(self, tuple_obj):
        self.index.insert_entry(self.index.key_of(tuple_obj), tuple_obj)

    def key(self, value):
        return self.index.key_builder.from_values((value,))

    def test_groups_keep_insertion_order(self):
        first, second, third = stored(0, "0", "x"), stored(1, "1", "x"), stored(2, "2", "x")
        other = stored(3, "3", "a")
        for tuple_obj in (first, other, second, third):
            self.add(tuple_obj)

        assert self.index.find_equal(self.key("x")) == [first, second, third]
        assert self.index.find_equal(self.key("a")) == [other]

    def test_insertion_order_is_by_record_id(self):
        late, early = stored(5, "late", "x"), stored(2, "early", "x")
        self.add(late)
        self.add(early)
        assert [t[0] for t in self.index.find_equal(self.key("x"))] == ["early", "late"]

    def test_delete_only_removes_given_tuple(self):
        first, second = stored(0, "0", "x"), stored(1, "1", "x")
        self.add(first)
        self.add(second)

        assert self.index.delete_entry(self.key("x"), first) is True
        assert self.index.find_equal(self.key("x")) == [second]

    def test_range_covers_whole_groups(self):
        for i, group in enumerate(["a", "b", "b", "c"]):
            self.add(stored(i, str(i), group))

        found = self.index.find_range(self.key("b"), self.key("b"))
        assert [t[0] for t in found] == ["1", "2"]
        found = self.index.find_range(self.key("a"), self.key("b"), include_min=False)
        assert [t[0] for t in found] == ["1", "2"]
