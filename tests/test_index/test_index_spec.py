import pytest
from boxspace.core.types import FieldType
from boxspace.index import IndexSpec, IndexType, KeyField, TreeIndex, HashIndex, build_index


class TestIndexSpec:
    """Tests for IndexSpec and KeyField."""

    def test_tree_shorthand(self):
        spec = IndexSpec.tree((1, FieldType.STR), unique=False)
        assert spec.type == IndexType.TREE
        assert spec.unique is False
        assert spec.key_fields == (KeyField(1, FieldType.STR),)

    def test_hashed_shorthand_is_unique(self):
        spec = IndexSpec.hashed((0, FieldType.NUM))
        assert spec.type == IndexType.HASH
        assert spec.unique is True

    def test_key_fields_list_becomes_tuple(self):
        spec = IndexSpec(IndexType.TREE, True, [KeyField(0, FieldType.STR)])
        assert isinstance(spec.key_fields, tuple)
        assert hash(spec) == hash(IndexSpec.tree((0, FieldType.STR)))

    def test_negative_fieldno(self):
        with pytest.raises(ValueError, match="fieldno must be non-negative"):
            KeyField(-1, FieldType.STR)

    def test_dict_form(self):
        spec = IndexSpec.tree((0, FieldType.STR), (2, FieldType.NUM64), unique=False)
        data = spec.to_dict()

        assert data == {
            "type": "TREE",
            "unique": False,
            "key_fields": [
                {"fieldno": 0, "type": "STR"},
                {"fieldno": 2, "type": "NUM64"},
            ],
        }
        assert IndexSpec.from_dict(data) == spec

    def test_index_type_from_name(self):
        assert IndexType.from_name("tree") is IndexType.TREE
        with pytest.raises(ValueError, match="Unknown index type: BITSET"):
            IndexType.from_name("BITSET")

    def test_build_index(self):
        assert isinstance(build_index(0, IndexSpec.tree((0, FieldType.STR))), TreeIndex)
        assert isinstance(build_index(1, IndexSpec.hashed((0, FieldType.STR))), HashIndex)
