"""
Tests for config.py module.
"""
import pytest
from boxspace.catalog import BoxConfig, IndexConfig, KeyFieldConfig, SpaceConfig
from boxspace.core.exceptions import ConfigError
from boxspace.core.types import FieldType
from boxspace.index import IndexSpec, IndexType, KeyField


class TestConfigStructs:
    """Test cases for the resolved config dataclasses."""

    def test_key_field_to_key_field(self):
        assert KeyFieldConfig(2, "num32").to_key_field() == KeyField(2, FieldType.NUM)

    def test_key_field_unknown_type(self):
        with pytest.raises(ConfigError, match="Unknown field type"):
            KeyFieldConfig(0, "BLOB").to_key_field()

    def test_index_to_spec(self):
        config = IndexConfig("HASH", True, [KeyFieldConfig(0, "STR")])
        assert config.to_spec() == IndexSpec(IndexType.HASH, True, (KeyField(0, FieldType.STR),))

    def test_index_unknown_type(self):
        with pytest.raises(ConfigError, match="Unknown index type"):
            IndexConfig("RTREE", True, [KeyFieldConfig(0)]).to_spec()

    def test_dict_round_trip(self):
        config = BoxConfig(spaces=[
            SpaceConfig(0, True, 3, [IndexConfig("TREE", True, [KeyFieldConfig(0, "STR")])]),
        ])
        assert BoxConfig.from_dict(config.to_dict()) == config

    def test_get_space(self):
        config = BoxConfig(spaces=[SpaceConfig(4)])
        assert config.get_space(4).n == 4
        assert config.get_space(5) is None

    def test_missing_fieldno(self):
        with pytest.raises(ConfigError, match="missing 'fieldno'"):
            KeyFieldConfig.from_dict({"type": "STR"})
