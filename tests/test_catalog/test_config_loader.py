"""
Tests for config_loader.py module.
"""
import json

import pytest
from boxspace.catalog import ConfigLoader, BoxConfig
from boxspace.core.exceptions import ConfigError, ParsingException
from boxspace.core.types import FieldType
from boxspace.index import IndexSpec

SCENARIO = """
# settings for other subsystems are skipped
pid_file = "box.pid"
primary_port = 33013

object_space[0].enabled = 1

object_space[0].index[0].type = "TREE"
object_space[0].index[0].unique = 1
object_space[0].index[0].key_field[0].fieldno = 0
object_space[0].index[0].key_field[0].type = "STR"

object_space[0].index[1].type = "TREE"
object_space[0].index[1].unique = 0
object_space[0].index[1].key_field[0].fieldno = 1
object_space[0].index[1].key_field[0].type = "STR"
"""


class TestCfgFormat:
    """Tests for the dotted assignment format."""

    def setup_method(self):
        self.loader = ConfigLoader()

    def test_scenario(self):
        config = self.loader.load_text(SCENARIO)

        assert len(config.spaces) == 1
        space = config.spaces[0]
        assert space.n == 0
        assert space.enabled is True
        assert space.cardinality is None
        assert space.index_specs() == [
            IndexSpec.tree((0, FieldType.STR)),
            IndexSpec.tree((1, FieldType.STR), unique=False),
        ]

    def test_space_disabled_by_default(self):
        config = self.loader.load_text(
            'object_space[2].index[0].key_field[0].fieldno = 0\n')
        assert config.get_space(2).enabled is False

    def test_defaults_for_index(self):
        config = self.loader.load_text(
            'object_space[0].enabled = 1\n'
            'object_space[0].index[0].key_field[0].fieldno = 3\n')
        index = config.spaces[0].indexes[0]
        assert index.type == "TREE"
        assert index.unique is True
        assert index.key_fields[0].fieldno == 3
        assert index.key_fields[0].type == "STR"

    def test_cardinality(self):
        config = self.loader.load_text(
            'object_space[0].cardinality = 2\n'
            'object_space[1].cardinality = -1\n')
        assert config.get_space(0).cardinality == 2
        assert config.get_space(1).cardinality is None

    def test_multiple_spaces_sorted(self):
        config = self.loader.load_text(
            'object_space[3].enabled = 1\n'
            'object_space[1].enabled = 0\n')
        assert [space.n for space in config.spaces] == [1, 3]

    def test_trailing_comment_and_hash_in_string(self):
        config = self.loader.load_text(
            'object_space[0].enabled = 1  # on\n'
            'object_space[0].index[0].type = "TREE"\n'
            'object_space[0].index[0].key_field[0].fieldno = 0\n'
            'object_space[0].index[0].key_field[0].type = "NUM#"\n')
        assert config.spaces[0].indexes[0].key_fields[0].type == "NUM#"

    def test_comment_after_string_with_hash(self):
        config = self.loader.load_text(
            'object_space[0].index[0].key_field[0].fieldno = 0\n'
            'object_space[0].index[0].key_field[0].type = "NUM#"  # not "STR"\n'
            'object_space[0].index[0].type = "TREE" # a "quoted # comment"\n')
        index = config.spaces[0].indexes[0]
        assert index.type == "TREE"
        assert index.key_fields[0].type == "NUM#"

    def test_flag_outside_zero_one(self):
        with pytest.raises(ConfigError, match="'unique' must be true/false or 0/1, got 2"):
            self.loader.load_text(
                'object_space[0].index[0].unique = 2\n'
                'object_space[0].index[0].key_field[0].fieldno = 0\n')

    def test_unknown_space_setting(self):
        with pytest.raises(ParsingException, match="Error parsing line 1: unknown object_space setting 'colour'"):
            self.loader.load_text('object_space[0].colour = "red"\n')

    def test_unknown_index_setting(self):
        with pytest.raises(ParsingException, match="unknown index setting 'size'"):
            self.loader.load_text('object_space[0].index[0].size = 1\n')

    def test_wrong_value_type(self):
        with pytest.raises(ParsingException, match="'fieldno' expects an integer"):
            self.loader.load_text('object_space[0].index[0].key_field[0].fieldno = "0"\n')
        with pytest.raises(ParsingException, match="'type' expects a quoted string"):
            self.loader.load_text('object_space[0].index[0].type = 1\n')

    def test_bad_value(self):
        with pytest.raises(ParsingException, match="Error parsing line 2"):
            self.loader.load_text('\nobject_space[0].enabled = yes\n')

    def test_not_an_assignment(self):
        with pytest.raises(ParsingException, match="Error parsing line 1"):
            self.loader.load_text('object_space[0].enabled\n')

    def test_index_gap(self):
        with pytest.raises(ParsingException, match=r"object_space\[0\]\.index\[1\] is missing"):
            self.loader.load_text(
                'object_space[0].index[0].key_field[0].fieldno = 0\n'
                'object_space[0].index[2].key_field[0].fieldno = 1\n')

    def test_key_field_without_fieldno(self):
        with pytest.raises(ParsingException, match="has no fieldno"):
            self.loader.load_text('object_space[0].index[0].key_field[0].type = "STR"\n')

    def test_unsupported_format(self):
        with pytest.raises(ConfigError, match="Unsupported config format: yaml"):
            self.loader.load_text("", "yaml")


class TestJsonFormat:
    """Tests for the JSON format."""

    def setup_method(self):
        self.loader = ConfigLoader()

    def test_same_result_as_cfg(self):
        from_cfg = self.loader.load_text(SCENARIO)
        from_json = self.loader.load_text(json.dumps(from_cfg.to_dict()), "json")
        assert from_json == from_cfg

    def test_invalid_json(self):
        with pytest.raises(ParsingException, match="Invalid JSON config"):
            self.loader.load_text("{", "json")

    def test_not_an_object(self):
        with pytest.raises(ParsingException, match="must be an object"):
            self.loader.load_text("[]", "json")

    def test_entries_must_be_objects(self):
        with pytest.raises(ConfigError, match="index must be an object, got 1"):
            self.loader.load_text('{"object_space": [{"n": 0, "index": [1]}]}', "json")
        with pytest.raises(ConfigError, match="object_space entry must be an object"):
            self.loader.load_text('{"object_space": ["space"]}', "json")
        with pytest.raises(ConfigError, match="key_field must be an object"):
            self.loader.load_text(
                '{"object_space": [{"n": 0, "index": [{"key_field": [0]}]}]}', "json")

    def test_lists_must_be_lists(self):
        with pytest.raises(ConfigError, match="object_space must be a list"):
            self.loader.load_text('{"object_space": {"n": 0}}', "json")

    def test_flags_must_be_boolean(self):
        with pytest.raises(ConfigError, match="'unique' must be true/false or 0/1, got 'false'"):
            self.loader.load_text(
                '{"object_space": [{"n": 0, "index": [{"unique": "false", '
                '"key_field": [{"fieldno": 0}]}]}]}', "json")
        with pytest.raises(ConfigError, match="'enabled' must be true/false or 0/1, got 'no'"):
            self.loader.load_text('{"object_space": [{"n": 0, "enabled": "no"}]}', "json")

    def test_numeric_flags(self):
        config = self.loader.load_text(
            '{"object_space": [{"n": 0, "enabled": 0, "index": [{"unique": 1, '
            '"key_field": [{"fieldno": 0}]}]}]}', "json")
        assert config.spaces[0].enabled is False
        assert config.spaces[0].indexes[0].unique is True

    def test_missing_space_number(self):
        with pytest.raises(ConfigError, match="missing 'n'"):
            self.loader.load_text('{"object_space": [{"enabled": true}]}', "json")


class TestLoadFile:
    """Tests for loading from disk."""

    def test_format_from_suffix(self, tmp_path):
        cfg_file = tmp_path / "box.cfg"
        cfg_file.write_text(SCENARIO)
        json_file = tmp_path / "box.json"
        json_file.write_text(json.dumps(ConfigLoader().load_text(SCENARIO).to_dict()))

        assert ConfigLoader().load_file(str(cfg_file)) == ConfigLoader().load_file(str(json_file))

    def test_explicit_format(self, tmp_path):
        config_file = tmp_path / "box.conf"
        config_file.write_text('{"object_space": []}')
        assert ConfigLoader().load_file(str(config_file), "json") == BoxConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Config file not found"):
            ConfigLoader().load_file(str(tmp_path / "absent.cfg"))
