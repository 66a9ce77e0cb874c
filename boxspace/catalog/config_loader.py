"""
Configuration loading from text and file formats.

Supports the dotted assignment format used by object space configs and an
equivalent JSON format.

    object_space[0].enabled = 1
    object_space[0].index[0].type = "TREE"
    object_space[0].index[0].unique = 1
    object_space[0].index[0].key_field[0].fieldno = 0
    object_space[0].index[0].key_field[0].type = "STR"
"""
import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from ..core.exceptions import ConfigError, ParsingException
from .config import BoxConfig, SpaceConfig

logger = logging.getLogger(__name__)

_ASSIGNMENT = re.compile(r'^(?P<path>[A-Za-z_][\w\[\]\.]*)\s*=\s*(?P<value>.+?)\s*$')
_SPACE_PATH = re.compile(r'^object_space\[(?P<n>\d+)\]\.(?P<rest>.+)$')
_INDEX_PATH = re.compile(r'^index\[(?P<i>\d+)\]\.(?P<rest>.+)$')
_KEY_FIELD_PATH = re.compile(r'^key_field\[(?P<k>\d+)\]\.(?P<attr>fieldno|type)$')
_INTEGER = re.compile(r'^-?\d+$')


class ConfigLoader:
    """Loads space configuration from the supported formats."""

    def __init__(self):
        self._format_loaders = {
            "cfg": self._load_cfg_text,
            "json": self._load_json_text,
        }

    def load_file(self, config_file: str, format_type: Optional[str] = None) -> BoxConfig:
        """
        Load a configuration file.

        Args:
            config_file: Path to the file
            format_type: "cfg" or "json"; guessed from the suffix if omitted
        """
        config_path = Path(config_file)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_file}")

        if format_type is None:
            format_type = "json" if config_path.suffix.lower() == ".json" else "cfg"

        return self.load_text(config_path.read_text(encoding="utf-8"), format_type)

    def load_text(self, text: str, format_type: str = "cfg") -> BoxConfig:
        if format_type not in self._format_loaders:
            raise ConfigError(f"Unsupported config format: {format_type}")

        config = self._format_loaders[format_type](text)
        logger.debug("Loaded %d space(s) from %s config", len(config.spaces), format_type)
        return config

    def _load_json_text(self, text: str) -> BoxConfig:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParsingException(f"Invalid JSON config: {e}")

        if not isinstance(data, dict):
            raise ParsingException("JSON config must be an object")

        try:
            return BoxConfig.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ParsingException(f"Malformed JSON config: {e}")

    def _load_cfg_text(self, text: str) -> BoxConfig:
        """Parse `object_space[n]...` assignments; other settings are skipped."""
        spaces: dict[int, dict] = {}

        for line_num, raw in enumerate(text.splitlines(), 1):
            line = _strip_comment(raw).strip()
            if not line:
                continue

            match = _ASSIGNMENT.match(line)
            if match is None:
                raise ParsingException(f"Error parsing line {line_num}: {raw.strip()!r}")

            path = match.group("path")
            space_match = _SPACE_PATH.match(path)
            if space_match is None:
                logger.debug("Skipping setting outside object_space: %s", path)
                continue

            try:
                value = _parse_value(match.group("value"))
                space = spaces.setdefault(int(space_match.group("n")), {"index": {}})
                self._assign_space(space, space_match.group("rest"), value)
            except ValueError as e:
                raise ParsingException(f"Error parsing line {line_num}: {e}")

        return BoxConfig(spaces=[
            self._build_space(n, spaces[n]) for n in sorted(spaces)
        ])

    @staticmethod
    def _assign_space(space: dict, rest: str, value: Any) -> None:
        if rest in ("enabled", "cardinality"):
            space[rest] = _expect_int(rest, value)
            return

        index_match = _INDEX_PATH.match(rest)
        if index_match is None:
            raise ValueError(f"unknown object_space setting '{rest}'")

        index = space["index"].setdefault(int(index_match.group("i")), {"key_field": {}})
        index_rest = index_match.group("rest")

        if index_rest == "type":
            index["type"] = _expect_str(index_rest, value)
            return
        if index_rest == "unique":
            index["unique"] = _expect_int(index_rest, value)
            return

        key_match = _KEY_FIELD_PATH.match(index_rest)
        if key_match is None:
            raise ValueError(f"unknown index setting '{index_rest}'")

        key_field = index["key_field"].setdefault(int(key_match.group("k")), {})
        attr = key_match.group("attr")
        if attr == "fieldno":
            key_field["fieldno"] = _expect_int(attr, value)
        else:
            key_field["type"] = _expect_str(attr, value)

    @staticmethod
    def _build_space(n: int, raw: dict) -> SpaceConfig:
        where = f"object_space[{n}]"
        indexes = []
        for index_no in _dense(raw["index"], f"{where}.index"):
            index = raw["index"][index_no]
            key_fields = []
            for key_no in _dense(index["key_field"], f"{where}.index[{index_no}].key_field"):
                key_field = index["key_field"][key_no]
                if "fieldno" not in key_field:
                    raise ParsingException(
                        f"{where}.index[{index_no}].key_field[{key_no}] has no fieldno")
                key_fields.append(key_field)
            indexes.append({
                "type": index.get("type", "TREE"),
                "unique": index.get("unique", 1),
                "key_field": key_fields,
            })

        # -1 means any arity
        cardinality = raw.get("cardinality", -1)
        return SpaceConfig.from_dict({
            "n": n,
            # spaces stay disabled unless the config turns them on
            "enabled": raw.get("enabled", 0),
            "cardinality": cardinality if cardinality > 0 else None,
            "index": indexes,
        })


def _parse_value(text: str) -> Any:
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1].replace('\\"', '"')
    if _INTEGER.match(text):
        return int(text)
    raise ValueError(f"expected an integer or a quoted string, got {text}")


def _expect_int(name: str, value: Any) -> int:
    if not isinstance(value, int):
        raise ValueError(f"'{name}' expects an integer, got {value!r}")
    return value


def _expect_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"'{name}' expects a quoted string, got {value!r}")
    return value


def _dense(entries: dict[int, Any], where: str) -> list[int]:
    """Numbers of sparse array entries, which must run 0..k-1 without gaps."""
    numbers = sorted(entries)
    if numbers != list(range(len(numbers))):
        missing = sorted(set(range(max(numbers) + 1)) - set(numbers))
        raise ParsingException(f"{where}[{missing[0]}] is missing")
    return numbers


def _strip_comment(line: str) -> str:
    """Drop a trailing '#' comment; a '#' inside a quoted value is kept."""
    in_string = False
    escaped = False
    for pos, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == '\\' and in_string:
            escaped = True
        elif char == '"':
            in_string = not in_string
        elif char == '#' and not in_string:
            return line[:pos]
    return line
