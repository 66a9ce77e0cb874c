from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.exceptions import ConfigError
from ..core.types import FieldType
from ..index import IndexSpec, IndexType, KeyField


def _expect_mapping(what: str, data: Any) -> dict:
    if not isinstance(data, dict):
        raise ConfigError(f"{what} must be an object, got {data!r}")
    return data


def _expect_list(what: str, data: Any) -> list:
    if not isinstance(data, list):
        raise ConfigError(f"{what} must be a list, got {data!r}")
    return data


def _expect_flag(what: str, value: Any) -> bool:
    """Flags are true/false or 0/1; anything else is a mistake."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ConfigError(f"'{what}' must be true/false or 0/1, got {value!r}")


@dataclass
class KeyFieldConfig:
    """
    Configuration of one key field.

    🔑 Mirrors `object_space[n].index[i].key_field[k].{fieldno,type}`.
    """

    """📍 Position of the field inside a tuple"""
    fieldno: int

    """🏷️ Type name: STR, NUM16, NUM (NUM32) or NUM64"""
    type: str = "STR"

    def to_key_field(self) -> KeyField:
        try:
            return KeyField(self.fieldno, FieldType.from_name(self.type))
        except ValueError as e:
            raise ConfigError(str(e))

    def to_dict(self) -> dict:
        return {"fieldno": self.fieldno, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict) -> 'KeyFieldConfig':
        _expect_mapping("key_field", data)
        if "fieldno" not in data:
            raise ConfigError("key_field is missing 'fieldno'")
        return cls(fieldno=int(data["fieldno"]), type=str(data.get("type", "STR")))


@dataclass
class IndexConfig:
    """
    Configuration of one index.

    🌳 Mirrors `object_space[n].index[i].{type,unique,key_field[]}`.
    """

    """🌳 TREE or HASH"""
    type: str = "TREE"

    """⭐ Whether the index enforces uniqueness"""
    unique: bool = True

    """🔑 Key fields in declared order"""
    key_fields: list[KeyFieldConfig] = field(default_factory=list)

    def to_spec(self) -> IndexSpec:
        try:
            index_type = IndexType.from_name(self.type)
        except ValueError as e:
            raise ConfigError(str(e))
        return IndexSpec(
            type=index_type,
            unique=self.unique,
            key_fields=tuple(kf.to_key_field() for kf in self.key_fields),
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "unique": self.unique,
            "key_field": [kf.to_dict() for kf in self.key_fields],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'IndexConfig':
        _expect_mapping("index", data)
        return cls(
            type=str(data.get("type", "TREE")),
            unique=_expect_flag("unique", data.get("unique", True)),
            key_fields=[KeyFieldConfig.from_dict(kf)
                        for kf in _expect_list("key_field", data.get("key_field", []))],
        )


@dataclass
class SpaceConfig:
    """
    Configuration of one object space.

    📚 Mirrors `object_space[n].{enabled,cardinality,index[]}`.
    """
    n: int

    """✅ Disabled spaces are declared but never built"""
    enabled: bool = True

    """📏 Fixed tuple arity, None for any"""
    cardinality: Optional[int] = None

    """🗂️ Indexes, primary first"""
    indexes: list[IndexConfig] = field(default_factory=list)

    def index_specs(self) -> list[IndexSpec]:
        return [index.to_spec() for index in self.indexes]

    def to_dict(self) -> dict:
        return {
            "n": self.n,
            "enabled": self.enabled,
            "cardinality": self.cardinality,
            "index": [index.to_dict() for index in self.indexes],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SpaceConfig':
        _expect_mapping("object_space entry", data)
        if "n" not in data:
            raise ConfigError("object_space entry is missing 'n'")
        cardinality = data.get("cardinality")
        return cls(
            n=int(data["n"]),
            enabled=_expect_flag("enabled", data.get("enabled", True)),
            cardinality=None if cardinality is None else int(cardinality),
            indexes=[IndexConfig.from_dict(index)
                     for index in _expect_list("index", data.get("index", []))],
        )


@dataclass
class BoxConfig:
    """All configured spaces."""
    spaces: list[SpaceConfig] = field(default_factory=list)

    def get_space(self, n: int) -> Optional[SpaceConfig]:
        for space in self.spaces:
            if space.n == n:
                return space
        return None

    def to_dict(self) -> dict:
        return {"object_space": [space.to_dict() for space in self.spaces]}

    @classmethod
    def from_dict(cls, data: dict) -> 'BoxConfig':
        _expect_mapping("config", data)
        return cls(spaces=[SpaceConfig.from_dict(space)
                           for space in _expect_list("object_space", data.get("object_space", []))])
