from .config import BoxConfig, SpaceConfig, IndexConfig, KeyFieldConfig
from .config_loader import ConfigLoader
from .config_validator import ConfigValidator
from .registry import SpaceRegistry

__all__ = [
    "BoxConfig",
    "SpaceConfig",
    "IndexConfig",
    "KeyFieldConfig",
    "ConfigLoader",
    "ConfigValidator",
    "SpaceRegistry",
]
