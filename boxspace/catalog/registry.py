import logging
import threading
from typing import Optional

from ..core.exceptions import ConfigError, SpaceDisabledError, SpaceNotFoundError
from ..space import IndexedSpace
from .config import BoxConfig, SpaceConfig
from .config_loader import ConfigLoader
from .config_validator import ConfigValidator

logger = logging.getLogger(__name__)


class SpaceRegistry:
    """
    Numbered object spaces built from a configuration.

    The registry validates the whole configuration up front, then builds
    one IndexedSpace per enabled space. Disabled spaces stay declared so
    that asking for them reports them as disabled rather than missing.
    """

    def __init__(self, config: BoxConfig):
        """
        Raises:
            ConfigError: If the configuration fails validation
        """
        validator = ConfigValidator()
        if not validator.validate(config):
            errors = validator.get_validation_errors()
            raise ConfigError(f"Invalid configuration: {'; '.join(errors)}")

        self.config = config
        self._spaces: dict[int, IndexedSpace] = {}
        self._disabled: set[int] = set()
        self._lock = threading.RLock()

        for space_config in config.spaces:
            if space_config.enabled:
                self._spaces[space_config.n] = self._build_space(space_config)
            else:
                self._disabled.add(space_config.n)
                logger.info("Space %d declared but disabled", space_config.n)

    @classmethod
    def from_file(cls, config_file: str, format_type: Optional[str] = None) -> 'SpaceRegistry':
        return cls(ConfigLoader().load_file(config_file, format_type))

    @classmethod
    def from_text(cls, text: str, format_type: str = "cfg") -> 'SpaceRegistry':
        return cls(ConfigLoader().load_text(text, format_type))

    @staticmethod
    def _build_space(space_config: SpaceConfig) -> IndexedSpace:
        space = IndexedSpace(
            space_config.index_specs(),
            n=space_config.n,
            cardinality=space_config.cardinality,
        )
        return space.open()

    def space(self, n: int) -> IndexedSpace:
        """
        Get an enabled space by number.

        Raises:
            SpaceDisabledError: If the space is configured but disabled
            SpaceNotFoundError: If no such space is configured
        """
        with self._lock:
            if n in self._spaces:
                return self._spaces[n]
            if n in self._disabled:
                raise SpaceDisabledError(f"Space {n} is disabled")
            raise SpaceNotFoundError(f"Space {n} is not configured")

    def __getitem__(self, n: int) -> IndexedSpace:
        return self.space(n)

    def has_space(self, n: int) -> bool:
        with self._lock:
            return n in self._spaces

    def enabled_spaces(self) -> list[int]:
        with self._lock:
            return sorted(self._spaces)

    def disabled_spaces(self) -> list[int]:
        with self._lock:
            return sorted(self._disabled)

    def get_statistics(self) -> dict:
        with self._lock:
            return {n: space.get_statistics() for n, space in sorted(self._spaces.items())}

    def __str__(self) -> str:
        return (f"SpaceRegistry({len(self._spaces)} enabled, "
                f"{len(self._disabled)} disabled)")
