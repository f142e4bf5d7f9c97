"""
config.py - Engine configuration

Provides configuration loading from environment variables and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import logging
import os

from atomstate.errors import ConfigurationError

logger = logging.getLogger(__name__)

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AtomStateConfig:
    """Runtime knobs for logging behaviour of the engine."""

    # Level used when an observe effect raises
    effect_error_log_level: str = "WARNING"

    # Log a warning when commit()/rollback() runs on a resolved transaction
    warn_on_reresolve: bool = True

    def __post_init__(self):
        level = str(self.effect_error_log_level).upper()
        if level not in _LEVEL_NAMES:
            raise ConfigurationError(
                f"Unknown log level {self.effect_error_log_level!r}, "
                f"expected one of {', '.join(_LEVEL_NAMES)}"
            )
        self.effect_error_log_level = level

    @property
    def effect_error_level(self) -> int:
        """Numeric logging level for effect failures."""
        return logging.getLevelName(self.effect_error_log_level)

    @classmethod
    def from_env(cls) -> "AtomStateConfig":
        return cls(
            effect_error_log_level=os.getenv("ATOMSTATE_EFFECT_ERROR_LEVEL", "WARNING"),
            warn_on_reresolve=os.getenv("ATOMSTATE_WARN_ON_RERESOLVE", "true").lower() == "true",
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Global config instance
_config: Optional[AtomStateConfig] = None


def load_config() -> AtomStateConfig:
    """Load configuration from the environment, replacing the current one."""
    global _config
    _config = AtomStateConfig.from_env()
    logger.debug(f"Configuration loaded: {_config.to_dict()}")
    return _config


def get_config() -> AtomStateConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[AtomStateConfig]) -> None:
    """Install a configuration. None drops it so the next get reloads."""
    global _config
    _config = config
