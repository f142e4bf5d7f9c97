"""
errors/ - Error Taxonomy

Exceptions raised by the engine and the failure record handed to observe
error hooks.
"""

from .taxonomy import (
    ErrorCode,
    AtomStateError,
    InvalidDependencyError,
    ConfigurationError,
    EffectFailure,
)

__all__ = [
    "ErrorCode",
    "AtomStateError",
    "InvalidDependencyError",
    "ConfigurationError",
    "EffectFailure",
]
