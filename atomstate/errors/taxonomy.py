"""
errors/taxonomy.py - Error classification for the reactive engine

Most failures in atomstate are the caller's own exceptions (updaters,
computers, transaction listeners, batched executors) and propagate unchanged.
This module covers the few errors the engine raises itself, plus the record
produced when an observe effect fails.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Specific error codes."""

    # Dependency (1xxx)
    DEP_INVALID = 1001

    # Effect (2xxx)
    EFFECT_FAILED = 2001

    # Transaction (3xxx)
    TXN_RERESOLVED = 3001

    # Configuration (4xxx)
    CFG_INVALID = 4001


class AtomStateError(Exception):
    """Base class for errors raised by atomstate itself."""

    code: Optional[ErrorCode] = None

    def __init__(self, message: str, code: Optional[ErrorCode] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InvalidDependencyError(AtomStateError, TypeError):
    """A computed dependency or molecule child is not an observable."""

    code = ErrorCode.DEP_INVALID

    def __init__(self, name: Any, value: Any):
        self.name = name
        self.value = value
        super().__init__(
            f"Dependency {name!r} is not an observable "
            f"(got {type(value).__name__}, expected get() and subscribe())"
        )


class ConfigurationError(AtomStateError, ValueError):
    """Invalid configuration value."""

    code = ErrorCode.CFG_INVALID


@dataclass
class EffectFailure:
    """Record of an observe effect that raised."""

    error: BaseException
    effect_name: str = ""
    transaction_id: Optional[str] = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    code: ErrorCode = ErrorCode.EFFECT_FAILED

    @property
    def message(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "effect": self.effect_name,
            "message": self.message,
            "transaction_id": self.transaction_id,
            "occurred_at": self.occurred_at.isoformat(),
        }
