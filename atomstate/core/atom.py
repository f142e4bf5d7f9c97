"""
core/atom.py - Writable observable cells

An atom is the only writable observable. Writes without a transaction land in
the committed value immediately; writes under a transaction land in that
transaction's overlay and reach the committed value when it commits.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, TypeVar, TYPE_CHECKING

from atomstate.transactions.manager import current_transaction
from .observable import Observable

if TYPE_CHECKING:
    from atomstate.transactions import Transaction

T = TypeVar("T")

Updater = Callable[[Any], Any]
Setter = Callable[..., None]
ActionsFactory = Callable[[Setter], Any]

_NO_ACTIONS: Mapping[str, Any] = MappingProxyType({})


def freeze_actions(actions: Any) -> Any:
    """Expose mapping-shaped actions read-only; other objects are kept as-is."""
    if actions is None:
        return _NO_ACTIONS
    if isinstance(actions, Mapping):
        return MappingProxyType(dict(actions))
    return actions


class Atom(Observable[T]):
    """
    Writable observable.

    Usage:
        counter = atom(0, actions=lambda set: {
            "increment": lambda: set(lambda n: n + 1),
        })
        counter.actions["increment"]()
        counter.get()  # 1
    """

    def __init__(self, default: T, actions: Optional[ActionsFactory] = None):
        super().__init__(default)
        self.actions = freeze_actions(actions(self.set) if actions is not None else None)

    def set(self, updater: Any, transaction: Optional["Transaction"] = None) -> None:
        """
        Write a value, or apply an updater to the current one.

        Args:
            updater: New value, or callable mapping the current value to the
                next one. Callables are always applied, never stored.
            transaction: Target transaction; defaults to the ambient one.
                Without any, the committed value is written directly.
        """
        if transaction is None:
            transaction = current_transaction()

        if transaction is not None:
            self._track(transaction)
            self._overlays[transaction] = self._next(updater, self._overlays[transaction])
        else:
            self._value = self._next(updater, self._value)

        self._notify(transaction)

    @staticmethod
    def _next(updater: Any, current: Any) -> Any:
        if callable(updater):
            return updater(current)
        return updater


def atom(default: T, actions: Optional[ActionsFactory] = None) -> Atom[T]:
    """Create an atom holding default, with actions bound to its setter."""
    return Atom(default, actions=actions)
