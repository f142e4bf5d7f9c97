"""
core/observable.py - Shared observable machinery

Every observable holds:
- a committed value,
- an overlay map: transaction -> tentative value, weakly keyed so a dropped
  transaction takes its overlay with it,
- a notifier for subscribers, called with the transaction (or None).

INVARIANT: an overlay entry exists for T iff a write reached this observable
under T and T has not resolved yet.
"""

from __future__ import annotations
from typing import Any, Callable, Generic, Optional, TypeVar, TYPE_CHECKING
import weakref

from atomstate.notifier import Notifier, Unsubscriber

if TYPE_CHECKING:
    from atomstate.transactions import Transaction

T = TypeVar("T")

Selector = Callable[[Any], Any]
Subscriber = Callable[[Optional["Transaction"]], Any]


def identity(value: Any) -> Any:
    return value


def is_observable(value: Any) -> bool:
    """True if value exposes the observable protocol (get + subscribe)."""
    return callable(getattr(value, "get", None)) and callable(getattr(value, "subscribe", None))


class Observable(Generic[T]):
    """Base for atoms and computeds: committed value plus per-transaction overlays."""

    def __init__(self, value: T):
        self._value: T = value
        self._overlays: "weakref.WeakKeyDictionary[Transaction, T]" = weakref.WeakKeyDictionary()
        self._subscribers = Notifier()

    def get(self, selector: Selector = identity, transaction: Optional["Transaction"] = None) -> Any:
        """
        Read the value seen by transaction.

        Args:
            selector: Projection applied to the value
            transaction: Reader's transaction; without an overlay for it,
                the committed value is used

        Returns:
            selector(value)
        """
        if transaction is not None and transaction in self._overlays:
            return selector(self._overlays[transaction])
        return selector(self._value)

    def subscribe(self, subscriber: Subscriber) -> Unsubscriber:
        """Register subscriber(transaction_or_None); returns the unsubscribe handle."""
        return self._subscribers.add(subscriber)

    def has_overlay(self, transaction: "Transaction") -> bool:
        return transaction in self._overlays

    def _track(self, transaction: "Transaction") -> None:
        """Seed an overlay for transaction on first use and hook its resolution."""
        if transaction in self._overlays:
            return

        def on_commit() -> None:
            if transaction in self._overlays:
                self._value = self._overlays.pop(transaction)

        def on_rollback() -> None:
            self._overlays.pop(transaction, None)

        transaction.on_commit(on_commit)
        transaction.on_rollback(on_rollback)
        self._overlays[transaction] = self._value

    def _notify(self, transaction: Optional["Transaction"]) -> None:
        self._subscribers.dispatch(transaction)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(value={self._value!r}, "
            f"overlays={len(self._overlays)}, subscribers={len(self._subscribers)})"
        )
