"""
core/computed.py - Derived read-only observables

A computed projects a fixed set of dependencies through a pure function.
It subscribes to every dependency once, at construction, and keeps an
overlay per transaction exactly like an atom does.

On every dependency notification the committed value is also recomputed,
from the dependencies as seen by the notifying transaction. While that
transaction is open, get() without a transaction already returns its
tentative value. A rollback does not recompute, so the committed value
stays at the tentative value until the next dependency notification.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union, TYPE_CHECKING
import logging

from atomstate.errors import InvalidDependencyError
from atomstate.notifier import Unsubscriber
from .observable import Observable, identity, is_observable

if TYPE_CHECKING:
    from atomstate.transactions import Transaction

logger = logging.getLogger(__name__)

Dependencies = Union[Mapping[str, Observable], Sequence[Observable]]
Computer = Callable[[Any], Any]


class Computed(Observable[Any]):
    """
    Read-only observable derived from dependencies.

    With a mapping of dependencies the computer receives a dict of values
    by name; with a sequence it receives a tuple of values in order.

    Usage:
        total = computed({"a": a, "b": b}, lambda v: v["a"] + v["b"])
        ratio = computed([a, total], lambda v: v[0] / v[1])
    """

    def __init__(self, dependencies: Dependencies, computer: Computer):
        self._named = isinstance(dependencies, Mapping)
        self._dependencies = dependencies if self._named else tuple(dependencies)
        self._computer = computer

        for name, dependency in self._items():
            if not is_observable(dependency):
                raise InvalidDependencyError(name, dependency)

        super().__init__(self._compute())

        self._disposed = False
        self._unsubscribers: List[Unsubscriber] = [
            dependency.subscribe(self._on_dependency_changed)
            for _, dependency in self._items()
        ]

    @property
    def dependencies(self) -> Dependencies:
        return self._dependencies

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """
        Drop the subscriptions to every dependency.

        The computed keeps its last values but stops following its
        dependencies. Calling dispose() again does nothing.
        """
        self._disposed = True
        unsubscribers, self._unsubscribers = self._unsubscribers, []
        for unsubscribe in unsubscribers:
            unsubscribe()
        if unsubscribers:
            logger.debug(f"Disposed {type(self).__name__} ({len(unsubscribers)} subscriptions)")

    def _items(self) -> List[Tuple[Any, Observable]]:
        if self._named:
            return list(self._dependencies.items())
        return list(enumerate(self._dependencies))

    def _snapshot(self, transaction: Optional["Transaction"] = None) -> Union[Dict[str, Any], Tuple[Any, ...]]:
        if self._named:
            return {
                name: dependency.get(identity, transaction)
                for name, dependency in self._dependencies.items()
            }
        return tuple(dependency.get(identity, transaction) for dependency in self._dependencies)

    def _compute(self, transaction: Optional["Transaction"] = None) -> Any:
        return self._computer(self._snapshot(transaction))

    def _on_dependency_changed(self, transaction: Optional["Transaction"]) -> None:
        if transaction is not None:
            self._track(transaction)
            self._overlays[transaction] = self._compute(transaction)

        self._value = self._compute(transaction)
        self._notify(transaction)


def computed(dependencies: Dependencies, computer: Computer) -> Computed:
    """Create a computed over dependencies."""
    return Computed(dependencies, computer)
