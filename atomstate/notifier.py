"""
notifier.py - Ordered callback list

The notifier is the only subscription primitive in atomstate. Observables use
one for their subscribers and every Transaction owns two (commit, rollback).

Unlike an event bus, a Notifier does not isolate callbacks: a raising callback
aborts the rest of the dispatch and the exception reaches the caller.
"""

from typing import Any, Callable, List

# Type aliases
Callback = Callable[..., Any]
Unsubscriber = Callable[[], None]


class Notifier:
    """
    Ordered list of callbacks.

    - add() never deduplicates: the same callback added twice runs twice.
    - Removal rebuilds the list, so removing during a dispatch leaves the
      running dispatch untouched.
    - dispatch() runs the callbacks present when it started, in order.
    """

    __slots__ = ("_callbacks",)

    def __init__(self):
        self._callbacks: List[Callback] = []

    def add(self, callback: Callback) -> Unsubscriber:
        """
        Register a callback.

        Args:
            callback: Invoked with the dispatch arguments

        Returns:
            Zero-argument handle removing the callback
        """
        self._callbacks = self._callbacks + [callback]

        def remove() -> None:
            self._callbacks = [c for c in self._callbacks if c is not callback]

        return remove

    def dispatch(self, *args: Any) -> None:
        """Invoke every registered callback with args."""
        for callback in self._callbacks:
            callback(*args)

    def __len__(self) -> int:
        return len(self._callbacks)

    def __repr__(self) -> str:
        return f"Notifier(callbacks={len(self._callbacks)})"
