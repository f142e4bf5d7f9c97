"""
core/observe.py - Side-effect runner

observe() runs an effect with the observable's committed value: once
immediately, again after every untransacted change, and once per committed
transaction no matter how many writes that transaction made.

Effect errors are logged and reported, never raised, and the subscription
stays in place.
"""

from __future__ import annotations
from typing import Any, Callable, Optional, Set, TYPE_CHECKING
import logging

from atomstate.config import get_config
from atomstate.errors import EffectFailure
from atomstate.notifier import Unsubscriber
from .observable import Observable

if TYPE_CHECKING:
    from atomstate.transactions import Transaction

logger = logging.getLogger(__name__)

Effect = Callable[[Any], Any]
ErrorHook = Callable[[EffectFailure], Any]


def observe(
    observable: Observable,
    effect: Effect,
    on_error: Optional[ErrorHook] = None,
) -> Unsubscriber:
    """
    Run effect now and whenever observable's committed value changes.

    Args:
        observable: Atom, computed or molecule to follow
        effect: Callback receiving the committed value
        on_error: Optional hook receiving an EffectFailure when effect raises

    Returns:
        Handle removing the subscription
    """
    pending: Set["Transaction"] = set()
    effect_name = getattr(effect, "__qualname__", repr(effect))

    def run_effect(transaction: Optional["Transaction"] = None) -> None:
        try:
            effect(observable.get())
        except Exception as e:
            failure = EffectFailure(
                error=e,
                effect_name=effect_name,
                transaction_id=transaction.transaction_id if transaction is not None else None,
            )
            logger.log(
                get_config().effect_error_level,
                f"Effect {effect_name} raised: {failure.message}",
                exc_info=e,
            )
            if on_error is not None:
                on_error(failure)

    def on_change(transaction: Optional["Transaction"]) -> None:
        if transaction is None:
            run_effect()
            return

        if transaction in pending:
            return
        pending.add(transaction)

        def on_commit() -> None:
            run_effect(transaction)
            pending.discard(transaction)

        def on_rollback() -> None:
            pending.discard(transaction)

        transaction.on_commit(on_commit)
        transaction.on_rollback(on_rollback)

    run_effect()
    return observable.subscribe(on_change)
