"""
transactions/manager.py - Transactions and batching

A Transaction is a one-shot coordination handle: observables that receive a
write under it keep a tentative overlay value and register commit/rollback
listeners on it. Resolving the transaction fires those listeners.

batched()/batch() run a block of writes inside an implicit ("ambient")
transaction. Only the outermost call owns the ambient transaction and
resolves it: commit on success, rollback on failure.
"""

from __future__ import annotations
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Optional, TypeVar
import functools
import logging
import uuid

from atomstate.config import get_config
from atomstate.errors import ErrorCode
from atomstate.notifier import Notifier, Unsubscriber
from .schemas import TransactionStatus

logger = logging.getLogger(__name__)

R = TypeVar("R")

Listener = Callable[[], Any]


class Transaction:
    """
    Commit/rollback coordination object.

    Holds one notifier for commit listeners and one for rollback listeners.
    Status fields are informational: commit() and rollback() always dispatch,
    so resolving twice fires the listeners twice.
    """

    def __init__(self, transaction_id: Optional[str] = None):
        self.transaction_id = transaction_id or uuid.uuid4().hex[:8]
        self.status = TransactionStatus.ACTIVE
        self.created_at = datetime.now(timezone.utc)
        self.resolved_at: Optional[datetime] = None

        self._commit_listeners = Notifier()
        self._rollback_listeners = Notifier()

    @property
    def is_resolved(self) -> bool:
        return self.status is not TransactionStatus.ACTIVE

    def commit(self) -> None:
        """Fire commit listeners."""
        self._resolve(TransactionStatus.COMMITTED, self._commit_listeners)

    def rollback(self) -> None:
        """Fire rollback listeners."""
        self._resolve(TransactionStatus.ROLLED_BACK, self._rollback_listeners)

    def on_commit(self, listener: Listener) -> Unsubscriber:
        return self._commit_listeners.add(listener)

    def on_rollback(self, listener: Listener) -> Unsubscriber:
        return self._rollback_listeners.add(listener)

    def _resolve(self, status: TransactionStatus, listeners: Notifier) -> None:
        if self.is_resolved and get_config().warn_on_reresolve:
            logger.warning(
                f"[{ErrorCode.TXN_RERESOLVED.name}] Transaction {self.transaction_id} "
                f"already {self.status.value}, "
                f"resolving again as {status.value}"
            )

        self.status = status
        self.resolved_at = datetime.now(timezone.utc)

        logger.debug(
            f"Transaction {self.transaction_id} {status.value} "
            f"({len(listeners)} listeners)"
        )
        listeners.dispatch()

    def __repr__(self) -> str:
        return f"Transaction(id={self.transaction_id}, status={self.status.value})"


def transaction() -> Transaction:
    """Create a fresh transaction."""
    txn = Transaction()
    logger.debug(f"Transaction {txn.transaction_id} created")
    return txn


# Ambient transaction slot, owned by the outermost batch
_ambient: Optional[Transaction] = None


def current_transaction() -> Optional[Transaction]:
    """Get the ambient transaction, if a batch is running."""
    return _ambient


@contextmanager
def batch() -> Iterator[Transaction]:
    """
    Run a block inside the ambient transaction.

    Usage:
        with batch():
            first.set(1)
            second.set(2)
        # both committed here, or neither if the block raised

    Nested blocks join the outer transaction and leave its resolution to
    the outermost block.
    """
    global _ambient

    if _ambient is not None:
        yield _ambient
        return

    txn = _ambient = transaction()
    logger.debug(f"Batch started with transaction {txn.transaction_id}")

    try:
        yield txn
    except BaseException as e:
        logger.info(f"Batch failed ({type(e).__name__}), rolling back {txn.transaction_id}")
        # cleared before rollback so listeners never see a resolving transaction
        _ambient = None
        txn.rollback()
        raise

    # cleared before commit so effects run on commit write directly
    _ambient = None
    txn.commit()
    logger.debug(f"Batch finished, transaction {txn.transaction_id} committed")


def batched(fn: Callable[..., R]) -> Callable[..., R]:
    """
    Wrap fn so every call runs inside the ambient transaction.

    Usage:
        @batched
        def transfer(amount):
            checking.set(lambda v: v - amount)
            savings.set(lambda v: v + amount)
    """

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> R:
        with batch():
            return fn(*args, **kwargs)

    return wrapper
