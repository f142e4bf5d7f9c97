"""
transactions/ - Transaction Model

Commit/rollback handles and the ambient batching used for atomic,
all-or-nothing updates across observables.
"""

from .schemas import TransactionStatus

from .manager import (
    Transaction,
    transaction,
    current_transaction,
    batch,
    batched,
)

__all__ = [
    # Schemas
    "TransactionStatus",
    # Manager
    "Transaction",
    "transaction",
    "current_transaction",
    "batch",
    "batched",
]
