"""
transactions/schemas.py - Transaction data structures
"""

from enum import Enum


class TransactionStatus(Enum):
    """Transaction status."""
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
