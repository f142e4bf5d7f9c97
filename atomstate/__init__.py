"""
atomstate - Reactive state with transactional overlays

Atoms hold writable state, computeds and molecules derive from them, and
transactions let a group of writes commit or roll back as one.

Usage:
    from atomstate import atom, molecule, observe, batched

    a = atom(0)
    m = molecule({"a": a}, computer=lambda v: v["a"] * 10)
    observe(m, print)          # prints 0

    @batched
    def bump():
        a.set(lambda n: n + 1)
        a.set(lambda n: n + 1)

    bump()                     # prints 20 once, on commit
"""

from .core import (
    Observable,
    Atom,
    atom,
    Computed,
    computed,
    Molecule,
    molecule,
    observe,
)

from .transactions import (
    Transaction,
    TransactionStatus,
    transaction,
    current_transaction,
    batch,
    batched,
)

from .notifier import Notifier

from .errors import (
    AtomStateError,
    InvalidDependencyError,
    ConfigurationError,
    EffectFailure,
)

from .config import AtomStateConfig, get_config, set_config, load_config

__version__ = "0.1.0"

__all__ = [
    # Observables
    "Observable",
    "Atom",
    "atom",
    "Computed",
    "computed",
    "Molecule",
    "molecule",
    "observe",
    # Transactions
    "Transaction",
    "TransactionStatus",
    "transaction",
    "current_transaction",
    "batch",
    "batched",
    # Primitives
    "Notifier",
    # Errors
    "AtomStateError",
    "InvalidDependencyError",
    "ConfigurationError",
    "EffectFailure",
    # Config
    "AtomStateConfig",
    "get_config",
    "set_config",
    "load_config",
]
