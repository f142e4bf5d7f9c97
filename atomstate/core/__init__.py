"""
core/ - Observables

Atoms, computeds, molecules and the observe() effect runner.
"""

from .observable import (
    Observable,
    identity,
    is_observable,
)

from .atom import Atom, atom

from .computed import Computed, computed

from .molecule import Molecule, molecule

from .observe import observe

__all__ = [
    # Base
    "Observable",
    "identity",
    "is_observable",
    # Atom
    "Atom",
    "atom",
    # Computed
    "Computed",
    "computed",
    # Molecule
    "Molecule",
    "molecule",
    # Effects
    "observe",
]
