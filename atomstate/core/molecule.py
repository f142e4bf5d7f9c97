"""
core/molecule.py - Composite observables

A molecule groups named child atoms/molecules, derives a value from them and
carries actions scoped to those children.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Mapping, Optional

from .atom import freeze_actions
from .computed import Computed, Computer
from .observable import Observable


def passthrough(values: Dict[str, Any]) -> Dict[str, Any]:
    return values


class Molecule(Computed):
    """
    Computed over named children plus actions bound to them.

    Usage:
        position = molecule(
            {"x": x, "y": y},
            actions=lambda children: {
                "reset": batched(lambda: [c.set(0) for c in children.values()]),
            },
        )
        position.get()  # {"x": 0, "y": 0}
    """

    def __init__(
        self,
        children: Mapping[str, Observable],
        actions: Optional[Callable[[Mapping[str, Observable]], Any]] = None,
        computer: Optional[Computer] = None,
    ):
        super().__init__(children, computer if computer is not None else passthrough)
        self.children = children
        self.actions = freeze_actions(actions(children) if actions is not None else None)


def molecule(
    children: Mapping[str, Observable],
    actions: Optional[Callable[[Mapping[str, Observable]], Any]] = None,
    computer: Optional[Computer] = None,
) -> Molecule:
    """Create a molecule over children."""
    return Molecule(children, actions=actions, computer=computer)
