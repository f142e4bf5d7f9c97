"""
atomstate Test Configuration and Fixtures

Resets engine-wide state (configuration, ambient transaction) around every
test and provides small observable graphs used across modules.
"""

import pytest

from atomstate import AtomStateConfig, atom, computed, molecule, set_config
from atomstate.transactions import manager


@pytest.fixture(autouse=True)
def isolated_engine():
    """Fresh default config and no ambient transaction for each test."""
    set_config(AtomStateConfig())
    manager._ambient = None
    yield
    manager._ambient = None
    set_config(None)


@pytest.fixture
def counter():
    """Atom with increment/add actions."""
    return atom(0, actions=lambda set_: {
        "increment": lambda: set_(lambda n: n + 1),
        "add": lambda amount: set_(lambda n: n + amount),
    })


@pytest.fixture
def pair():
    """Two atoms and a computed summing them."""
    a = atom(1)
    b = atom(2)
    total = computed({"a": a, "b": b}, lambda v: v["a"] + v["b"])
    return a, b, total


@pytest.fixture
def account():
    """Molecule over checking/savings with a transfer action."""
    checking = atom(100)
    savings = atom(50)

    def actions(children):
        def transfer(amount, txn=None):
            children["checking"].set(lambda v: v - amount, txn)
            children["savings"].set(lambda v: v + amount, txn)
        return {"transfer": transfer}

    return molecule(
        {"checking": checking, "savings": savings},
        actions=actions,
        computer=lambda v: v["checking"] + v["savings"],
    )
