"""
Integration tests for transactional updates across atoms, computeds,
molecules and effects.
"""

import pytest
from unittest.mock import Mock

from atomstate import (
    atom,
    batch,
    batched,
    computed,
    current_transaction,
    molecule,
    observe,
    transaction,
)


class TestCommittedWrites:
    """Writes without a transaction."""

    def test_increment_twice(self):
        """Two increments reach the atom and a molecule over it."""
        a = atom(0)
        m = molecule({"a": a}, computer=lambda v: v["a"] * 10)

        a.set(lambda x: x + 1)
        a.set(lambda x: x + 1)

        assert a.get() == 2
        assert m.get() == 20


class TestExplicitTransactions:
    """Writes under an explicit transaction."""

    def test_reads_isolated_until_commit(self):
        """Committed readers see nothing until commit, then the last write."""
        a, b = atom(1), atom(2)
        txn = transaction()

        a.set(10, txn)
        b.set(20, txn)
        a.set(lambda x: x + 1, txn)

        assert (a.get(), b.get()) == (1, 2)
        assert (a.get(transaction=txn), b.get(transaction=txn)) == (11, 20)

        txn.commit()

        assert (a.get(), b.get()) == (11, 20)

    def test_rollback_restores(self):
        """After rollback every atom is at its pre-transaction value."""
        a, b = atom(1), atom(2)
        txn = transaction()
        a.set(10, txn)
        b.set(20, txn)

        txn.rollback()

        assert (a.get(), b.get()) == (1, 2)

    def test_effect_once_per_commit(self):
        """An effect on a computed over N atoms runs once per commit."""
        atoms = {name: atom(0) for name in "abc"}
        total = computed(atoms, lambda v: sum(v.values()))
        effect = Mock()
        observe(total, effect)

        txn = transaction()
        for step in range(3):
            for a in atoms.values():
                a.set(lambda x: x + 1, txn)
        txn.commit()

        assert effect.call_count == 2
        effect.assert_called_with(9)


class TestBatchedUpdates:
    """Writes through batched()."""

    def test_failure_leaves_values(self):
        """A failing batched call leaves touched atoms unchanged."""
        a = atom(1)

        @batched
        def fail():
            a.set(5)
            raise Exception("fail")

        with pytest.raises(Exception, match="fail"):
            fail()

        assert a.get() == 1
        assert current_transaction() is None

    def test_success_applies_final_values(self):
        """A successful batched call leaves the final values written."""
        a, b = atom(1), atom(2)

        @batched
        def swap():
            first, second = a.get(), b.get()
            a.set(second)
            b.set(first)

        swap()

        assert (a.get(), b.get()) == (2, 1)

    def test_reads_inside_batch_see_committed(self):
        """Untransacted reads inside a batch see committed values."""
        a = atom(1)
        seen = []

        @batched
        def work():
            a.set(5)
            seen.append(a.get())
            seen.append(a.get(transaction=current_transaction()))

        work()

        assert seen == [1, 5]
        assert a.get() == 5

    def test_effect_runs_once_for_batch(self, account):
        """A batched molecule action produces one effect run."""
        effect = Mock()
        observe(account, effect)

        @batched
        def move_twice():
            account.actions["transfer"](10)
            account.actions["transfer"](20)

        move_twice()

        assert account.children["checking"].get() == 70
        assert account.children["savings"].get() == 80
        assert effect.call_count == 2

    def test_nested_batched_commit_once(self):
        """Nested batched calls share one transaction and commit once."""
        a = atom(0)
        commits = []

        @batched
        def inner():
            a.set(lambda x: x + 1)

        @batched
        def outer():
            current_transaction().on_commit(lambda: commits.append(a.get()))
            inner()
            inner()
            assert a.get() == 0

        outer()

        assert a.get() == 2
        assert len(commits) == 1

    def test_nested_failure_rolls_back_everything(self):
        """A nested failure rolls back writes from every level."""
        a, b = atom(0), atom(0)

        @batched
        def inner():
            b.set(1)
            raise RuntimeError("inner")

        @batched
        def outer():
            a.set(1)
            inner()

        with pytest.raises(RuntimeError):
            outer()

        assert (a.get(), b.get()) == (0, 0)

    def test_batch_context_manager(self):
        """batch() behaves like batched() for a block."""
        a = atom(0)
        effect = Mock()
        observe(a, effect)

        with batch():
            a.set(1)
            a.set(2)

        assert a.get() == 2
        assert effect.call_count == 2

    def test_effect_writes_after_commit_are_immediate(self):
        """An effect writing an atom on commit writes it directly."""
        source, mirror = atom(0), atom(0)
        observe(source, lambda value: mirror.set(value))

        with batch():
            source.set(7)

        assert mirror.get() == 7


class TestConcurrentTransactions:
    """Independent transactions on the same observables."""

    def test_two_transactions_do_not_clobber(self):
        """Each transaction proposes its own value; commits apply in order."""
        a = atom(0)
        doubled = computed({"a": a}, lambda v: v["a"] * 2)
        first, second = transaction(), transaction()

        a.set(1, first)
        a.set(2, second)

        assert doubled.get(transaction=first) == 2
        assert doubled.get(transaction=second) == 4
        # the committed value follows the latest transactional notification
        assert doubled.get() == 4
        assert a.get() == 0

        second.commit()
        assert (a.get(), doubled.get()) == (2, 4)

        first.rollback()
        assert (a.get(), doubled.get()) == (2, 4)
