# tests/unit/engine/test_cell.py
"""Tests for test definitions and law helpers."""

from __future__ import annotations

import pytest

from quickprop.contracts.enums import ResultState, Verdict
from quickprop.contracts.errors import PreconditionFailed, TestFailure
from quickprop.core.random_source import RandomSource
from quickprop.engine.cell import Test, TestCell, assume, implies, make_cell
from quickprop.generation import arbitrary


class TestLawHelpers:
    """implies and assume."""

    def test_implies_discards_on_false_precondition(self) -> None:
        """A false precondition is a discard, whatever the conclusion."""
        assert implies(False, False) == Verdict.DISCARD
        assert implies(False, True) == Verdict.DISCARD

    def test_implies_follows_conclusion(self) -> None:
        """A true precondition yields the conclusion's verdict."""
        assert implies(True, True) == Verdict.HOLDS
        assert implies(True, False) == Verdict.FALSIFIED

    def test_assume(self) -> None:
        """assume raises the discard signal only when the condition is false."""
        assume(True)
        with pytest.raises(PreconditionFailed):
            assume(False)


class TestMakeCell:
    """Budget defaults and validation."""

    def test_defaults(self) -> None:
        """count 100, max_gen 300, max_fail 1, no name."""
        cell = make_cell(arbitrary.small_int, lambda x: True)
        assert (cell.count, cell.max_gen, cell.max_fail, cell.name) == (100, 300, 1, None)

    def test_max_gen_defaults_to_count_when_larger(self) -> None:
        """The generation ceiling never starts below the check count."""
        assert make_cell(arbitrary.small_int, lambda x: True, count=1000).max_gen == 1000

    def test_explicit_max_gen_below_count_rejected(self) -> None:
        """max_gen must absorb every check."""
        with pytest.raises(ValueError, match="max_gen"):
            make_cell(arbitrary.small_int, lambda x: True, count=10, max_gen=5)

    @pytest.mark.parametrize("max_fail", [0, -1])
    def test_max_fail_at_least_one(self, max_fail: int) -> None:
        """At least one counterexample is always allowed."""
        with pytest.raises(ValueError, match="max_fail"):
            make_cell(arbitrary.small_int, lambda x: True, max_fail=max_fail)

    def test_negative_count_rejected(self) -> None:
        """count must be non-negative."""
        with pytest.raises(ValueError, match="count"):
            TestCell(arb=arbitrary.small_int, law=lambda x: True, count=-1, max_gen=10, max_fail=1)

    def test_size_override(self) -> None:
        """size_of replaces the arbitrary's size metric for this cell only."""
        cell = make_cell(arbitrary.small_int, lambda x: True, size_of=lambda x: 0)
        assert cell.arb.size_of is not None and cell.arb.size_of(50) == 0
        assert arbitrary.small_int.size_of is abs

    def test_set_name(self) -> None:
        """Names can be assigned after construction."""
        cell = make_cell(arbitrary.small_int, lambda x: True)
        cell.set_name("late")
        assert cell.name == "late"


class TestTestWrapper:
    """The type-erased Test."""

    def test_make_and_name(self) -> None:
        """Test.make builds a cell and exposes its name."""
        t = Test.make(arbitrary.small_int, lambda x: True, name="ok", count=5)
        assert t.name == "ok"
        assert t.cell.count == 5
        t.set_name("renamed")
        assert t.cell.name == "renamed"

    def test_heterogeneous_list(self) -> None:
        """Tests over different payload types run uniformly."""
        tests = [
            Test.make(arbitrary.small_int, lambda x: x >= 0),
            Test.make(arbitrary.small_string, lambda s: len(s) <= 10),
            Test.make(arbitrary.list_of(arbitrary.boolean), lambda xs: isinstance(xs, list)),
        ]
        results = [t.run(RandomSource.from_seed(1)) for t in tests]
        assert all(r.state == ResultState.SUCCESS for r in results)

    def test_check_exn_raises_on_failure(self) -> None:
        """check_exn turns a falsified run into TestFailure."""
        t = Test.make(arbitrary.small_int, lambda x: x < 0, name="negative")
        with pytest.raises(TestFailure, match="negative"):
            t.check_exn(RandomSource.from_seed(1))

    def test_repr(self) -> None:
        """repr names the test."""
        assert repr(Test.make(arbitrary.small_int, lambda x: True, name="r")) == "Test(name='r', count=100)"
