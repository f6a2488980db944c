# src/quickprop/engine/cell.py
"""Test definitions: a typed TestCell and the type-erased Test wrapper.

TestCell[T] binds an Arbitrary[T] to a law over T and to the three budgets
that bound a run. Test hides T so tests over different payload types can
live in one list and be run uniformly.

Laws return ``bool`` or a ``Verdict``. Use ``implies`` (returns DISCARD) or
``assume`` (raises PreconditionFailed) to reject inputs outside the law's
domain without failing the test.

Usage:
    t = Test.make(arbitrary.small_int, lambda x: implies(x > 0, x * x >= x), name="squares")
    result = t.run(RandomSource.from_seed(1))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from quickprop.contracts.enums import Verdict
from quickprop.contracts.errors import PreconditionFailed
from quickprop.engine import executor

if TYPE_CHECKING:
    from quickprop.contracts.results import TestResult
    from quickprop.core.random_source import RandomSource
    from quickprop.engine.executor import Callback
    from quickprop.generation.arbitrary import Arbitrary

type Law[T] = Callable[[T], bool | Verdict]

DEFAULT_COUNT = 100
DEFAULT_MAX_GEN = 300
DEFAULT_MAX_FAIL = 1


# =============================================================================
# Law Helpers
# =============================================================================


def implies(precondition: bool, holds: bool) -> Verdict:
    """DISCARD when precondition is false, else the verdict of holds."""
    if not precondition:
        return Verdict.DISCARD
    return Verdict.HOLDS if holds else Verdict.FALSIFIED


def assume(condition: bool) -> None:
    """Abort evaluation of the current instance unless condition holds.

    Raises:
        PreconditionFailed: If condition is false. The engine treats this as
            a discard, never as a failure.
    """
    if not condition:
        raise PreconditionFailed()


# =============================================================================
# Test Cell
# =============================================================================


@dataclass
class TestCell[T]:
    """A law over T with its arbitrary and run budgets.

    Attributes:
        arb: Generates, shrinks and prints instances
        law: The property under test
        count: Number of checks to perform (successes plus failures)
        max_gen: Ceiling on generation attempts, discards included
        max_fail: Ceiling on counterexamples before stopping early
        name: Display name, optional
    """

    __test__ = False

    arb: Arbitrary[T]
    law: Law[T]
    count: int
    max_gen: int
    max_fail: int
    name: str | None = None

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")
        if self.max_gen < self.count:
            raise ValueError(f"max_gen ({self.max_gen}) must be >= count ({self.count})")
        if self.max_fail < 1:
            raise ValueError(f"max_fail must be >= 1, got {self.max_fail}")

    def set_name(self, name: str) -> None:
        self.name = name


def make_cell[T](
    arb: Arbitrary[T],
    law: Law[T],
    *,
    count: int = DEFAULT_COUNT,
    max_gen: int | None = None,
    max_fail: int = DEFAULT_MAX_FAIL,
    name: str | None = None,
    size_of: Callable[[T], int] | None = None,
) -> TestCell[T]:
    """Build a TestCell.

    Args:
        max_gen: Defaults to max(300, count).
        size_of: Replaces the arbitrary's size metric for this test only.

    Raises:
        ValueError: If a budget is out of range.
    """
    if size_of is not None:
        arb = arb.set_size(size_of)
    if max_gen is None:
        max_gen = max(DEFAULT_MAX_GEN, count)
    return TestCell(arb=arb, law=law, count=count, max_gen=max_gen, max_fail=max_fail, name=name)


# =============================================================================
# Type-Erased Test
# =============================================================================


class Test:
    """A TestCell with its payload type hidden."""

    __test__ = False
    __slots__ = ("_cell",)

    def __init__(self, cell: TestCell[Any]) -> None:
        self._cell = cell

    @classmethod
    def make[T](
        cls,
        arb: Arbitrary[T],
        law: Law[T],
        *,
        count: int = DEFAULT_COUNT,
        max_gen: int | None = None,
        max_fail: int = DEFAULT_MAX_FAIL,
        name: str | None = None,
        size_of: Callable[[T], int] | None = None,
    ) -> Test:
        """Build a test in one step; see ``make_cell`` for the arguments."""
        return cls(
            make_cell(
                arb,
                law,
                count=count,
                max_gen=max_gen,
                max_fail=max_fail,
                name=name,
                size_of=size_of,
            )
        )

    @property
    def cell(self) -> TestCell[Any]:
        return self._cell

    @property
    def name(self) -> str | None:
        return self._cell.name

    def set_name(self, name: str) -> None:
        self._cell.set_name(name)

    def run(self, rand: RandomSource | None = None, call: Callback | None = None) -> TestResult[Any]:
        """Run the test and return its result; see ``executor.check_cell``."""
        return executor.check_cell(self._cell, rand=rand, call=call)

    def check_exn(self, rand: RandomSource | None = None) -> None:
        """Run the test, raising TestFailure or TestError unless it succeeds."""
        executor.check_cell_exn(self._cell, rand=rand)

    def __repr__(self) -> str:
        return f"Test(name={self.name!r}, count={self._cell.count})"
