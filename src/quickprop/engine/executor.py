# src/quickprop/engine/executor.py
"""Execution engine: runs a TestCell to a TestResult.

State machine, per generated instance:

    HOLDS      -> one check consumed
    DISCARD    -> nothing but the generation attempt consumed
    FALSIFIED  -> shrink, then one check and one failure consumed; stop once
                  the failure ceiling is reached unless a size metric is set
    exception  -> ERROR, stop immediately, never shrunk

The loop runs while checks and generation attempts remain. When a size
metric is configured the run keeps going past the failure ceiling: later
failures may shrink to strictly smaller counterexamples, which then evict
the retained ones.

All mutable counters of a run live in one RunState owned by that run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from quickprop.contracts.enums import ResultState, Verdict
from quickprop.contracts.errors import PreconditionFailed, TestError, TestFailure
from quickprop.contracts.results import TestResult
from quickprop.core.random_source import RandomSource
from quickprop.engine.reporting import print_c_ex, print_instance

if TYPE_CHECKING:
    from quickprop.engine.cell import Law, Test, TestCell

logger = structlog.get_logger(__name__)

type Callback = Callable[[str, TestCell[Any], TestResult[Any]], None]

DEFAULT_NAME = "<test>"


@dataclass
class RunState[T]:
    """Per-run context: remaining budgets and the result being built."""

    cell: TestCell[T]
    rand: RandomSource
    cur_count: int
    cur_max_gen: int
    cur_max_fail: int
    result: TestResult[T] = field(default_factory=TestResult)

    @classmethod
    def start(cls, cell: TestCell[T], rand: RandomSource) -> RunState[T]:
        return cls(
            cell=cell,
            rand=rand,
            cur_count=cell.count,
            cur_max_gen=cell.max_gen,
            cur_max_fail=cell.max_fail,
            result=TestResult(seed=rand.seed),
        )


def evaluate_law[T](law: Law[T], instance: T) -> Verdict:
    """Evaluate law on instance and fold the outcome into a Verdict.

    A PreconditionFailed raised by the law becomes DISCARD. Any other
    exception propagates to the caller.
    """
    try:
        outcome = law(instance)
    except PreconditionFailed:
        return Verdict.DISCARD
    if isinstance(outcome, Verdict):
        return outcome
    return Verdict.HOLDS if outcome else Verdict.FALSIFIED


def _falsifies[T](law: Law[T], candidate: T) -> bool:
    try:
        return evaluate_law(law, candidate) == Verdict.FALSIFIED
    except Exception:
        # The law fails on this candidate too
        return True


def shrink[T](cell: TestCell[T], instance: T) -> tuple[T, int]:
    """Greedy first-improvement search for a smaller falsifying instance.

    Repeatedly replaces the current instance with the first shrink candidate
    that still falsifies the law, until no candidate does. Never backtracks.
    A shrinker that raises while producing candidates ends the search at the
    current instance.

    Returns:
        The minimised instance and the number of successful steps taken.
    """
    shrinker = cell.arb.shrinker
    if shrinker is None:
        return instance, 0
    law = cell.law
    current = instance
    steps = 0
    while True:
        # Boxed so that a None candidate is distinguishable from "not found"
        try:
            found = shrinker(current).map(lambda candidate: (candidate,)).find(lambda boxed: _falsifies(law, boxed[0]))
        except Exception as exc:
            logger.info("shrinker raised", test=cell.name, error_type=type(exc).__name__, shrink_steps=steps)
            return current, steps
        if found is None:
            return current, steps
        current = found[0]
        steps += 1


def _run[T](state: RunState[T]) -> None:
    cell = state.cell
    arb = cell.arb
    result = state.result
    while state.cur_count > 0 and state.cur_max_gen > 0:
        instance = arb.gen(state.rand)
        state.cur_max_gen -= 1
        result.count_gen += 1
        if arb.collect is not None:
            result.record_tag(arb.collect(instance))

        try:
            verdict = evaluate_law(cell.law, instance)
        except Exception as exc:
            logger.info("law raised", test=cell.name, error_type=type(exc).__name__)
            result.set_error(instance, exc)
            return

        match verdict:
            case Verdict.HOLDS:
                result.count += 1
                state.cur_count -= 1
            case Verdict.DISCARD:
                continue
            case Verdict.FALSIFIED:
                shrunk, steps = shrink(cell, instance)
                logger.debug("counterexample shrunk", test=cell.name, shrink_steps=steps)
                state.cur_count -= 1
                state.cur_max_fail -= 1
                result.fail(shrunk, steps=steps, size_of=arb.size_of)
                if state.cur_max_fail <= 0 and arb.size_of is None:
                    return


def check_cell[T](
    cell: TestCell[T],
    rand: RandomSource | None = None,
    call: Callback | None = None,
) -> TestResult[T]:
    """Run cell and return its result.

    Args:
        cell: The test to run
        rand: Random source, consumed by the run. Self-initialised (and its
            seed logged) when None.
        call: Invoked once with (name, cell, result) after the run.

    Returns:
        The TestResult. Falsification and law exceptions are recorded in the
        result, never raised.
    """
    if rand is None:
        rand = RandomSource.self_init()
        logger.info("random source self-initialised", test=cell.name, seed=rand.seed)
    logger.debug(
        "test started",
        test=cell.name,
        count=cell.count,
        max_gen=cell.max_gen,
        max_fail=cell.max_fail,
    )
    state = RunState.start(cell, rand)
    _run(state)
    result = state.result
    logger.debug(
        "test finished",
        test=cell.name,
        state=str(result.state),
        count=result.count,
        count_gen=result.count_gen,
    )
    if call is not None:
        call(cell.name or DEFAULT_NAME, cell, result)
    return result


def check_result[T](cell: TestCell[T], result: TestResult[T]) -> None:
    """Raise unless result is a success.

    Raises:
        TestFailure: If counterexamples were found.
        TestError: If the law raised; the original exception is chained.
    """
    name = cell.name or DEFAULT_NAME
    match result.state:
        case ResultState.SUCCESS:
            return
        case ResultState.FAILED:
            raise TestFailure(
                name,
                [print_c_ex(cell.arb, c_ex) for c_ex in result.counter_examples],
                seed=result.seed,
            )
        case ResultState.ERROR:
            if result.error is None:
                raise RuntimeError("ERROR result with no error recorded")
            cause = result.error.exception
            raise TestError(
                name,
                print_instance(cell.arb, result.error.instance),
                cause,
                seed=result.seed,
            ) from cause


def check_cell_exn[T](
    cell: TestCell[T],
    rand: RandomSource | None = None,
    call: Callback | None = None,
) -> None:
    """Run cell, then raise as ``check_result`` does."""
    result = check_cell(cell, rand=rand, call=call)
    check_result(cell, result)


def check_exn(test: Test, rand: RandomSource | None = None) -> None:
    """Run a type-erased test, raising TestFailure or TestError unless it succeeds."""
    check_cell_exn(test.cell, rand=rand)
