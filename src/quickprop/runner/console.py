# src/quickprop/runner/console.py
"""Console and TAP runners for lists of tests.

Seed policy: one RandomSource per run, shared by every test in order. Test
inputs are therefore seed-chained: re-running the same list with the same
seed replays every test exactly, but a test's inputs depend on the tests
before it.
"""

from __future__ import annotations

import sys
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TextIO

import structlog

from quickprop.contracts.enums import ResultState
from quickprop.core.config import RunnerSettings
from quickprop.engine import executor
from quickprop.engine.reporting import print_error, print_fail
from quickprop.runner.hookspecs import create_plugin_manager, hookimpl
from quickprop.runner.seed import random_state

if TYPE_CHECKING:
    from quickprop.contracts.results import TestResult
    from quickprop.core.random_source import RandomSource
    from quickprop.engine.cell import Test, TestCell

logger = structlog.get_logger(__name__)

ANONYMOUS_PREFIX = "<anon prop>"


@dataclass(frozen=True, slots=True)
class TestOutcome:
    """One finished test, as seen by a runner."""

    __test__ = False

    name: str
    result: TestResult[Any]
    elapsed: float


def display_names(tests: Sequence[Test]) -> list[str]:
    """Display names, numbering anonymous tests ``<anon prop> 0``, ``<anon prop> 1``..."""
    names = []
    anonymous = 0
    for test in tests:
        if test.name is not None:
            names.append(test.name)
        else:
            names.append(f"{ANONYMOUS_PREFIX} {anonymous}")
            anonymous += 1
    return names


def format_report(name: str, cell: TestCell[Any], result: TestResult[Any]) -> str | None:
    """Failure or error report for result, None on success."""
    match result.state:
        case ResultState.SUCCESS:
            return None
        case ResultState.FAILED:
            return print_fail(cell.arb, name, result.counter_examples)
        case ResultState.ERROR:
            if result.error is None:
                raise RuntimeError("ERROR result with no error recorded")
            return print_error(cell.arb, name, result.error.instance, result.error.exception)


class ConsoleReporter:
    """Built-in reporter: statistics when verbose, failures and errors always."""

    def __init__(self, out: TextIO, *, verbose: bool = False) -> None:
        self._out = out
        self._verbose = verbose

    @hookimpl
    def quickprop_test_finished(self, name: str, cell: TestCell[Any], result: TestResult[Any]) -> None:
        if self._verbose:
            print(f"law {name}: {result.count} relevant cases ({result.count_gen} total)", file=self._out)
            if cell.arb.collect is not None:
                for tag, occurrences in sorted(result.collected.items()):
                    print(f"  {tag}: {occurrences} cases", file=self._out)
        report = format_report(name, cell, result)
        if report is not None:
            print(f"  {report}", file=self._out)


def _execute(
    tests: Sequence[Test],
    rand: RandomSource,
    plugins: Iterable[object],
) -> list[TestOutcome]:
    plugin_manager = create_plugin_manager(plugins)
    outcomes = []
    for test, name in zip(tests, display_names(tests), strict=True):
        started = time.perf_counter()
        result = executor.check_cell(test.cell, rand=rand)
        elapsed = time.perf_counter() - started
        plugin_manager.hook.quickprop_test_finished(name=name, cell=test.cell, result=result)
        outcomes.append(TestOutcome(name=name, result=result, elapsed=elapsed))
    return outcomes


def run_tests(
    tests: Sequence[Test],
    *,
    settings: RunnerSettings | None = None,
    rand: RandomSource | None = None,
    out: TextIO | None = None,
    plugins: Iterable[object] = (),
) -> int:
    """Run tests in order, print a console report and return an exit code.

    Args:
        tests: Tests to run
        settings: Verbosity, slow-test listing and seed. Defaults apply when None.
        rand: Shared random source; built from settings.seed when None.
        out: Report destination, stdout when None
        plugins: Extra reporter plugins implementing ``quickprop_test_finished``

    Returns:
        0 if every test succeeded, 1 otherwise.
    """
    settings = settings if settings is not None else RunnerSettings()
    out = out if out is not None else sys.stdout
    rand = rand if rand is not None else random_state(settings.seed)
    print(f"random seed: {rand.seed}", file=out)

    reporter = ConsoleReporter(out, verbose=settings.verbose)
    outcomes = _execute(tests, rand, [reporter, *plugins])

    if settings.slow > 0:
        print(f"Display the {settings.slow} slowest tests:", file=out)
        slowest = sorted(outcomes, key=lambda outcome: outcome.elapsed, reverse=True)
        for outcome in slowest[: settings.slow]:
            print(f"  {outcome.name} in {outcome.elapsed:.2f}s", file=out)

    failed = sum(1 for outcome in outcomes if not outcome.result.is_success)
    logger.debug("run finished", seed=rand.seed, tests=len(outcomes), failed=failed)
    if failed == 0:
        print(f"success (ran {len(outcomes)} tests)", file=out)
        return 0
    print(f"failure ({failed} tests failed, ran {len(outcomes)} tests)", file=out)
    return 1


def run_tap(
    tests: Sequence[Test],
    *,
    settings: RunnerSettings | None = None,
    rand: RandomSource | None = None,
    out: TextIO | None = None,
    plugins: Iterable[object] = (),
) -> int:
    """Run tests and print TAP version 13 output.

    Reports are single-line directives; their continuation lines are
    emitted as TAP diagnostics (``# ...``).

    Returns:
        0 if every test succeeded, 1 otherwise.
    """
    settings = settings if settings is not None else RunnerSettings()
    out = out if out is not None else sys.stdout
    rand = rand if rand is not None else random_state(settings.seed)
    print("TAP version 13", file=out)
    print(f"1..{len(tests)}", file=out)
    print(f"# random seed: {rand.seed}", file=out)

    outcomes = _execute(tests, rand, plugins)
    failed = 0
    for number, (test, outcome) in enumerate(zip(tests, outcomes, strict=True), start=1):
        report = format_report(outcome.name, test.cell, outcome.result)
        if report is None:
            print(f"ok {number} - {outcome.name}", file=out)
            continue
        failed += 1
        first, *rest = report.splitlines()
        prefix = "ERROR: " if outcome.result.state == ResultState.ERROR else ""
        print(f"not ok {number} - {outcome.name} # {prefix}{first}", file=out)
        for line in rest:
            print(f"# {line}", file=out)
    return 0 if failed == 0 else 1
