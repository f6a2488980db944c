"""quickprop: property-based testing.

Describe how to generate values of a type (an Arbitrary), state a law over
it, and quickprop checks the law on many random inputs. Falsifying inputs
are shrunk to a locally minimal counterexample before being reported.

Usage:
    from quickprop import Test, arbitrary, run_tests

    reverse = Test.make(
        arbitrary.list_of(arbitrary.small_int),
        lambda xs: list(reversed(list(reversed(xs)))) == xs,
        name="reverse involutive",
    )
    raise SystemExit(run_tests([reverse]))
"""

__version__ = "0.3.0"

from quickprop.contracts import (
    ConfigurationError,
    CounterExample,
    PreconditionFailed,
    ResultState,
    TestError,
    TestFailure,
    TestResult,
    Verdict,
)
from quickprop.core import RandomSource, RunnerSettings, configure_logging, load_settings
from quickprop.engine import (
    Test,
    TestCell,
    assume,
    check_cell,
    check_cell_exn,
    check_exn,
    check_result,
    implies,
    make_cell,
)
from quickprop.generation import Arbitrary, Candidates, Gen
from quickprop.generation import arbitrary, gen, printers, shrink
from quickprop.runner import run_tap, run_tests, to_pytest, to_pytest_list

__all__ = [
    "Arbitrary",
    "Candidates",
    "ConfigurationError",
    "CounterExample",
    "Gen",
    "PreconditionFailed",
    "RandomSource",
    "ResultState",
    "RunnerSettings",
    "Test",
    "TestCell",
    "TestError",
    "TestFailure",
    "TestResult",
    "Verdict",
    "__version__",
    "arbitrary",
    "assume",
    "check_cell",
    "check_cell_exn",
    "check_exn",
    "check_result",
    "configure_logging",
    "gen",
    "implies",
    "load_settings",
    "make_cell",
    "printers",
    "run_tap",
    "run_tests",
    "shrink",
    "to_pytest",
    "to_pytest_list",
]
