"""Exceptions raised and handled by quickprop.

PreconditionFailed is a control-flow signal, not an error. TestFailure and
TestError are what the "assert success" wrappers raise so a surrounding
harness sees a single reported failure per test.
"""

from __future__ import annotations

from collections.abc import Sequence

# =============================================================================
# Control Flow Exceptions
# =============================================================================


class PreconditionFailed(Exception):
    """Raised by ``assume()`` when an input is outside the law's domain.

    This is NOT an error condition - it's a control flow signal telling the
    engine to discard the current input and draw another one. The engine
    folds it into ``Verdict.DISCARD``; it never escapes a run.
    """

    def __init__(self) -> None:
        super().__init__("precondition not satisfied")


# =============================================================================
# Test Outcome Exceptions
# =============================================================================


class TestFailure(AssertionError):
    """A test was falsified.

    Attributes:
        name: Name of the failing test
        counter_examples: Printed counterexamples, with shrink step counts
        seed: Seed of the run that found them, when known
    """

    __test__ = False

    def __init__(self, name: str, counter_examples: Sequence[str], *, seed: int | None = None) -> None:
        self.name = name
        self.counter_examples = list(counter_examples)
        self.seed = seed
        super().__init__(with_seed(format_test_failure(name, self.counter_examples), seed))


class TestError(Exception):
    """A test's law raised an uncontrolled exception.

    Attributes:
        name: Name of the test
        instance: Printed instance that triggered the exception
        cause: The exception raised by the law
        seed: Seed of the run, when known
    """

    __test__ = False

    def __init__(self, name: str, instance: str, cause: BaseException, *, seed: int | None = None) -> None:
        self.name = name
        self.instance = instance
        self.cause = cause
        self.seed = seed
        super().__init__(with_seed(format_test_error(name, instance, cause), seed))


class ConfigurationError(Exception):
    """Runner configuration could not be loaded.

    Attributes:
        source: Where the bad configuration came from (file path, option name)
    """

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


def format_test_failure(name: str, counter_examples: Sequence[str]) -> str:
    """Render a falsified test and its printed counterexamples."""
    lines = [f"test `{name}` failed on ≥ {len(counter_examples)} cases:"]
    lines.extend(f"  {c_ex}" for c_ex in counter_examples)
    return "\n".join(lines)


def format_test_error(name: str, instance: str, cause: BaseException) -> str:
    """Render a test whose law raised."""
    return f"test `{name}` raised exception `{type(cause).__name__}: {cause}` on {instance}"


def with_seed(message: str, seed: int | None) -> str:
    """Append a `random seed: N` line when the seed is known."""
    if seed is None:
        return message
    return f"{message}\nrandom seed: {seed}"
