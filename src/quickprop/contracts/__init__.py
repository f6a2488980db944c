"""Shared contracts: verdicts, result states, outcomes and exceptions.

Leaf package: imports nothing else from quickprop, so every other layer
(generation, engine, runner) may depend on it.
"""

from quickprop.contracts.enums import ResultState, Verdict
from quickprop.contracts.errors import (
    ConfigurationError,
    PreconditionFailed,
    TestError,
    TestFailure,
)
from quickprop.contracts.results import CounterExample, ErrorInfo, TestResult

__all__ = [
    "ConfigurationError",
    "CounterExample",
    "ErrorInfo",
    "PreconditionFailed",
    "ResultState",
    "TestError",
    "TestFailure",
    "TestResult",
    "Verdict",
]
