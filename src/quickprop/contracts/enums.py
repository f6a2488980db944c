"""Status codes shared across the engine and its reporting collaborators."""

from enum import StrEnum


class Verdict(StrEnum):
    """Outcome of evaluating a law on one instance.

    DISCARD means the instance is outside the law's domain. It is a
    control signal, never a failure: it consumes generation budget only.
    """

    HOLDS = "holds"
    FALSIFIED = "falsified"
    DISCARD = "discard"


class ResultState(StrEnum):
    """Terminal state of a test run.

    Values:
        SUCCESS: No counterexample found within the budgets
        FAILED: One or more counterexamples retained
        ERROR: The law raised an uncontrolled exception
    """

    SUCCESS = "success"
    FAILED = "failed"
    ERROR = "error"
