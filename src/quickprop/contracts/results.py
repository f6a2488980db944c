"""Run outcomes.

These types answer: "What did checking a property produce?"

IMPORTANT:
- TestResult is mutable and owned by exactly one run; reporters read it
  only after the run finished.
- In FAILED state every retained counterexample has the same size when a
  size metric is configured (see ``TestResult.fail``).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field

from quickprop.contracts.enums import ResultState


@dataclass(frozen=True, slots=True)
class CounterExample[T]:
    """A falsifying instance.

    Attributes:
        instance: The (possibly shrunk) instance
        shrink_steps: Number of successful shrink recursions that produced it
    """

    instance: T
    shrink_steps: int


@dataclass(frozen=True, slots=True)
class ErrorInfo[T]:
    """Instance whose evaluation raised, with the exception preserved verbatim."""

    instance: T
    exception: Exception


@dataclass
class TestResult[T]:
    """Outcome of running one test.

    Fields:
        state: SUCCESS, FAILED or ERROR
        counter_examples: Retained counterexamples, in discovery order (FAILED only)
        error: Triggering instance and exception (ERROR only)
        count: Number of law evaluations that held
        count_gen: Number of generation attempts, discards included
        collected: Classification tag tally
        seed: Seed of the random source the run drew from
    """

    __test__ = False

    state: ResultState = ResultState.SUCCESS
    counter_examples: list[CounterExample[T]] = field(default_factory=list)
    error: ErrorInfo[T] | None = None
    count: int = 0
    count_gen: int = 0
    collected: Counter[str] = field(default_factory=Counter)
    seed: int | None = None

    @property
    def is_success(self) -> bool:
        """True if no counterexample and no error was recorded."""
        return self.state == ResultState.SUCCESS

    def fail(
        self,
        instance: T,
        *,
        steps: int,
        size_of: Callable[[T], int] | None = None,
    ) -> None:
        """Record a falsifying instance under the retention policy.

        With a size metric, all retained counterexamples share one size:
        a strictly smaller instance replaces them, a strictly larger one is
        dropped, an equal one is appended. Without a size metric every
        distinct instance is appended. An ERROR state is never overwritten.
        """
        c_ex = CounterExample(instance=instance, shrink_steps=steps)
        match self.state:
            case ResultState.ERROR:
                return
            case ResultState.SUCCESS:
                self.state = ResultState.FAILED
                self.counter_examples = [c_ex]
            case ResultState.FAILED:
                if not self.counter_examples:
                    raise RuntimeError("FAILED result with no counterexamples")
                if size_of is None:
                    self._append_distinct(c_ex)
                    return
                # All retained have the same size, compare to the first one
                new_size = size_of(instance)
                kept_size = size_of(self.counter_examples[0].instance)
                if new_size < kept_size:
                    self.counter_examples = [c_ex]
                elif new_size == kept_size:
                    self._append_distinct(c_ex)

    def _append_distinct(self, c_ex: CounterExample[T]) -> None:
        if any(kept.instance == c_ex.instance for kept in self.counter_examples):
            return
        self.counter_examples.append(c_ex)

    def set_error(self, instance: T, exception: Exception) -> None:
        """Record an uncontrolled failure. Terminal: replaces any prior state."""
        self.state = ResultState.ERROR
        self.error = ErrorInfo(instance=instance, exception=exception)

    def record_tag(self, tag: str) -> None:
        """Tally one classification tag."""
        self.collected[tag] += 1
