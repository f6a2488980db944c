# src/quickprop/generation/candidates.py
"""Push-style lazy sequences of shrink candidates.

A ``Candidates[T]`` is a producer: given a consumer callback, it calls the
callback once per element, in a defined order. Nothing is materialised up
front, and a search can stop the producer early (``find``). Because a
producer is a pure function of the value it was built from, it can be run
again from scratch any number of times.

Usage:
    smaller = Candidates.of_iterable([3, 2, 1]) + Candidates.single(0)
    first_even = smaller.find(lambda x: x % 2 == 0)   # -> 2, stops before 1
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

type Consumer[T] = Callable[[T], None]


class _StopSearch(Exception):
    """Internal signal unwinding a producer once find() has its match."""


class Candidates[T]:
    """A finite, re-runnable, push-style sequence."""

    __slots__ = ("_produce",)

    def __init__(self, produce: Callable[[Consumer[T]], None]) -> None:
        self._produce = produce

    def __call__(self, consume: Consumer[T]) -> None:
        self._produce(consume)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @staticmethod
    def empty() -> Candidates[T]:
        return Candidates(lambda _consume: None)

    @staticmethod
    def single(value: T) -> Candidates[T]:
        return Candidates(lambda consume: consume(value))

    @staticmethod
    def of_iterable(values: Iterable[T]) -> Candidates[T]:
        """Snapshot values (a list, tuple, generator...) into a re-runnable sequence."""
        items = tuple(values)

        def produce(consume: Consumer[T]) -> None:
            for item in items:
                consume(item)

        return Candidates(produce)

    # -------------------------------------------------------------------------
    # Combinators
    # -------------------------------------------------------------------------

    def map[U](self, f: Callable[[T], U]) -> Candidates[U]:
        return Candidates(lambda consume: self._produce(lambda x: consume(f(x))))

    def bind[U](self, f: Callable[[T], Candidates[U]]) -> Candidates[U]:
        return Candidates(lambda consume: self._produce(lambda x: f(x)(consume)))

    def append(self, other: Candidates[T]) -> Candidates[T]:
        """All of self, then all of other."""

        def produce(consume: Consumer[T]) -> None:
            self._produce(consume)
            other(consume)

        return Candidates(produce)

    def __add__(self, other: Candidates[T]) -> Candidates[T]:
        return self.append(other)

    def pair[U](self, other: Candidates[U]) -> Candidates[tuple[T, U]]:
        """Cartesian product, self varying slowest."""
        return Candidates(lambda consume: self._produce(lambda x: other(lambda y: consume((x, y)))))

    def triple[U, V](self, second: Candidates[U], third: Candidates[V]) -> Candidates[tuple[T, U, V]]:
        return Candidates(
            lambda consume: self._produce(lambda x: second(lambda y: third(lambda z: consume((x, y, z)))))
        )

    # -------------------------------------------------------------------------
    # Consumers
    # -------------------------------------------------------------------------

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        """First element satisfying predicate, or None.

        Elements after the match are never produced, so predicate is not
        evaluated on them. When None is itself a possible element, box the
        elements first (``seq.map(lambda x: (x,)).find(...)``).
        """
        found: list[T] = []
        stop = _StopSearch()

        def consume(x: T) -> None:
            if predicate(x):
                found.append(x)
                raise stop

        try:
            self._produce(consume)
        except _StopSearch as e:
            # A nested search unwinding through us is not our match
            if e is not stop:
                raise
        return found[0] if found else None

    def to_list(self) -> list[T]:
        collected: list[T] = []
        self._produce(collected.append)
        return collected


def ap[T, U](fs: Candidates[Callable[[T], U]], xs: Candidates[T]) -> Candidates[U]:
    """Apply every function in fs to every element of xs."""
    return Candidates(lambda consume: fs(lambda f: xs(lambda x: consume(f(x)))))


def map2[A, B, R](f: Callable[[A, B], R], xs: Candidates[A], ys: Candidates[B]) -> Candidates[R]:
    return Candidates(lambda consume: xs(lambda x: ys(lambda y: consume(f(x, y)))))
