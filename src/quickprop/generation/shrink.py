# src/quickprop/generation/shrink.py
"""Shrinkers: from a value to a lazy sequence of "smaller" values.

A shrinker never fails and never consumes randomness: the candidates for a
value are a deterministic function of that value. Candidate order matters,
because the engine keeps the first candidate that still falsifies the law.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from quickprop.generation.candidates import Candidates, Consumer

type Shrinker[T] = Callable[[T], Candidates[T]]


def nil[T](_value: T) -> Candidates[T]:
    """No candidates: the value has no smaller form."""
    return Candidates.empty()


def _halve(x: int) -> int:
    # Integer division toward zero
    return -((-x) // 2) if x < 0 else x // 2


def integer(x: int) -> Candidates[int]:
    """Move toward zero: halve when |x| > 2, then step by one."""

    def produce(consume: Consumer[int]) -> None:
        if x < -2 or x > 2:
            consume(_halve(x))
        if x > 0:
            consume(x - 1)
        if x < 0:
            consume(x + 1)

    return Candidates(produce)


def option[T](shrink: Shrinker[T]) -> Shrinker[T | None]:
    """None first, then every shrink of the wrapped value."""

    def shrink_option(value: T | None) -> Candidates[T | None]:
        if value is None:
            return Candidates.empty()
        return Candidates.single(None) + shrink(value)

    return shrink_option


def string(s: str) -> Candidates[str]:
    """Every one-character deletion, left to right."""

    def produce(consume: Consumer[str]) -> None:
        for i in range(len(s)):
            consume(s[:i] + s[i + 1 :])

    return Candidates(produce)


def _sequence_shrinker(rebuild: Callable[[list[Any]], Any], shrink: Shrinker[Any] | None) -> Shrinker[Any]:
    def shrink_sequence(items: Any) -> Candidates[Any]:
        def produce(consume: Consumer[Any]) -> None:
            # Removals first: they shrink the most
            for i in range(len(items)):
                consume(rebuild([*items[:i], *items[i + 1 :]]))
            if shrink is None:
                return
            # Then each element shrunk in place, all others fixed
            for i, element in enumerate(items):

                def substitute(smaller: object, i: int = i) -> None:
                    copy = list(items)
                    copy[i] = smaller
                    consume(rebuild(copy))

                shrink(element)(substitute)

        return Candidates(produce)

    return shrink_sequence


def list_[T](shrink: Shrinker[T] | None = None) -> Shrinker[list[T]]:
    """Shrinker for lists: element removals, then element-level shrinks if given."""
    return _sequence_shrinker(list, shrink)


def tuple_[T](shrink: Shrinker[T] | None = None) -> Shrinker[tuple[T, ...]]:
    """Shrinker for tuples, same candidate order as ``list_``."""
    return _sequence_shrinker(tuple, shrink)


def pair[A, B](shrink_a: Shrinker[A], shrink_b: Shrinker[B]) -> Shrinker[tuple[A, B]]:
    """Shrink one component at a time: first the left, then the right."""

    def shrink_pair(value: tuple[A, B]) -> Candidates[tuple[A, B]]:
        a, b = value
        return shrink_a(a).map(lambda a2: (a2, b)) + shrink_b(b).map(lambda b2: (a, b2))

    return shrink_pair


def triple[A, B, C](
    shrink_a: Shrinker[A],
    shrink_b: Shrinker[B],
    shrink_c: Shrinker[C],
) -> Shrinker[tuple[A, B, C]]:
    def shrink_triple(value: tuple[A, B, C]) -> Candidates[tuple[A, B, C]]:
        a, b, c = value
        return (
            shrink_a(a).map(lambda a2: (a2, b, c))
            + shrink_b(b).map(lambda b2: (a, b2, c))
            + shrink_c(c).map(lambda c2: (a, b, c2))
        )

    return shrink_triple
