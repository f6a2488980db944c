# tests/helpers.py
"""Deterministic generators for engine tests."""

from __future__ import annotations

import itertools
from collections.abc import Iterator

from quickprop.core.random_source import RandomSource
from quickprop.generation.gen import Gen


def counting_gen(start: int = 0) -> Gen[int]:
    """Generator yielding start, start + 1, ... regardless of the source."""
    counter: Iterator[int] = itertools.count(start)
    return Gen(lambda _rand: next(counter))


def recording[T](gen: Gen[T], sink: list[T]) -> Gen[T]:
    """Wrap gen so every drawn value is appended to sink."""

    def draw(source: RandomSource) -> T:
        value = gen(source)
        sink.append(value)
        return value

    return Gen(draw)


def boundary_shrink_steps(x: int, boundary: int) -> int:
    """Steps the integer shrinker takes from x down to boundary for the law ``x < boundary``."""
    steps = 0
    while True:
        if abs(x) > 2 and x // 2 >= boundary:
            x //= 2
        elif x - 1 >= boundary:
            x -= 1
        else:
            return steps
        steps += 1
