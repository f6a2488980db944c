# src/quickprop/generation/gen.py
"""Random value generators and their combinators.

A ``Gen[T]`` is a pure function from a RandomSource to a value of type T.
Generators have no identity and no state of their own: they are composed,
not stored, and calling one never does anything observable beyond
consuming entropy from the source it is given. (The single exception is
``graft_corners``, whose generators remember which corner cases they have
already produced.)

Combinators:
- constant, map/bind (methods), ap, map2, map3, map_keep_input
- oneof / oneofl (uniform choice), frequency / frequencyl (weighted choice)
- nat (size-biased naturals), sized, fix (size-indexed recursion)
- bounded and full-range integers, floats, characters, strings
- lists, tuples, options, pairs/triples/quads, shuffling

Usage:
    tree = sized(fix(lambda self, n: (
        nat.map(Leaf) if n == 0
        else frequency([(1, nat.map(Leaf)), (2, map2(Node, self(n // 2), self(n // 2)))])
    )))
    sample = generate(tree, n=20, rand=RandomSource.from_seed(7))
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from quickprop.core.random_source import RandomSource

# Full-range integers are 64-bit two's complement
MAX_INT = (1 << 63) - 1
MIN_INT = -(1 << 63)

PRINTABLE_CHARS = "".join(chr(code) for code in range(32, 127)) + "\n"

type Sized[T] = Callable[[int], Gen[T]]


class Gen[T]:
    """A value generator: ``RandomSource -> T``."""

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[RandomSource], T]) -> None:
        self._fn = fn

    def __call__(self, rand: RandomSource) -> T:
        return self._fn(rand)

    def map[U](self, f: Callable[[T], U]) -> Gen[U]:
        """Transform every generated value with f."""
        return Gen(lambda rand: f(self._fn(rand)))

    def bind[U](self, f: Callable[[T], Gen[U]]) -> Gen[U]:
        """Sequential composition: the next generator depends on the drawn value."""
        return Gen(lambda rand: f(self._fn(rand))(rand))


# =============================================================================
# Core Combinators
# =============================================================================


def constant[T](value: T) -> Gen[T]:
    """Always produce value."""
    return Gen(lambda _rand: value)


def ap[T, U](fs: Gen[Callable[[T], U]], xs: Gen[T]) -> Gen[U]:
    """Apply a generated function to a generated argument."""
    return Gen(lambda rand: fs(rand)(xs(rand)))


def map2[A, B, R](f: Callable[[A, B], R], ga: Gen[A], gb: Gen[B]) -> Gen[R]:
    return Gen(lambda rand: f(ga(rand), gb(rand)))


def map3[A, B, C, R](f: Callable[[A, B, C], R], ga: Gen[A], gb: Gen[B], gc: Gen[C]) -> Gen[R]:
    return Gen(lambda rand: f(ga(rand), gb(rand), gc(rand)))


def map_keep_input[T, U](f: Callable[[T], U], gen: Gen[T]) -> Gen[tuple[T, U]]:
    """Generate x and pair it with f(x)."""

    def draw(rand: RandomSource) -> tuple[T, U]:
        x = gen(rand)
        return x, f(x)

    return Gen(draw)


def oneof[T](gens: Sequence[Gen[T]]) -> Gen[T]:
    """Uniform choice among generators.

    Raises:
        ValueError: If gens is empty.
    """
    choices = tuple(gens)
    if not choices:
        raise ValueError("oneof requires at least one generator")
    return Gen(lambda rand: choices[rand.below(len(choices))](rand))


def oneofl[T](values: Sequence[T]) -> Gen[T]:
    """Uniform choice among plain values.

    Raises:
        ValueError: If values is empty.
    """
    choices = tuple(values)
    if not choices:
        raise ValueError("oneofl requires at least one value")
    return Gen(lambda rand: choices[rand.below(len(choices))])


def _validate_weights[T](weighted: Sequence[tuple[int, T]], who: str) -> tuple[tuple[tuple[int, T], ...], int]:
    pairs = tuple(weighted)
    for weight, _ in pairs:
        if weight < 0:
            raise ValueError(f"{who}: weights must be non-negative, got {weight}")
    total = sum(weight for weight, _ in pairs)
    if total <= 0:
        raise ValueError(f"{who} requires a positive total weight")
    return pairs, total


def _pick_weighted[T](pairs: tuple[tuple[int, T], ...], total: int, rand: RandomSource) -> T:
    # Uniform draw in [0, total), first bucket whose cumulative sum exceeds it wins
    roll = rand.below(total)
    threshold = 0
    for weight, value in pairs:
        threshold += weight
        if roll < threshold:
            return value
    raise RuntimeError("weighted choice fell through")  # pragma: no cover


def frequencyl[T](weighted: Sequence[tuple[int, T]]) -> Gen[T]:
    """Choose a plain value with probability proportional to its weight.

    Raises:
        ValueError: If a weight is negative or all weights are zero.
    """
    pairs, total = _validate_weights(weighted, "frequencyl")
    return Gen(lambda rand: _pick_weighted(pairs, total, rand))


def frequency[T](weighted: Sequence[tuple[int, Gen[T]]]) -> Gen[T]:
    """Choose a generator with probability proportional to its weight, then draw from it."""
    pairs, total = _validate_weights(weighted, "frequency")
    return Gen(lambda rand: _pick_weighted(pairs, total, rand)(rand))


# =============================================================================
# Numbers
# =============================================================================


def _nat(rand: RandomSource) -> int:
    p = rand.uniform(1.0)
    if p < 0.5:
        return rand.below(10)
    if p < 0.75:
        return rand.below(100)
    if p < 0.95:
        return rand.below(1_000)
    return rand.below(10_000)


nat: Gen[int] = Gen(_nat)
"""Small natural numbers: ~50% in [0,10), 25% in [10,100), 20% below 1000, 5% below 10000."""

small_int = nat

neg_int: Gen[int] = nat.map(lambda n: -n)

unit: Gen[None] = constant(None)

boolean: Gen[bool] = Gen(lambda rand: rand.coin())


def _sign(rand: RandomSource) -> float:
    return 1.0 if rand.uniform(1.0) < 0.5 else -1.0


def _floating(rand: RandomSource) -> float:
    # Never NaN nor infinite: exp of a bounded exponent
    magnitude = math.exp(rand.uniform(15.0) * _sign(rand))
    return magnitude * _sign(rand)


floating: Gen[float] = Gen(_floating)
pos_float: Gen[float] = floating.map(abs)
neg_float: Gen[float] = pos_float.map(lambda x: -x)


def _pos_int(rand: RandomSource) -> int:
    # 30 + 30 + 3 independent uniform bits cover [0, MAX_INT]
    low = rand.bits()
    middle = rand.bits() << 30
    top = (rand.bits() & 0b111) << 60
    return low | middle | top


pos_int: Gen[int] = Gen(_pos_int)


def _integer(rand: RandomSource) -> int:
    if rand.coin():
        return -_pos_int(rand) - 1
    return _pos_int(rand)


integer: Gen[int] = Gen(_integer)
"""Uniform over [MIN_INT, MAX_INT], sign chosen independently of magnitude."""


def int_bound(n: int) -> Gen[int]:
    """Uniform in [0, n].

    Raises:
        ValueError: If n is negative.
    """
    if n < 0:
        raise ValueError(f"int_bound requires n >= 0, got {n}")
    return Gen(lambda rand: rand.below(n + 1))


def int_range(low: int, high: int) -> Gen[int]:
    """Uniform in [low, high].

    Raises:
        ValueError: If high < low.
    """
    if high < low:
        raise ValueError(f"int_range requires high >= low, got [{low}, {high}]")
    return Gen(lambda rand: low + rand.below(high - low + 1))


ui32: Gen[int] = Gen(lambda rand: (rand.bits() | (rand.bits() << 30)) & 0xFFFF_FFFF)
ui64: Gen[int] = Gen(lambda rand: (rand.bits() | (rand.bits() << 30) | (rand.bits() << 60)) & 0xFFFF_FFFF_FFFF_FFFF)


# =============================================================================
# Containers
# =============================================================================


def list_size[T](size: Gen[int], gen: Gen[T]) -> Gen[list[T]]:
    """Draw a length from size, then that many independent elements."""
    return Gen(lambda rand: [gen(rand) for _ in range(size(rand))])


def list_of[T](gen: Gen[T]) -> Gen[list[T]]:
    return list_size(nat, gen)


def list_repeat[T](n: int, gen: Gen[T]) -> Gen[list[T]]:
    return list_size(constant(n), gen)


def tuple_size[T](size: Gen[int], gen: Gen[T]) -> Gen[tuple[T, ...]]:
    return Gen(lambda rand: tuple(gen(rand) for _ in range(size(rand))))


def tuple_of[T](gen: Gen[T]) -> Gen[tuple[T, ...]]:
    return tuple_size(nat, gen)


def tuple_repeat[T](n: int, gen: Gen[T]) -> Gen[tuple[T, ...]]:
    return tuple_size(constant(n), gen)


def opt[T](gen: Gen[T]) -> Gen[T | None]:
    """None with probability 0.15, otherwise a drawn value."""

    def draw(rand: RandomSource) -> T | None:
        if rand.uniform(1.0) < 0.15:
            return None
        return gen(rand)

    return Gen(draw)


def pair[A, B](ga: Gen[A], gb: Gen[B]) -> Gen[tuple[A, B]]:
    return Gen(lambda rand: (ga(rand), gb(rand)))


def triple[A, B, C](ga: Gen[A], gb: Gen[B], gc: Gen[C]) -> Gen[tuple[A, B, C]]:
    return Gen(lambda rand: (ga(rand), gb(rand), gc(rand)))


def quad[A, B, C, D](ga: Gen[A], gb: Gen[B], gc: Gen[C], gd: Gen[D]) -> Gen[tuple[A, B, C, D]]:
    return Gen(lambda rand: (ga(rand), gb(rand), gc(rand), gd(rand)))


def shuffle_in_place[T](items: list[T]) -> Gen[None]:
    """Fisher-Yates shuffle of items, uniform over permutations.

    The list is mutated each time the generator is called.
    """

    def draw(rand: RandomSource) -> None:
        for i in range(len(items) - 1, 0, -1):
            j = rand.below(i + 1)
            items[i], items[j] = items[j], items[i]

    return Gen(draw)


def shuffled[T](items: Sequence[T]) -> Gen[list[T]]:
    """A shuffled copy of items."""

    def draw(rand: RandomSource) -> list[T]:
        copy = list(items)
        shuffle_in_place(copy)(rand)
        return copy

    return Gen(draw)


# =============================================================================
# Characters and Strings
# =============================================================================

character: Gen[str] = Gen(lambda rand: chr(rand.below(255)))
printable: Gen[str] = Gen(lambda rand: PRINTABLE_CHARS[rand.below(len(PRINTABLE_CHARS))])
numeral: Gen[str] = Gen(lambda rand: chr(ord("0") + rand.below(10)))


def string_size(size: Gen[int], gen: Gen[str] = character) -> Gen[str]:
    return Gen(lambda rand: "".join(gen(rand) for _ in range(size(rand))))


def string(gen: Gen[str] = character) -> Gen[str]:
    """Strings whose length follows nat."""
    return string_size(nat, gen)


def small_string(gen: Gen[str] = character) -> Gen[str]:
    """Strings of length 0 to 10."""
    return string_size(int_range(0, 10), gen)


# =============================================================================
# Corner Cases, Sizing and Recursion
# =============================================================================


def graft_corners[T](gen: Gen[T], corners: Sequence[T]) -> Gen[T]:
    """A stateful generator: yields each corner once, in order, then defers to gen.

    Each call to graft_corners builds a fresh generator with its own corner
    queue; the queue is consumed across draws.
    """
    pending = list(corners)

    def draw(rand: RandomSource) -> T:
        if pending:
            return pending.pop(0)
        return gen(rand)

    return Gen(draw)


def nat_corners() -> Gen[int]:
    return graft_corners(nat, [0, 1, 2, MAX_INT])


def sized[T](f: Sized[T]) -> Gen[T]:
    """Draw a size from nat, then generate with f(size)."""
    return Gen(lambda rand: f(nat(rand))(rand))


def fix[T](f: Callable[[Sized[T], int], Gen[T]]) -> Sized[T]:
    """Fixpoint for size-indexed recursive generators.

    f receives the recursive handle and the current size. Recursive calls
    must use a strictly smaller size; that is the caller's responsibility.
    The handle is lazy, so building a generator never recurses by itself.
    """

    def recursive(n: int) -> Gen[T]:
        return Gen(lambda rand: f(recursive, n)(rand))

    return recursive


# =============================================================================
# Sampling
# =============================================================================


def generate[T](gen: Gen[T], n: int, rand: RandomSource | None = None) -> list[T]:
    """Draw n values from gen (self-initialised source when rand is None)."""
    source = rand if rand is not None else RandomSource.self_init()
    return [gen(source) for _ in range(n)]


def generate1[T](gen: Gen[T], rand: RandomSource | None = None) -> T:
    source = rand if rand is not None else RandomSource.self_init()
    return gen(source)
