# src/quickprop/generation/arbitrary.py
"""Arbitrary: the unit of reuse for generating, shrinking and printing a type.

An ``Arbitrary[T]`` always owns a generator. Everything else is an optional
attachment:

- printer: renders an instance in failure reports
- size_of: ranks instances; smaller counterexamples evict larger ones
- shrinker: enumerates smaller candidates for a falsifying instance
- collect: maps an instance to a classification tag (statistics only)

Composite constructors propagate a capability only when every component
provides it. Pairs and triples are the exception for shrinking: a missing
component shrinker is replaced by the no-op shrinker, so the composite can
still shrink the components that do have one.

Usage:
    sorted_lists = list_of(small_int)
    pairs = pair(int_range(-10, 10), small_string)
    evens = map_same_type(lambda x: 2 * x, small_int)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Hashable, Sequence
from dataclasses import dataclass
from typing import Any

from quickprop.core.random_source import RandomSource
from quickprop.generation import gen as g
from quickprop.generation import printers, shrink
from quickprop.generation.gen import Gen
from quickprop.generation.printers import Printer
from quickprop.generation.shrink import Shrinker


@dataclass(frozen=True, slots=True)
class Arbitrary[T]:
    """Generator plus optional printer, size metric, shrinker and classifier."""

    gen: Gen[T]
    printer: Printer[T] | None = None
    size_of: Callable[[T], int] | None = None
    shrinker: Shrinker[T] | None = None
    collect: Callable[[T], str] | None = None

    def set_printer(self, printer: Printer[T]) -> Arbitrary[T]:
        return dataclasses.replace(self, printer=printer)

    def set_size(self, size_of: Callable[[T], int]) -> Arbitrary[T]:
        return dataclasses.replace(self, size_of=size_of)

    def set_shrinker(self, shrinker: Shrinker[T]) -> Arbitrary[T]:
        return dataclasses.replace(self, shrinker=shrinker)

    def set_collect(self, collect: Callable[[T], str]) -> Arbitrary[T]:
        return dataclasses.replace(self, collect=collect)


def make[T](
    gen: Gen[T],
    *,
    printer: Printer[T] | None = None,
    size_of: Callable[[T], int] | None = None,
    shrinker: Shrinker[T] | None = None,
    collect: Callable[[T], str] | None = None,
) -> Arbitrary[T]:
    """Builder: a generator plus any attachments."""
    return Arbitrary(gen=gen, printer=printer, size_of=size_of, shrinker=shrinker, collect=collect)


def _size_one(_value: object) -> int:
    return 1


def make_scalar[T](
    gen: Gen[T],
    *,
    printer: Printer[T] | None = None,
    collect: Callable[[T], str] | None = None,
) -> Arbitrary[T]:
    """Scalars (booleans, chars, floats) have no smaller form: no-op shrinker, constant size."""
    return make(gen, printer=printer, size_of=_size_one, shrinker=shrink.nil, collect=collect)


def make_int(gen: Gen[int], *, collect: Callable[[int], str] | None = None) -> Arbitrary[int]:
    """Integers shrink toward zero and are ranked by absolute value."""
    return make(gen, printer=printers.integer, size_of=abs, shrinker=shrink.integer, collect=collect)


def _adapt[T](arb: Arbitrary[T], gen: Gen[T]) -> Arbitrary[T]:
    return dataclasses.replace(arb, gen=gen)


# =============================================================================
# Scalars
# =============================================================================

unit: Arbitrary[None] = make(g.unit, printer=lambda _: "None", size_of=_size_one, shrinker=shrink.nil)
boolean: Arbitrary[bool] = make_scalar(g.boolean, printer=printers.boolean)
floating: Arbitrary[float] = make_scalar(g.floating, printer=printers.floating)
pos_float: Arbitrary[float] = make_scalar(g.pos_float, printer=printers.floating)
neg_float: Arbitrary[float] = make_scalar(g.neg_float, printer=printers.floating)

integer: Arbitrary[int] = make_int(g.integer)
pos_int: Arbitrary[int] = make_int(g.pos_int)
small_int: Arbitrary[int] = make_int(g.nat)
neg_int: Arbitrary[int] = make_int(g.neg_int)


def int_bound(n: int) -> Arbitrary[int]:
    """Uniform in [0, n]."""
    return make_int(g.int_bound(n))


def int_range(low: int, high: int) -> Arbitrary[int]:
    """Uniform in [low, high]; high must not be below low."""
    return make_int(g.int_range(low, high))


def small_int_corners() -> Arbitrary[int]:
    """Like small_int, but each new arbitrary first yields 0, 1, 2 and the max int."""
    return make_int(g.nat_corners())


def _signed(bits: int) -> Callable[[int], int]:
    half = 1 << (bits - 1)
    return lambda x: x - (1 << bits) if x >= half else x


int32: Arbitrary[int] = make_scalar(g.ui32.map(_signed(32)), printer=printers.integer)
int64: Arbitrary[int] = make_scalar(g.ui64.map(_signed(64)), printer=printers.integer)

character: Arbitrary[str] = make_scalar(g.character, printer=printers.character)
printable_char: Arbitrary[str] = make_scalar(g.printable, printer=printers.character)
numeral_char: Arbitrary[str] = make_scalar(g.numeral, printer=printers.character)


# =============================================================================
# Strings
# =============================================================================


def string_gen_of_size(size: Gen[int], chars: Gen[str]) -> Arbitrary[str]:
    return make(
        g.string_size(size, chars),
        printer=printers.string,
        size_of=len,
        shrinker=shrink.string,
    )


def string_gen(chars: Gen[str]) -> Arbitrary[str]:
    """Strings with nat-distributed length over the given characters."""
    return string_gen_of_size(g.nat, chars)


def string_of_size(size: Gen[int]) -> Arbitrary[str]:
    return string_gen_of_size(size, g.character)


def printable_string_of_size(size: Gen[int]) -> Arbitrary[str]:
    return string_gen_of_size(size, g.printable)


def numeral_string_of_size(size: Gen[int]) -> Arbitrary[str]:
    return string_gen_of_size(size, g.numeral)


string: Arbitrary[str] = string_gen(g.character)
small_string: Arbitrary[str] = string_gen_of_size(g.int_range(0, 10), g.character)
printable_string: Arbitrary[str] = string_gen(g.printable)
small_printable_string: Arbitrary[str] = string_gen_of_size(g.int_range(0, 10), g.printable)
numeral_string: Arbitrary[str] = string_gen(g.numeral)


# =============================================================================
# Containers
# =============================================================================


def _sequence_size[T](size_of: Callable[[T], int] | None) -> Callable[[Sequence[T]], int]:
    # Sum of element sizes when known, else the element count
    if size_of is None:
        return len
    return lambda items: sum(size_of(item) for item in items)


def list_of_size[T](size: Gen[int], arb: Arbitrary[T]) -> Arbitrary[list[T]]:
    return make(
        g.list_size(size, arb.gen),
        printer=printers.list_(arb.printer) if arb.printer is not None else None,
        size_of=_sequence_size(arb.size_of),
        shrinker=shrink.list_(arb.shrinker),
    )


def list_of[T](arb: Arbitrary[T]) -> Arbitrary[list[T]]:
    """Lists with nat-distributed length."""
    return list_of_size(g.nat, arb)


def tuple_of_size[T](size: Gen[int], arb: Arbitrary[T]) -> Arbitrary[tuple[T, ...]]:
    return make(
        g.tuple_size(size, arb.gen),
        printer=printers.tuple_(arb.printer) if arb.printer is not None else None,
        size_of=_sequence_size(arb.size_of),
        shrinker=shrink.tuple_(arb.shrinker),
    )


def tuple_of[T](arb: Arbitrary[T]) -> Arbitrary[tuple[T, ...]]:
    """Tuples with nat-distributed length."""
    return tuple_of_size(g.nat, arb)


def pair[A, B](a: Arbitrary[A], b: Arbitrary[B]) -> Arbitrary[tuple[A, B]]:
    size_of = None
    if a.size_of is not None and b.size_of is not None:
        size_a, size_b = a.size_of, b.size_of
        size_of = lambda value: size_a(value[0]) + size_b(value[1])  # noqa: E731
    printer = None
    if a.printer is not None and b.printer is not None:
        printer = printers.pair(a.printer, b.printer)
    return make(
        g.pair(a.gen, b.gen),
        printer=printer,
        size_of=size_of,
        shrinker=shrink.pair(a.shrinker or shrink.nil, b.shrinker or shrink.nil),
    )


def triple[A, B, C](a: Arbitrary[A], b: Arbitrary[B], c: Arbitrary[C]) -> Arbitrary[tuple[A, B, C]]:
    size_of = None
    if a.size_of is not None and b.size_of is not None and c.size_of is not None:
        size_a, size_b, size_c = a.size_of, b.size_of, c.size_of
        size_of = lambda value: size_a(value[0]) + size_b(value[1]) + size_c(value[2])  # noqa: E731
    printer = None
    if a.printer is not None and b.printer is not None and c.printer is not None:
        printer = printers.triple(a.printer, b.printer, c.printer)
    return make(
        g.triple(a.gen, b.gen, c.gen),
        printer=printer,
        size_of=size_of,
        shrinker=shrink.triple(
            a.shrinker or shrink.nil,
            b.shrinker or shrink.nil,
            c.shrinker or shrink.nil,
        ),
    )


def option[T](arb: Arbitrary[T]) -> Arbitrary[T | None]:
    """None (15% of draws) or a value from arb."""
    inner_size = arb.size_of

    def size_of(value: T | None) -> int:
        if value is None:
            return 0
        return inner_size(value) if inner_size is not None else 1

    return make(
        g.opt(arb.gen),
        printer=printers.option(arb.printer) if arb.printer is not None else None,
        size_of=size_of,
        shrinker=shrink.option(arb.shrinker) if arb.shrinker is not None else None,
    )


# =============================================================================
# Generated Functions
# =============================================================================


class GeneratedFunction[A: Hashable, B]:
    """A pure, total, memoizing random function.

    Results are drawn lazily, on first use of each argument, from a private
    source forked at generation time. The same argument always returns the
    same result, and the observed table is what gets printed.
    """

    def __init__(self, result_gen: Gen[B], rand: RandomSource) -> None:
        self._result_gen = result_gen
        self._rand = rand
        self._table: dict[A, B] = {}

    def __call__(self, *args: Any) -> B:
        key: Any = args[0] if len(args) == 1 else args
        if key not in self._table:
            self._table[key] = self._result_gen(self._rand)
        return self._table[key]

    @property
    def table(self) -> dict[A, B]:
        """Arguments seen so far and their results (a copy)."""
        return dict(self._table)


def _function_arbitrary[A: Hashable, B](
    print_key: Printer[A] | None,
    result: Arbitrary[B],
) -> Arbitrary[GeneratedFunction[A, B]]:
    def draw(rand: RandomSource) -> GeneratedFunction[A, B]:
        return GeneratedFunction(result.gen, rand.fork())

    printer = None
    if print_key is not None and result.printer is not None:
        print_value = result.printer

        def printer(f: GeneratedFunction[A, B]) -> str:
            entries = "; ".join(f"{print_key(k)} -> {print_value(v)}" for k, v in f.table.items())
            return "{" + entries + "}"

    return make(Gen(draw), printer=printer)


def fun1[A: Hashable, B](arg: Arbitrary[A], result: Arbitrary[B]) -> Arbitrary[GeneratedFunction[A, B]]:
    """Random one-argument functions from arg to result. Arguments must be hashable."""
    return _function_arbitrary(arg.printer, result)


def fun2[A: Hashable, B: Hashable, C](
    arg1: Arbitrary[A],
    arg2: Arbitrary[B],
    result: Arbitrary[C],
) -> Arbitrary[GeneratedFunction[tuple[A, B], C]]:
    """Random two-argument functions, called as ``f(x, y)``."""
    print_key = None
    if arg1.printer is not None and arg2.printer is not None:
        print_key = printers.pair(arg1.printer, arg2.printer)
    return _function_arbitrary(print_key, result)


# =============================================================================
# Choice
# =============================================================================


def choose[T](arbs: Sequence[Arbitrary[T]]) -> Arbitrary[T]:
    """Pick one of arbs at random for each draw; attachments come from the first.

    Raises:
        ValueError: If arbs is empty.
    """
    if not arbs:
        raise ValueError("choose requires at least one arbitrary")
    return _adapt(arbs[0], g.oneof([arb.gen for arb in arbs]))


def oneof[T](arbs: Sequence[Arbitrary[T]]) -> Arbitrary[T]:
    """Synonym of choose."""
    return choose(arbs)


def oneofl[T](
    values: Sequence[T],
    *,
    printer: Printer[T] | None = None,
    collect: Callable[[T], str] | None = None,
) -> Arbitrary[T]:
    """Pick uniformly among plain values."""
    return make(g.oneofl(values), printer=printer, collect=collect)


def always[T](value: T, *, printer: Printer[T] | None = None) -> Arbitrary[T]:
    return make(g.constant(value), printer=printer)


def frequency[T](
    weighted: Sequence[tuple[int, Arbitrary[T]]],
    *,
    printer: Printer[T] | None = None,
    size_of: Callable[[T], int] | None = None,
    shrinker: Shrinker[T] | None = None,
    collect: Callable[[T], str] | None = None,
) -> Arbitrary[T]:
    """Weighted choice among arbitraries.

    Explicit attachments win; missing ones are taken from the first arbitrary.

    Raises:
        ValueError: If weighted is empty or has no positive weight.
    """
    if not weighted:
        raise ValueError("frequency requires at least one arbitrary")
    first = weighted[0][1]
    return make(
        g.frequency([(weight, arb.gen) for weight, arb in weighted]),
        printer=printer if printer is not None else first.printer,
        size_of=size_of if size_of is not None else first.size_of,
        shrinker=shrinker if shrinker is not None else first.shrinker,
        collect=collect if collect is not None else first.collect,
    )


def frequencyl[T](
    weighted: Sequence[tuple[int, T]],
    *,
    printer: Printer[T] | None = None,
    size_of: Callable[[T], int] | None = None,
) -> Arbitrary[T]:
    """Weighted choice among plain values."""
    return make(g.frequencyl(weighted), printer=printer, size_of=size_of)


# =============================================================================
# Mapping
# =============================================================================


def map[T, U](f: Callable[[T], U], arb: Arbitrary[T], *, rev: Callable[[U], T] | None = None) -> Arbitrary[U]:
    """Generate with arb, then transform through f.

    Args:
        rev: Maps values back to T so arb's printer, size metric, shrinker and
            classifier stay usable. f is assumed monotonic in that case
            (smaller inputs give smaller outputs). The shrinker applies f to
            every shrunk preimage; if f raises there, shrinking stops at the
            last falsifying value found.
    """
    gen = arb.gen.map(f)
    if rev is None:
        return make(gen)

    printer = None
    if arb.printer is not None:
        printer = printers.comap(rev, arb.printer)
    size_of = None
    if arb.size_of is not None:
        inner_size = arb.size_of
        size_of = lambda value: inner_size(rev(value))  # noqa: E731
    shrinker = None
    if arb.shrinker is not None:
        inner_shrink = arb.shrinker
        shrinker = lambda value: inner_shrink(rev(value)).map(f)  # noqa: E731
    collect = None
    if arb.collect is not None:
        inner_collect = arb.collect
        collect = lambda value: inner_collect(rev(value))  # noqa: E731
    return make(gen, printer=printer, size_of=size_of, shrinker=shrinker, collect=collect)


def map_same_type[T](f: Callable[[T], T], arb: Arbitrary[T]) -> Arbitrary[T]:
    """Transform generated values; printer, shrinker etc. are kept as they still apply."""
    return _adapt(arb, arb.gen.map(f))


def map_keep_input[T, U](
    f: Callable[[T], U],
    arb: Arbitrary[T],
    *,
    printer: Printer[U] | None = None,
    size_of: Callable[[U], int] | None = None,
) -> Arbitrary[tuple[T, U]]:
    """Generate x with arb and pair it with f(x).

    Args:
        printer: Optional printer for f's output; combined with arb's printer.
        size_of: Optional size of f's output; otherwise the input's size is used.
    """
    print_pair: Printer[tuple[T, U]] | None = None
    if printer is not None and arb.printer is not None:
        print_pair = printers.pair(arb.printer, printer)
    elif printer is not None:
        print_pair = printers.comap(lambda value: value[1], printer)
    elif arb.printer is not None:
        print_pair = printers.comap(lambda value: value[0], arb.printer)

    size_pair: Callable[[tuple[T, U]], int] | None = None
    if size_of is not None:
        output_size = size_of
        size_pair = lambda value: output_size(value[1])  # noqa: E731
    elif arb.size_of is not None:
        input_size = arb.size_of
        size_pair = lambda value: input_size(value[0])  # noqa: E731

    return make(g.map_keep_input(f, arb.gen), printer=print_pair, size_of=size_pair)
