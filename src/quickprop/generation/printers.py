# src/quickprop/generation/printers.py
"""Printers: render instances for counterexample reports."""

from __future__ import annotations

from collections.abc import Callable, Sequence

type Printer[T] = Callable[[T], str]

integer: Printer[int] = str
boolean: Printer[bool] = str
floating: Printer[float] = repr
character: Printer[str] = repr
string: Printer[str] = repr


def option[T](print_value: Printer[T]) -> Printer[T | None]:
    def print_option(value: T | None) -> str:
        if value is None:
            return "None"
        return print_value(value)

    return print_option


def pair[A, B](print_a: Printer[A], print_b: Printer[B]) -> Printer[tuple[A, B]]:
    return lambda value: f"({print_a(value[0])}, {print_b(value[1])})"


def triple[A, B, C](print_a: Printer[A], print_b: Printer[B], print_c: Printer[C]) -> Printer[tuple[A, B, C]]:
    return lambda value: f"({print_a(value[0])}, {print_b(value[1])}, {print_c(value[2])})"


def quad[A, B, C, D](
    print_a: Printer[A],
    print_b: Printer[B],
    print_c: Printer[C],
    print_d: Printer[D],
) -> Printer[tuple[A, B, C, D]]:
    return lambda value: f"({print_a(value[0])}, {print_b(value[1])}, {print_c(value[2])}, {print_d(value[3])})"


def list_[T](print_item: Printer[T]) -> Printer[Sequence[T]]:
    """``[a, b, c]``"""
    return lambda items: "[" + ", ".join(print_item(item) for item in items) + "]"


def tuple_[T](print_item: Printer[T]) -> Printer[Sequence[T]]:
    """``(a, b, c)``, with the trailing comma for one element."""

    def print_tuple(items: Sequence[T]) -> str:
        if len(items) == 1:
            return f"({print_item(items[0])},)"
        return "(" + ", ".join(print_item(item) for item in items) + ")"

    return print_tuple


def comap[T, U](f: Callable[[T], U], print_value: Printer[U]) -> Printer[T]:
    """Print a T by converting it to a U first."""
    return lambda value: print_value(f(value))
