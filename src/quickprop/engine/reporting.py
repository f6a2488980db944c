# src/quickprop/engine/reporting.py
"""Render instances, counterexamples and errors for failure reports."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from quickprop.contracts.errors import format_test_error, format_test_failure

if TYPE_CHECKING:
    from quickprop.contracts.results import CounterExample
    from quickprop.generation.arbitrary import Arbitrary

NO_PRINTER = "<instance>"


def print_instance[T](arb: Arbitrary[T], instance: T) -> str:
    """The arbitrary's rendering of instance, or a placeholder without a printer."""
    if arb.printer is None:
        return NO_PRINTER
    return arb.printer(instance)


def print_c_ex[T](arb: Arbitrary[T], c_ex: CounterExample[T]) -> str:
    printed = print_instance(arb, c_ex.instance)
    if c_ex.shrink_steps > 0:
        return f"{printed} (after {c_ex.shrink_steps} shrink steps)"
    return printed


def print_fail[T](arb: Arbitrary[T], name: str, counter_examples: Sequence[CounterExample[T]]) -> str:
    """Failure report listing every retained counterexample."""
    return format_test_failure(name, [print_c_ex(arb, c_ex) for c_ex in counter_examples])


def print_error[T](arb: Arbitrary[T], name: str, instance: T, exception: BaseException) -> str:
    return format_test_error(name, print_instance(arb, instance), exception)
