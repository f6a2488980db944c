"""Execution engine: test definitions, the run state machine and reports."""

from quickprop.engine.cell import Law, Test, TestCell, assume, implies, make_cell
from quickprop.engine.executor import (
    Callback,
    check_cell,
    check_cell_exn,
    check_exn,
    check_result,
    evaluate_law,
    shrink,
)
from quickprop.engine.reporting import print_c_ex, print_error, print_fail, print_instance

__all__ = [
    "Callback",
    "Law",
    "Test",
    "TestCell",
    "assume",
    "check_cell",
    "check_cell_exn",
    "check_exn",
    "check_result",
    "evaluate_law",
    "implies",
    "make_cell",
    "print_c_ex",
    "print_error",
    "print_fail",
    "print_instance",
    "shrink",
]
