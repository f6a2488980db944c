"""Runners and reporters: consume engine results, never influence them."""

from quickprop.runner.console import ConsoleReporter, run_tap, run_tests
from quickprop.runner.hookspecs import create_plugin_manager, hookimpl
from quickprop.runner.pytest_adapter import to_pytest, to_pytest_list
from quickprop.runner.seed import random_state, resolve_seed

__all__ = [
    "ConsoleReporter",
    "create_plugin_manager",
    "hookimpl",
    "random_state",
    "resolve_seed",
    "run_tap",
    "run_tests",
    "to_pytest",
    "to_pytest_list",
]
