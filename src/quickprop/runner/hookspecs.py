# src/quickprop/runner/hookspecs.py
"""pluggy hook specifications for test run reporters.

Reporters implement these hooks to observe a run. The runners in
``quickprop.runner.console`` call them once per finished test, after the
engine has produced the result.

Usage (implementing a reporter plugin):
    from quickprop.runner.hookspecs import hookimpl

    class CountingReporter:
        def __init__(self):
            self.failed = []

        @hookimpl
        def quickprop_test_finished(self, name, result):
            if not result.is_success:
                self.failed.append(name)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from quickprop.contracts.results import TestResult
    from quickprop.engine.cell import TestCell

PROJECT_NAME = "quickprop"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for reporter plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class QuickpropSpec:
    """Hook specifications for reporter plugins."""

    @hookspec
    def quickprop_test_finished(self, name: str, cell: TestCell[Any], result: TestResult[Any]) -> None:
        """Called exactly once per test, after it ran.

        Args:
            name: Display name of the test (anonymous tests get a generated one)
            cell: The test definition
            result: Its final result. Read-only: the run is over.
        """


def create_plugin_manager(plugins: Iterable[object] = ()) -> pluggy.PluginManager:
    """Plugin manager with the quickprop hookspecs and the given plugins registered."""
    plugin_manager = pluggy.PluginManager(PROJECT_NAME)
    plugin_manager.add_hookspecs(QuickpropSpec)
    for plugin in plugins:
        plugin_manager.register(plugin)
    return plugin_manager
