# src/quickprop/runner/cli.py
"""CLI for running quickprop tests.

Usage:
    # Run every test in a list
    quickprop run mypkg.props:ALL_TESTS

    # Replay a run and show statistics
    quickprop run mypkg.props:ALL_TESTS --seed=1234 --verbose

    # TAP output for a test harness
    quickprop run mypkg.props:reverse_test --tap

    # Settings from a YAML file (CLI options win)
    quickprop run mypkg.props:ALL_TESTS --config=quickprop.yaml
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError

from quickprop.contracts.errors import ConfigurationError
from quickprop.core.config import load_settings
from quickprop.core.logging import configure_logging
from quickprop.engine.cell import Test
from quickprop.runner.console import run_tap, run_tests

app = typer.Typer(
    name="quickprop",
    help="quickprop: property-based test runner.",
    no_args_is_help=True,
)


def load_tests(target: str) -> list[Test]:
    """Import ``MODULE:ATTR`` and return the Test (or tests) it names.

    Raises:
        ConfigurationError: If the target is malformed, cannot be imported,
            or does not name a Test or a sequence of Tests.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(target, "expected MODULE:ATTR")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(target, f"cannot import {module_name}: {e}") from e
    try:
        value = getattr(module, attr)
    except AttributeError as e:
        raise ConfigurationError(target, f"{module_name} has no attribute {attr}") from e

    if isinstance(value, Test):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(item, Test) for item in value):
        return list(value)
    raise ConfigurationError(target, f"expected a Test or a list of Tests, got {type(value).__name__}")


@app.command()
def run(
    target: Annotated[
        str,
        typer.Argument(help="Tests to run, as MODULE:ATTR (a Test or a list of Tests)."),
    ],
    seed: Annotated[
        int | None,
        typer.Option(
            "--seed",
            "-s",
            help="Random seed, to replay a previous run.",
            min=0,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Print per-test statistics.",
        ),
    ] = False,
    tap: Annotated[
        bool,
        typer.Option(
            "--tap",
            help="Emit TAP version 13 instead of the console report.",
        ),
    ] = False,
    slow: Annotated[
        int | None,
        typer.Option(
            "--slow",
            help="List the N slowest tests.",
            min=0,
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to YAML settings file.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    json_logs: Annotated[
        bool,
        typer.Option(
            "--json-logs",
            help="Emit logs as JSON.",
        ),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level (DEBUG, INFO, WARNING...).",
        ),
    ] = None,
) -> None:
    """Run property tests and exit with 0 on success, 1 on failure."""
    # Unset flags are None so config file values are not overridden
    overrides = {
        "seed": seed,
        "verbose": True if verbose else None,
        "output": "tap" if tap else None,
        "slow": slow,
        "json_logs": True if json_logs else None,
        "log_level": log_level,
    }
    try:
        settings = load_settings(config_file=config_file, cli_overrides=overrides)
        configure_logging(json_output=settings.json_logs, level=settings.log_level)
        tests = load_tests(target)
    except (ConfigurationError, ValidationError, yaml.YAMLError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from e

    if settings.output == "tap":
        code = run_tap(tests, settings=settings)
    else:
        code = run_tests(tests, settings=settings)
    raise typer.Exit(code)


@app.command()
def version() -> None:
    """Print the quickprop version."""
    from quickprop import __version__

    typer.echo(f"quickprop {__version__}")


def main() -> None:
    """Entry point for quickprop CLI."""
    app()


if __name__ == "__main__":
    main()
