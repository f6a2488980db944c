# src/quickprop/core/config.py
"""Runner configuration loading.

Provides YAML loading and deep merge for configuration precedence
(CLI > config file > defaults), validated through a frozen Pydantic model.
The engine itself takes no configuration object: bounds live on each test
and the random source is passed explicitly. These settings only drive the
runners in ``quickprop.runner``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from quickprop.contracts.errors import ConfigurationError


class RunnerSettings(BaseModel):
    """Settings for running a batch of tests."""

    model_config = {"frozen": True, "extra": "forbid"}

    seed: int | None = Field(
        default=None,
        ge=0,
        description="Random seed; self-initialised from system entropy when absent",
    )
    verbose: bool = Field(
        default=False,
        description="Print per-test statistics and classification tallies",
    )
    output: Literal["console", "tap"] = Field(
        default="console",
        description="Report format",
    )
    slow: int = Field(
        default=0,
        ge=0,
        description="Number of slowest tests to list after the run",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit structured logs as JSON instead of console format",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for structlog/stdlib logging",
    )


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, with override taking precedence.

    Returns:
        Merged dict (new dict, does not mutate inputs).
    """
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Load a YAML file that must contain a mapping (or be empty).

    Raises:
        ConfigurationError: If the file is missing or not a mapping.
        yaml.YAMLError: If the YAML is malformed.
    """
    if not path.exists():
        raise ConfigurationError(str(path), "config file not found")
    with path.open() as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(str(path), f"must be a YAML mapping, got {type(loaded).__name__}")
    return loaded


def load_settings(
    *,
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> RunnerSettings:
    """Load runner settings with precedence handling.

    Precedence (highest to lowest):
    1. cli_overrides - Options given on the command line (None values ignored)
    2. config_file - YAML configuration file
    3. defaults - Built-in Pydantic defaults

    Raises:
        ConfigurationError: If config_file is missing or not a mapping.
        yaml.YAMLError: If YAML is malformed.
        pydantic.ValidationError: If final config fails validation.
    """
    config_dict: dict[str, Any] = {}

    if config_file is not None:
        config_dict = load_yaml_mapping(config_file)

    if cli_overrides is not None:
        explicit = {key: value for key, value in cli_overrides.items() if value is not None}
        config_dict = deep_merge(config_dict, explicit)

    return RunnerSettings(**config_dict)
