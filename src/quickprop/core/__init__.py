"""Core infrastructure: random source, logging, runner configuration."""

from quickprop.core.config import RunnerSettings, deep_merge, load_settings
from quickprop.core.logging import configure_logging
from quickprop.core.random_source import RandomSource

__all__ = [
    "RandomSource",
    "RunnerSettings",
    "configure_logging",
    "deep_merge",
    "load_settings",
]
