# src/quickprop/runner/seed.py
"""Seed resolution for runners.

The seed is the only persisted state of a run: printing it, then passing
it back, reproduces every generated input.
"""

from __future__ import annotations

import structlog

from quickprop.core.random_source import RandomSource

logger = structlog.get_logger(__name__)


def resolve_seed(seed: int | None) -> int:
    """The given seed, or a fresh one drawn from system entropy."""
    if seed is not None:
        return seed
    seed = RandomSource.self_init().seed
    logger.info("seed self-initialised", seed=seed)
    return seed


def random_state(seed: int | None = None) -> RandomSource:
    """Random source for a run, seeded with resolve_seed(seed)."""
    return RandomSource.from_seed(resolve_seed(seed))
