# src/quickprop/runner/pytest_adapter.py
"""Expose quickprop tests to pytest.

Usage (in a test module):
    from quickprop.runner.pytest_adapter import to_pytest

    test_reverse_involutive = to_pytest(
        Test.make(arbitrary.list_of(arbitrary.small_int), lambda xs: xs[::-1][::-1] == xs, name="reverse")
    )

Each call of the returned function runs on a fresh copy of one source,
fixed when the adapter is built, so re-running a pytest test replays the
same inputs. Set ``QUICKPROP_SEED`` to pick that source's seed.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import structlog

from quickprop.contracts.errors import ConfigurationError, TestError, TestFailure
from quickprop.engine import executor
from quickprop.runner.seed import random_state

if TYPE_CHECKING:
    from quickprop.core.random_source import RandomSource
    from quickprop.engine.cell import Test

logger = structlog.get_logger(__name__)

SEED_ENV_VAR = "QUICKPROP_SEED"


def seed_from_env() -> int | None:
    """Seed from QUICKPROP_SEED, or None when unset.

    Raises:
        ConfigurationError: If the variable is not a non-negative integer.
    """
    raw = os.environ.get(SEED_ENV_VAR)
    if raw is None or raw.strip() == "":
        return None
    try:
        seed = int(raw)
    except ValueError as e:
        raise ConfigurationError(SEED_ENV_VAR, f"must be an integer, got {raw!r}") from e
    if seed < 0:
        raise ConfigurationError(SEED_ENV_VAR, f"must be non-negative, got {seed}")
    return seed


def _function_name(name: str) -> str:
    slug = re.sub(r"\W+", "_", name).strip("_").lower()
    return f"test_{slug}" if slug else "test_property"


def to_pytest(test: Test, rand: RandomSource | None = None) -> Callable[[], None]:
    """Wrap test as a zero-argument pytest test function.

    Args:
        test: The test to wrap
        rand: Source whose copies drive each call. Built from QUICKPROP_SEED
            (or system entropy) when None.

    Returns:
        A function raising TestFailure (an AssertionError) when the test is
        falsified and TestError when the law raised. Both carry the seed in
        their message and a note naming the QUICKPROP_SEED value that
        replays the call.
    """
    source = rand if rand is not None else random_state(seed_from_env())
    name = test.name or "<test>"

    def run_property() -> None:
        logger.debug("running property under pytest", test=name, seed=source.seed)
        try:
            executor.check_exn(test, rand=source.copy())
        except (TestFailure, TestError) as exc:
            exc.add_note(f"set {SEED_ENV_VAR}={source.seed} to replay")
            raise

    run_property.__name__ = _function_name(name)
    run_property.__qualname__ = run_property.__name__
    run_property.__doc__ = f"Property {name} (seed {source.seed})."
    return run_property


def to_pytest_list(tests: Sequence[Test], rand: RandomSource | None = None) -> list[Callable[[], None]]:
    """to_pytest over a list, all tests sharing one source (each call uses its own copy)."""
    source = rand if rand is not None else random_state(seed_from_env())
    return [to_pytest(test, rand=source) for test in tests]
