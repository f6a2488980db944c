# tests/property/settings.py
"""Standardized Hypothesis settings profiles for property tests.

Provides consistent test intensity across all property test modules.
Import these instead of using inline @settings(max_examples=...).

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(seed=seeds)
    @STANDARD_SETTINGS
    def test_something(seed):
        ...

Tiers:
- DETERMINISM_SETTINGS: 500 examples - seed replay and reproducibility
- STANDARD_SETTINGS: 100 examples - Regular property tests
- SLOW_SETTINGS: 50 examples - Tests that run a full engine loop per example
- QUICK_SETTINGS: 20 examples - Fast validation tests (simple rejection)
"""

from hypothesis import settings

# Reproducibility is the engine's central contract
DETERMINISM_SETTINGS = settings(max_examples=500, deadline=None)

# Standard property tests - good balance of coverage and speed
STANDARD_SETTINGS = settings(max_examples=100, deadline=None)

# Each example runs hundreds of law evaluations
SLOW_SETTINGS = settings(max_examples=50, deadline=None)

# Quick validation tests - simple input rejection
QUICK_SETTINGS = settings(max_examples=20, deadline=None)
