# tests/property/generation/test_shrink_properties.py
"""Property-based tests for shrinkers and generators.

Properties tested:
- Greedy integer shrinking reaches zero in O(log |x|) steps
- Integer candidates are strictly closer to zero
- List removal candidates cover every position exactly once
- Bounded generators respect their bounds for every seed
- Zero-weight buckets are never chosen
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from quickprop.core.random_source import SEED_BOUND, RandomSource
from quickprop.generation import gen, shrink
from tests.property.settings import QUICK_SETTINGS, STANDARD_SETTINGS

# =============================================================================
# Strategies
# =============================================================================

seeds = st.integers(min_value=0, max_value=SEED_BOUND - 1)
int64s = st.integers(min_value=gen.MIN_INT, max_value=gen.MAX_INT)


# =============================================================================
# Integer Shrinking
# =============================================================================


@given(x=int64s)
@STANDARD_SETTINGS
def test_integer_shrink_terminates_logarithmically(x: int) -> None:
    """Following the first candidate reaches 0 within bit_length + 2 steps."""
    steps = 0
    current = x
    while True:
        candidates = shrink.integer(current).to_list()
        if not candidates:
            break
        current = candidates[0]
        steps += 1
    assert current == 0
    assert steps <= abs(x).bit_length() + 2


@given(x=int64s)
@STANDARD_SETTINGS
def test_integer_candidates_move_toward_zero(x: int) -> None:
    """Every candidate is strictly smaller in magnitude and keeps the sign."""
    for candidate in shrink.integer(x).to_list():
        assert abs(candidate) < abs(x)
        assert candidate * x >= 0


# =============================================================================
# Sequence Shrinking
# =============================================================================


@given(items=st.lists(st.integers()))
@STANDARD_SETTINGS
def test_list_removal_candidates(items: list[int]) -> None:
    """Exactly len(items) candidates, the i-th with position i removed."""
    candidates = shrink.list_()(items).to_list()
    assert len(candidates) == len(items)
    for i, candidate in enumerate(candidates):
        assert len(candidate) == len(items) - 1
        assert candidate == items[:i] + items[i + 1 :]


@given(text=st.text(max_size=30))
@STANDARD_SETTINGS
def test_string_removal_candidates(text: str) -> None:
    """One deletion per character."""
    candidates = shrink.string(text).to_list()
    assert candidates == [text[:i] + text[i + 1 :] for i in range(len(text))]


# =============================================================================
# Generators
# =============================================================================


@given(seed=seeds, low=st.integers(-1000, 1000), width=st.integers(0, 1000))
@STANDARD_SETTINGS
def test_int_range_within_bounds(seed: int, low: int, width: int) -> None:
    """int_range(a, b) stays in [a, b] for every seed."""
    high = low + width
    values = gen.generate(gen.int_range(low, high), 50, RandomSource.from_seed(seed))
    assert all(low <= v <= high for v in values)


@given(seed=seeds, weights=st.lists(st.integers(0, 5), min_size=1, max_size=6).filter(lambda ws: sum(ws) > 0))
@QUICK_SETTINGS
def test_frequency_skips_zero_weights(seed: int, weights: list[int]) -> None:
    """Only buckets with positive weight are ever chosen."""
    chosen = gen.generate(gen.frequencyl(list(zip(weights, range(len(weights)), strict=True))), 100, RandomSource.from_seed(seed))
    assert all(weights[i] > 0 for i in chosen)


@given(seed=seeds)
@QUICK_SETTINGS
def test_shuffled_is_permutation(seed: int) -> None:
    """shuffled never loses or duplicates elements."""
    items = list(range(12))
    assert sorted(gen.shuffled(items)(RandomSource.from_seed(seed))) == items
