# tests/unit/generation/test_shrink.py
"""Tests for shrinker candidate order and content."""

from __future__ import annotations

import pytest

from quickprop.generation import shrink


class TestInteger:
    """Integers move toward zero."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (10, [5, 9]),
            (-10, [-5, -9]),
            (-7, [-3, -6]),
            (3, [1, 2]),
            (2, [1]),
            (1, [0]),
            (-1, [0]),
            (-2, [-1]),
            (0, []),
        ],
    )
    def test_candidates(self, value: int, expected: list[int]) -> None:
        """Halve when |x| > 2 (toward zero), then step by one."""
        assert shrink.integer(value).to_list() == expected


class TestNil:
    """The no-op shrinker."""

    def test_no_candidates(self) -> None:
        """nil yields nothing for any value."""
        assert shrink.nil(123).to_list() == []


class TestOption:
    """None first, then inner shrinks."""

    def test_some(self) -> None:
        """A value shrinks to None, then to its own shrinks."""
        assert shrink.option(shrink.integer)(5).to_list() == [None, 2, 4]

    def test_none(self) -> None:
        """None has nothing smaller."""
        assert shrink.option(shrink.integer)(None).to_list() == []


class TestSequences:
    """Strings, lists and tuples."""

    def test_string_deletions(self) -> None:
        """One deletion per position, left to right."""
        assert shrink.string("abc").to_list() == ["bc", "ac", "ab"]

    def test_empty_string(self) -> None:
        """The empty string is minimal."""
        assert shrink.string("").to_list() == []

    def test_list_removals_only(self) -> None:
        """Without an element shrinker only removals are produced."""
        assert shrink.list_()([1, 2, 3]).to_list() == [[2, 3], [1, 3], [1, 2]]

    def test_list_with_element_shrinks(self) -> None:
        """Removals first, then element shrinks in place."""
        assert shrink.list_(shrink.integer)([4, 1]).to_list() == [[1], [4], [2, 1], [3, 1], [4, 0]]

    def test_list_input_untouched(self) -> None:
        """Candidates are copies."""
        items = [4, 1]
        shrink.list_(shrink.integer)(items).to_list()
        assert items == [4, 1]

    def test_tuple_candidates_are_tuples(self) -> None:
        """tuple_ rebuilds tuples."""
        assert shrink.tuple_(shrink.integer)((2,)).to_list() == [(), (1,)]


class TestProducts:
    """Pairs and triples vary one component per candidate."""

    def test_pair(self) -> None:
        """Left component first, then right."""
        assert shrink.pair(shrink.integer, shrink.integer)((4, 1)).to_list() == [(2, 1), (3, 1), (4, 0)]

    def test_pair_with_nil(self) -> None:
        """A nil component just contributes nothing."""
        assert shrink.pair(shrink.nil, shrink.integer)(("a", 2)).to_list() == [("a", 1)]

    def test_triple(self) -> None:
        """First, second, then third component."""
        candidates = shrink.triple(shrink.integer, shrink.string, shrink.integer)((1, "x", -1)).to_list()
        assert candidates == [(0, "x", -1), (1, "", -1), (1, "x", 0)]
