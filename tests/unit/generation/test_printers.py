# tests/unit/generation/test_printers.py
"""Tests for instance printers."""

from __future__ import annotations

from quickprop.generation import printers


class TestScalars:
    """Scalar printers use Python's own renderings."""

    def test_scalars(self) -> None:
        """str for numbers and bools, repr for floats and text."""
        assert printers.integer(-3) == "-3"
        assert printers.boolean(True) == "True"
        assert printers.floating(0.1) == "0.1"
        assert printers.character("\n") == "'\\n'"
        assert printers.string("ab") == "'ab'"


class TestComposites:
    """Containers delegate to element printers."""

    def test_option(self) -> None:
        """None prints as None, values via the inner printer."""
        show = printers.option(printers.integer)
        assert show(None) == "None"
        assert show(4) == "4"

    def test_tuples(self) -> None:
        """Fixed-size products print like Python tuples."""
        assert printers.pair(printers.integer, printers.string)((1, "a")) == "(1, 'a')"
        assert printers.triple(printers.integer, printers.integer, printers.integer)((1, 2, 3)) == "(1, 2, 3)"
        quad = printers.quad(printers.integer, printers.integer, printers.integer, printers.boolean)
        assert quad((1, 2, 3, False)) == "(1, 2, 3, False)"

    def test_list(self) -> None:
        """Lists print with brackets."""
        assert printers.list_(printers.integer)([1, 2]) == "[1, 2]"
        assert printers.list_(printers.integer)([]) == "[]"

    def test_tuple_sequences(self) -> None:
        """Variable tuples print like Python, trailing comma for one element."""
        show = printers.tuple_(printers.integer)
        assert show(()) == "()"
        assert show((7,)) == "(7,)"
        assert show((7, 8)) == "(7, 8)"

    def test_comap(self) -> None:
        """comap converts before printing."""
        assert printers.comap(len, printers.integer)("abc") == "3"
