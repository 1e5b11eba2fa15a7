"""Unit tests for value expressions, comparisons and conditions."""

from __future__ import annotations

import pytest

from shortcut.domain.value_objects import (
    Column,
    Comparison,
    ComparisonOp,
    Condition,
    Const,
)


class TestValue:
    """Tests for Const and Column value expressions."""

    def test_column_evaluates_against_row(self) -> None:
        assert Column(0).evaluate(["a"]) == "a"

    def test_const_ignores_row(self) -> None:
        assert Const("a").evaluate(["b"]) == "a"

    def test_negative_column_rejected(self) -> None:
        with pytest.raises(ValueError):
            Column(-1)

    def test_column_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            Column(3).evaluate(["a"])


class TestComparison:
    """Tests for Comparison."""

    def test_equal_against_column(self) -> None:
        assert Comparison.equal(Column(0)).matches("a", ["a"])
        assert not Comparison.equal(Column(0)).matches("a", ["b"])

    def test_equal_against_const(self) -> None:
        assert Comparison.equal(Const("a")).matches("a", ["b"])
        assert not Comparison.equal(Const("b")).matches("a", ["a"])

    def test_op(self) -> None:
        assert Comparison.equal(Const(1)).op is ComparisonOp.EQUAL

    def test_index_eligibility(self) -> None:
        """Only equality against a constant can be answered by an index."""
        assert Comparison.equal(Const("a")).is_index_eligible
        assert not Comparison.equal(Column(0)).is_index_eligible

    def test_constant(self) -> None:
        assert Comparison.equal(Const("a")).constant == "a"
        with pytest.raises(ValueError, match="cannot be answered by an index"):
            Comparison.equal(Column(1)).constant


class TestCondition:
    """Tests for Condition."""

    def test_column_vs_column(self) -> None:
        cond = Condition.same_as(1, 0)
        assert cond.matches(["a", "a"])
        assert not cond.matches(["a", "b"])

    def test_column_vs_const(self) -> None:
        cca = Condition.equal(0, "a")
        ccb = Condition.equal(0, "b")

        assert cca.matches(["a"])
        assert not cca.matches(["b"])
        assert ccb.matches(["b"])
        assert not ccb.matches(["a"])

    def test_equal_wraps_literal(self) -> None:
        """Plain literals are wrapped in Const, expressions are kept."""
        assert Condition.equal(0, "a").cmp.operand == Const("a")
        assert Condition.equal(0, Column(1)).cmp.operand == Column(1)
        assert Condition.equal(0, Const(None)).cmp.operand == Const(None)

    def test_explicit_construction(self) -> None:
        cond = Condition(column=1, cmp=Comparison.equal(Const("x2")))
        assert cond.matches(["a", "x2"])
        assert not cond.matches(["a", "x1"])

    def test_negative_column_rejected(self) -> None:
        with pytest.raises(ValueError):
            Condition.equal(-1, "a")

    def test_conditions_are_values(self) -> None:
        """Conditions compare and hash by content."""
        assert Condition.equal(0, "a") == Condition.equal(0, "a")
        assert len({Condition.equal(0, "a"), Condition.equal(0, "a")}) == 1

    def test_numeric_equality(self) -> None:
        """Equality follows Python semantics for the stored values."""
        assert Condition.equal(0, 1).matches([1.0])
        assert not Condition.equal(0, 1).matches(["1"])
