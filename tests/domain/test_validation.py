"""Tests for continhas.domain.validation pure functions."""

import pytest

from continhas.domain.models import Money
from continhas.domain.validation import (
    format_currency,
    format_decimal,
    parse_money,
    validate_due_day,
    validate_expense,
)


class TestValidateExpense:
    """Tests for validate_expense."""

    def test_valid(self) -> None:
        """Should accept a named, positive expense."""
        assert validate_expense("Internet", Money(9990), 10) is None

    def test_valid_without_due_day(self) -> None:
        """Should accept an expense without a due day."""
        assert validate_expense("Mercado", Money(1)) is None

    def test_blank_name(self) -> None:
        """Should reject a whitespace-only name."""
        assert validate_expense("   ", Money(100)) == "Name must not be empty"

    def test_unparsed_value(self) -> None:
        """Should reject a value that did not parse."""
        assert validate_expense("Luz", None) == "Value is not a valid amount"

    @pytest.mark.parametrize("value", [0, -100])
    def test_non_positive_value(self, value: int) -> None:
        """Should reject zero and negative values."""
        assert validate_expense("Luz", Money(value)) == "Value must be greater than zero"

    @pytest.mark.parametrize("due_day", [0, 32])
    def test_due_day_out_of_range(self, due_day: int) -> None:
        """Should reject due days outside 1-31."""
        assert validate_expense("Luz", Money(100), due_day) == "Due day must be between 1 and 31"


class TestValidateDueDay:
    """Tests for validate_due_day."""

    def test_bounds(self) -> None:
        """Should accept 1 and 31 and reject beyond."""
        assert validate_due_day(1) is None
        assert validate_due_day(31) is None
        assert validate_due_day(32) is not None


class TestParseMoney:
    """Tests for parse_money."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1200,50", 120050),
            ("1.200,50", 120050),
            ("R$ 1.200,50", 120050),
            ("r$1.234.567,89", 123456789),
            ("1200.50", 120050),
            ("1200.5", 120050),
            ("1.200", 120000),
            ("5000", 500000),
            ("0,005", 1),
            ("-15,25", -1525),
        ],
    )
    def test_parses(self, text: str, expected: int) -> None:
        """Should convert Brazilian and plain formats to centavos."""
        assert parse_money(text) == Money(expected)

    @pytest.mark.parametrize(
        "text", ["", "   ", "abc", "R$", "nan", "1,2,3", "1e30", "99999999999999999999999999999"]
    )
    def test_rejects(self, text: str) -> None:
        """Should return None for text that is not a usable amount."""
        assert parse_money(text) is None

    def test_largest_precise_amount(self) -> None:
        """Should still parse amounts that fit the decimal precision."""
        assert parse_money("99999999999999999999999999") == Money(9999999999999999999999999900)


class TestFormatDecimal:
    """Tests for format_decimal."""

    def test_comma_decimal_no_grouping(self) -> None:
        """Should use a comma and no thousands separator."""
        assert format_decimal(Money(120050)) == "1200,50"

    def test_grouping(self) -> None:
        """Should group thousands with dots when asked."""
        assert format_decimal(Money(123456789), grouping=True) == "1.234.567,89"

    def test_zero(self) -> None:
        """Should format zero with two decimals."""
        assert format_decimal(Money(0)) == "0,00"

    def test_negative(self) -> None:
        """Should keep the sign in front."""
        assert format_decimal(Money(-1525)) == "-15,25"

    def test_small_negative(self) -> None:
        """Should not lose the sign below one real."""
        assert format_decimal(Money(-5)) == "-0,05"


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_positive(self) -> None:
        """Should prefix R$ and group thousands."""
        assert format_currency(Money(120050)) == "R$ 1.200,50"

    def test_negative(self) -> None:
        """Should put the minus before the symbol."""
        assert format_currency(Money(-349950)) == "-R$ 3.499,50"
