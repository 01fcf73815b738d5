"""Unit tests for money parsing."""

from decimal import Decimal

import pytest

from outletbase.domain.exceptions import InvalidInputError
from outletbase.domain.services.pricing import line_total, parse_price


class TestParsePrice:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (120, Decimal("120.00")),
            ("99.5", Decimal("99.50")),
            (" 45 ", Decimal("45.00")),
            (12.345, Decimal("12.35")),
            (Decimal("0"), Decimal("0.00")),
        ],
    )
    def test_accepts_amounts(self, value, expected):
        assert parse_price(value) == expected

    def test_always_two_places(self):
        assert str(parse_price("7")) == "7.00"

    @pytest.mark.parametrize("value", [None, True])
    def test_missing(self, value):
        with pytest.raises(InvalidInputError, match="is required"):
            parse_price(value, "Base price")

    @pytest.mark.parametrize("value", ["abc", "1,000", "", "NaN", "Infinity"])
    def test_not_a_number(self, value):
        with pytest.raises(InvalidInputError, match="must be a number"):
            parse_price(value)

    def test_negative(self):
        with pytest.raises(InvalidInputError, match="cannot be negative"):
            parse_price("-0.01", "Custom price")

    def test_too_large_for_column(self):
        with pytest.raises(InvalidInputError, match="too large"):
            parse_price("100000000")


def test_line_total():
    assert line_total(Decimal("33.33"), 3) == Decimal("99.99")
    assert str(line_total(Decimal("120.00"), 2)) == "240.00"
