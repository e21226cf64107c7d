"""Tests for German number formatting and parsing."""

from decimal import Decimal

import pytest

from bruttonetto.core.formatting import format_euro, format_prozent, parse_german_number


class TestFormatEuro:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("1234.56"), "1.234,56 €"),
            (Decimal("1234567.891"), "1.234.567,89 €"),
            (0, "0,00 €"),
            (Decimal("0.005"), "0,01 €"),
            (-1234.5, "-1.234,50 €"),
        ],
    )
    def test_format(self, value, expected):
        assert format_euro(value) == expected

    def test_whole_euros(self):
        assert format_euro(Decimal("1234.5"), 0) == "1.235 €"


class TestFormatProzent:
    def test_one_decimal(self):
        assert format_prozent(Decimal("12.345")) == "12,3 %"

    def test_two_decimals(self):
        assert format_prozent(42, 2) == "42,00 %"


class TestParseGermanNumber:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("1.234,56", Decimal("1234.56")),
            ("3.000 €", Decimal("3000")),
            (" 2,9 % ", Decimal("2.9")),
            ("42", Decimal("42")),
            (12.5, Decimal("12.5")),
        ],
    )
    def test_parse(self, text, expected):
        assert parse_german_number(text) == expected

    @pytest.mark.parametrize("text", ["", None, "abc"])
    def test_blank_or_invalid_is_zero(self, text):
        assert parse_german_number(text) == Decimal("0")
