"""Tests for decimal string normalization."""

from decimal import Decimal

import pytest

from itbit_sdk import ConfigurationError, to_decimal_string


class TestToDecimalString:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.1, "0.1"),
            (1.5, "1.5"),
            (622, "622"),
            ("622.250", "622.250"),
            (" 3.0 ", "3.0"),
            (Decimal("1E-8"), "0.00000001"),
            (1e-8, "0.00000001"),
            (Decimal("1E+2"), "100"),
        ],
    )
    def test_normalizes(self, value, expected):
        assert to_decimal_string(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", float("nan"), float("inf"), True, None, [1]])
    def test_rejects(self, value):
        with pytest.raises(ConfigurationError):
            to_decimal_string(value, "price")
