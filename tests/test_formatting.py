"""Tests for CLI output formatting."""

import pytest

from ledgerkit.cli.formatting import format_amount, format_money, format_pct
from ledgerkit.domain.entities import CurrencyCode


@pytest.mark.parametrize(
    "amount,currency,expected",
    [
        (123456, CurrencyCode.USD, "1,234.56"),
        (5, CurrencyCode.EUR, "0.05"),
        (-110000, CurrencyCode.USD, "-1,100.00"),
        (0, CurrencyCode.MXN, "0.00"),
        (1500, CurrencyCode.JPY, "1,500"),
        (-1500, CurrencyCode.JPY, "-1,500"),
    ],
)
def test_format_amount(amount, currency, expected):
    assert format_amount(amount, currency) == expected


def test_format_money_accepts_code_string():
    assert format_money(99999, "USD") == "999.99 USD"


def test_format_pct():
    assert format_pct(0.85) == "85%"
    assert format_pct(1.0) == "100%"
    assert format_pct(0.0) == "0%"
