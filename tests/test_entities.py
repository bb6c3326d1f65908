"""Tests for domain entities."""

from datetime import date

import pytest

from ledgerkit.domain.entities import (
    SUPPORTED_CURRENCIES,
    Budget,
    BudgetType,
    CurrencyCode,
    Dimension,
    Transaction,
    TransactionKind,
)


def test_supported_currencies():
    assert SUPPORTED_CURRENCIES == ("USD", "MXN", "JPY", "GBP", "EUR", "CAD", "AUD")
    assert CurrencyCode.JPY.minor_digits == 0
    assert CurrencyCode.GBP.minor_digits == 2


def test_signed_amount_follows_kind():
    income = Transaction("t1", "ws1", date(2024, 1, 1), 500, CurrencyCode.USD, TransactionKind.INCOME)
    expense = Transaction("t2", "ws1", date(2024, 1, 1), 500, CurrencyCode.USD, TransactionKind.EXPENSE)

    assert income.signed_amount_minor == 500
    assert expense.signed_amount_minor == -500


def test_dimension_labels():
    assert Dimension.CATEGORY.missing_label == "Uncategorized"
    assert Dimension.MERCHANT.missing_label == "Unassigned"
    assert Dimension.GROUP.unknown_label == "Unknown group"
    assert Dimension.from_slug("merchant") is Dimension.MERCHANT
    with pytest.raises(ValueError):
        Dimension.from_slug("account")


def test_budget_planned_total():
    per_category = Budget("b1", "ws1", "B", BudgetType.MONTHLY, CurrencyCode.USD, category_budgets={"a": 100, "b": 50})
    limit = Budget("b2", "ws1", "B", BudgetType.MONTHLY, CurrencyCode.USD, total_budget_minor=700)

    assert per_category.is_per_category
    assert per_category.planned_total_minor == 150
    assert not limit.is_per_category
    assert limit.planned_total_minor == 700
