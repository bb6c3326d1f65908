"""Tests for database mappers."""

from datetime import date

from ledgerkit.database.mappers import (
    budget_to_domain,
    budget_to_orm,
    category_to_domain,
    recurring_to_domain,
    recurring_to_orm,
    transaction_to_domain,
)
from ledgerkit.database.models import (
    Category as ORMCategory,
    Transaction as ORMTransaction,
)
from ledgerkit.domain.entities import (
    Budget,
    BudgetType,
    CurrencyCode,
    Frequency,
    RecurringDefinition,
    Schedule,
    TransactionKind,
)


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_transaction_to_domain(self):
        orm_transaction = ORMTransaction(
            id="t1",
            workspace_id="ws1",
            date=date(2024, 1, 15),
            amount_minor=4500,
            currency="MXN",
            kind="expense",
            category_id="cat-food",
            merchant_id=None,
            account_id="acc-1",
            is_archived=False,
            is_pending=True,
        )

        txn = transaction_to_domain(orm_transaction)

        assert txn.currency is CurrencyCode.MXN
        assert txn.kind is TransactionKind.EXPENSE
        assert txn.is_pending is True
        assert txn.merchant_id is None


class TestCategoryMapper:
    """Tests for Category mapper."""

    def test_category_to_domain(self):
        orm_category = ORMCategory(
            id="cat-salary", workspace_id="ws1", name="Salary", group_id=None, kind="income", is_archived=False
        )

        category = category_to_domain(orm_category)

        assert category.kind is TransactionKind.INCOME
        assert category.group_id is None


class TestRecurringMapper:
    """Tests for RecurringDefinition mapper."""

    def test_schedule_columns(self):
        definition = RecurringDefinition(
            id="r1",
            workspace_id="ws1",
            name="Gym",
            amount_minor=2500,
            currency=CurrencyCode.CAD,
            kind=TransactionKind.EXPENSE,
            schedule=Schedule(frequency=Frequency.WEEKLY, interval=2),
            start_date=date(2024, 1, 1),
            next_run_on=date(2024, 1, 15),
        )

        orm_definition = recurring_to_orm(definition)

        assert orm_definition.frequency == "weekly"
        assert orm_definition.interval == 2
        assert orm_definition.day_of_month is None
        assert recurring_to_domain(orm_definition) == definition


class TestBudgetMapper:
    """Tests for Budget mapper."""

    def test_scope_ids_stored_as_sorted_lists(self):
        budget = Budget(
            id="b1",
            workspace_id="ws1",
            name="Q1",
            type=BudgetType.CUSTOM,
            currency=CurrencyCode.AUD,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 3, 31),
            category_ids=frozenset({"z", "a"}),
            category_budgets={"a": 100},
        )

        orm_budget = budget_to_orm(budget)

        assert orm_budget.category_ids == ["a", "z"]
        assert orm_budget.account_ids is None
        assert orm_budget.type == "custom"
        assert budget_to_domain(orm_budget) == budget
