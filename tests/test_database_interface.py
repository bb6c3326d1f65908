"""Tests for Database implementations returning domain models."""

from datetime import date, datetime

import pytest

from conftest import WORKSPACE, make_txn
from ledgerkit.database.memory import InMemoryDatabase
from ledgerkit.database.sqlalchemy_db import SQLAlchemyDatabase
from ledgerkit.domain import entities
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.filters import TransactionScope, build_filter
from ledgerkit.domain.grouping import GroupKey


class TestDatabaseInterface:
    """Behaviour shared by every Database implementation."""

    def test_reference_lookups_return_domain_models(self, ledger):
        category = ledger.get_category("cat-food")
        group = ledger.get_category_group("grp-living")
        merchant = ledger.get_merchant("m-market")
        account = ledger.get_account("acc-1")

        assert isinstance(category, entities.Category)
        assert category.group_id == "grp-living"
        assert category.kind is entities.TransactionKind.EXPENSE
        assert isinstance(group, entities.CategoryGroup)
        assert group.name == "Living"
        assert isinstance(merchant, entities.Merchant)
        assert merchant.name == "Market"
        assert account.name == "Checking"

    def test_missing_references_return_none(self, ledger):
        assert ledger.get_category("nope") is None
        assert ledger.get_category_group("nope") is None
        assert ledger.get_merchant("nope") is None
        assert ledger.get_account("nope") is None
        assert ledger.get_recurring("nope") is None
        assert ledger.get_budget("nope") is None

    def test_list_transactions_is_ordered_by_date_then_id(self, ledger):
        txns = ledger.list_transactions(build_filter(TransactionScope(workspace_id=WORKSPACE)))

        assert [txn.id for txn in txns] == ["t01", "t02", "t03", "t09", "t04", "t10", "t05", "t06", "t08"]
        assert all(isinstance(txn.currency, entities.CurrencyCode) for txn in txns)
        assert all(isinstance(txn.kind, entities.TransactionKind) for txn in txns)

    def test_list_transactions_applies_filter(self, ledger):
        txn_filter = build_filter(
            TransactionScope(workspace_id=WORKSPACE, currency="USD", include_archived=True)
        ).with_kind("expense").with_range(date(2024, 2, 1), date(2024, 3, 1))

        assert [txn.id for txn in ledger.list_transactions(txn_filter)] == ["t05", "t06", "t07"]

    def test_list_transactions_matches_predicate(self, ledger):
        txn_filter = build_filter(
            TransactionScope(workspace_id=WORKSPACE, category_ids=["cat-food", "cat-rent"], include_pending=False)
        )

        txns = ledger.list_transactions(txn_filter)

        assert txns
        assert all(txn_filter(txn) for txn in txns)

    def test_grouped_totals_enum_keys(self, ledger):
        rows = ledger.grouped_totals(
            build_filter(TransactionScope(workspace_id=WORKSPACE)), [GroupKey.CURRENCY, GroupKey.KIND]
        )

        keyed = {row.key: (row.total_minor, row.count) for row in rows}
        assert keyed[(entities.CurrencyCode.USD, entities.TransactionKind.INCOME)] == (350000, 2)
        assert keyed[(entities.CurrencyCode.JPY, entities.TransactionKind.EXPENSE)] == (1500, 1)
        assert len(keyed) == 4

    def test_grouped_totals_by_account(self, ledger):
        rows = ledger.grouped_totals(
            build_filter(TransactionScope(workspace_id=WORKSPACE, currency="USD")).with_kind("expense"),
            [GroupKey.ACCOUNT],
        )

        assert {row.key: row.total_minor for row in rows} == {("acc-1",): 120000, ("acc-2",): 19000}

    def test_grouped_totals_count_matches_transactions(self, ledger):
        txn_filter = build_filter(TransactionScope(workspace_id=WORKSPACE, include_archived=True))

        rows = ledger.grouped_totals(txn_filter, [GroupKey.CATEGORY_GROUP, GroupKey.CURRENCY])

        assert sum(row.count for row in rows) == len(ledger.list_transactions(txn_filter))
        assert sum(row.total_minor for row in rows) == sum(
            txn.amount_minor for txn in ledger.list_transactions(txn_filter)
        )

    def test_add_transaction_rejects_negative_amount(self, db):
        with pytest.raises(ValidationError, match="non-negative integer"):
            db.add_transaction(make_txn("bad", date(2024, 1, 1), -100))

    def test_add_transaction_rejects_fractional_amount(self, db):
        with pytest.raises(ValidationError):
            db.add_transaction(make_txn("bad", date(2024, 1, 1), 10.5))

    def test_add_transaction_rejects_unsupported_currency(self, db):
        txn = entities.Transaction(
            id="bad",
            workspace_id=WORKSPACE,
            date=date(2024, 1, 1),
            amount_minor=100,
            currency="BTC",
            kind="expense",
        )

        with pytest.raises(ValidationError, match="Unsupported currency"):
            db.add_transaction(txn)

    def test_add_transaction_normalizes_strings(self, db):
        txn = entities.Transaction(
            id="t1",
            workspace_id=WORKSPACE,
            date=date(2024, 1, 1),
            amount_minor=100,
            currency="gbp",
            kind="INCOME",
        )
        db.add_transaction(txn)

        stored = db.list_transactions(build_filter(TransactionScope(workspace_id=WORKSPACE)))

        assert stored[0].currency is entities.CurrencyCode.GBP
        assert stored[0].kind is entities.TransactionKind.INCOME

    @pytest.mark.parametrize(
        "bad_date", ["2024-13-45", "01/05/2024", datetime(2024, 1, 5, 12), 20240105, None]
    )
    def test_add_transaction_rejects_malformed_date(self, db, bad_date):
        with pytest.raises(ValidationError, match="date"):
            db.add_transaction(make_txn("bad", bad_date, 100))

        assert db.list_transactions(build_filter(TransactionScope(workspace_id=WORKSPACE))) == []

    def test_add_transaction_parses_iso_date_string(self, db):
        db.add_transaction(make_txn("t1", "2024-01-05", 100))

        stored = db.list_transactions(
            build_filter(TransactionScope(workspace_id=WORKSPACE, start=date(2024, 1, 1)))
        )

        assert [txn.date for txn in stored] == [date(2024, 1, 5)]

    def test_add_transaction_replaces_same_id(self, db):
        db.add_transaction(make_txn("t1", date(2024, 1, 1), 100))
        db.add_transaction(make_txn("t1", date(2024, 1, 1), 250))

        stored = db.list_transactions(build_filter(TransactionScope(workspace_id=WORKSPACE)))

        assert [txn.amount_minor for txn in stored] == [250]


def test_sqlite_database_path(temp_db):
    assert isinstance(temp_db, SQLAlchemyDatabase)
    assert temp_db.database_url == f"sqlite:///{temp_db.database_path}"


def test_sqlite_database_reads_after_reconnect(sqlite_ledger):
    sqlite_ledger.disconnect()

    txns = sqlite_ledger.list_transactions(build_filter(TransactionScope(workspace_id="ws2")))

    assert [txn.id for txn in txns] == ["t11"]


def test_memory_database_factory(memory_db):
    assert isinstance(memory_db, InMemoryDatabase)
    assert memory_db.list_recurring(WORKSPACE) == []
