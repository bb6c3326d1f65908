"""Shared pytest fixtures for ledgerkit tests."""

import logging
import os
import tempfile
from datetime import date

import pytest

from ledgerkit import logging_setup
from ledgerkit.database.factories import create_memory_database, create_sqlite_database
from ledgerkit.domain.entities import (
    Account,
    Category,
    CategoryGroup,
    CurrencyCode,
    Merchant,
    Transaction,
    TransactionKind,
)

WORKSPACE = "ws1"


@pytest.fixture(autouse=True)
def restore_package_logger(monkeypatch):
    """Undo logging configuration done by CLI invocations within a test."""
    logger = logging.getLogger("ledgerkit")
    saved_handlers = list(logger.handlers)
    saved_level = logger.level
    saved_propagate = logger.propagate
    monkeypatch.setattr(logging_setup, "_CONFIGURED", logging_setup._CONFIGURED)

    yield

    for handler in list(logger.handlers):
        if handler not in saved_handlers:
            logger.removeHandler(handler)
    for handler in saved_handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(saved_level)
    logger.propagate = saved_propagate


def make_txn(
    txn_id: str,
    day: date,
    amount_minor: int,
    currency: str = "USD",
    kind: str = "expense",
    workspace_id: str = WORKSPACE,
    **fields,
) -> Transaction:
    """Build a transaction with sensible defaults for tests."""
    return Transaction(
        id=txn_id,
        workspace_id=workspace_id,
        date=day,
        amount_minor=amount_minor,
        currency=CurrencyCode(currency),
        kind=TransactionKind(kind),
        **fields,
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_db():
    """Create an empty in-memory database."""
    return create_memory_database()


@pytest.fixture(params=["memory", "sqlite"])
def db(request):
    """Run a test against every Database implementation."""
    if request.param == "memory":
        return request.getfixturevalue("memory_db")
    return request.getfixturevalue("temp_db")


def seed_references(db) -> None:
    """Load accounts, categories, groups and merchants for the sample ledger."""
    db.add_account(Account(id="acc-1", workspace_id=WORKSPACE, name="Checking"))
    db.add_account(Account(id="acc-2", workspace_id=WORKSPACE, name="Card"))
    db.add_category_group(CategoryGroup(id="grp-living", workspace_id=WORKSPACE, name="Living"))
    db.add_category(Category(id="cat-food", workspace_id=WORKSPACE, name="Food", group_id="grp-living"))
    db.add_category(Category(id="cat-rent", workspace_id=WORKSPACE, name="Rent", group_id="grp-living"))
    db.add_category(
        Category(id="cat-salary", workspace_id=WORKSPACE, name="Salary", kind=TransactionKind.INCOME)
    )
    # Its group has been deleted
    db.add_category(Category(id="cat-fun", workspace_id=WORKSPACE, name="Fun", group_id="grp-gone"))
    db.add_merchant(Merchant(id="m-market", workspace_id=WORKSPACE, name="Market"))
    db.add_merchant(Merchant(id="m-landlord", workspace_id=WORKSPACE, name="Landlord"))


SAMPLE_TRANSACTIONS = [
    make_txn("t01", date(2024, 1, 5), 300000, kind="income", category_id="cat-salary", account_id="acc-1"),
    make_txn(
        "t02", date(2024, 1, 10), 120000,
        category_id="cat-rent", merchant_id="m-landlord", account_id="acc-1",
    ),
    make_txn("t03", date(2024, 1, 12), 4500, category_id="cat-food", merchant_id="m-market", account_id="acc-2"),
    make_txn("t04", date(2024, 1, 20), 5500, category_id="cat-food", merchant_id="m-market", account_id="acc-2"),
    make_txn("t05", date(2024, 2, 2), 2000, account_id="acc-2"),
    make_txn("t06", date(2024, 2, 5), 7000, category_id="cat-fun", account_id="acc-2"),
    make_txn("t07", date(2024, 2, 10), 10000, category_id="cat-food", is_archived=True),
    make_txn(
        "t08", date(2024, 2, 15), 50000, kind="income",
        category_id="cat-salary", account_id="acc-1", is_pending=True,
    ),
    make_txn("t09", date(2024, 1, 15), 250000, currency="MXN", category_id="cat-food"),
    make_txn("t10", date(2024, 1, 20), 1500, currency="JPY", category_id="cat-missing"),
    make_txn("t11", date(2024, 1, 10), 99999, workspace_id="ws2", category_id="cat-food"),
]


@pytest.fixture
def ledger(db):
    """Database loaded with the sample ledger."""
    seed_references(db)
    for txn in SAMPLE_TRANSACTIONS:
        db.add_transaction(txn)
    return db


@pytest.fixture
def sqlite_ledger(temp_db):
    """Temporary SQLite database loaded with the sample ledger."""
    seed_references(temp_db)
    for txn in SAMPLE_TRANSACTIONS:
        temp_db.add_transaction(txn)
    return temp_db


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
