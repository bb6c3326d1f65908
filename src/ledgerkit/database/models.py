"""SQLAlchemy models for ledgerkit database.

Reference columns (category, merchant, account, group ids) are plain strings
without foreign keys: the records are owned by another layer and may point at
rows that have since been deleted.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Index,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    workspace_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)


class CategoryGroup(Base):
    """Category group model."""

    __tablename__ = "category_groups"

    id = Column(String, primary_key=True)
    workspace_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(String, primary_key=True)
    workspace_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    group_id = Column(String, nullable=True)
    kind = Column(String(16), nullable=False, default="expense")
    is_archived = Column(Boolean, default=False, nullable=False)


class Merchant(Base):
    """Merchant model."""

    __tablename__ = "merchants"

    id = Column(String, primary_key=True)
    workspace_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    workspace_id = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    amount_minor = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    kind = Column(String(16), nullable=False)
    category_id = Column(String, nullable=True)
    merchant_id = Column(String, nullable=True)
    account_id = Column(String, nullable=True)
    is_archived = Column(Boolean, default=False, nullable=False)
    is_pending = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        CheckConstraint("amount_minor >= 0", name="ck_transaction_amount_non_negative"),
        Index("ix_transactions_workspace_date", "workspace_id", "date"),
        Index("ix_transactions_workspace_category_date", "workspace_id", "category_id", "date"),
        Index("ix_transactions_workspace_account_date", "workspace_id", "account_id", "date"),
    )


class RecurringDefinition(Base):
    """Recurring definition model."""

    __tablename__ = "recurring_definitions"

    id = Column(String, primary_key=True)
    workspace_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    amount_minor = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    kind = Column(String(16), nullable=False)
    category_id = Column(String, nullable=True)
    merchant_id = Column(String, nullable=True)
    frequency = Column(String(16), nullable=False)
    interval = Column(Integer, nullable=False, default=1)
    day_of_month = Column(Integer, nullable=True)
    start_date = Column(Date, nullable=False)
    next_run_on = Column(Date, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        Index("ix_recurring_workspace_archived", "workspace_id", "is_archived"),
    )


class Budget(Base):
    """Budget model.

    Scope id lists are stored as JSON; NULL means unconstrained.
    """

    __tablename__ = "budgets"

    id = Column(String, primary_key=True)
    workspace_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String(16), nullable=False)
    currency = Column(String(3), nullable=False)
    start_month = Column(String(7), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    category_ids = Column(JSON(none_as_null=True), nullable=True)
    account_ids = Column(JSON(none_as_null=True), nullable=True)
    category_budgets = Column(JSON, nullable=False, default=dict)
    total_budget_minor = Column(Integer, nullable=False, default=0)
    is_archived = Column(Boolean, default=False, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
