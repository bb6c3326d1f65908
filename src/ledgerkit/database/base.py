"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.entities import (
    Account,
    Budget,
    Category,
    CategoryGroup,
    Merchant,
    RecurringDefinition,
    Transaction,
)
from ledgerkit.domain.filters import TransactionFilter
from ledgerkit.domain.grouping import GroupKey, GroupTotal


class Database(ABC):
    """Abstract database interface for ledgerkit.

    The engine only reads through this interface. The ``add_*`` methods load
    records that the application's own CRUD layer owns; ids are supplied by
    the caller.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Loading
    @abstractmethod
    def add_account(self, account: Account) -> None:
        """Store an account."""
        pass

    @abstractmethod
    def add_category_group(self, group: CategoryGroup) -> None:
        """Store a category group."""
        pass

    @abstractmethod
    def add_category(self, category: Category) -> None:
        """Store a category."""
        pass

    @abstractmethod
    def add_merchant(self, merchant: Merchant) -> None:
        """Store a merchant."""
        pass

    @abstractmethod
    def add_transaction(self, txn: Transaction) -> None:
        """Store a transaction.

        Raises:
            ValidationError: If the amount is negative or the currency unsupported
        """
        pass

    @abstractmethod
    def add_recurring(self, definition: RecurringDefinition) -> None:
        """Store a recurring definition."""
        pass

    @abstractmethod
    def add_budget(self, budget: Budget) -> None:
        """Store a budget."""
        pass

    # Reference lookups; None for ids that do not resolve
    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_group(self, group_id: str) -> Optional[CategoryGroup]:
        """Get category group by ID."""
        pass

    @abstractmethod
    def get_merchant(self, merchant_id: str) -> Optional[Merchant]:
        """Get merchant by ID."""
        pass

    # Recurring definitions and budgets
    @abstractmethod
    def get_recurring(self, definition_id: str) -> Optional[RecurringDefinition]:
        """Get recurring definition by ID."""
        pass

    @abstractmethod
    def list_recurring(
        self, workspace_id: str, include_archived: bool = False
    ) -> list[RecurringDefinition]:
        """List recurring definitions of a workspace ordered by next run and id."""
        pass

    @abstractmethod
    def get_budget(self, budget_id: str) -> Optional[Budget]:
        """Get budget by ID."""
        pass

    # Transactions
    @abstractmethod
    def list_transactions(self, txn_filter: TransactionFilter) -> list[Transaction]:
        """List transactions matching a filter, ordered by date then id."""
        pass

    @abstractmethod
    def grouped_totals(
        self, txn_filter: TransactionFilter, keys: Sequence[GroupKey]
    ) -> list[GroupTotal]:
        """Sum ``amount_minor`` and count rows per group.

        Args:
            txn_filter: Transactions to include
            keys: Fields to group by. Each GroupTotal.key is a tuple in the
                same order; currency and kind values are returned as their
                enums, id values as strings or None. CATEGORY_GROUP resolves
                to the group id of the transaction's category, or None when
                the transaction has no category or the category is missing.

        Returns:
            One GroupTotal per non-empty group, in no particular order
        """
        pass
