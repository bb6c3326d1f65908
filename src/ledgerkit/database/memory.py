"""In-memory database implementation.

Holds a snapshot of records in plain dictionaries and answers grouped queries
with ``grouped_sum``. Used for tests and for callers that already hold the
records they want to aggregate.
"""

from typing import Optional, Sequence

from ledgerkit.database.base import Database
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
from ledgerkit.domain.grouping import GroupKey, GroupTotal, grouped_sum
from ledgerkit.domain.validation import (
    validate_budget,
    validate_recurring,
    validate_transaction,
)


class InMemoryDatabase(Database):
    """Dictionary-backed implementation of Database interface."""

    def __init__(self):
        self._accounts: dict[str, Account] = {}
        self._groups: dict[str, CategoryGroup] = {}
        self._categories: dict[str, Category] = {}
        self._merchants: dict[str, Merchant] = {}
        self._transactions: dict[str, Transaction] = {}
        self._recurring: dict[str, RecurringDefinition] = {}
        self._budgets: dict[str, Budget] = {}

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def initialize_schema(self) -> None:
        pass

    # Loading
    def add_account(self, account: Account) -> None:
        self._accounts[account.id] = account

    def add_category_group(self, group: CategoryGroup) -> None:
        self._groups[group.id] = group

    def add_category(self, category: Category) -> None:
        self._categories[category.id] = category

    def add_merchant(self, merchant: Merchant) -> None:
        self._merchants[merchant.id] = merchant

    def add_transaction(self, txn: Transaction) -> None:
        txn = validate_transaction(txn)
        self._transactions[txn.id] = txn

    def add_recurring(self, definition: RecurringDefinition) -> None:
        definition = validate_recurring(definition)
        self._recurring[definition.id] = definition

    def add_budget(self, budget: Budget) -> None:
        budget = validate_budget(budget)
        self._budgets[budget.id] = budget

    # Reference lookups
    def get_account(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def get_category_group(self, group_id: str) -> Optional[CategoryGroup]:
        return self._groups.get(group_id)

    def get_merchant(self, merchant_id: str) -> Optional[Merchant]:
        return self._merchants.get(merchant_id)

    # Recurring definitions and budgets
    def get_recurring(self, definition_id: str) -> Optional[RecurringDefinition]:
        return self._recurring.get(definition_id)

    def list_recurring(
        self, workspace_id: str, include_archived: bool = False
    ) -> list[RecurringDefinition]:
        definitions = [
            d
            for d in self._recurring.values()
            if d.workspace_id == workspace_id and (include_archived or not d.is_archived)
        ]
        return sorted(definitions, key=lambda d: (d.next_run_on, d.id))

    def get_budget(self, budget_id: str) -> Optional[Budget]:
        return self._budgets.get(budget_id)

    # Transactions
    def list_transactions(self, txn_filter: TransactionFilter) -> list[Transaction]:
        matching = [txn for txn in self._transactions.values() if txn_filter(txn)]
        return sorted(matching, key=lambda txn: (txn.date, txn.id))

    def _category_group_id(self, txn: Transaction) -> Optional[str]:
        if txn.category_id is None:
            return None
        category = self._categories.get(txn.category_id)
        if category is None or category.workspace_id != txn.workspace_id:
            return None
        return category.group_id

    def _key_value(self, txn: Transaction, key: GroupKey):
        if key is GroupKey.CURRENCY:
            return txn.currency
        if key is GroupKey.KIND:
            return txn.kind
        if key is GroupKey.CATEGORY:
            return txn.category_id
        if key is GroupKey.MERCHANT:
            return txn.merchant_id
        if key is GroupKey.ACCOUNT:
            return txn.account_id
        return self._category_group_id(txn)

    def grouped_totals(
        self, txn_filter: TransactionFilter, keys: Sequence[GroupKey]
    ) -> list[GroupTotal]:
        groups = grouped_sum(
            (txn for txn in self._transactions.values() if txn_filter(txn)),
            key_fn=lambda txn: tuple(self._key_value(txn, key) for key in keys),
            sum_fn=lambda txn: txn.amount_minor,
        )
        return list(groups.values())
