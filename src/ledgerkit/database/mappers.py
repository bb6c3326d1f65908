"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so enum coercion and the JSON
encoding of budget scopes live in one place.
"""

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    Account as ORMAccount,
    Budget as ORMBudget,
    Category as ORMCategory,
    CategoryGroup as ORMCategoryGroup,
    Merchant as ORMMerchant,
    RecurringDefinition as ORMRecurringDefinition,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        workspace_id=orm_account.workspace_id,
        name=orm_account.name,
    )


def account_to_orm(account: domain.Account) -> ORMAccount:
    return ORMAccount(id=account.id, workspace_id=account.workspace_id, name=account.name)


def category_group_to_domain(orm_group: ORMCategoryGroup) -> domain.CategoryGroup:
    """Convert SQLAlchemy CategoryGroup model to domain CategoryGroup entity."""
    return domain.CategoryGroup(
        id=orm_group.id,
        workspace_id=orm_group.workspace_id,
        name=orm_group.name,
        is_archived=orm_group.is_archived,
    )


def category_group_to_orm(group: domain.CategoryGroup) -> ORMCategoryGroup:
    return ORMCategoryGroup(
        id=group.id,
        workspace_id=group.workspace_id,
        name=group.name,
        is_archived=group.is_archived,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        workspace_id=orm_category.workspace_id,
        name=orm_category.name,
        group_id=orm_category.group_id,
        kind=domain.TransactionKind(orm_category.kind),
        is_archived=orm_category.is_archived,
    )


def category_to_orm(category: domain.Category) -> ORMCategory:
    return ORMCategory(
        id=category.id,
        workspace_id=category.workspace_id,
        name=category.name,
        group_id=category.group_id,
        kind=domain.TransactionKind(category.kind).value,
        is_archived=category.is_archived,
    )


def merchant_to_domain(orm_merchant: ORMMerchant) -> domain.Merchant:
    """Convert SQLAlchemy Merchant model to domain Merchant entity."""
    return domain.Merchant(
        id=orm_merchant.id,
        workspace_id=orm_merchant.workspace_id,
        name=orm_merchant.name,
    )


def merchant_to_orm(merchant: domain.Merchant) -> ORMMerchant:
    return ORMMerchant(id=merchant.id, workspace_id=merchant.workspace_id, name=merchant.name)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        workspace_id=orm_transaction.workspace_id,
        date=orm_transaction.date,
        amount_minor=orm_transaction.amount_minor,
        currency=domain.CurrencyCode(orm_transaction.currency),
        kind=domain.TransactionKind(orm_transaction.kind),
        category_id=orm_transaction.category_id,
        merchant_id=orm_transaction.merchant_id,
        account_id=orm_transaction.account_id,
        is_archived=orm_transaction.is_archived,
        is_pending=orm_transaction.is_pending,
    )


def transaction_to_orm(txn: domain.Transaction) -> ORMTransaction:
    """Convert a validated domain Transaction into a SQLAlchemy model."""
    return ORMTransaction(
        id=txn.id,
        workspace_id=txn.workspace_id,
        date=txn.date,
        amount_minor=txn.amount_minor,
        currency=txn.currency.value,
        kind=txn.kind.value,
        category_id=txn.category_id,
        merchant_id=txn.merchant_id,
        account_id=txn.account_id,
        is_archived=txn.is_archived,
        is_pending=txn.is_pending,
    )


def recurring_to_domain(orm_recurring: ORMRecurringDefinition) -> domain.RecurringDefinition:
    """Convert SQLAlchemy RecurringDefinition model to domain entity."""
    return domain.RecurringDefinition(
        id=orm_recurring.id,
        workspace_id=orm_recurring.workspace_id,
        name=orm_recurring.name,
        amount_minor=orm_recurring.amount_minor,
        currency=domain.CurrencyCode(orm_recurring.currency),
        kind=domain.TransactionKind(orm_recurring.kind),
        schedule=domain.Schedule(
            frequency=domain.Frequency(orm_recurring.frequency),
            interval=orm_recurring.interval,
            day_of_month=orm_recurring.day_of_month,
        ),
        start_date=orm_recurring.start_date,
        next_run_on=orm_recurring.next_run_on,
        category_id=orm_recurring.category_id,
        merchant_id=orm_recurring.merchant_id,
        is_archived=orm_recurring.is_archived,
    )


def recurring_to_orm(definition: domain.RecurringDefinition) -> ORMRecurringDefinition:
    """Convert a validated domain RecurringDefinition into a SQLAlchemy model."""
    return ORMRecurringDefinition(
        id=definition.id,
        workspace_id=definition.workspace_id,
        name=definition.name,
        amount_minor=definition.amount_minor,
        currency=definition.currency.value,
        kind=definition.kind.value,
        category_id=definition.category_id,
        merchant_id=definition.merchant_id,
        frequency=definition.schedule.frequency.value,
        interval=definition.schedule.interval,
        day_of_month=definition.schedule.day_of_month,
        start_date=definition.start_date,
        next_run_on=definition.next_run_on,
        is_archived=definition.is_archived,
    )


def _ids_to_json(ids):
    if ids is None:
        return None
    return sorted(ids)


def _ids_from_json(values):
    if values is None:
        return None
    return frozenset(values)


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        workspace_id=orm_budget.workspace_id,
        name=orm_budget.name,
        type=domain.BudgetType(orm_budget.type),
        currency=domain.CurrencyCode(orm_budget.currency),
        start_month=orm_budget.start_month,
        start_date=orm_budget.start_date,
        end_date=orm_budget.end_date,
        category_ids=_ids_from_json(orm_budget.category_ids),
        account_ids=_ids_from_json(orm_budget.account_ids),
        category_budgets=dict(orm_budget.category_budgets or {}),
        total_budget_minor=orm_budget.total_budget_minor,
        is_archived=orm_budget.is_archived,
    )


def budget_to_orm(budget: domain.Budget) -> ORMBudget:
    """Convert a validated domain Budget into a SQLAlchemy model."""
    return ORMBudget(
        id=budget.id,
        workspace_id=budget.workspace_id,
        name=budget.name,
        type=budget.type.value,
        currency=budget.currency.value,
        start_month=budget.start_month,
        start_date=budget.start_date,
        end_date=budget.end_date,
        category_ids=_ids_to_json(budget.category_ids),
        account_ids=_ids_to_json(budget.account_ids),
        category_budgets=dict(budget.category_budgets),
        total_budget_minor=budget.total_budget_minor,
        is_archived=budget.is_archived,
    )
