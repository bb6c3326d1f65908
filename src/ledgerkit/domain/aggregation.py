"""Aggregation domain service."""

from datetime import date
from typing import Optional, Union

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import (
    CurrencyCode,
    DashboardSummary,
    Dimension,
    RankedEntry,
    Totals,
    TransactionKind,
)
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.filters import TransactionFilter, TransactionScope, build_filter
from ledgerkit.domain.grouping import GroupKey, GroupTotal
from ledgerkit.domain.validation import parse_kind
from ledgerkit.logging_setup import get_logger

logger = get_logger(__name__)

DEFAULT_TOP_LIMIT = 5

_DIMENSION_KEYS = {
    Dimension.CATEGORY: GroupKey.CATEGORY,
    Dimension.MERCHANT: GroupKey.MERCHANT,
    Dimension.GROUP: GroupKey.CATEGORY_GROUP,
}

ScopeLike = Union[TransactionScope, TransactionFilter]


def _as_filter(scope: ScopeLike) -> TransactionFilter:
    if isinstance(scope, TransactionFilter):
        return scope
    return build_filter(scope)


def _by_currency(values: dict) -> dict:
    return {currency: values[currency] for currency in sorted(values, key=lambda c: c.value)}


class AggregationService:
    """Service for totals, balances and ranked breakdowns."""

    def __init__(self, db: Database):
        """Initialize aggregation service.

        Args:
            db: Database instance
        """
        self.db = db

    def sum_by_kind_and_currency(
        self, txn_filter: ScopeLike
    ) -> dict[CurrencyCode, Totals]:
        """Total income and expense per currency.

        Currencies without matching transactions are absent from the result;
        callers that need a fixed set of currencies must union key sets.

        Args:
            txn_filter: Filter (or scope) selecting transactions

        Returns:
            Mapping of currency to Totals, ordered by currency code
        """
        txn_filter = _as_filter(txn_filter)
        rows = self.db.grouped_totals(txn_filter, [GroupKey.CURRENCY, GroupKey.KIND])

        income: dict[CurrencyCode, GroupTotal] = {}
        expense: dict[CurrencyCode, GroupTotal] = {}
        for row in rows:
            currency, kind = row.key
            if kind is TransactionKind.INCOME:
                income[currency] = row
            else:
                expense[currency] = row

        totals: dict[CurrencyCode, Totals] = {}
        for currency in set(income) | set(expense):
            income_row = income.get(currency)
            expense_row = expense.get(currency)
            totals[currency] = Totals(
                income_minor=income_row.total_minor if income_row else 0,
                expense_minor=expense_row.total_minor if expense_row else 0,
                income_count=income_row.count if income_row else 0,
                expense_count=expense_row.count if expense_row else 0,
            )

        logger.debug(
            "sum_by_kind_and_currency workspace=%s groups=%d currencies=%d",
            txn_filter.workspace_id,
            len(rows),
            len(totals),
        )
        return _by_currency(totals)

    def balance_as_of(
        self, scope: ScopeLike, as_of_exclusive: Optional[date]
    ) -> dict[CurrencyCode, int]:
        """Balance per currency of everything strictly before a date.

        The scope's own date window is replaced by ``(-inf, as_of_exclusive)``;
        its other constraints still apply. ``as_of_exclusive`` of None means
        all history.
        """
        txn_filter = _as_filter(scope).with_range(None, as_of_exclusive)
        totals = self.sum_by_kind_and_currency(txn_filter)
        return {currency: entry.balance_minor for currency, entry in totals.items()}

    def period_change(self, scope: ScopeLike) -> dict[CurrencyCode, int]:
        """Change in balance across the scope's date window.

        Equals ``balance_as_of(end) - balance_as_of(start)`` per currency,
        over the union of currencies seen at either point.
        """
        txn_filter = _as_filter(scope)
        end_balance = self.balance_as_of(txn_filter, txn_filter.end)
        if txn_filter.start is None:
            return end_balance

        start_balance = self.balance_as_of(txn_filter, txn_filter.start)
        change = {
            currency: end_balance.get(currency, 0) - start_balance.get(currency, 0)
            for currency in set(end_balance) | set(start_balance)
        }
        return _by_currency(change)

    def top_n(
        self,
        txn_filter: ScopeLike,
        kind: TransactionKind,
        dimension: Dimension,
        limit: int = DEFAULT_TOP_LIMIT,
    ) -> list[RankedEntry]:
        """Rank dimension buckets by total amount.

        Rows are grouped by (dimension id, currency). Ordering is total
        descending, then dimension id ascending with the null bucket after
        named ids, then currency code.

        Args:
            txn_filter: Filter (or scope) selecting transactions
            kind: Income or expense
            dimension: Category, merchant or category group
            limit: Maximum number of entries to return

        Returns:
            Ranked entries, at most ``limit`` long

        Raises:
            ValidationError: If limit is not a positive integer
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError(f"Limit must be a positive integer, got {limit!r}")
        kind = parse_kind(kind)
        txn_filter = _as_filter(txn_filter).with_kind(kind)

        rows = self.breakdown(txn_filter, kind, dimension)
        rows.sort(
            key=lambda row: (
                -row.total_minor,
                row.key[0] is None,
                row.key[0] or "",
                row.key[1].value,
            )
        )

        entries = [
            RankedEntry(
                id=row.key[0],
                name=self.resolve_name(dimension, row.key[0], txn_filter.workspace_id),
                currency=row.key[1],
                amount_minor=row.total_minor,
                count=row.count,
            )
            for row in rows[:limit]
        ]
        logger.debug(
            "top_n workspace=%s kind=%s dimension=%s buckets=%d returned=%d",
            txn_filter.workspace_id,
            kind.value,
            dimension.slug,
            len(rows),
            len(entries),
        )
        return entries

    def breakdown(
        self, txn_filter: ScopeLike, kind: TransactionKind, dimension: Dimension
    ) -> list[GroupTotal]:
        """Unranked totals of one kind keyed by ``(dimension id, currency)``."""
        txn_filter = _as_filter(txn_filter).with_kind(kind)
        return self.db.grouped_totals(
            txn_filter, [_DIMENSION_KEYS[dimension], GroupKey.CURRENCY]
        )

    def resolve_name(
        self, dimension: Dimension, ref_id: Optional[str], workspace_id: str
    ) -> str:
        """Display name for a dimension id, falling back to the dimension's labels."""
        if ref_id is None:
            return dimension.missing_label

        if dimension is Dimension.MERCHANT:
            entity = self.db.get_merchant(ref_id)
        elif dimension is Dimension.GROUP:
            entity = self.db.get_category_group(ref_id)
        else:
            entity = self.db.get_category(ref_id)

        if entity is None or entity.workspace_id != workspace_id:
            return dimension.unknown_label
        return entity.name.strip() or dimension.unknown_label

    def distinct_currencies(self, txn_filter: ScopeLike) -> set[CurrencyCode]:
        """Currencies that appear in the matching transactions."""
        rows = self.db.grouped_totals(_as_filter(txn_filter), [GroupKey.CURRENCY])
        return {row.key[0] for row in rows}

    def summarize(
        self, scope: ScopeLike, limit: int = DEFAULT_TOP_LIMIT
    ) -> DashboardSummary:
        """Build the dashboard summary for a scope.

        Args:
            scope: Scope (or filter) for the period being viewed
            limit: Entries per ranked breakdown

        Returns:
            DashboardSummary with totals, balance, change and breakdowns
        """
        txn_filter = _as_filter(scope)
        kinds = (TransactionKind.INCOME, TransactionKind.EXPENSE)

        def ranked(dimension: Dimension) -> dict[TransactionKind, tuple[RankedEntry, ...]]:
            return {
                kind: tuple(self.top_n(txn_filter, kind, dimension, limit))
                for kind in kinds
            }

        return DashboardSummary(
            totals=self.sum_by_kind_and_currency(txn_filter),
            balance_as_of_end=self.balance_as_of(txn_filter, txn_filter.end),
            total_change=self.period_change(txn_filter),
            top_categories=ranked(Dimension.CATEGORY),
            top_merchants=ranked(Dimension.MERCHANT),
            top_groups=ranked(Dimension.GROUP),
        )
