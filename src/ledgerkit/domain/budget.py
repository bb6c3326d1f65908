"""Budget-vs-actual domain service."""

from datetime import date, timedelta
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain import errors
from ledgerkit.domain.aggregation import AggregationService
from ledgerkit.domain.entities import (
    Budget,
    BudgetCurrencySection,
    BudgetProgress,
    BudgetRow,
    BudgetSummary,
    BudgetType,
    CurrencyCode,
    Dimension,
    TransactionKind,
)
from ledgerkit.domain.errors import NotFoundError, ValidationError
from ledgerkit.domain.filters import (
    TransactionFilter,
    TransactionScope,
    build_filter,
    exclusive_end,
    month_range,
)
from ledgerkit.domain.grouping import GroupTotal
from ledgerkit.domain.validation import (
    validate_budget,
    validate_date_range,
    validate_date_value,
)
from ledgerkit.logging_setup import get_logger

logger = get_logger(__name__)


def budget_period(budget: Budget) -> tuple[date, Optional[date]]:
    """Half-open ``[start, end)`` window covered by a budget.

    ``end`` is None only for a custom budget running to the last calendar day.

    Raises:
        ValidationError: If the period fields are missing or inverted
    """
    if BudgetType(budget.type) is BudgetType.MONTHLY:
        if not budget.start_month:
            raise ValidationError("Monthly budgets require start_month (YYYY-MM)")
        return month_range(budget.start_month)

    if budget.start_date is None or budget.end_date is None:
        raise ValidationError("Custom budgets require start_date and end_date")
    start_date = validate_date_value(budget.start_date, "start_date")
    end_date = validate_date_value(budget.end_date, "end_date")
    validate_date_range(start_date, end_date)
    return start_date, exclusive_end(end_date)


def budget_filter(budget: Budget) -> TransactionFilter:
    """Transactions counted against a budget: its scope within its period."""
    start, end = budget_period(budget)
    return build_filter(
        TransactionScope(
            workspace_id=budget.workspace_id,
            start=start,
            end=end,
            category_ids=budget.category_ids,
            account_ids=budget.account_ids,
        )
    )


class BudgetSummaryService:
    """Service combining budget definitions with actual spend."""

    def __init__(self, db: Database):
        """Initialize budget summary service.

        Args:
            db: Database instance
        """
        self.db = db
        self.aggregation = AggregationService(db)

    def get_budget_summary(self, budget_id: str) -> BudgetSummary:
        """Summarize a stored budget.

        Raises:
            NotFoundError: If no budget has this id
        """
        budget = self.db.get_budget(budget_id)
        if budget is None:
            raise NotFoundError(errors.budget_not_found(budget_id))
        return self.summarize(budget)

    def summarize(self, budget: Budget) -> BudgetSummary:
        """Build planned/actual/remaining figures for a budget.

        Actuals are expense transactions only. There is one section per
        currency: the budget currency always, plus every currency with spend.
        Planned amounts belong to the budget currency.

        Args:
            budget: Budget to summarize

        Returns:
            BudgetSummary with one section per currency
        """
        budget = validate_budget(budget)
        start, end = budget_period(budget)
        groups = self.aggregation.breakdown(
            budget_filter(budget), TransactionKind.EXPENSE, Dimension.CATEGORY
        )

        actuals: dict[tuple[CurrencyCode, Optional[str]], GroupTotal] = {
            (row.key[1], row.key[0]): row for row in groups
        }
        currencies = {budget.currency} | {currency for currency, _ in actuals}
        ordered = sorted(
            currencies, key=lambda c: (c != budget.currency, c.value)
        )

        sections = []
        for currency in ordered:
            if budget.is_per_category:
                sections.append(self._category_section(budget, currency, actuals))
            else:
                sections.append(self._limit_section(budget, currency, actuals))

        logger.debug(
            "budget summary budget=%s start=%s end=%s groups=%d sections=%d",
            budget.id,
            start,
            end,
            len(groups),
            len(sections),
        )
        return BudgetSummary(
            budget_id=budget.id,
            budget_name=budget.name,
            budget_currency=budget.currency,
            start=start,
            end=end - timedelta(days=1) if end is not None else date.max,
            sections=tuple(sections),
        )

    def _limit_section(
        self,
        budget: Budget,
        currency: CurrencyCode,
        actuals: dict[tuple[CurrencyCode, Optional[str]], GroupTotal],
    ) -> BudgetCurrencySection:
        planned = budget.total_budget_minor if currency == budget.currency else 0
        actual = sum(
            row.total_minor for (c, _), row in actuals.items() if c == currency
        )
        return BudgetCurrencySection(
            currency=currency,
            rows=(),
            totals=BudgetProgress.compute(currency, planned, actual),
        )

    def _category_section(
        self,
        budget: Budget,
        currency: CurrencyCode,
        actuals: dict[tuple[CurrencyCode, Optional[str]], GroupTotal],
    ) -> BudgetCurrencySection:
        planned = dict(budget.category_budgets) if currency == budget.currency else {}
        category_ids = set(planned) | {
            category_id
            for (c, category_id) in actuals
            if c == currency and category_id is not None
        }

        rows = [
            self._row(
                budget,
                currency,
                category_id,
                planned.get(category_id, 0),
                actuals.get((currency, category_id)),
            )
            for category_id in sorted(category_ids)
        ]
        uncategorized = actuals.get((currency, None))
        if uncategorized is not None:
            rows.append(self._row(budget, currency, None, 0, uncategorized))

        totals = BudgetProgress.compute(
            currency,
            sum(row.planned_minor for row in rows),
            sum(row.actual_minor for row in rows),
        )
        return BudgetCurrencySection(currency=currency, rows=tuple(rows), totals=totals)

    def _row(
        self,
        budget: Budget,
        currency: CurrencyCode,
        category_id: Optional[str],
        planned_minor: int,
        actual: Optional[GroupTotal],
    ) -> BudgetRow:
        actual_minor = actual.total_minor if actual else 0
        progress = BudgetProgress.compute(currency, planned_minor, actual_minor)
        return BudgetRow(
            category_id=category_id,
            category_name=self.aggregation.resolve_name(
                Dimension.CATEGORY, category_id, budget.workspace_id
            ),
            planned_minor=planned_minor,
            actual_minor=actual_minor,
            remaining_minor=progress.remaining_minor,
            progress_pct=progress.progress_pct,
            transaction_count=actual.count if actual else 0,
        )

    def budget_progress(self, budget: Budget) -> dict[CurrencyCode, BudgetProgress]:
        """Section totals of a budget summary keyed by currency."""
        summary = self.summarize(budget)
        return {section.currency: section.totals for section in summary.sections}
