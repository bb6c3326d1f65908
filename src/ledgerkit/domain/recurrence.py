"""Recurrence scheduling.

``advance`` is pure date arithmetic. The monthly anchor day is re-derived on
every call (explicit ``day_of_month`` first, otherwise the day of the
definition's start date), so a clamp in a short month never carries over:
a schedule anchored on the 31st goes Jan 31, Feb 29, Mar 31.
"""

from datetime import date, timedelta
from typing import Any, Optional

from dateutil.relativedelta import relativedelta

from ledgerkit.database.base import Database
from ledgerkit.domain import errors
from ledgerkit.domain.entities import (
    DueItem,
    Frequency,
    PendingRun,
    RecurringDefinition,
    Schedule,
)
from ledgerkit.domain.errors import NotFoundError, ValidationError
from ledgerkit.domain.validation import (
    parse_optional_currency,
    validate_date_value,
    validate_schedule,
)
from ledgerkit.logging_setup import get_logger

logger = get_logger(__name__)

DUE_HORIZON_DAYS = 14
MAX_CATCH_UP_OCCURRENCES = 366


def anchor_day(schedule: Schedule, start_date: date) -> int:
    """Day of month a monthly schedule targets before clamping."""
    if schedule.day_of_month is not None:
        return schedule.day_of_month
    return start_date.day


def advance(schedule: Schedule, from_date: date, start_date: date) -> date:
    """Compute the occurrence after ``from_date``.

    Args:
        schedule: Recurrence schedule
        from_date: Date of the current occurrence
        start_date: Start date of the definition, source of the anchor day
            when the schedule has no explicit day_of_month

    Returns:
        Next occurrence date, always later than ``from_date``

    Raises:
        ValidationError: If the schedule or dates are invalid, or the next
            occurrence would fall after the last calendar day
    """
    validate_schedule(schedule)
    from_date = validate_date_value(from_date, "from_date")
    start_date = validate_date_value(start_date, "start_date")

    try:
        if Frequency(schedule.frequency) is Frequency.WEEKLY:
            return from_date + timedelta(weeks=schedule.interval)

        # relativedelta clamps an absolute day to the target month's last day
        return from_date + relativedelta(
            months=schedule.interval, day=anchor_day(schedule, start_date)
        )
    except (OverflowError, ValueError):
        raise ValidationError(errors.date_out_of_range(from_date))


def initial_next_run_on(start_date: date) -> date:
    """First occurrence of a new definition."""
    return start_date


class RecurrenceService:
    """Service for recurring definition scheduling queries."""

    def __init__(self, db: Database):
        """Initialize recurrence service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_definition(self, definition_id: str) -> RecurringDefinition:
        """Load a recurring definition.

        Raises:
            NotFoundError: If no definition has this id
        """
        definition = self.db.get_recurring(definition_id)
        if definition is None:
            raise NotFoundError(errors.recurring_not_found(definition_id))
        return definition

    def next_run_on(
        self, definition: RecurringDefinition, from_date: Optional[date] = None
    ) -> date:
        """Next occurrence after ``from_date`` (defaults to the stored next run)."""
        current = from_date if from_date is not None else definition.next_run_on
        return advance(definition.schedule, current, definition.start_date)

    def due_items(
        self, workspace_id: str, today: date, currency: Optional[Any] = None
    ) -> list[DueItem]:
        """Definitions whose next run falls within the look-ahead horizon.

        A definition is due when it is not archived and
        ``today <= next_run_on <= today + DUE_HORIZON_DAYS``.

        Args:
            workspace_id: Workspace to query
            today: Reference day
            currency: Optional currency restriction

        Returns:
            Due items ordered by next run date then definition id
        """
        today = validate_date_value(today, "today")
        currency = parse_optional_currency(currency)
        horizon_end = (
            today + timedelta(days=DUE_HORIZON_DAYS)
            if date.max - today > timedelta(days=DUE_HORIZON_DAYS)
            else date.max
        )

        items = []
        for definition in self.db.list_recurring(workspace_id):
            if definition.is_archived:
                continue
            if not today <= definition.next_run_on <= horizon_end:
                continue
            if currency is not None and definition.currency != currency:
                continue
            items.append(
                DueItem(
                    definition_id=definition.id,
                    name=definition.name,
                    next_run_on=definition.next_run_on,
                    amount_minor=definition.amount_minor,
                    currency=definition.currency,
                    kind=definition.kind,
                    category_name=self._category_name(definition),
                    merchant_name=self._merchant_name(definition),
                )
            )

        items.sort(key=lambda item: (item.next_run_on, item.definition_id))
        logger.debug(
            "due_items workspace=%s today=%s horizon_end=%s due=%d",
            workspace_id,
            today.isoformat(),
            horizon_end.isoformat(),
            len(items),
        )
        return items

    def _category_name(self, definition: RecurringDefinition) -> Optional[str]:
        if definition.category_id is None:
            return None
        category = self.db.get_category(definition.category_id)
        if category is None or category.workspace_id != definition.workspace_id:
            return None
        return category.name.strip() or None

    def _merchant_name(self, definition: RecurringDefinition) -> Optional[str]:
        if definition.merchant_id is None:
            return None
        merchant = self.db.get_merchant(definition.merchant_id)
        if merchant is None or merchant.workspace_id != definition.workspace_id:
            return None
        return merchant.name.strip() or None

    def pending_occurrences(
        self, definition: RecurringDefinition, today: date
    ) -> PendingRun:
        """Occurrences up to and including ``today`` that have not run yet.

        The materialization job posts each returned date once and then stores
        ``next_run_on``. Archived definitions have nothing pending.
        """
        today = validate_date_value(today, "today")
        occurrences: list[date] = []
        current = definition.next_run_on
        if definition.is_archived:
            return PendingRun(definition.id, (), current)

        while current <= today and len(occurrences) < MAX_CATCH_UP_OCCURRENCES:
            occurrences.append(current)
            current = advance(definition.schedule, current, definition.start_date)

        if current <= today:
            logger.warning(
                "pending_occurrences capped definition=%s occurrences=%d resume_from=%s",
                definition.id,
                len(occurrences),
                current.isoformat(),
            )
        return PendingRun(definition.id, tuple(occurrences), current)

    def upcoming(self, definition: RecurringDefinition, count: int) -> list[date]:
        """Next ``count`` occurrence dates starting at the stored next run."""
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValidationError(f"Count must be a positive integer, got {count!r}")

        dates = [definition.next_run_on]
        while len(dates) < count:
            dates.append(advance(definition.schedule, dates[-1], definition.start_date))
        return dates
