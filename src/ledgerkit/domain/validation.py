"""Input validation for engine operations.

Everything here runs before any grouping or date arithmetic, so a bad request
fails fast with a ValidationError instead of producing a partial result.
"""

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Optional

from ledgerkit.domain import errors
from ledgerkit.domain.entities import (
    Budget,
    BudgetType,
    CurrencyCode,
    Frequency,
    RecurringDefinition,
    Schedule,
    Transaction,
    TransactionKind,
)
from ledgerkit.domain.errors import ValidationError


def parse_currency(value: Any) -> CurrencyCode:
    """Parse a currency code into the closed CurrencyCode set.

    Args:
        value: CurrencyCode or currency code string (case-insensitive)

    Returns:
        CurrencyCode member

    Raises:
        ValidationError: If the code is not supported
    """
    if isinstance(value, CurrencyCode):
        return value
    if isinstance(value, str):
        try:
            return CurrencyCode(value.strip().upper())
        except ValueError:
            pass
    raise ValidationError(errors.unsupported_currency(value))


def parse_optional_currency(value: Any) -> Optional[CurrencyCode]:
    if value is None or value == "":
        return None
    return parse_currency(value)


def parse_kind(value: Any) -> TransactionKind:
    """Parse a transaction kind."""
    if isinstance(value, TransactionKind):
        return value
    try:
        return TransactionKind(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unsupported transaction kind '{value}'")


def parse_iso_date(value: Any) -> date:
    """Parse a YYYY-MM-DD string (or pass through a date).

    Raises:
        ValidationError: If the value is not a valid calendar day
    """
    if isinstance(value, datetime):
        raise ValidationError(errors.invalid_date(value))
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value.strip()) != 10:
        raise ValidationError(errors.invalid_date(value))
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(errors.invalid_date(value))


def validate_date_value(value: Any, field_name: str = "date") -> date:
    """Check a record's date field, accepting ISO strings.

    Datetimes are rejected rather than truncated, since comparing one with a
    date raises TypeError.

    Raises:
        ValidationError: If the value is not a calendar day
    """
    if isinstance(value, datetime) or not isinstance(value, (date, str)):
        raise ValidationError(errors.not_a_date(field_name, value))
    return parse_iso_date(value)


def validate_optional_date(value: Any, field_name: str = "date") -> Optional[date]:
    if value is None:
        return None
    return validate_date_value(value, field_name)


def validate_workspace_id(workspace_id: Any) -> str:
    if not isinstance(workspace_id, str) or not workspace_id.strip():
        raise ValidationError("Workspace id is required")
    return workspace_id


def validate_date_range(start: Optional[date], end: Optional[date]) -> None:
    """Reject ranges whose start is after their end.

    Either bound may be None (unbounded).
    """
    if start is not None and end is not None and start > end:
        raise ValidationError(errors.invalid_date_range(start, end))


def _is_strict_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_amount_minor(amount_minor: Any) -> int:
    """Amounts are non-negative integers in minor units."""
    if not _is_strict_int(amount_minor) or amount_minor < 0:
        raise ValidationError(
            f"Amount must be a non-negative integer in minor units, got {amount_minor!r}"
        )
    return amount_minor


def validate_schedule(schedule: Schedule) -> None:
    """Validate a recurrence schedule.

    Args:
        schedule: Schedule to validate

    Raises:
        ValidationError: If frequency, interval or day_of_month are invalid
    """
    if not isinstance(schedule.frequency, Frequency):
        try:
            Frequency(schedule.frequency)
        except ValueError:
            raise ValidationError(f"Unsupported frequency '{schedule.frequency}'")

    if not _is_strict_int(schedule.interval) or schedule.interval < 1:
        raise ValidationError(
            f"Interval must be an integer of at least 1, got {schedule.interval!r}"
        )

    if schedule.day_of_month is None:
        return
    if Frequency(schedule.frequency) is not Frequency.MONTHLY:
        raise ValidationError("day_of_month is only valid for monthly schedules")
    if not _is_strict_int(schedule.day_of_month) or not 1 <= schedule.day_of_month <= 31:
        raise ValidationError(
            f"day_of_month must be an integer between 1 and 31, got {schedule.day_of_month!r}"
        )


def validate_transaction(txn: Transaction) -> Transaction:
    """Validate a transaction before it enters a store.

    Returns:
        The transaction with its date, currency and kind normalized
    """
    validate_workspace_id(txn.workspace_id)
    validate_amount_minor(txn.amount_minor)
    return replace(
        txn,
        date=validate_date_value(txn.date, "date"),
        currency=parse_currency(txn.currency),
        kind=parse_kind(txn.kind),
    )


def validate_recurring(definition: RecurringDefinition) -> RecurringDefinition:
    """Validate a recurring definition before it enters a store.

    Returns:
        The definition with enum fields coerced
    """
    validate_workspace_id(definition.workspace_id)
    validate_amount_minor(definition.amount_minor)
    validate_schedule(definition.schedule)
    start_date = validate_date_value(definition.start_date, "start_date")
    next_run_on = validate_date_value(definition.next_run_on, "next_run_on")
    if next_run_on < start_date:
        raise ValidationError("next_run_on cannot be before start_date")
    schedule = replace(
        definition.schedule, frequency=Frequency(definition.schedule.frequency)
    )
    return replace(
        definition,
        start_date=start_date,
        next_run_on=next_run_on,
        currency=parse_currency(definition.currency),
        kind=parse_kind(definition.kind),
        schedule=schedule,
    )


def validate_budget(budget: Budget) -> Budget:
    """Validate a budget before it enters a store.

    Returns:
        The budget with its dates, currency and type coerced
    """
    validate_workspace_id(budget.workspace_id)
    for planned in budget.category_budgets.values():
        validate_amount_minor(planned)
    validate_amount_minor(budget.total_budget_minor)
    try:
        budget_type = BudgetType(budget.type)
    except ValueError:
        raise ValidationError(f"Unsupported budget type '{budget.type}'")
    if budget.start_month is not None and not isinstance(budget.start_month, str):
        raise ValidationError(errors.invalid_month(budget.start_month))
    start_date = validate_optional_date(budget.start_date, "start_date")
    end_date = validate_optional_date(budget.end_date, "end_date")
    validate_date_range(start_date, end_date)
    return replace(
        budget,
        start_date=start_date,
        end_date=end_date,
        currency=parse_currency(budget.currency),
        type=budget_type,
    )
