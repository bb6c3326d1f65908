"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


def invalid_date_range(start: date, end: date) -> str:
    """Return message for a range whose start is after its end."""
    return f"Invalid date range: start {start.isoformat()} is after end {end.isoformat()}"


def unsupported_currency(code: object) -> str:
    """Return message for a currency outside the supported set."""
    return f"Unsupported currency '{code}'"


def invalid_month(value: object) -> str:
    """Return message for a malformed YYYY-MM month string."""
    return f"Invalid month '{value}': expected YYYY-MM"


def invalid_date(value: object) -> str:
    """Return message for a malformed YYYY-MM-DD date."""
    return f"Invalid date '{value}': expected YYYY-MM-DD"


def budget_not_found(budget_id: str) -> str:
    """Return message for missing budget."""
    return f"Budget {budget_id} not found"


def recurring_not_found(definition_id: str) -> str:
    """Return message for missing recurring definition."""
    return f"Recurring definition {definition_id} not found"


def not_a_date(field_name: str, value: object) -> str:
    """Return message for a date field holding something other than a day."""
    return f"{field_name} must be a calendar date (YYYY-MM-DD), got {value!r}"


def date_out_of_range(value: object) -> str:
    """Return message for date arithmetic that leaves the supported calendar."""
    return f"Date arithmetic from {value} is outside the supported calendar range"
