"""Date parsing utilities for command-line input."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = ["this-month", "this-year", "this-week", "last-month", "last-year", "last-week"]


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Relative forms that name a period resolve to its first day.

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    prefix, _, period = date_str.partition(" ")
    if prefix in ("last", "this", "next") and period:
        offset = {"last": -1, "this": 0, "next": 1}[prefix]
        if period == "month":
            return (today + relativedelta(months=offset)).replace(day=1)
        if period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=offset)
        if period == "week":
            return today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
        if prefix == "last" and period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get the inclusive first and last day of a named period.

    Args:
        period: One of this-month, this-year, this-week, last-month,
            last-year, last-week
        today: Reference day (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "this-month":
        start_date = today.replace(day=1)
        return start_date, start_date + relativedelta(months=1) - timedelta(days=1)

    if period == "this-year":
        return today.replace(month=1, day=1), today.replace(month=12, day=31)

    if period == "this-week":
        start_date = today - timedelta(days=today.weekday())
        return start_date, start_date + timedelta(days=6)

    if period == "last-month":
        end_date = today.replace(day=1) - timedelta(days=1)
        return end_date.replace(day=1), end_date

    if period == "last-year":
        year = today.year - 1
        return date(year, 1, 1), date(year, 12, 31)

    if period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        return start_date, start_date + timedelta(days=6)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
