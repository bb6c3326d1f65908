"""Transaction filter construction.

A TransactionScope describes which transactions a query covers. build_filter
validates it and turns it into a TransactionFilter: an immutable predicate
that in-memory code can call directly and that storage backends can translate
into their own query language because every constraint stays inspectable.

Date windows are half-open, ``[start, end)``. User-facing ranges are
inclusive on both ends; ``exclusive_end`` and ``scope_for_inclusive_range``
are the only places that convert between the two.
"""

import re
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from ledgerkit.domain import errors
from ledgerkit.domain.entities import CurrencyCode, Transaction, TransactionKind
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.validation import (
    parse_kind,
    parse_optional_currency,
    validate_date_range,
    validate_optional_date,
    validate_workspace_id,
)

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True)
class TransactionScope:
    """Constraints selecting a set of transactions.

    Id collections that are None or empty leave that dimension unconstrained.
    """

    workspace_id: str
    start: Optional[date] = None
    end: Optional[date] = None
    account_ids: Optional[Iterable[str]] = None
    category_ids: Optional[Iterable[str]] = None
    merchant_ids: Optional[Iterable[str]] = None
    currency: Optional[Any] = None
    include_archived: bool = False
    include_pending: bool = True


@dataclass(frozen=True)
class TransactionFilter:
    """Validated, immutable predicate over transactions."""

    workspace_id: str
    start: Optional[date] = None
    end: Optional[date] = None
    account_ids: Optional[frozenset[str]] = None
    category_ids: Optional[frozenset[str]] = None
    merchant_ids: Optional[frozenset[str]] = None
    currency: Optional[CurrencyCode] = None
    kind: Optional[TransactionKind] = None
    include_archived: bool = False
    include_pending: bool = True

    def __call__(self, txn: Transaction) -> bool:
        return self.matches(txn)

    def matches(self, txn: Transaction) -> bool:
        if txn.workspace_id != self.workspace_id:
            return False
        if not self.include_archived and txn.is_archived:
            return False
        if not self.include_pending and txn.is_pending:
            return False
        if self.start is not None and txn.date < self.start:
            return False
        if self.end is not None and txn.date >= self.end:
            return False
        if self.account_ids is not None and txn.account_id not in self.account_ids:
            return False
        if self.category_ids is not None and txn.category_id not in self.category_ids:
            return False
        if self.merchant_ids is not None and txn.merchant_id not in self.merchant_ids:
            return False
        if self.currency is not None and txn.currency != self.currency:
            return False
        if self.kind is not None and txn.kind != self.kind:
            return False
        return True

    def with_range(
        self, start: Optional[date], end: Optional[date]
    ) -> "TransactionFilter":
        """Return the same filter over a different half-open window."""
        start = validate_optional_date(start, "start")
        end = validate_optional_date(end, "end")
        validate_date_range(start, end)
        return replace(self, start=start, end=end)

    def with_kind(self, kind: Optional[Any]) -> "TransactionFilter":
        """Return the same filter restricted to one transaction kind."""
        return replace(self, kind=None if kind is None else parse_kind(kind))


def _normalize_ids(ids: Optional[Iterable[str]]) -> Optional[frozenset[str]]:
    if ids is None:
        return None
    if isinstance(ids, str):
        ids = [ids]
    cleaned = frozenset(value.strip() for value in ids if value and value.strip())
    return cleaned or None


def build_filter(scope: TransactionScope) -> TransactionFilter:
    """Build a transaction filter from a scope.

    Args:
        scope: Scope constraints

    Returns:
        TransactionFilter matching the scope

    Raises:
        ValidationError: If the workspace is missing, the range is inverted
            or the currency is unsupported
    """
    validate_workspace_id(scope.workspace_id)
    start = validate_optional_date(scope.start, "start")
    end = validate_optional_date(scope.end, "end")
    validate_date_range(start, end)
    return TransactionFilter(
        workspace_id=scope.workspace_id,
        start=start,
        end=end,
        account_ids=_normalize_ids(scope.account_ids),
        category_ids=_normalize_ids(scope.category_ids),
        merchant_ids=_normalize_ids(scope.merchant_ids),
        currency=parse_optional_currency(scope.currency),
        include_archived=scope.include_archived,
        include_pending=scope.include_pending,
    )


def exclusive_end(end_inclusive: Optional[date]) -> Optional[date]:
    """Convert an inclusive last day into an exclusive bound.

    The last representable day has no successor, so it maps to an unbounded
    end, which selects the same days.
    """
    if end_inclusive is None or end_inclusive == date.max:
        return None
    return end_inclusive + timedelta(days=1)


def scope_for_inclusive_range(
    workspace_id: str,
    start: Optional[date],
    end_inclusive: Optional[date],
    **constraints: Any,
) -> TransactionScope:
    """Build a scope from an inclusive ``[start, end_inclusive]`` range.

    The inverted-range check runs on the inclusive bounds so that a single
    day (start == end) is valid.
    """
    start = validate_optional_date(start, "start")
    end_inclusive = validate_optional_date(end_inclusive, "end")
    validate_date_range(start, end_inclusive)
    return TransactionScope(
        workspace_id=workspace_id,
        start=start,
        end=exclusive_end(end_inclusive),
        **constraints,
    )


def month_range(month: str) -> tuple[date, date]:
    """Return ``(first_day, first_day_of_next_month)`` for a YYYY-MM month.

    Raises:
        ValidationError: If the month string is malformed
    """
    match = _MONTH_RE.match(month.strip()) if isinstance(month, str) else None
    if match is None:
        raise ValidationError(errors.invalid_month(month))
    year, month_number = int(match.group(1)), int(match.group(2))
    if not 1 <= month_number <= 12 or year < 1:
        raise ValidationError(errors.invalid_month(month))
    if (year, month_number) == (date.max.year, 12):
        raise ValidationError(errors.date_out_of_range(month))
    start = date(year, month_number, 1)
    if month_number == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month_number + 1, 1)
