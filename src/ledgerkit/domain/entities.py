"""Domain model entities for ledgerkit.

These are pure data classes representing ledger concepts, independent of how
a backend stores them. Storage layers convert their own records into these
types so the aggregation and scheduling logic never sees a database row.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Mapping, Optional


class CurrencyCode(str, Enum):
    """Closed set of supported currency codes."""

    USD = "USD"
    MXN = "MXN"
    JPY = "JPY"
    GBP = "GBP"
    EUR = "EUR"
    CAD = "CAD"
    AUD = "AUD"

    @property
    def minor_digits(self) -> int:
        """Number of minor-unit digits used when rendering amounts."""
        return 0 if self is CurrencyCode.JPY else 2


SUPPORTED_CURRENCIES = tuple(code.value for code in CurrencyCode)


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Frequency(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class BudgetType(str, Enum):
    MONTHLY = "monthly"
    CUSTOM = "custom"


class Dimension(Enum):
    """Axis a ranked breakdown is grouped by.

    Each member carries its own labels: one for rows without a reference and
    one for references that no longer resolve.
    """

    CATEGORY = ("category", "Uncategorized", "Unknown category")
    MERCHANT = ("merchant", "Unassigned", "Unknown merchant")
    GROUP = ("group", "Uncategorized", "Unknown group")

    def __init__(self, slug: str, missing_label: str, unknown_label: str):
        self.slug = slug
        self.missing_label = missing_label
        self.unknown_label = unknown_label

    @classmethod
    def from_slug(cls, slug: str) -> "Dimension":
        for member in cls:
            if member.slug == slug:
                return member
        raise ValueError(f"Unknown dimension '{slug}'")


@dataclass(frozen=True)
class Account:
    """Account reference entity."""

    id: str
    workspace_id: str
    name: str


@dataclass(frozen=True)
class CategoryGroup:
    """Category group entity."""

    id: str
    workspace_id: str
    name: str
    is_archived: bool = False


@dataclass(frozen=True)
class Category:
    """Category entity, optionally belonging to a group."""

    id: str
    workspace_id: str
    name: str
    group_id: Optional[str] = None
    kind: TransactionKind = TransactionKind.EXPENSE
    is_archived: bool = False


@dataclass(frozen=True)
class Merchant:
    """Merchant entity."""

    id: str
    workspace_id: str
    name: str


@dataclass(frozen=True)
class Transaction:
    """Transaction entity.

    ``amount_minor`` is always a non-negative magnitude in minor currency
    units; the sign is implied by ``kind``.
    """

    id: str
    workspace_id: str
    date: date
    amount_minor: int
    currency: CurrencyCode
    kind: TransactionKind
    category_id: Optional[str] = None
    merchant_id: Optional[str] = None
    account_id: Optional[str] = None
    is_archived: bool = False
    is_pending: bool = False

    @property
    def signed_amount_minor(self) -> int:
        """Amount with income positive and expense negative."""
        if self.kind is TransactionKind.INCOME:
            return self.amount_minor
        return -self.amount_minor


@dataclass(frozen=True)
class Schedule:
    """Recurrence schedule."""

    frequency: Frequency
    interval: int = 1
    day_of_month: Optional[int] = None


@dataclass(frozen=True)
class RecurringDefinition:
    """Recurring transaction definition.

    ``next_run_on`` is the only mutable state and is written by the job that
    materializes occurrences, never by this package.
    """

    id: str
    workspace_id: str
    name: str
    amount_minor: int
    currency: CurrencyCode
    kind: TransactionKind
    schedule: Schedule
    start_date: date
    next_run_on: date
    category_id: Optional[str] = None
    merchant_id: Optional[str] = None
    is_archived: bool = False


@dataclass(frozen=True)
class Budget:
    """Budget definition.

    Monthly budgets cover ``start_month`` ("YYYY-MM"). Custom budgets cover
    ``start_date`` through ``end_date`` inclusive. ``category_ids`` and
    ``account_ids`` of None mean unconstrained. Planned amounts are
    denominated in ``currency``; ``total_budget_minor`` is the aggregate limit
    used when ``category_budgets`` is empty.
    """

    id: str
    workspace_id: str
    name: str
    type: BudgetType
    currency: CurrencyCode
    start_month: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category_ids: Optional[frozenset[str]] = None
    account_ids: Optional[frozenset[str]] = None
    category_budgets: Mapping[str, int] = field(default_factory=dict)
    total_budget_minor: int = 0
    is_archived: bool = False

    @property
    def is_per_category(self) -> bool:
        return bool(self.category_budgets)

    @property
    def planned_total_minor(self) -> int:
        """Total planned amount in the budget currency."""
        if self.category_budgets:
            return sum(self.category_budgets.values())
        return self.total_budget_minor


# Read models produced by the engine


@dataclass(frozen=True)
class Totals:
    """Income/expense totals for one currency."""

    income_minor: int = 0
    expense_minor: int = 0
    income_count: int = 0
    expense_count: int = 0

    @property
    def balance_minor(self) -> int:
        return self.income_minor - self.expense_minor


@dataclass(frozen=True)
class RankedEntry:
    """One row of a top-N breakdown."""

    id: Optional[str]
    name: str
    currency: CurrencyCode
    amount_minor: int
    count: int


@dataclass(frozen=True)
class BudgetProgress:
    """Planned versus actual figures for one currency."""

    currency: CurrencyCode
    planned_minor: int
    actual_minor: int
    remaining_minor: int
    progress_pct: float

    @classmethod
    def compute(
        cls, currency: CurrencyCode, planned_minor: int, actual_minor: int
    ) -> "BudgetProgress":
        """Build progress figures, guarding the zero-planned case."""
        progress_pct = 0.0
        if planned_minor > 0:
            progress_pct = min(actual_minor / planned_minor, 1.0)
        return cls(
            currency=currency,
            planned_minor=planned_minor,
            actual_minor=actual_minor,
            remaining_minor=planned_minor - actual_minor,
            progress_pct=progress_pct,
        )


@dataclass(frozen=True)
class BudgetRow:
    """Per-category line of a budget summary."""

    category_id: Optional[str]
    category_name: str
    planned_minor: int
    actual_minor: int
    remaining_minor: int
    progress_pct: float
    transaction_count: int


@dataclass(frozen=True)
class BudgetCurrencySection:
    """Budget summary rows and totals for one currency."""

    currency: CurrencyCode
    rows: tuple[BudgetRow, ...]
    totals: BudgetProgress


@dataclass(frozen=True)
class BudgetSummary:
    """Budget-vs-actual summary across currencies."""

    budget_id: str
    budget_name: str
    budget_currency: CurrencyCode
    start: date
    end: date
    sections: tuple[BudgetCurrencySection, ...]

    def section(self, currency: CurrencyCode) -> Optional[BudgetCurrencySection]:
        for section in self.sections:
            if section.currency == currency:
                return section
        return None


@dataclass(frozen=True)
class DueItem:
    """Recurring definition due within the look-ahead horizon."""

    definition_id: str
    name: str
    next_run_on: date
    amount_minor: int
    currency: CurrencyCode
    kind: TransactionKind
    category_name: Optional[str] = None
    merchant_name: Optional[str] = None


@dataclass(frozen=True)
class PendingRun:
    """Occurrences a materialization job should post, and what to store next."""

    definition_id: str
    occurrences: tuple[date, ...]
    next_run_on: date


@dataclass(frozen=True)
class DashboardSummary:
    """Dashboard read model for one scope."""

    totals: dict[CurrencyCode, Totals]
    balance_as_of_end: dict[CurrencyCode, int]
    total_change: dict[CurrencyCode, int]
    top_categories: dict[TransactionKind, tuple[RankedEntry, ...]]
    top_merchants: dict[TransactionKind, tuple[RankedEntry, ...]]
    top_groups: dict[TransactionKind, tuple[RankedEntry, ...]]
