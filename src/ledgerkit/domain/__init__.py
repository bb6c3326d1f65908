"""Domain layer for ledgerkit."""

__all__ = [
    "AggregationService",
    "BudgetSummaryService",
    "RecurrenceService",
]


# Services import the database layer, which imports domain entities; load lazily
def __getattr__(name):
    if name == "AggregationService":
        from ledgerkit.domain.aggregation import AggregationService
        return AggregationService
    if name == "BudgetSummaryService":
        from ledgerkit.domain.budget import BudgetSummaryService
        return BudgetSummaryService
    if name == "RecurrenceService":
        from ledgerkit.domain.recurrence import RecurrenceService
        return RecurrenceService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
