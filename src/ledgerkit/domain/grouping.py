"""Group-by and reduce over records.

This is the in-memory form of the grouping contract used by the aggregation
service. A relational backend satisfies the same contract with ``GROUP BY``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Hashable, Iterable, TypeVar

T = TypeVar("T")


class GroupKey(str, Enum):
    """Fields a backend can group transactions by."""

    CURRENCY = "currency"
    KIND = "kind"
    CATEGORY = "category_id"
    MERCHANT = "merchant_id"
    ACCOUNT = "account_id"
    CATEGORY_GROUP = "category_group_id"


@dataclass(frozen=True)
class GroupTotal:
    """Reduced value for one group."""

    key: tuple
    total_minor: int
    count: int


def grouped_sum(
    records: Iterable[T],
    key_fn: Callable[[T], Hashable],
    sum_fn: Callable[[T], int],
) -> dict[Hashable, GroupTotal]:
    """Group records by ``key_fn`` and sum ``sum_fn`` per group.

    Groups appear in first-seen order. Empty input yields an empty dict.

    Args:
        records: Records to group
        key_fn: Function returning the group key of a record
        sum_fn: Function returning the integer contribution of a record

    Returns:
        Mapping of group key to GroupTotal
    """
    totals: dict[Hashable, int] = {}
    counts: dict[Hashable, int] = {}
    for record in records:
        key = key_fn(record)
        totals[key] = totals.get(key, 0) + sum_fn(record)
        counts[key] = counts.get(key, 0) + 1

    return {
        key: GroupTotal(
            key=key if isinstance(key, tuple) else (key,),
            total_minor=total,
            count=counts[key],
        )
        for key, total in totals.items()
    }
