"""Tests for the group-by and reduce helper."""

from ledgerkit.domain.grouping import GroupTotal, grouped_sum


def test_grouped_sum_empty_input():
    assert grouped_sum([], key_fn=lambda r: r, sum_fn=lambda r: r) == {}


def test_grouped_sum_totals_and_counts():
    records = [("a", 10), ("b", 5), ("a", 7), (None, 1)]

    groups = grouped_sum(records, key_fn=lambda r: r[0], sum_fn=lambda r: r[1])

    assert list(groups) == ["a", "b", None]
    assert groups["a"] == GroupTotal(key=("a",), total_minor=17, count=2)
    assert groups[None] == GroupTotal(key=(None,), total_minor=1, count=1)


def test_grouped_sum_tuple_keys():
    records = [("x", "USD", 3), ("x", "EUR", 4), ("x", "USD", 5)]

    groups = grouped_sum(records, key_fn=lambda r: (r[0], r[1]), sum_fn=lambda r: r[2])

    assert groups[("x", "USD")].total_minor == 8
    assert groups[("x", "USD")].key == ("x", "USD")
    assert sum(g.count for g in groups.values()) == len(records)
