"""
Sort Engine

Orders the filtered table by a single column. The sort is stable, so
entries that compare equal keep their relative order in both directions.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable, List, Optional

from core.models import LeasingEntry, SortConfig, SortDirection
from utils.formatting import parse_instant


def _three_way(a: Any, b: Any) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def compare_entries(a: LeasingEntry, b: LeasingEntry, key: str) -> int:
    """
    Compare two entries on one column (ascending sense).

    - week: numeric
    - date: parsed to instants, so text values order correctly too
    - anything else: case-insensitive string comparison
    """
    a_value = a.field_value(key)
    b_value = b.field_value(key)

    if key == "week":
        return _three_way(int(a_value), int(b_value))

    if key == "date":
        return _three_way(parse_instant(a_value), parse_instant(b_value))

    return _three_way(str(a_value).lower(), str(b_value).lower())


def sort_entries(
    entries: Iterable[LeasingEntry],
    sort: Optional[SortConfig],
) -> List[LeasingEntry]:
    """
    Sort entries by the active sort configuration.

    Args:
        entries: Filtered entries
        sort: Column and direction, or None to keep the input order

    Returns:
        A new list; the input is never reordered in place
    """
    items = list(entries)
    if sort is None:
        return items

    sign = 1 if sort.ascending else -1
    return sorted(
        items,
        key=cmp_to_key(lambda a, b: sign * compare_entries(a, b, sort.key)),
    )


def toggle_sort(current: Optional[SortConfig], key: str) -> SortConfig:
    """
    Work out the next sort after a column header click.

    Clicking the ascending column flips it to descending; any other click
    sorts the chosen column ascending.
    """
    if (
        current is not None
        and current.key == key
        and current.direction == SortDirection.ASCENDING
    ):
        return SortConfig(key, SortDirection.DESCENDING)
    return SortConfig(key, SortDirection.ASCENDING)
