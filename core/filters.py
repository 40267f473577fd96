"""
Entry Filters

Implements the two filters applied before sorting:
- Date range (inclusive UTC calendar days)
- Field filter (per-column substring predicates, AND-combined)

Both are pure functions: they never mutate the input collection.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from core.models import DateRange, LeasingEntry, TEXT_FIELDS
from utils.formatting import utc_day


# =============================================================================
# Date-Range Filter
# =============================================================================


def in_date_range(entry: LeasingEntry, date_range: Optional[DateRange]) -> bool:
    """
    Check whether an entry falls within a picker selection.

    The entry instant is reduced to its UTC day and the picker's calendar
    days are read as UTC days, so the outcome does not depend on the local
    timezone offset of whoever picked the range.
    """
    if date_range is None or not date_range.is_active:
        return True

    entry_day = utc_day(entry.date)
    return date_range.start <= entry_day <= date_range.effective_end


def filter_by_date_range(
    entries: Iterable[LeasingEntry],
    date_range: Optional[DateRange],
) -> List[LeasingEntry]:
    """
    Narrow entries to an inclusive date range.

    Args:
        entries: Entries to filter
        date_range: Picker selection; None or no start day means no constraint

    Returns:
        New list of entries inside the range, in input order
    """
    return [e for e in entries if in_date_range(e, date_range)]


# =============================================================================
# Field Filter
# =============================================================================


def matches_field(entry: LeasingEntry, key: str, value: str) -> bool:
    """Evaluate a single column predicate."""
    if key == "week":
        return value in str(entry.week)

    if key == "date":
        # Partial matches like "2025" or "2025-06" are allowed
        return value in entry.iso_date

    if key in TEXT_FIELDS:
        entry_value = entry.field_value(key)
        if isinstance(entry_value, str):
            return value.casefold() in entry_value.casefold()

    return True


def matches_filters(entry: LeasingEntry, filters: Mapping[str, str]) -> bool:
    """Check an entry against every non-empty predicate in the mapping."""
    return all(
        matches_field(entry, key, value)
        for key, value in filters.items()
        if value
    )


def filter_by_fields(
    entries: Iterable[LeasingEntry],
    filters: Optional[Mapping[str, str]],
) -> List[LeasingEntry]:
    """
    Apply column filters.

    Args:
        entries: Entries to filter (usually already date-filtered)
        filters: Field name -> filter text; empty values impose no constraint

    Returns:
        New list of matching entries, in input order
    """
    if not filters:
        return list(entries)
    return [e for e in entries if matches_filters(e, filters)]
