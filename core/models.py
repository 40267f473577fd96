"""
Data models for the leasing tracker.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Final, Optional

from utils.formatting import DateLike, calendar_day, format_instant, parse_instant


# =============================================================================
# Field Registry
# =============================================================================

# External (camelCase) field names, in CSV column order
ENTRY_FIELDS: Final[tuple[str, ...]] = (
    "id",
    "week",
    "date",
    "tenantName",
    "businessName",
    "businessType",
    "contact",
    "notes",
    "status",
)

# External field name -> dataclass attribute
FIELD_ATTRIBUTES: Final[dict[str, str]] = {
    "id": "id",
    "week": "week",
    "date": "date",
    "tenantName": "tenant_name",
    "businessName": "business_name",
    "businessType": "business_type",
    "contact": "contact",
    "notes": "notes",
    "status": "status",
}

# Fields the filter form exposes
FILTERABLE_FIELDS: Final[tuple[str, ...]] = ENTRY_FIELDS[1:]

# Free-text fields (case-insensitive substring filtering)
TEXT_FIELDS: Final[tuple[str, ...]] = (
    "tenantName",
    "businessName",
    "businessType",
    "contact",
    "notes",
    "status",
)


def new_entry_id() -> str:
    """Generate a fresh, unique entry id."""
    return str(uuid.uuid4())


# =============================================================================
# Leasing Entry
# =============================================================================


@dataclass(frozen=True)
class LeasingEntry:
    """
    One tenancy record.

    Entries are immutable; edits produce a new entry with the same id.
    The date is held as a UTC instant and compared by UTC calendar day.
    """

    id: str
    week: int
    date: datetime
    tenant_name: str
    business_name: str = ""
    business_type: str = ""
    contact: str = ""
    notes: str = ""
    status: str = ""

    def __post_init__(self):
        """Validate and normalise after initialisation."""
        if not self.id:
            raise ValueError("id must not be empty")
        if isinstance(self.week, bool) or not isinstance(self.week, int):
            raise ValueError("week must be an integer")
        if self.week < 0:
            raise ValueError("week must be non-negative")
        object.__setattr__(self, "date", parse_instant(self.date))

    @classmethod
    def create(
        cls,
        week: int,
        date: DateLike,
        tenant_name: str,
        business_name: str = "",
        business_type: str = "",
        contact: str = "",
        notes: str = "",
        status: str = "",
    ) -> "LeasingEntry":
        """Create a new entry with a freshly generated id."""
        return cls(
            id=new_entry_id(),
            week=week,
            date=date,
            tenant_name=tenant_name,
            business_name=business_name,
            business_type=business_type,
            contact=contact,
            notes=notes,
            status=status,
        )

    @property
    def iso_date(self) -> str:
        """Date as the persisted ISO-8601 instant string."""
        return format_instant(self.date)

    def with_changes(self, **changes: Any) -> "LeasingEntry":
        """Return a copy with the given attributes replaced."""
        return replace(self, **changes)

    def field_value(self, key: str) -> Any:
        """
        Get a value by external field name.

        Returns None for names that are not entry fields.
        """
        attribute = FIELD_ATTRIBUTES.get(key)
        if attribute is None:
            return None
        return getattr(self, attribute)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the external (camelCase) representation."""
        return {
            "id": self.id,
            "week": self.week,
            "date": self.iso_date,
            "tenantName": self.tenant_name,
            "businessName": self.business_name,
            "businessType": self.business_type,
            "contact": self.contact,
            "notes": self.notes,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LeasingEntry":
        """
        Build an entry from its external representation.

        Raises:
            ValueError: If week or date are invalid, or tenantName is missing.
        """
        week = data.get("week")
        if isinstance(week, str):
            week = int(week)
        return cls(
            id=data.get("id") or new_entry_id(),
            week=week,
            date=data["date"],
            tenant_name=data["tenantName"],
            business_name=data.get("businessName") or "",
            business_type=data.get("businessType") or "",
            contact=data.get("contact") or "",
            notes=data.get("notes") or "",
            status=data.get("status") or "",
        )


# =============================================================================
# View State Types
# =============================================================================


class SortDirection(Enum):
    """Sort direction."""
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class SortConfig:
    """Active sort column and direction."""
    key: str
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def ascending(self) -> bool:
        return self.direction == SortDirection.ASCENDING

    def to_dict(self) -> dict:
        return {"key": self.key, "direction": self.direction.value}


# Default selection on a fresh session
DEFAULT_RANGE_START: Final[date] = date(2025, 6, 1)
DEFAULT_RANGE_END: Final[date] = date(2025, 6, 30)


@dataclass(frozen=True)
class DateRange:
    """
    Date-range picker selection.

    ``end`` omitted means a single-day range on ``start``; ``start`` omitted
    means no date constraint at all.
    """
    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.start is not None:
            object.__setattr__(self, "start", calendar_day(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", calendar_day(self.end))

    @classmethod
    def default(cls) -> "DateRange":
        return cls(DEFAULT_RANGE_START, DEFAULT_RANGE_END)

    @classmethod
    def unbounded(cls) -> "DateRange":
        return cls()

    @property
    def is_active(self) -> bool:
        return self.start is not None

    @property
    def effective_end(self) -> Optional[date]:
        """Inclusive end day; falls back to the start day."""
        return self.end or self.start

    def to_dict(self) -> dict:
        return {
            "from": self.start.isoformat() if self.start else None,
            "to": self.end.isoformat() if self.end else None,
        }
