"""
Application State

Everything the table view depends on besides the entries themselves:
date range, committed and draft filters, sort, staff name, UI text and the
translation status. AppState is immutable; every transition returns a new
state, so a reader never sees a half-applied change.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from core.i18n import UiText
from core.models import DateRange, SortConfig
from core.sorting import toggle_sort


class TranslationStatus(Enum):
    """Lifecycle of the most recent translation request."""
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class AppState:
    """Snapshot of the session's view state."""

    date_range: DateRange = field(default_factory=DateRange.default)
    filters: Mapping[str, str] = field(default_factory=dict)
    draft_filters: Mapping[str, str] = field(default_factory=dict)
    sort: Optional[SortConfig] = None
    staff_name: str = ""
    ui_text: UiText = field(default_factory=UiText.default)
    translation_status: TranslationStatus = TranslationStatus.IDLE

    def __post_init__(self):
        object.__setattr__(self, "filters", _frozen(self.filters))
        object.__setattr__(self, "draft_filters", _frozen(self.draft_filters))

    @property
    def is_translating(self) -> bool:
        return self.translation_status == TranslationStatus.PENDING

    # =========================================================================
    # Date Range / Staff Name
    # =========================================================================

    def with_date_range(self, date_range: Optional[DateRange]) -> "AppState":
        return replace(self, date_range=date_range or DateRange.unbounded())

    def with_staff_name(self, staff_name: str) -> "AppState":
        return replace(self, staff_name=staff_name)

    # =========================================================================
    # Filters
    # =========================================================================

    def open_filter_draft(self) -> "AppState":
        """Start editing: the draft becomes a copy of the committed filters."""
        return replace(self, draft_filters=self.filters)

    def with_draft_filter(self, key: str, value: str) -> "AppState":
        draft = dict(self.draft_filters)
        draft[key] = value
        return replace(self, draft_filters=draft)

    def apply_filters(self) -> "AppState":
        """Commit the draft so it affects the table."""
        return replace(self, filters=self.draft_filters)

    def reset_filters(self) -> "AppState":
        return replace(self, filters={}, draft_filters={})

    # =========================================================================
    # Sort
    # =========================================================================

    def with_sort_toggled(self, key: str) -> "AppState":
        return replace(self, sort=toggle_sort(self.sort, key))

    def without_sort(self) -> "AppState":
        return replace(self, sort=None)

    # =========================================================================
    # Translation
    # =========================================================================

    def begin_translation(self) -> "AppState":
        return replace(self, translation_status=TranslationStatus.PENDING)

    def translation_succeeded(self, ui_text: UiText) -> "AppState":
        return replace(
            self,
            ui_text=ui_text,
            translation_status=TranslationStatus.SUCCEEDED,
        )

    def translation_failed(self) -> "AppState":
        # UI text is left at its last good version
        return replace(self, translation_status=TranslationStatus.FAILED)

    def to_dict(self) -> dict:
        return {
            "dateRange": self.date_range.to_dict(),
            "filters": dict(self.filters),
            "draftFilters": dict(self.draft_filters),
            "sort": self.sort.to_dict() if self.sort else None,
            "staffName": self.staff_name,
            "language": self.ui_text.language_code,
            "uiTextVersion": self.ui_text.version,
            "translationStatus": self.translation_status.value,
        }
