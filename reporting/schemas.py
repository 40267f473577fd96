"""
Report Schemas

Shared inputs and outputs for the three export formats: the report
metadata block, the display rows of the table and the downloadable
payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Final, List, Optional, Sequence

from core.i18n import UiText
from core.models import DateRange, LeasingEntry
from utils.formatting import format_long_date, format_short_date


FILENAME_PREFIX: Final[str] = "leasing_report"

MEDIA_TYPES: Final[dict[str, str]] = {
    "csv": "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
}

EXPORT_FORMATS: Final[tuple[str, ...]] = tuple(MEDIA_TYPES)


@dataclass(frozen=True)
class ReportMetadata:
    """Heading block printed above the table."""
    title: str
    period: str
    staff_line: str
    headers: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ExportPayload:
    """A rendered export ready for download."""
    filename: str
    content: bytes
    media_type: str

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def format_period(date_range: Optional[DateRange]) -> str:
    """
    Describe the reporting period.

    ``Period: 1 June 2025 - 30 June 2025`` for a full range,
    ``Period: 1 June 2025`` when only the start is picked and
    ``Period: All Data`` without a selection.
    """
    if date_range is None or date_range.start is None:
        return "Period: All Data"
    if date_range.end is not None:
        return f"Period: {format_long_date(date_range.start)} - {format_long_date(date_range.end)}"
    return f"Period: {format_long_date(date_range.start)}"


def build_report_metadata(
    ui_text: UiText,
    date_range: Optional[DateRange],
    staff_name: str,
) -> ReportMetadata:
    """Assemble the heading block from the current UI text and selections."""
    return ReportMetadata(
        title=ui_text["reportTitle"],
        period=format_period(date_range),
        staff_line=f"{ui_text['staffNameLabel']} {staff_name}",
        headers=tuple(ui_text.table_headers),
    )


def report_rows(entries: Sequence[LeasingEntry]) -> List[list]:
    """
    Build the display rows: sequence number, week, dd/MM/yyyy date and the
    text columns.
    """
    return [
        [
            index,
            entry.week,
            format_short_date(entry.date),
            entry.tenant_name,
            entry.business_name,
            entry.business_type,
            entry.contact,
            entry.notes or "",
            entry.status or "",
        ]
        for index, entry in enumerate(entries, start=1)
    ]


def report_filename(extension: str, today: date) -> str:
    """``leasing_report_<yyyy-MM-dd>.<ext>``"""
    return f"{FILENAME_PREFIX}_{today:%Y-%m-%d}.{extension}"
