"""
CSV export of the current table.

Columns are the raw field names so the file can be uploaded again; the
date is reduced to ``yyyy-MM-dd``.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Sequence

from core.importer import CSV_HEADERS
from core.models import LeasingEntry
from utils.formatting import format_iso_date

from .schemas import ExportPayload, MEDIA_TYPES, report_filename


def render_csv(entries: Sequence[LeasingEntry]) -> str:
    """Render entries as CSV text with CRLF line endings."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_HEADERS)
    for entry in entries:
        row = entry.to_dict()
        row["date"] = format_iso_date(entry.date)
        writer.writerow([row[name] for name in CSV_HEADERS])
    return buffer.getvalue()


def export_csv(entries: Sequence[LeasingEntry], today: date) -> ExportPayload:
    """
    Build the CSV download.

    Args:
        entries: Final sorted/filtered entries
        today: Date used in the filename

    Returns:
        ExportPayload with UTF-8 content
    """
    return ExportPayload(
        filename=report_filename("csv", today),
        content=render_csv(entries).encode("utf-8"),
        media_type=MEDIA_TYPES["csv"],
    )
