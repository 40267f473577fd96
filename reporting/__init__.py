"""
Reporting module for the leasing tracker.

Renders the current (sorted, filtered) table as a downloadable CSV,
styled XLSX workbook or landscape PDF.

Usage:
    from reporting import export_report, build_report_metadata

    metadata = build_report_metadata(ui_text, date_range, staff_name)
    payload = export_report("pdf", entries, metadata, today)
    Path(payload.filename).write_bytes(payload.content)
"""

from datetime import date
from typing import Sequence

from core.models import LeasingEntry

from .csv_export import export_csv, render_csv
from .pdf_generator import LeasingReportGenerator, export_pdf, render_pdf
from .schemas import (
    EXPORT_FORMATS,
    ExportPayload,
    ReportMetadata,
    build_report_metadata,
    format_period,
    report_filename,
    report_rows,
)
from .xlsx_export import export_xlsx, render_xlsx


def export_report(
    export_format: str,
    entries: Sequence[LeasingEntry],
    metadata: ReportMetadata,
    today: date,
) -> ExportPayload:
    """
    Render entries in one of the supported formats.

    Raises:
        ValueError: If the format is not csv, xlsx or pdf
    """
    if export_format == "csv":
        return export_csv(entries, today)
    if export_format == "xlsx":
        return export_xlsx(entries, metadata, today)
    if export_format == "pdf":
        return export_pdf(entries, metadata, today)
    raise ValueError(f"Unsupported export format: {export_format}")


__all__ = [
    "EXPORT_FORMATS",
    "ExportPayload",
    "LeasingReportGenerator",
    "ReportMetadata",
    "build_report_metadata",
    "export_csv",
    "export_pdf",
    "export_report",
    "export_xlsx",
    "format_period",
    "render_csv",
    "render_pdf",
    "render_xlsx",
    "report_filename",
    "report_rows",
]
