"""
Spreadsheet export of the current table.

Layout (1-based rows):
1. Report title, merged across every column
2. (blank)
3. Period line
4. Staff name line
5. (blank)
6. Column headers
7+. One row per entry
"""

from __future__ import annotations

import io
import re
import zipfile
from datetime import date, datetime, time
from typing import Final, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from core.models import LeasingEntry

from .schemas import ExportPayload, MEDIA_TYPES, ReportMetadata, report_filename, report_rows


SHEET_TITLE: Final[str] = "Leasing Report"

TITLE_ROW: Final[int] = 1
PERIOD_ROW: Final[int] = 3
STAFF_ROW: Final[int] = 4
HEADER_ROW: Final[int] = 6
DATA_START_ROW: Final[int] = HEADER_ROW + 1

# Columns up to this one are centered, the rest left-aligned
CENTERED_COLUMNS: Final[int] = 3

COLUMN_WIDTHS: Final[tuple[int, ...]] = (5, 8, 12, 30, 25, 20, 20, 45, 45)

TITLE_ROW_HEIGHT: Final[int] = 24
INFO_ROW_HEIGHT: Final[int] = 18
HEADER_ROW_HEIGHT: Final[int] = 30
DATA_ROW_HEIGHT: Final[int] = 45

FONT_NAME: Final[str] = "Arial"
HEADER_FILL_COLOR: Final[str] = "E6E6E6"


_thin = Side(style="thin", color="000000")
ALL_BORDERS = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)

TITLE_FONT = Font(name=FONT_NAME, size=16, bold=True)
INFO_FONT = Font(name=FONT_NAME, size=12)
HEADER_FONT = Font(name=FONT_NAME, size=10, bold=True)
CELL_FONT = Font(name=FONT_NAME, size=8)

HEADER_FILL = PatternFill(start_color=HEADER_FILL_COLOR, end_color=HEADER_FILL_COLOR, fill_type="solid")

CORE_PROPERTIES_PART: Final[str] = "docProps/core.xml"
_MODIFIED_PROPERTY: Final = re.compile(rb"(<dcterms:modified[^>]*>)[^<]*(</dcterms:modified>)")


def _build_workbook(entries: Sequence[LeasingEntry], metadata: ReportMetadata, today: date) -> Workbook:
    headers = list(metadata.headers)
    column_count = len(headers)

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    stamp = _document_stamp(today)
    wb.properties.created = stamp
    wb.properties.modified = stamp

    # Title band
    title_cell = ws.cell(row=TITLE_ROW, column=1, value=metadata.title)
    title_cell.font = TITLE_FONT
    title_cell.alignment = Alignment(horizontal="center", vertical="center")
    ws.merge_cells(start_row=TITLE_ROW, start_column=1, end_row=TITLE_ROW, end_column=column_count)

    # Period and staff lines
    for row, text in ((PERIOD_ROW, metadata.period), (STAFF_ROW, metadata.staff_line)):
        cell = ws.cell(row=row, column=1, value=text)
        cell.font = INFO_FONT
        cell.alignment = Alignment(horizontal="left", vertical="center")

    # Header row
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=HEADER_ROW, column=col, value=header)
        cell.font = HEADER_FONT
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        cell.border = ALL_BORDERS
        cell.fill = HEADER_FILL

    # Data rows
    for row_idx, values in enumerate(report_rows(entries), DATA_START_ROW):
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row_idx, column=col, value=value)
            cell.font = CELL_FONT
            cell.border = ALL_BORDERS
            cell.alignment = Alignment(
                horizontal="center" if col <= CENTERED_COLUMNS else "left",
                vertical="top",
                wrap_text=True,
            )
        ws.row_dimensions[row_idx].height = DATA_ROW_HEIGHT

    for col, width in enumerate(COLUMN_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(col)].width = width

    ws.row_dimensions[TITLE_ROW].height = TITLE_ROW_HEIGHT
    ws.row_dimensions[PERIOD_ROW].height = INFO_ROW_HEIGHT
    ws.row_dimensions[STAFF_ROW].height = INFO_ROW_HEIGHT
    ws.row_dimensions[HEADER_ROW].height = HEADER_ROW_HEIGHT

    return wb


def _document_stamp(today: date) -> datetime:
    return datetime.combine(today, time.min)


def _pin_timestamps(content: bytes, stamp: datetime) -> bytes:
    """
    Rewrite a saved workbook with every timestamp set to ``stamp``.

    openpyxl overwrites the modified property with the wall clock on save
    and the zip entries carry the save time; both are replaced here.
    """
    modified = f"{stamp:%Y-%m-%dT%H:%M:%SZ}".encode("ascii")
    output = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(content)) as source, \
            zipfile.ZipFile(output, "w") as target:
        for item in source.infolist():
            data = source.read(item.filename)
            if item.filename == CORE_PROPERTIES_PART:
                data = _MODIFIED_PROPERTY.sub(rb"\g<1>" + modified + rb"\g<2>", data)
            info = zipfile.ZipInfo(item.filename, date_time=stamp.timetuple()[:6])
            info.compress_type = zipfile.ZIP_DEFLATED
            target.writestr(info, data)
    return output.getvalue()


def render_xlsx(entries: Sequence[LeasingEntry], metadata: ReportMetadata, today: date) -> bytes:
    """Render the styled workbook to bytes; identical inputs give identical bytes."""
    wb = _build_workbook(entries, metadata, today)
    buffer = io.BytesIO()
    wb.save(buffer)
    return _pin_timestamps(buffer.getvalue(), _document_stamp(today))


def export_xlsx(entries: Sequence[LeasingEntry], metadata: ReportMetadata, today: date) -> ExportPayload:
    """
    Build the spreadsheet download.

    Args:
        entries: Final sorted/filtered entries
        metadata: Title, period and staff lines plus column headers
        today: Date used in the filename and document properties

    Returns:
        ExportPayload with the .xlsx bytes
    """
    return ExportPayload(
        filename=report_filename("xlsx", today),
        content=render_xlsx(entries, metadata, today),
        media_type=MEDIA_TYPES["xlsx"],
    )
