"""
Leasing Report - PDF Table Export

Renders the current table as a landscape PDF: centered title, period and
staff lines, then a gridded table that repeats its header row on every page.

Uses ReportLab for deterministic PDF generation. The document is built in
invariant mode, so the same entries and metadata always produce the same
bytes.
"""

from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import Final, List, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.models import LeasingEntry

from .schemas import ExportPayload, MEDIA_TYPES, ReportMetadata, report_filename, report_rows


# =============================================================================
# Color Palette
# =============================================================================

class Palette:
    """Print-friendly grid palette."""
    BLACK = colors.black
    HEADER_FILL = colors.Color(230 / 255, 230 / 255, 230 / 255)


# =============================================================================
# Layout Constants
# =============================================================================

FONT_NAME: Final[str] = "Helvetica"
FONT_NAME_BOLD: Final[str] = "Helvetica-Bold"

BODY_FONT_SIZE: Final[float] = 7
CELL_PADDING: Final[float] = 1.5 * mm
GRID_LINE_WIDTH: Final[float] = 0.1 * mm

# No., Week and Date are fixed and centered; the text columns share the rest
COLUMN_WIDTHS: Final[tuple[float, ...]] = (
    8 * mm,
    10 * mm,
    18 * mm,
    38 * mm,
    36 * mm,
    28 * mm,
    30 * mm,
    52 * mm,
    49 * mm,
)
CENTERED_COLUMNS: Final[int] = 3


# =============================================================================
# Style Configuration
# =============================================================================

def get_report_styles() -> dict:
    """Create paragraph styles for the report heading and table cells."""
    styles = getSampleStyleSheet()

    styles.add(ParagraphStyle(
        name='ReportTitle',
        parent=styles['Normal'],
        fontName=FONT_NAME_BOLD,
        fontSize=16,
        leading=20,
        alignment=TA_CENTER,
        spaceAfter=4 * mm,
    ))

    styles.add(ParagraphStyle(
        name='ReportInfo',
        parent=styles['Normal'],
        fontName=FONT_NAME,
        fontSize=12,
        leading=17,
        alignment=TA_LEFT,
    ))

    styles.add(ParagraphStyle(
        name='TableHeader',
        parent=styles['Normal'],
        fontName=FONT_NAME_BOLD,
        fontSize=BODY_FONT_SIZE,
        leading=BODY_FONT_SIZE + 1.5,
        alignment=TA_CENTER,
        textColor=Palette.BLACK,
    ))

    styles.add(ParagraphStyle(
        name='TableCell',
        parent=styles['Normal'],
        fontName=FONT_NAME,
        fontSize=BODY_FONT_SIZE,
        leading=BODY_FONT_SIZE + 1.5,
        alignment=TA_LEFT,
    ))

    styles.add(ParagraphStyle(
        name='TableCellCentered',
        parent=styles['TableCell'],
        alignment=TA_CENTER,
    ))

    return styles


# =============================================================================
# Report Generator
# =============================================================================


class LeasingReportGenerator:
    """
    Builds the PDF table report.

    Stateless apart from the style sheet; safe to reuse across exports.
    """

    PAGE_SIZE = landscape(A4)
    MARGIN_LEFT = 14 * mm
    MARGIN_RIGHT = 14 * mm
    MARGIN_TOP = 14 * mm
    MARGIN_BOTTOM = 14 * mm

    def __init__(self):
        self.styles = get_report_styles()

    def generate_to_buffer(self, entries: Sequence[LeasingEntry], metadata: ReportMetadata) -> bytes:
        """Generate the PDF and return it as bytes."""
        buffer = BytesIO()
        self._build_document(entries, metadata, buffer)
        return buffer.getvalue()

    def _build_document(self, entries: Sequence[LeasingEntry], metadata: ReportMetadata, buffer: BytesIO):
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self.PAGE_SIZE,
            leftMargin=self.MARGIN_LEFT,
            rightMargin=self.MARGIN_RIGHT,
            topMargin=self.MARGIN_TOP,
            bottomMargin=self.MARGIN_BOTTOM,
            title=metadata.title,
            subject=metadata.period,
            invariant=1,
        )

        story = []
        story.extend(self._build_heading(metadata))
        story.append(self._build_table(entries, metadata))
        doc.build(story)

    def _build_heading(self, metadata: ReportMetadata) -> list:
        """Title, period and staff lines."""
        return [
            Paragraph(escape(metadata.title), self.styles['ReportTitle']),
            Paragraph(escape(metadata.period), self.styles['ReportInfo']),
            Paragraph(escape(metadata.staff_line), self.styles['ReportInfo']),
            Spacer(1, 3 * mm),
        ]

    def _cell(self, value, column: int) -> Paragraph:
        style = 'TableCellCentered' if column < CENTERED_COLUMNS else 'TableCell'
        return Paragraph(escape(str(value)), self.styles[style])

    def _build_table(self, entries: Sequence[LeasingEntry], metadata: ReportMetadata) -> Table:
        """Gridded table with a shaded, bold header row."""
        header = [Paragraph(escape(h), self.styles['TableHeader']) for h in metadata.headers]
        body: List[list] = [
            [self._cell(value, col) for col, value in enumerate(row)]
            for row in report_rows(entries)
        ]

        table = Table([header] + body, colWidths=list(COLUMN_WIDTHS), repeatRows=1)
        table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, 0), FONT_NAME_BOLD),
            ('FONTNAME', (0, 1), (-1, -1), FONT_NAME),
            ('FONTSIZE', (0, 0), (-1, -1), BODY_FONT_SIZE),
            ('BACKGROUND', (0, 0), (-1, 0), Palette.HEADER_FILL),
            ('TEXTCOLOR', (0, 0), (-1, -1), Palette.BLACK),
            ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
            ('ALIGN', (0, 1), (CENTERED_COLUMNS - 1, -1), 'CENTER'),
            ('VALIGN', (0, 0), (-1, 0), 'MIDDLE'),
            ('VALIGN', (0, 1), (-1, -1), 'TOP'),
            ('GRID', (0, 0), (-1, -1), GRID_LINE_WIDTH, Palette.BLACK),
            ('TOPPADDING', (0, 0), (-1, -1), CELL_PADDING),
            ('BOTTOMPADDING', (0, 0), (-1, -1), CELL_PADDING),
            ('LEFTPADDING', (0, 0), (-1, -1), CELL_PADDING),
            ('RIGHTPADDING', (0, 0), (-1, -1), CELL_PADDING),
        ]))
        return table


def render_pdf(entries: Sequence[LeasingEntry], metadata: ReportMetadata) -> bytes:
    """Render the report to PDF bytes."""
    return LeasingReportGenerator().generate_to_buffer(entries, metadata)


def export_pdf(entries: Sequence[LeasingEntry], metadata: ReportMetadata, today: date) -> ExportPayload:
    """
    Build the PDF download.

    Args:
        entries: Final sorted/filtered entries
        metadata: Title, period and staff lines plus column headers
        today: Date used in the filename

    Returns:
        ExportPayload with the PDF bytes
    """
    return ExportPayload(
        filename=report_filename("pdf", today),
        content=render_pdf(entries, metadata),
        media_type=MEDIA_TYPES["pdf"],
    )
