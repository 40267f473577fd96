"""
CSV Import - Validating Bulk Loader for Leasing Entries

Parses an uploaded CSV file into entries. Each row is validated in order:
1. date and tenantName present
2. date parses
3. week parses as a non-negative integer
4. id generated when absent, other optional fields default to ""

Import is all-or-nothing: the first bad row fails the whole file. The
parser returns a tagged result instead of raising, and it never touches
the store or storage; replacing the store is the caller's job.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Final, List, Optional, Union

from core.errors import ValidationError
from core.models import ENTRY_FIELDS, LeasingEntry, new_entry_id
from utils.formatting import parse_instant


logger = logging.getLogger(__name__)


CSV_HEADERS: Final[tuple[str, ...]] = ENTRY_FIELDS
ALLOWED_EXTENSIONS: Final[tuple[str, ...]] = (".csv",)

_LEADING_INTEGER: Final = re.compile(r"^\s*([+-]?\d+)")


# =============================================================================
# Import Result Types
# =============================================================================


@dataclass(frozen=True)
class ImportSuccess:
    """Returned when every row parsed."""
    entries: tuple[LeasingEntry, ...]

    @property
    def count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class ImportFailure:
    """Returned when the file or any row was rejected."""
    reason: str
    row_number: Optional[int] = None
    raw_row: Optional[dict[str, Any]] = None

    def to_error(self) -> ValidationError:
        return ValidationError(self.reason, self.row_number, self.raw_row)


ImportResult = Union[ImportSuccess, ImportFailure]


# =============================================================================
# Row Parsing
# =============================================================================


def is_allowed_filename(filename: Optional[str]) -> bool:
    """Check the upload has a .csv extension."""
    if not filename or "." not in filename:
        return False
    ext = "." + filename.rsplit(".", 1)[-1].lower()
    return ext in ALLOWED_EXTENSIONS


def _describe(row: dict[str, Any]) -> str:
    return json.dumps(row, ensure_ascii=False)


def parse_week(value: Any) -> Optional[int]:
    """
    Read a week number the way a lenient integer parse would.

    Leading digits win ("12abc" is 12); anything without a leading integer,
    or a negative number, gives None.
    """
    if value is None:
        return None
    match = _LEADING_INTEGER.match(str(value))
    if not match:
        return None
    week = int(match.group(1))
    if week < 0:
        return None
    return week


def parse_row(row: dict[str, Any], row_number: int) -> LeasingEntry:
    """
    Validate one CSV row and build its entry.

    Args:
        row: Column name -> raw cell text
        row_number: 1-based data row number (header excluded)

    Raises:
        ValidationError: Naming the offending row
    """
    if not row.get("date") or not row.get("tenantName"):
        raise ValidationError(
            f"Row is missing required fields (date, tenantName): {_describe(row)}",
            row_number,
            row,
        )

    try:
        date = parse_instant(row["date"])
    except ValueError:
        raise ValidationError(
            f"Invalid date format for row: {_describe(row)}",
            row_number,
            row,
        ) from None

    week = parse_week(row.get("week"))
    if week is None:
        raise ValidationError(
            f"Invalid week format for row: {_describe(row)}",
            row_number,
            row,
        )

    return LeasingEntry(
        id=row.get("id") or new_entry_id(),
        week=week,
        date=date,
        tenant_name=row.get("tenantName") or "",
        business_name=row.get("businessName") or "",
        business_type=row.get("businessType") or "",
        contact=row.get("contact") or "",
        notes=row.get("notes") or "",
        status=row.get("status") or "",
    )


# =============================================================================
# File Parsing
# =============================================================================


def _rows(text: str) -> List[dict[str, Any]]:
    reader = csv.DictReader(io.StringIO(text, newline=""))
    rows = []
    for row in reader:
        # Drop overflow cells collected under the None key
        row.pop(None, None)
        if not any(value for value in row.values()):
            continue
        rows.append(row)
    return rows


def parse_csv_text(text: str) -> ImportResult:
    """
    Parse CSV text into entries.

    Returns:
        ImportSuccess with every entry, or ImportFailure for the first
        rejected row
    """
    try:
        rows = _rows(text)
    except csv.Error as e:
        logger.warning("CSV parsing error: %s", e)
        return ImportFailure(reason=f"Could not parse the CSV file: {e}")

    entries: List[LeasingEntry] = []
    seen_ids: set[str] = set()
    for row_number, row in enumerate(rows, start=1):
        try:
            entry = parse_row(row, row_number)
        except ValidationError as e:
            logger.warning("Rejected import at row %d: %s", row_number, e)
            return ImportFailure(reason=str(e), row_number=row_number, raw_row=row)

        if entry.id in seen_ids:
            reason = f"Duplicate id for row: {_describe(row)}"
            logger.warning("Rejected import at row %d: %s", row_number, reason)
            return ImportFailure(reason=reason, row_number=row_number, raw_row=row)

        seen_ids.add(entry.id)
        entries.append(entry)

    return ImportSuccess(entries=tuple(entries))


def parse_csv_bytes(content: bytes) -> ImportResult:
    """Decode an uploaded file (UTF-8, optional BOM) and parse it."""
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("CSV upload is not valid UTF-8")
        return ImportFailure(reason="Could not read the file. Please upload a UTF-8 CSV file.")
    return parse_csv_text(text)
