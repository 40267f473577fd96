"""
Leasing Tracker - Core Business Logic

The table pipeline over leasing entries:
1. Entry Store (in-memory, saved on demand)
2. Date-Range Filter (inclusive UTC days)
3. Field Filter (per-column substring predicates)
4. Sort Engine (stable, one column)
5. Import Parser (validating, all-or-nothing)

The session service lives in core.session and is imported from there,
since it depends on the reporting package.
"""

from .errors import (
    LeasingError,
    ValidationError,
    StorageError,
    TranslationError,
    EntryNotFoundError,
)
from .models import (
    LeasingEntry,
    SortConfig,
    SortDirection,
    DateRange,
    ENTRY_FIELDS,
    FILTERABLE_FIELDS,
)
from .filters import filter_by_date_range, filter_by_fields
from .sorting import sort_entries, toggle_sort
from .store import EntryStore
from .storage import LocalStorage, load_entries, save_entries
from .importer import (
    ImportSuccess,
    ImportFailure,
    ImportResult,
    parse_csv_text,
    parse_csv_bytes,
)
from .i18n import UiText, Language, LANGUAGES, DEFAULT_UI_TEXT
from .state import AppState, TranslationStatus

__all__ = [
    # Errors
    "LeasingError",
    "ValidationError",
    "StorageError",
    "TranslationError",
    "EntryNotFoundError",
    # Models
    "LeasingEntry",
    "SortConfig",
    "SortDirection",
    "DateRange",
    "ENTRY_FIELDS",
    "FILTERABLE_FIELDS",
    # Pipeline
    "filter_by_date_range",
    "filter_by_fields",
    "sort_entries",
    "toggle_sort",
    # Store / persistence
    "EntryStore",
    "LocalStorage",
    "load_entries",
    "save_entries",
    # Import
    "ImportSuccess",
    "ImportFailure",
    "ImportResult",
    "parse_csv_text",
    "parse_csv_bytes",
    # UI text / state
    "UiText",
    "Language",
    "LANGUAGES",
    "DEFAULT_UI_TEXT",
    "AppState",
    "TranslationStatus",
]
