"""
UI Text and Languages

The interface text is held as a single immutable, versioned value. A
translation never edits it in place: a new UiText is built from the full
translated mapping and swapped in as a whole.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping, Optional


DEFAULT_LANGUAGE_CODE: Final[str] = "en"

DEFAULT_UI_TEXT: Final[Mapping[str, str]] = MappingProxyType({
    "reportTitle": "Leasing Activity Report",
    "staffNameLabel": "Staff Name:",
    "datePickerPlaceholder": "Pick a date range",
    "addNewEntryButton": "Add New Entry",
    "filterButton": "Filter",
    "filterPopoverTitle": "Filter Entries",
    "filterPopoverDescription": "Set filters for the leasing data.",
    "filterWeek": "Week",
    "filterDate": "Date",
    "filterTenantName": "Tenant Name",
    "filterBusinessName": "Business Name",
    "filterBusinessType": "Business Type",
    "filterContact": "Contact",
    "filterResetButton": "Reset",
    "filterApplyButton": "Apply",
    "saveButton": "Save",
    "uploadButton": "Upload CSV",
    "downloadCsvButton": "Download CSV",
    "exportButton": "Export",
    "exportToXlsx": "Export to XLSX",
    "exportToPdf": "Export to PDF",
    "tableHeaderNo": "No.",
    "tableHeaderWeek": "Week",
    "tableHeaderDate": "Date",
    "tableHeaderTenantName": "Tenant Name",
    "tableHeaderBusinessName": "Business Name",
    "tableHeaderBusinessType": "Business Type",
    "tableHeaderContact": "Contact",
    "tableHeaderNotes": "Notes",
    "tableHeaderStatus": "Status",
    "tableHeaderActions": "Actions",
    "noEntries": "No entries found.",
    "addEntryDialogTitle": "Add New Entry",
    "editEntryDialogTitle": "Edit Entry",
    "dialogSaveButton": "Save",
    "dialogCancelButton": "Cancel",
    "deleteDialogTitle": "Are you sure?",
    "deleteDialogDescription": "This will permanently delete the entry for",
    "deleteDialogCancelButton": "Cancel",
    "deleteDialogDeleteButton": "Delete",
    "translationInProgress": "Translating...",
    "translationSuccess": "Translation complete.",
    "translationError": "Translation failed. Please try again.",
})

# Keys that head the report table, in column order
TABLE_HEADER_KEYS: Final[tuple[str, ...]] = (
    "tableHeaderNo",
    "tableHeaderWeek",
    "tableHeaderDate",
    "tableHeaderTenantName",
    "tableHeaderBusinessName",
    "tableHeaderBusinessType",
    "tableHeaderContact",
    "tableHeaderNotes",
    "tableHeaderStatus",
)


@dataclass(frozen=True)
class Language:
    """A language offered in the translate menu."""
    code: str
    name: str

    def to_dict(self) -> dict:
        return {"code": self.code, "name": self.name}


LANGUAGES: Final[tuple[Language, ...]] = (
    Language("en", "English"),
    Language("id", "Indonesian"),
    Language("zh", "Chinese (Simplified)"),
    Language("ja", "Japanese"),
    Language("ko", "Korean"),
    Language("es", "Spanish"),
    Language("fr", "French"),
    Language("de", "German"),
)


def get_language(code: str) -> Optional[Language]:
    """Look up an offered language by code."""
    for language in LANGUAGES:
        if language.code == code:
            return language
    return None


@dataclass(frozen=True)
class UiText:
    """Versioned snapshot of all interface strings."""

    texts: Mapping[str, str] = field(default_factory=lambda: DEFAULT_UI_TEXT)
    language_code: str = DEFAULT_LANGUAGE_CODE
    version: int = 0

    def __post_init__(self):
        object.__setattr__(self, "texts", MappingProxyType(dict(self.texts)))

    @classmethod
    def default(cls) -> "UiText":
        return cls()

    def __getitem__(self, key: str) -> str:
        return self.texts[key]

    def get(self, key: str, default: str = "") -> str:
        return self.texts.get(key, default)

    @property
    def table_headers(self) -> list[str]:
        return [self.texts[key] for key in TABLE_HEADER_KEYS]

    def replaced_with(self, texts: Mapping[str, str], language_code: str) -> "UiText":
        """
        Build the next version from a complete mapping.

        Raises:
            ValueError: If the mapping does not cover exactly the default keys.
        """
        if set(texts) != set(DEFAULT_UI_TEXT):
            raise ValueError("UI text mapping must contain exactly the default keys")
        return UiText(texts=texts, language_code=language_code, version=self.version + 1)

    def reset(self) -> "UiText":
        """Return the next version with the English defaults."""
        return UiText(
            texts=DEFAULT_UI_TEXT,
            language_code=DEFAULT_LANGUAGE_CODE,
            version=self.version + 1,
        )

    def to_dict(self) -> dict:
        return {
            "language": self.language_code,
            "version": self.version,
            "texts": dict(self.texts),
        }
