"""
Leasing Session - Single-User Service Over Store, State and Exports

Ties the pieces together for one session: the entry store, the view state,
local storage and the translation collaborator. The table pipeline is

    store -> date-range filter -> field filter -> sort -> (listing | export)

and imports bypass the filters, replacing the store wholesale.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from core.errors import StorageError
from core.filters import filter_by_date_range, filter_by_fields
from core.i18n import UiText
from core.importer import ImportResult, ImportSuccess, parse_csv_bytes
from core.models import DateRange, LeasingEntry
from core.sorting import sort_entries
from core.state import AppState
from core.storage import DEFAULT_STORAGE_KEY, LocalStorage, load_entries, save_entries
from core.store import EntryStore
from core.translation import TranslationFailure, TranslationResult, Translator, translate_ui_text
from reporting import ExportPayload, build_report_metadata, export_report


logger = logging.getLogger(__name__)


def build_view(entries: List[LeasingEntry], state: AppState) -> List[LeasingEntry]:
    """Run the table pipeline for a state snapshot."""
    by_date = filter_by_date_range(entries, state.date_range)
    by_fields = filter_by_fields(by_date, state.filters)
    return sort_entries(by_fields, state.sort)


class LeasingSession:
    """
    The tracker's single active session.

    State transitions replace ``self.state`` with a new snapshot; mutations
    of entries go through the store. Nothing is persisted until ``save``.
    """

    def __init__(
        self,
        storage: LocalStorage,
        storage_key: str = DEFAULT_STORAGE_KEY,
        translator: Optional[Translator] = None,
        today: Callable[[], date] = date.today,
        state: Optional[AppState] = None,
    ):
        """
        Initialise session, loading entries from storage.

        Args:
            storage: Local key/value storage
            storage_key: Key the entries live under
            translator: Translation collaborator, or None if unavailable
            today: Clock used for export filenames
            state: Initial view state (defaults to the June 2025 range)
        """
        self._storage = storage
        self._storage_key = storage_key
        self._translator = translator
        self._today = today
        self.store = EntryStore(load_entries(storage, storage_key))
        self.state = state or AppState()

    @property
    def translation_available(self) -> bool:
        return self._translator is not None

    # =========================================================================
    # Table
    # =========================================================================

    def view(self) -> List[LeasingEntry]:
        """Entries as currently displayed."""
        return build_view(self.store.all(), self.state)

    def set_date_range(self, date_range: Optional[DateRange]) -> AppState:
        self.state = self.state.with_date_range(date_range)
        return self.state

    def set_staff_name(self, staff_name: str) -> AppState:
        self.state = self.state.with_staff_name(staff_name)
        return self.state

    def toggle_sort(self, key: str) -> AppState:
        self.state = self.state.with_sort_toggled(key)
        return self.state

    def clear_sort(self) -> AppState:
        self.state = self.state.without_sort()
        return self.state

    def open_filters(self) -> AppState:
        self.state = self.state.open_filter_draft()
        return self.state

    def edit_draft_filter(self, key: str, value: str) -> AppState:
        self.state = self.state.with_draft_filter(key, value)
        return self.state

    def apply_filters(self) -> AppState:
        self.state = self.state.apply_filters()
        return self.state

    def reset_filters(self) -> AppState:
        self.state = self.state.reset_filters()
        return self.state

    # =========================================================================
    # Entries
    # =========================================================================

    def create_entry(self, entry: LeasingEntry) -> LeasingEntry:
        return self.store.create(entry)

    def update_entry(self, entry: LeasingEntry) -> LeasingEntry:
        return self.store.update(entry)

    def delete_entry(self, entry_id: str) -> LeasingEntry:
        return self.store.delete(entry_id)

    # =========================================================================
    # Persistence / Import
    # =========================================================================

    def save(self) -> int:
        """
        Persist the store.

        Raises:
            StorageError: If the write fails
        """
        try:
            return save_entries(self._storage, self.store.all(), self._storage_key)
        except StorageError as e:
            logger.error("Failed to save data to storage: %s", e)
            raise

    def import_csv(self, content: bytes) -> ImportResult:
        """
        Replace the store with an uploaded CSV file.

        On failure the store is left untouched. The import is not saved
        until ``save`` is called.
        """
        result = parse_csv_bytes(content)
        if isinstance(result, ImportSuccess):
            self.store.replace_all(result.entries)
            logger.info("Imported %d entries", result.count)
        return result

    # =========================================================================
    # Export
    # =========================================================================

    def export(self, export_format: str) -> ExportPayload:
        """Render the displayed table in csv, xlsx or pdf."""
        metadata = build_report_metadata(
            self.state.ui_text,
            self.state.date_range,
            self.state.staff_name,
        )
        return export_report(export_format, self.view(), metadata, self._today())

    # =========================================================================
    # Translation
    # =========================================================================

    def begin_translation(self) -> AppState:
        """Mark a translation as pending."""
        self.state = self.state.begin_translation()
        return self.state

    def run_translation(self, language_code: str) -> TranslationResult:
        """
        Call the collaborator; safe to run off the event loop.

        Never raises: any error from the collaborator becomes a failure, so
        the pending status can always be finished.
        """
        try:
            return translate_ui_text(self.state.ui_text, language_code, self._translator)
        except Exception as e:
            logger.exception("Unexpected error during translation to %s", language_code)
            return TranslationFailure(str(e) or e.__class__.__name__)

    def finish_translation(self, result: TranslationResult) -> AppState:
        """Swap in the new UI text, or keep the old one on failure."""
        if isinstance(result, TranslationFailure):
            self.state = self.state.translation_failed()
        else:
            self.state = self.state.translation_succeeded(result.ui_text)
        return self.state

    def translate(self, language_code: str) -> TranslationResult:
        """Pending -> success | failure, in one call."""
        self.begin_translation()
        result = TranslationFailure("Translation was interrupted")
        try:
            result = self.run_translation(language_code)
        finally:
            self.finish_translation(result)
        return result

    @property
    def ui_text(self) -> UiText:
        return self.state.ui_text
