"""
FastAPI application for the leasing tracker.

Single-session JSON API over the entry table: CRUD, date-range and column
filters, sorting, CSV import, CSV/XLSX/PDF export and UI translation.

Production deployment configuration via environment variables.
"""

from __future__ import annotations

import logging
import os
from datetime import date
from typing import Dict, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool

from core import (
    DateRange,
    EntryNotFoundError,
    FILTERABLE_FIELDS,
    ENTRY_FIELDS,
    LANGUAGES,
    LeasingEntry,
    LocalStorage,
    StorageError,
    TranslationError,
)
from core.i18n import get_language
from core.importer import ImportFailure, is_allowed_filename
from core.session import LeasingSession
from core.translation import TranslationFailure, Translator
from reporting import EXPORT_FORMATS
from utils.config import Config


logger = logging.getLogger(__name__)


# =============================================================================
# Environment Configuration
# =============================================================================

IS_PRODUCTION = os.getenv("PRODUCTION", "").lower() == "true"

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only
    ALLOWED_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

# Largest CSV upload accepted
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


# =============================================================================
# API Request Models
# =============================================================================

class EntryInput(BaseModel):
    """Entry fields as submitted by the add/edit form."""
    model_config = ConfigDict(populate_by_name=True)

    week: int = Field(ge=0)
    entry_date: date = Field(alias="date")
    tenant_name: str = Field(alias="tenantName", min_length=1)
    business_name: str = Field("", alias="businessName")
    business_type: str = Field("", alias="businessType")
    contact: str = ""
    notes: str = ""
    status: str = ""

    def to_entry(self, entry_id: Optional[str] = None) -> LeasingEntry:
        fields = dict(
            week=self.week,
            date=self.entry_date,
            tenant_name=self.tenant_name,
            business_name=self.business_name,
            business_type=self.business_type,
            contact=self.contact,
            notes=self.notes,
            status=self.status,
        )
        if entry_id is None:
            return LeasingEntry.create(**fields)
        return LeasingEntry(id=entry_id, **fields)


class DateRangeInput(BaseModel):
    """Picker selection; both ends optional."""
    model_config = ConfigDict(populate_by_name=True)

    start: Optional[date] = Field(None, alias="from")
    end: Optional[date] = Field(None, alias="to")


class StaffNameInput(BaseModel):
    staff_name: str = Field("", alias="staffName")


class TranslateRequest(BaseModel):
    language_code: str = Field(alias="languageCode")


def notification(title: str, description: str, variant: str = "default") -> dict:
    """Transient user notification payload."""
    return {"variant": variant, "title": title, "description": description}


def error_response(status_code: int, title: str, description: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"notification": notification(title, description, "destructive")},
    )


# =============================================================================
# Application Factory
# =============================================================================


def build_session(config: Config) -> LeasingSession:
    """Create the session from configuration."""
    translator = None
    if config.translation_enabled:
        translator = Translator(
            api_key=config.anthropic_api_key,
            model=config.translation_model,
            max_tokens=config.translation_max_tokens,
        )
    else:
        logger.warning("ANTHROPIC_API_KEY not set; translation disabled")

    return LeasingSession(
        storage=LocalStorage(config.storage_file),
        storage_key=config.storage_key,
        translator=translator,
    )


def create_app(config: Optional[Config] = None, session: Optional[LeasingSession] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or Config.load()

    app = FastAPI(
        title="Leasing Tracker",
        description="Leasing activity tracker with filtering, sorting and report export",
        version="0.1.0",
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=config.debug and not IS_PRODUCTION,
    )

    @app.get("/health", include_in_schema=False)
    def health():
        """Health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )

    # Loaded once; saved only through POST /api/save
    leasing = session or build_session(config)
    app.state.session = leasing

    def state_payload() -> dict:
        return leasing.state.to_dict()

    # ==========================================================================
    # Table
    # ==========================================================================

    @app.get("/api/entries")
    async def list_entries():
        """Displayed entries (date range, committed filters and sort applied)."""
        entries = leasing.view()
        return {
            "entries": [e.to_dict() for e in entries],
            "count": len(entries),
            "total": len(leasing.store),
            "state": state_payload(),
        }

    @app.post("/api/entries", status_code=201)
    async def create_entry(payload: EntryInput):
        """Add a new entry with a fresh id at the top of the list."""
        entry = leasing.create_entry(payload.to_entry())
        return entry.to_dict()

    @app.get("/api/entries/{entry_id}")
    async def get_entry(entry_id: str):
        entry = leasing.store.get(entry_id)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"Entry {entry_id} not found")
        return entry.to_dict()

    @app.put("/api/entries/{entry_id}")
    async def update_entry(entry_id: str, payload: EntryInput):
        """Replace an entry in place, keeping its id."""
        try:
            entry = leasing.update_entry(payload.to_entry(entry_id))
        except EntryNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return entry.to_dict()

    @app.delete("/api/entries/{entry_id}")
    async def delete_entry(entry_id: str):
        try:
            removed = leasing.delete_entry(entry_id)
        except EntryNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return {"deleted": removed.to_dict()}

    # ==========================================================================
    # View State
    # ==========================================================================

    @app.get("/api/state")
    async def get_state():
        return state_payload()

    @app.put("/api/date-range")
    async def set_date_range(payload: DateRangeInput):
        """Set the picker selection; omit ``from`` to show all dates."""
        if payload.start is None:
            leasing.set_date_range(None)
        else:
            leasing.set_date_range(DateRange(payload.start, payload.end))
        return state_payload()

    @app.put("/api/staff-name")
    async def set_staff_name(payload: StaffNameInput):
        leasing.set_staff_name(payload.staff_name)
        return state_payload()

    @app.get("/api/filters")
    async def get_filters():
        return {
            "filters": dict(leasing.state.filters),
            "draft": dict(leasing.state.draft_filters),
            "fields": list(FILTERABLE_FIELDS),
        }

    @app.post("/api/filters/open")
    async def open_filters():
        """Start editing: copy committed filters into the draft."""
        leasing.open_filters()
        return state_payload()

    @app.put("/api/filters/draft")
    async def edit_draft_filters(payload: Dict[str, str]):
        """Edit draft filters; the table is unaffected until applied."""
        unknown = sorted(set(payload) - set(FILTERABLE_FIELDS))
        if unknown:
            raise HTTPException(status_code=422, detail=f"Unknown filter fields: {unknown}")
        for key, value in payload.items():
            leasing.edit_draft_filter(key, value)
        return state_payload()

    @app.post("/api/filters/apply")
    async def apply_filters():
        leasing.apply_filters()
        return state_payload()

    @app.post("/api/filters/reset")
    async def reset_filters():
        leasing.reset_filters()
        return state_payload()

    @app.post("/api/sort/{field}")
    async def toggle_sort(field: str):
        """Sort by a column; the same column again flips the direction."""
        if field not in ENTRY_FIELDS:
            raise HTTPException(status_code=422, detail=f"Unknown sort field: {field}")
        leasing.toggle_sort(field)
        return state_payload()

    @app.delete("/api/sort")
    async def clear_sort():
        leasing.clear_sort()
        return state_payload()

    # ==========================================================================
    # Persistence / Import
    # ==========================================================================

    @app.post("/api/save")
    async def save():
        """Persist the current entries to local storage."""
        try:
            count = await run_in_threadpool(leasing.save)
        except StorageError:
            return error_response(500, "Save Failed", "There was an error saving your data.")
        return {
            "saved": count,
            "notification": notification(
                "Data Saved", "Your leasing data has been saved."
            ),
        }

    @app.post("/api/import")
    async def import_csv(file: UploadFile = File(...)):
        """Replace all entries with an uploaded CSV file (not saved until /api/save)."""
        if not is_allowed_filename(file.filename):
            return error_response(400, "Upload Failed", "Only .csv files are accepted.")

        content = await file.read(MAX_UPLOAD_BYTES + 1)
        if len(content) > MAX_UPLOAD_BYTES:
            return error_response(413, "Upload Failed", "The file is too large.")

        result = await run_in_threadpool(leasing.import_csv, content)
        if isinstance(result, ImportFailure):
            return error_response(
                422,
                "Upload Failed",
                result.reason or "Could not parse the CSV file. Please check the format.",
            )

        return {
            "imported": result.count,
            "notification": notification(
                "Upload Successful",
                f"{result.count} entries loaded. Click 'Save' to persist changes.",
            ),
        }

    # ==========================================================================
    # Export
    # ==========================================================================

    @app.get("/api/export/{export_format}")
    async def export(export_format: str):
        """Download the displayed table as csv, xlsx or pdf."""
        if export_format not in EXPORT_FORMATS:
            raise HTTPException(status_code=404, detail=f"Unsupported export format: {export_format}")
        payload = await run_in_threadpool(leasing.export, export_format)
        return Response(
            content=payload.content,
            media_type=payload.media_type,
            headers={"Content-Disposition": payload.content_disposition},
        )

    # ==========================================================================
    # UI Text / Translation
    # ==========================================================================

    @app.get("/api/languages")
    async def languages():
        return {
            "languages": [language.to_dict() for language in LANGUAGES],
            "translationAvailable": leasing.translation_available,
        }

    @app.get("/api/ui-text")
    async def ui_text():
        return leasing.ui_text.to_dict()

    @app.post("/api/translate")
    async def translate(payload: TranslateRequest):
        """
        Translate the UI text.

        The text is replaced as a whole on success; on failure the previous
        version stays in place.
        """
        if get_language(payload.language_code) is None:
            raise HTTPException(status_code=422, detail=f"Unsupported language: {payload.language_code}")

        if leasing.state.is_translating:
            raise HTTPException(status_code=409, detail="A translation is already in progress")

        pending_text = leasing.ui_text
        leasing.begin_translation()
        result = TranslationFailure("Translation was interrupted")
        try:
            result = await run_in_threadpool(leasing.run_translation, payload.language_code)
        except TranslationError as e:
            result = TranslationFailure(str(e))
        except Exception as e:
            logger.exception("Translation request failed")
            result = TranslationFailure(str(e) or e.__class__.__name__)
        finally:
            leasing.finish_translation(result)

        if isinstance(result, TranslationFailure):
            return error_response(502, "Translation", pending_text["translationError"])

        return {
            "uiText": leasing.ui_text.to_dict(),
            "notification": notification("Translation", leasing.ui_text["translationSuccess"]),
        }

    @app.on_event("startup")
    def on_startup():
        logger.info(
            "Leasing tracker started with %d entries (storage: %s)",
            len(leasing.store),
            config.storage_file,
        )

    return app
