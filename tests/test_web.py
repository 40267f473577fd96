"""
Tests for the HTTP API

The app is built around a session on temporary storage and a stand-in
translation client, so the tests touch neither the real data directory nor
the network.
"""

import json
import pytest
from datetime import date
from pathlib import Path
from types import SimpleNamespace
import sys

from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.i18n import DEFAULT_UI_TEXT
from core.session import LeasingSession
from core.storage import LocalStorage
from core.translation import Translator
from utils.config import Config
from web.app import create_app


CSV_UPLOAD = (
    "id,week,date,tenantName,businessName,businessType,contact,notes,status\n"
    "u1,23,2025-06-02,Budi Santoso,Kopi Senja,Cafe,0812,,Follow-up\n"
    "u2,24,2025-06-10,Siti Rahayu,Batik,Retail,,,Proposal\n"
).encode("utf-8")


# =============================================================================
# Test Fixtures
# =============================================================================

class FakeMessages:
    def __init__(self, reply):
        self.reply = reply

    def create(self, **kwargs):
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.reply)])


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "local_storage.json"


@pytest.fixture
def make_client(storage_path):
    """Factory fixture for a client with an optional translation reply."""
    def _create(reply=None, storage=None):
        translator = None
        if reply is not None:
            translator = Translator(client=SimpleNamespace(messages=FakeMessages(reply)))
        session = LeasingSession(
            storage or LocalStorage(str(storage_path)),
            translator=translator,
            today=lambda: date(2025, 7, 1),
        )
        config = Config(storage_file=str(storage_path), anthropic_api_key=None)
        return TestClient(create_app(config=config, session=session))
    return _create


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def new_entry_payload():
    return {
        "week": 27,
        "date": "2025-06-30",
        "tenantName": "Ahmad Fauzi",
        "businessName": "Sate Pak Ahmad",
        "businessType": "F&B",
        "contact": "0811-000-111",
        "notes": "",
        "status": "Follow-up",
    }


def displayed_ids(client):
    return [e["id"] for e in client.get("/api/entries").json()["entries"]]


# =============================================================================
# Test: Entries
# =============================================================================

class TestEntries:
    """Tests for listing and CRUD."""

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_list_seed_entries(self, client):
        data = client.get("/api/entries").json()

        assert data["count"] == 8
        assert data["total"] == 8
        assert data["state"]["dateRange"] == {"from": "2025-06-01", "to": "2025-06-30"}

    def test_create_entry(self, client, new_entry_payload):
        response = client.post("/api/entries", json=new_entry_payload)

        assert response.status_code == 201
        created = response.json()
        assert created["id"]
        assert created["date"] == "2025-06-30T00:00:00.000Z"
        assert displayed_ids(client)[0] == created["id"]

    def test_create_requires_tenant_name(self, client, new_entry_payload):
        new_entry_payload["tenantName"] = ""

        assert client.post("/api/entries", json=new_entry_payload).status_code == 422

    def test_create_rejects_negative_week(self, client, new_entry_payload):
        new_entry_payload["week"] = -1

        assert client.post("/api/entries", json=new_entry_payload).status_code == 422

    def test_update_entry(self, client, new_entry_payload):
        response = client.put("/api/entries/3", json=new_entry_payload)

        assert response.status_code == 200
        assert response.json()["id"] == "3"
        assert client.get("/api/entries/3").json()["tenantName"] == "Ahmad Fauzi"

    def test_update_unknown_entry(self, client, new_entry_payload):
        assert client.put("/api/entries/nope", json=new_entry_payload).status_code == 404

    def test_delete_entry(self, client):
        response = client.delete("/api/entries/2")

        assert response.status_code == 200
        assert response.json()["deleted"]["tenantName"] == "Siti Rahayu"
        assert client.get("/api/entries/2").status_code == 404
        assert client.delete("/api/entries/2").status_code == 404


# =============================================================================
# Test: View State
# =============================================================================

class TestViewState:
    """Tests for date range, filters and sort."""

    def test_date_range(self, client):
        client.put("/api/date-range", json={"from": "2025-06-10", "to": "2025-06-12"})

        assert displayed_ids(client) == ["3", "4"]

    def test_single_day_range(self, client):
        client.put("/api/date-range", json={"from": "2025-06-17"})

        assert displayed_ids(client) == ["5"]

    def test_clearing_range_shows_all(self, client, new_entry_payload):
        new_entry_payload["date"] = "2024-01-05"
        client.post("/api/entries", json=new_entry_payload)
        assert len(displayed_ids(client)) == 8

        client.put("/api/date-range", json={})

        assert len(displayed_ids(client)) == 9

    def test_draft_filters_apply_on_commit(self, client):
        client.post("/api/filters/open")
        client.put("/api/filters/draft", json={"businessType": "f&b"})
        assert len(displayed_ids(client)) == 8

        client.post("/api/filters/apply")
        assert displayed_ids(client) == ["4", "7"]

        client.post("/api/filters/reset")
        assert len(displayed_ids(client)) == 8

    def test_unknown_filter_field(self, client):
        response = client.put("/api/filters/draft", json={"colour": "red"})

        assert response.status_code == 422

    def test_sort_toggle(self, client):
        client.post("/api/sort/date")
        state = client.post("/api/sort/date").json()

        assert state["sort"] == {"key": "date", "direction": "descending"}
        assert displayed_ids(client) == ["8", "7", "6", "5", "4", "3", "2", "1"]

        client.delete("/api/sort")
        assert displayed_ids(client) == ["1", "2", "3", "4", "5", "6", "7", "8"]

    def test_unknown_sort_field(self, client):
        assert client.post("/api/sort/colour").status_code == 422

    def test_staff_name(self, client):
        state = client.put("/api/staff-name", json={"staffName": "Ayu"}).json()

        assert state["staffName"] == "Ayu"


# =============================================================================
# Test: Save / Import
# =============================================================================

class TestPersistence:
    """Tests for explicit save and CSV upload."""

    def test_nothing_written_until_save(self, client, storage_path, new_entry_payload):
        client.post("/api/entries", json=new_entry_payload)

        assert not storage_path.exists()

    def test_save(self, client, storage_path):
        response = client.post("/api/save")

        assert response.status_code == 200
        assert response.json()["notification"]["title"] == "Data Saved"
        stored = json.loads(storage_path.read_text(encoding="utf-8"))
        assert len(stored["leasingData"]) == 8

    def test_saved_data_is_loaded_next_time(self, make_client, new_entry_payload):
        first = make_client()
        first.post("/api/entries", json=new_entry_payload)
        first.post("/api/save")

        second = make_client()

        assert second.get("/api/entries").json()["total"] == 9

    def test_save_failure(self, make_client, tmp_path):
        client = make_client(storage=LocalStorage(str(tmp_path)))

        response = client.post("/api/save")

        assert response.status_code == 500
        assert response.json()["notification"]["variant"] == "destructive"

    def test_import_csv(self, client, storage_path):
        response = client.post(
            "/api/import",
            files={"file": ("entries.csv", CSV_UPLOAD, "text/csv")},
        )

        assert response.status_code == 200
        assert response.json()["imported"] == 2
        assert response.json()["notification"]["title"] == "Upload Successful"
        assert displayed_ids(client) == ["u1", "u2"]
        assert not storage_path.exists()

    def test_import_rejects_bad_row(self, client):
        bad = CSV_UPLOAD + b"u3,x,2025-06-17,Rudi,,,,,\n"

        response = client.post("/api/import", files={"file": ("entries.csv", bad, "text/csv")})

        assert response.status_code == 422
        notification = response.json()["notification"]
        assert notification["title"] == "Upload Failed"
        assert notification["description"].startswith("Invalid week format for row:")
        assert len(displayed_ids(client)) == 8

    def test_import_rejects_other_extensions(self, client):
        response = client.post(
            "/api/import",
            files={"file": ("entries.xlsx", CSV_UPLOAD, "application/octet-stream")},
        )

        assert response.status_code == 400


# =============================================================================
# Test: Export
# =============================================================================

class TestExport:

    def test_csv_download(self, client):
        response = client.get("/api/export/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "leasing_report_2025-07-01.csv" in response.headers["content-disposition"]
        assert response.text.splitlines()[0].startswith("id,week,date")

    def test_export_follows_displayed_table(self, client):
        client.put("/api/date-range", json={"from": "2025-06-17"})

        lines = client.get("/api/export/csv").text.strip().splitlines()

        assert len(lines) == 2

    @pytest.mark.parametrize("export_format, magic", [("xlsx", b"PK"), ("pdf", b"%PDF")])
    def test_binary_downloads(self, client, export_format, magic):
        response = client.get(f"/api/export/{export_format}")

        assert response.status_code == 200
        assert response.content.startswith(magic)

    def test_unknown_format(self, client):
        assert client.get("/api/export/docx").status_code == 404


# =============================================================================
# Test: Translation
# =============================================================================

class TestTranslation:

    def test_languages(self, make_client):
        client = make_client(reply="{}")

        data = client.get("/api/languages").json()

        assert data["translationAvailable"] is True
        assert {"code": "id", "name": "Indonesian"} in data["languages"]

    def test_translate(self, make_client):
        reply = json.dumps({key: "ID " + value for key, value in DEFAULT_UI_TEXT.items()})
        client = make_client(reply=reply)

        response = client.post("/api/translate", json={"languageCode": "id"})

        assert response.status_code == 200
        ui_text = response.json()["uiText"]
        assert ui_text["language"] == "id"
        assert ui_text["texts"]["reportTitle"] == "ID Leasing Activity Report"
        assert client.get("/api/state").json()["translationStatus"] == "succeeded"

    def test_failed_translation_keeps_text(self, make_client):
        client = make_client(reply="not json")

        response = client.post("/api/translate", json={"languageCode": "id"})

        assert response.status_code == 502
        assert response.json()["notification"]["description"] == "Translation failed. Please try again."
        assert client.get("/api/ui-text").json()["language"] == "en"
        assert client.get("/api/state").json()["translationStatus"] == "failed"

    def test_translation_unavailable(self, client):
        response = client.post("/api/translate", json={"languageCode": "id"})

        assert response.status_code == 502

    def test_unknown_language(self, client):
        assert client.post("/api/translate", json={"languageCode": "xx"}).status_code == 422


# =============================================================================
# Test: Configuration
# =============================================================================

class TestConfig:

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PORT", "9001")
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        monkeypatch.delenv("STORAGE_FILE", raising=False)
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")

        config = Config.load()

        assert config.port == 9001
        assert config.storage_file == str(tmp_path / "local_storage.json")
        assert config.translation_enabled

    def test_api_key_is_never_exposed(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-secret")

        config = Config.load()

        assert "sk-secret" not in repr(config)
        assert "sk-secret" not in json.dumps(config.to_dict())


# =============================================================================
# Test: Error Paths
# =============================================================================

class FailingMessages:
    def create(self, **kwargs):
        raise RuntimeError("connection reset")


class TestErrorPaths:
    """Unexpected failures are reported and leave the app usable."""

    @pytest.fixture
    def failing_client(self, storage_path):
        session = LeasingSession(
            LocalStorage(str(storage_path)),
            translator=Translator(client=SimpleNamespace(messages=FailingMessages())),
        )
        config = Config(storage_file=str(storage_path), anthropic_api_key=None)
        return TestClient(create_app(config=config, session=session))

    def test_unexpected_translation_error_is_a_failure(self, failing_client):
        response = failing_client.post("/api/translate", json={"languageCode": "id"})

        assert response.status_code == 502
        assert response.json()["notification"]["variant"] == "destructive"
        assert failing_client.get("/api/state").json()["translationStatus"] == "failed"

    def test_translation_can_be_retried(self, failing_client):
        failing_client.post("/api/translate", json={"languageCode": "id"})

        response = failing_client.post("/api/translate", json={"languageCode": "id"})

        assert response.status_code == 502
        assert failing_client.get("/api/ui-text").json()["language"] == "en"

    def test_upload_at_size_limit(self, client, monkeypatch):
        monkeypatch.setattr("web.app.MAX_UPLOAD_BYTES", len(CSV_UPLOAD))

        response = client.post("/api/import", files={"file": ("entries.csv", CSV_UPLOAD, "text/csv")})

        assert response.status_code == 200

    def test_upload_over_size_limit(self, client, monkeypatch):
        monkeypatch.setattr("web.app.MAX_UPLOAD_BYTES", len(CSV_UPLOAD) - 1)

        response = client.post("/api/import", files={"file": ("entries.csv", CSV_UPLOAD, "text/csv")})

        assert response.status_code == 413
        assert len(displayed_ids(client)) == 8
