"""
Tests for UI translation

The Anthropic client is replaced by a stand-in exposing the same
``messages.create`` call, so no network access is needed.

Tests covering:
1. A valid reply replaces the UI text as a whole
2. Malformed replies fail and keep the previous text
3. API errors surface as failures
4. English resets without calling the model
"""

import json
import pytest
from pathlib import Path
from types import SimpleNamespace
import sys

import anthropic
import httpx

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.errors import TranslationError
from core.i18n import DEFAULT_UI_TEXT, UiText
from core.session import LeasingSession
from core.state import TranslationStatus
from core.storage import LocalStorage
from core.translation import (
    TranslationFailure,
    TranslationSuccess,
    Translator,
    parse_translation,
    translate_ui_text,
)


# =============================================================================
# Test Fixtures
# =============================================================================

class FakeMessages:
    """Records requests and returns a canned reply."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.reply)])


def translated_reply(prefix="ID "):
    return json.dumps({key: prefix + value for key, value in DEFAULT_UI_TEXT.items()})


@pytest.fixture
def make_translator():
    def _create(reply=None, error=None):
        messages = FakeMessages(reply=reply, error=error)
        translator = Translator(client=SimpleNamespace(messages=messages), model="test-model")
        return translator, messages
    return _create


# =============================================================================
# Test: Reply Parsing
# =============================================================================

class TestParseTranslation:
    """Tests for validating model replies."""

    def test_valid_reply(self):
        content = {"a": "Save", "b": "Cancel"}

        result = parse_translation('{"a": "Simpan", "b": "Batal"}', content)

        assert result == {"a": "Simpan", "b": "Batal"}

    def test_code_fence_is_stripped(self):
        reply = '```json\n{"a": "Simpan"}\n```'

        assert parse_translation(reply, {"a": "Save"}) == {"a": "Simpan"}

    @pytest.mark.parametrize("reply", [
        "not json",
        '["Simpan"]',
        '{"a": "Simpan"}',
        '{"a": "Simpan", "b": "Batal", "c": "Extra"}',
        '{"a": "Simpan", "b": 3}',
    ])
    def test_malformed_reply_raises(self, reply):
        with pytest.raises(TranslationError):
            parse_translation(reply, {"a": "Save", "b": "Cancel"})


# =============================================================================
# Test: Translator
# =============================================================================

class TestTranslator:
    """Tests for the Messages API collaborator."""

    def test_request_carries_language_and_keys(self, make_translator):
        translator, messages = make_translator(reply='{"reportTitle": "Laporan"}')

        translator.translate("Indonesian", {"reportTitle": "Leasing Activity Report"})

        call = messages.calls[0]
        assert call["model"] == "test-model"
        prompt = call["messages"][0]["content"]
        assert "Indonesian" in prompt
        assert '"reportTitle"' in prompt

    def test_api_error_becomes_translation_error(self, make_translator):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        translator, _ = make_translator(error=anthropic.APIConnectionError(request=request))

        with pytest.raises(TranslationError):
            translator.translate("Indonesian", {"a": "Save"})

    def test_empty_reply_content(self):
        messages = SimpleNamespace(create=lambda **kwargs: SimpleNamespace(content=[]))
        translator = Translator(client=SimpleNamespace(messages=messages))

        with pytest.raises(TranslationError):
            translator.translate("Indonesian", {"a": "Save"})

    def test_missing_api_key(self):
        with pytest.raises(TranslationError):
            Translator(api_key=None)


# =============================================================================
# Test: UI Text Translation
# =============================================================================

class TestTranslateUiText:
    """Tests for producing the next UI text version."""

    def test_success_replaces_all_text(self, make_translator):
        translator, _ = make_translator(reply=translated_reply())

        result = translate_ui_text(UiText.default(), "id", translator)

        assert isinstance(result, TranslationSuccess)
        assert result.ui_text.language_code == "id"
        assert result.ui_text.version == 1
        assert result.ui_text["reportTitle"] == "ID Leasing Activity Report"

    def test_english_resets_without_calling_model(self, make_translator):
        translator, messages = make_translator(reply=translated_reply())
        current = translate_ui_text(UiText.default(), "id", translator).ui_text

        result = translate_ui_text(current, "en", translator)

        assert isinstance(result, TranslationSuccess)
        assert dict(result.ui_text.texts) == dict(DEFAULT_UI_TEXT)
        assert len(messages.calls) == 1

    def test_translation_starts_from_english(self, make_translator):
        translator, messages = make_translator(reply=translated_reply("FR "))
        current = UiText.default().replaced_with(
            {key: "ID " + value for key, value in DEFAULT_UI_TEXT.items()}, "id"
        )

        translate_ui_text(current, "fr", translator)

        prompt = messages.calls[0]["messages"][0]["content"]
        assert "Leasing Activity Report" in prompt
        assert "ID Leasing Activity Report" not in prompt

    def test_bad_reply_is_failure(self, make_translator):
        translator, _ = make_translator(reply='{"reportTitle": "Laporan"}')

        result = translate_ui_text(UiText.default(), "id", translator)

        assert isinstance(result, TranslationFailure)

    def test_unknown_language(self, make_translator):
        translator, messages = make_translator(reply=translated_reply())

        result = translate_ui_text(UiText.default(), "xx", translator)

        assert isinstance(result, TranslationFailure)
        assert messages.calls == []

    def test_no_translator(self):
        result = translate_ui_text(UiText.default(), "id", None)

        assert isinstance(result, TranslationFailure)


# =============================================================================
# Test: Session Translation Lifecycle
# =============================================================================

class TestSessionTranslation:
    """Tests for the pending -> success | failure lifecycle."""

    def test_success_swaps_text(self, tmp_path, make_translator):
        translator, _ = make_translator(reply=translated_reply())
        session = LeasingSession(LocalStorage(str(tmp_path / "s.json")), translator=translator)

        session.translate("id")

        assert session.state.translation_status == TranslationStatus.SUCCEEDED
        assert session.ui_text["saveButton"] == "ID Save"

    def test_failure_keeps_previous_text(self, tmp_path, make_translator):
        translator, _ = make_translator(reply="nonsense")
        session = LeasingSession(LocalStorage(str(tmp_path / "s.json")), translator=translator)
        before = session.ui_text

        result = session.translate("id")

        assert isinstance(result, TranslationFailure)
        assert session.state.translation_status == TranslationStatus.FAILED
        assert session.ui_text is before

    def test_export_uses_translated_headers(self, tmp_path, make_translator):
        translator, _ = make_translator(reply=translated_reply())
        session = LeasingSession(LocalStorage(str(tmp_path / "s.json")), translator=translator)
        session.translate("id")

        payload = session.export("pdf")

        assert payload.content.startswith(b"%PDF")

    def test_unexpected_error_finishes_as_failure(self, tmp_path, make_translator):
        translator, _ = make_translator(error=RuntimeError("connection reset"))
        session = LeasingSession(LocalStorage(str(tmp_path / "s.json")), translator=translator)

        result = session.translate("id")

        assert isinstance(result, TranslationFailure)
        assert session.state.translation_status == TranslationStatus.FAILED
        assert not session.state.is_translating
        assert session.ui_text.language_code == "en"
