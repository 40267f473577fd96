"""
UI Translation - AI-Backed Interface Text Translation

Translates the interface strings into another language through the
Anthropic Messages API. The reply must be a JSON object with exactly the
requested keys; anything else is a TranslationError and the caller keeps
its current text.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import anthropic

from core.errors import TranslationError
from core.i18n import UiText, get_language, DEFAULT_LANGUAGE_CODE


logger = logging.getLogger(__name__)


DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 4096

PROMPT_TEMPLATE = """You are translating the interface of a leasing activity tracker.

Translate every value of the JSON object below into {language}.
Rules:
- Keep every key exactly as it is
- Keep punctuation such as trailing colons or ellipses
- Do not add or remove keys
- Keep the text concise; these are button labels and headings

Return ONLY valid JSON with the same keys (no other text):

{content}"""


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class TranslationSuccess:
    """Returned when the new UI text is ready to swap in."""
    ui_text: UiText


@dataclass(frozen=True)
class TranslationFailure:
    """Returned when translation failed; the current UI text stays."""
    message: str


TranslationResult = Union[TranslationSuccess, TranslationFailure]


# =============================================================================
# Response Handling
# =============================================================================


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        # Remove first line (```json) and last line (```)
        text = "\n".join(lines[1:-1])
    return text


def parse_translation(response_text: str, content: Mapping[str, str]) -> dict[str, str]:
    """
    Validate a model reply against the requested mapping.

    Raises:
        TranslationError: If the reply is not JSON or changes the shape
    """
    try:
        translated = json.loads(_strip_code_fence(response_text))
    except json.JSONDecodeError as e:
        raise TranslationError(f"Translation reply is not valid JSON: {e}") from e

    if not isinstance(translated, dict):
        raise TranslationError("Translation reply is not a JSON object")

    missing = set(content) - set(translated)
    extra = set(translated) - set(content)
    if missing or extra:
        raise TranslationError(
            f"Translation reply has different keys (missing={sorted(missing)}, extra={sorted(extra)})"
        )

    if not all(isinstance(value, str) for value in translated.values()):
        raise TranslationError("Translation reply contains non-string values")

    return {key: translated[key] for key in content}


# =============================================================================
# Translator
# =============================================================================


class Translator:
    """
    Translation collaborator backed by the Anthropic Messages API.

    Any object with a compatible ``messages.create`` method can be passed
    as the client.
    """

    def __init__(
        self,
        client: Any = None,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Initialise translator.

        Args:
            client: Pre-built client; created from api_key when omitted
            api_key: Anthropic API key
            model: Model name to request
            max_tokens: Reply token limit
        """
        if client is None:
            if not api_key:
                raise TranslationError("Translation is not configured (ANTHROPIC_API_KEY missing)")
            client = anthropic.Anthropic(api_key=api_key)
        self._client = client
        self._model = model
        self._max_tokens = max_tokens

    def translate(self, target_language: str, content: Mapping[str, str]) -> dict[str, str]:
        """
        Translate a mapping of UI keys to English strings.

        Args:
            target_language: Human-readable language name, e.g. "Indonesian"
            content: UI key -> English text

        Returns:
            Same-shaped mapping with translated strings

        Raises:
            TranslationError: On API failure or a malformed reply
        """
        prompt = PROMPT_TEMPLATE.format(
            language=target_language,
            content=json.dumps(dict(content), ensure_ascii=False, indent=2),
        )

        try:
            message = self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                messages=[
                    {"role": "user", "content": prompt}
                ],
            )
        except anthropic.APIError as e:
            raise TranslationError(f"Translation API error: {e}") from e

        try:
            response_text = message.content[0].text
        except (AttributeError, IndexError, TypeError) as e:
            raise TranslationError("Translation reply had no text content") from e

        return parse_translation(response_text, content)


def translate_ui_text(
    current: UiText,
    language_code: str,
    translator: Optional[Translator],
) -> TranslationResult:
    """
    Produce the next UI text version for a language.

    English resets to the defaults without calling the translator. The
    translation always starts from the English defaults, not from whatever
    language is currently shown.
    """
    if language_code == DEFAULT_LANGUAGE_CODE:
        return TranslationSuccess(current.reset())

    language = get_language(language_code)
    if language is None:
        return TranslationFailure(f"Unsupported language: {language_code}")

    if translator is None:
        return TranslationFailure("Translation is not configured")

    defaults = current.reset().texts
    try:
        translated = translator.translate(language.name, defaults)
    except TranslationError as e:
        logger.error("Translation to %s failed: %s", language.name, e)
        return TranslationFailure(str(e))

    return TranslationSuccess(current.replaced_with(translated, language.code))
