"""
MyMemory translation client - looks up a single translation over HTTP.
"""

import json
import logging
from typing import Any, Optional

import httpx

from translateme.config.settings import TranslationProviderSettings, get_settings
from translateme.core.exceptions import DecodeError, NetworkError, UnsupportedLanguageError
from translateme.models.language import Language

logger = logging.getLogger(__name__)


class TranslationClient:
    """Client for the MyMemory ``/get`` lookup endpoint."""

    def __init__(
        self,
        settings: Optional[TranslationProviderSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings().translation
        self.base_url = self.settings.base_url
        self.timeout = self.settings.timeout_seconds
        self.contact_email = self.settings.contact_email
        self._transport = transport

    def build_params(self, text: str, source: Language, target: Language) -> dict:
        """Query parameters for one lookup; httpx percent-encodes them."""
        params = {
            "q": text,
            "langpair": f"{source.value}|{target.value}",
        }
        if self.contact_email:
            params["de"] = self.contact_email
        return params

    async def translate(self, text: str, source_language, target_language) -> str:
        """
        Translate ``text`` from ``source_language`` to ``target_language``.

        Args:
            text: Arbitrary text, sent as the ``q`` query parameter
            source_language: Language or two-letter code
            target_language: Language or two-letter code

        Returns:
            The provider's ``translatedText``, untouched

        Raises:
            UnsupportedLanguageError: If either code is outside the supported set
            NetworkError: If the endpoint cannot be reached
            DecodeError: If the response body is empty or has an unexpected shape
        """
        source = _coerce_language(source_language)
        target = _coerce_language(target_language)
        params = self.build_params(text, source, target)

        logger.info(f"Requesting translation {params['langpair']} ({len(text)} chars)")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(self.base_url, params=params)
        except httpx.TransportError as e:
            logger.warning(f"Translation request failed: {type(e).__name__}: {e}")
            raise NetworkError(
                f"Translation endpoint unreachable: {e}",
                details={"exception_type": type(e).__name__},
            ) from e

        if response.status_code != 200:
            logger.warning(f"Translation endpoint returned {response.status_code}")

        return self.decode_response(response.content)

    @staticmethod
    def decode_response(body: bytes) -> str:
        """Extract ``translatedText`` from a response body."""
        if not body or not body.strip():
            raise DecodeError("Translation response body is empty")

        try:
            payload: Any = json.loads(body)
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(f"Translation response is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise DecodeError("Translation response is not a JSON object")

        data = payload.get("responseData", payload)
        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not isinstance(translated, str):
            raise DecodeError(
                "Translation response has no translatedText",
                details={"keys": sorted(payload.keys())},
            )
        return translated


def _coerce_language(value) -> Language:
    try:
        return Language(value)
    except ValueError:
        raise UnsupportedLanguageError(str(value), Language.codes()) from None
