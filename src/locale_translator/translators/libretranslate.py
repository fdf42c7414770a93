# SPDX-License-Identifier: Apache-2.0
"""LibreTranslate-compatible HTTP translation backend."""

from __future__ import annotations

from typing import Any

import aiohttp

from locale_translator.translators.base import ConfigurationError, TranslationError


class LibreTranslateTranslator:
    """Backend for servers speaking the LibreTranslate ``/translate`` API.

    Each call POSTs ``{"q", "source", "target", "format": "text"}`` as JSON and
    reads ``translatedText`` from the JSON response. A bearer token is sent
    when configured.

    Attributes:
        name: Backend identifier ("libretranslate").
    """

    DEFAULT_API_URL = "http://localhost:5000/translate"

    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize LibreTranslateTranslator.

        Args:
            api_url: Endpoint URL (default: local LibreTranslate server).
            api_key: Optional bearer token.
            timeout: Total per-request timeout in seconds (None: no limit).
        """
        self._api_url = api_url or self.DEFAULT_API_URL
        self._api_key = api_key or ""
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    @property
    def name(self) -> str:
        """Return backend name."""
        return "libretranslate"

    async def __aenter__(self) -> LibreTranslateTranslator:
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            return {}
        return {"Authorization": f"Bearer {self._api_key}"}

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Translate a single text.

        Args:
            text: Text to translate.
            source_lang: Source language code.
            target_lang: Target language code.

        Returns:
            Translated text.

        Raises:
            TranslationError: On transport failure, non-200 status, or a
                response without a string ``translatedText`` field.
            ConfigurationError: If the server rejects the credentials.
        """
        if not text or not text.strip():
            return text

        session = await self._ensure_session()
        payload = {
            "q": text,
            "source": source_lang,
            "target": target_lang,
            "format": "text",
        }

        try:
            async with session.post(
                self._api_url, json=payload, headers=self._headers()
            ) as response:
                if response.status == 200:
                    data = await response.json(content_type=None)
                    return self._extract_text(data)
                elif response.status in (401, 403):
                    raise ConfigurationError(
                        f"LibreTranslate rejected credentials (status {response.status})"
                    )
                elif response.status == 429:
                    raise TranslationError(
                        "LibreTranslate rate limit exceeded, please retry later"
                    )
                elif response.status >= 500:
                    raise TranslationError(
                        f"LibreTranslate server error (status {response.status})"
                    )
                else:
                    error_text = await response.text()
                    raise TranslationError(
                        f"LibreTranslate API error (status {response.status}): {error_text}"
                    )
        except aiohttp.ClientError as e:
            raise TranslationError(f"LibreTranslate request failed: {e}") from e
        except ValueError as e:
            raise TranslationError(f"LibreTranslate returned invalid JSON: {e}") from e

    @staticmethod
    def _extract_text(data: Any) -> str:
        if not isinstance(data, dict):
            raise TranslationError("LibreTranslate response is not a JSON object")
        translated = data.get("translatedText")
        if not isinstance(translated, str):
            raise TranslationError("LibreTranslate response has no 'translatedText' string")
        return translated

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
