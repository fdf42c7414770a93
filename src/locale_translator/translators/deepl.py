# SPDX-License-Identifier: Apache-2.0
"""DeepL translation backend."""

from __future__ import annotations

from typing import Any

import aiohttp

from locale_translator.translators.base import ConfigurationError, TranslationError


class DeepLTranslator:
    """DeepL translation backend.

    This backend uses DeepL API for high-quality translation.
    Requires an API key (free or pro).

    Attributes:
        name: Backend identifier ("deepl").
    """

    DEFAULT_API_URL = "https://api-free.deepl.com/v2/translate"

    def __init__(
        self,
        api_key: str,
        api_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize DeepLTranslator.

        Args:
            api_key: DeepL API key.
            api_url: API URL (default: free API endpoint).
            timeout: Total per-request timeout in seconds (None: no limit).

        Raises:
            ConfigurationError: If API key is not provided.
        """
        if not api_key:
            raise ConfigurationError("DeepL API key is required")

        self._api_key = api_key
        self._api_url = api_url or self.DEFAULT_API_URL
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    @property
    def name(self) -> str:
        """Return backend name."""
        return "deepl"

    async def __aenter__(self) -> DeepLTranslator:
        """Enter async context manager."""
        await self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session exists.

        Returns:
            Active aiohttp session.
        """
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self._timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Translate a single text using DeepL.

        Args:
            text: Text to translate.
            source_lang: Source language code ("en", "ja", "auto").
            target_lang: Target language code ("de", "ja").

        Returns:
            Translated text.

        Raises:
            TranslationError: On translation failure.
            ConfigurationError: On authentication failure.
        """
        # Early return for empty or whitespace-only text
        if not text or not text.strip():
            return text

        session = await self._ensure_session()

        params: list[tuple[str, str]] = [
            ("text", text),
            ("target_lang", target_lang.upper()),
        ]
        # DeepL doesn't support "auto" - omit source_lang for auto-detection
        if source_lang.lower() != "auto":
            params.append(("source_lang", source_lang.upper()))
        headers = {"Authorization": f"DeepL-Auth-Key {self._api_key}"}

        try:
            async with session.post(self._api_url, data=params, headers=headers) as response:
                if response.status == 200:
                    data = await response.json()
                    translations = data.get("translations") if isinstance(data, dict) else None
                    first = translations[0] if isinstance(translations, list) and translations else None
                    if not isinstance(first, dict) or not isinstance(first.get("text"), str):
                        raise TranslationError("DeepL response contains no translation")
                    return first["text"]
                elif response.status == 403:
                    raise ConfigurationError("Invalid DeepL API key")
                elif response.status == 429:
                    raise TranslationError(
                        "DeepL rate limit exceeded, please retry later"
                    )
                elif response.status == 456:
                    raise TranslationError("DeepL quota exceeded")
                elif response.status >= 500:
                    raise TranslationError(
                        f"DeepL server error (status {response.status})"
                    )
                else:
                    error_text = await response.text()
                    raise TranslationError(
                        f"DeepL API error (status {response.status}): {error_text}"
                    )
        except aiohttp.ClientError as e:
            raise TranslationError(f"DeepL request failed: {e}") from e
        except ValueError as e:
            raise TranslationError(f"DeepL returned invalid JSON: {e}") from e

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
