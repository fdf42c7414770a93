# SPDX-License-Identifier: Apache-2.0
"""Google Translate backend using deep-translator."""

import asyncio

from deep_translator import GoogleTranslator as DeepGoogleTranslator  # type: ignore[import-untyped]

from locale_translator.translators.base import TranslationError


class GoogleTranslator:
    """Google Translate backend.

    This backend uses Google Translate via deep-translator library.
    No API key is required (uses free web API). The blocking client runs in
    a worker thread. A timed-out call cannot stop its thread, so the
    request may still be in flight after its permit is released.

    Attributes:
        name: Backend identifier ("google").
    """

    @property
    def name(self) -> str:
        """Return backend name."""
        return "google"

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Translate a single text using Google Translate.

        Args:
            text: Text to translate.
            source_lang: Source language code ("en", "ja", "auto").
            target_lang: Target language code ("de", "ja").

        Returns:
            Translated text.

        Raises:
            TranslationError: On translation failure.
        """
        # Early return for empty or whitespace-only text
        if not text or not text.strip():
            return text

        return await asyncio.to_thread(
            self._translate_sync, text, source_lang, target_lang
        )

    def _translate_sync(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        try:
            translator = DeepGoogleTranslator(source=source_lang, target=target_lang)
            result = translator.translate(text)
        except Exception as e:
            raise TranslationError(f"Google Translate failed: {e}") from e
        if not isinstance(result, str):
            raise TranslationError("Google Translate returned no text")
        return result

    async def close(self) -> None:
        """Nothing to release; present for protocol conformance."""
        return None
