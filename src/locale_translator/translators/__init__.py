# SPDX-License-Identifier: Apache-2.0
"""Translation backend modules.

This module provides translation backends for LibreTranslate-compatible
servers, DeepL, and Google Translate.

LibreTranslate and DeepL use aiohttp and are always available.
Google Translate requires the optional deep-translator dependency.

Usage:
    # LibreTranslate (default)
    from locale_translator.translators import LibreTranslateTranslator
    translator = LibreTranslateTranslator("http://localhost:5000/translate")
    result = await translator.translate("Hello", "en", "de")

    # DeepL (requires API key)
    from locale_translator.translators import DeepLTranslator
    translator = DeepLTranslator(api_key="your-api-key")

    # Google Translate (requires deep-translator)
    from locale_translator.translators import get_google_translator
    GoogleTranslator = get_google_translator()
    translator = GoogleTranslator()
"""

from locale_translator.translators.base import (
    ConfigurationError,
    TranslationError,
    TranslatorBackend,
    TranslatorError,
)
from locale_translator.translators.deepl import DeepLTranslator
from locale_translator.translators.libretranslate import LibreTranslateTranslator

__all__ = [
    # Protocol and exceptions
    "TranslatorBackend",
    "TranslatorError",
    "TranslationError",
    "ConfigurationError",
    # Always available
    "DeepLTranslator",
    "LibreTranslateTranslator",
    # Lazy import functions
    "get_google_translator",
]


def get_google_translator() -> type:
    """Get GoogleTranslator class with lazy import.

    This function imports GoogleTranslator only when called,
    avoiding import errors when deep-translator is not installed.

    Returns:
        GoogleTranslator class.

    Raises:
        ImportError: If deep-translator is not installed.
    """
    from locale_translator.translators.google import GoogleTranslator

    return GoogleTranslator
