# SPDX-License-Identifier: Apache-2.0
"""Tests for translation backends."""

import os
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from locale_translator.translators import (
    ConfigurationError,
    DeepLTranslator,
    LibreTranslateTranslator,
    TranslationError,
    TranslatorBackend,
    TranslatorError,
    get_google_translator,
)


def _mock_session(status: int = 200, body: Any = None, text: str = "") -> MagicMock:
    """Build an aiohttp-like session whose post() yields one response."""
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.json = AsyncMock(return_value=body)
    mock_response.text = AsyncMock(return_value=text)

    mock_session = MagicMock()
    mock_session.post = MagicMock(return_value=AsyncMock())
    mock_session.post.return_value.__aenter__ = AsyncMock(return_value=mock_response)
    mock_session.post.return_value.__aexit__ = AsyncMock(return_value=None)
    mock_session.close = AsyncMock()
    return mock_session


class TestTranslatorBackendProtocol:
    """Test TranslatorBackend protocol."""

    def test_libretranslate_implements_protocol(self) -> None:
        """LibreTranslateTranslator should implement TranslatorBackend protocol."""
        assert isinstance(LibreTranslateTranslator(), TranslatorBackend)

    def test_deepl_implements_protocol(self) -> None:
        """DeepLTranslator should implement TranslatorBackend protocol."""
        assert isinstance(DeepLTranslator(api_key="test-key"), TranslatorBackend)

    def test_google_implements_protocol(self) -> None:
        """GoogleTranslator should implement TranslatorBackend protocol."""
        GoogleTranslator = get_google_translator()
        assert isinstance(GoogleTranslator(), TranslatorBackend)


class TestExceptions:
    """Test exception hierarchy."""

    def test_translation_error_inherits_from_translator_error(self) -> None:
        """TranslationError should inherit from TranslatorError."""
        assert issubclass(TranslationError, TranslatorError)

    def test_configuration_error_inherits_from_translator_error(self) -> None:
        """ConfigurationError should inherit from TranslatorError."""
        assert issubclass(ConfigurationError, TranslatorError)


class TestLibreTranslateTranslator:
    """Unit tests for LibreTranslateTranslator (mocked)."""

    def test_name(self) -> None:
        """LibreTranslateTranslator should have name 'libretranslate'."""
        assert LibreTranslateTranslator().name == "libretranslate"

    def test_default_url(self) -> None:
        """Default endpoint is a local LibreTranslate server."""
        translator = LibreTranslateTranslator()
        assert translator._api_url == "http://localhost:5000/translate"

    @pytest.mark.asyncio
    async def test_translate_empty_string(self) -> None:
        """Empty string should return as-is without a request."""
        translator = LibreTranslateTranslator()
        translator._session = _mock_session()
        assert await translator.translate("", "en", "de") == ""
        translator._session.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_translate_whitespace_only(self) -> None:
        """Whitespace-only string should return as-is."""
        translator = LibreTranslateTranslator()
        assert await translator.translate("  ", "en", "de") == "  "

    @pytest.mark.asyncio
    async def test_request_payload(self) -> None:
        """Request body follows the LibreTranslate JSON contract."""
        translator = LibreTranslateTranslator(api_url="http://mt.local/translate")
        translator._session = _mock_session(body={"translatedText": "Hallo"})

        result = await translator.translate("Hello", "en", "de")

        assert result == "Hallo"
        args, kwargs = translator._session.post.call_args
        assert args == ("http://mt.local/translate",)
        assert kwargs["json"] == {
            "q": "Hello",
            "source": "en",
            "target": "de",
            "format": "text",
        }
        assert kwargs["headers"] == {}

    @pytest.mark.asyncio
    async def test_bearer_token(self) -> None:
        """Configured token is sent as a bearer Authorization header."""
        translator = LibreTranslateTranslator(api_key="secret")
        translator._session = _mock_session(body={"translatedText": "Hallo"})

        await translator.translate("Hello", "en", "de")

        _, kwargs = translator._session.post.call_args
        assert kwargs["headers"] == {"Authorization": "Bearer secret"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"translatedText": None},
            {"translatedText": 42},
            ["Hallo"],
            None,
        ],
    )
    async def test_missing_translated_text(self, body: Any) -> None:
        """Absent or non-string translatedText is a translation error."""
        translator = LibreTranslateTranslator()
        translator._session = _mock_session(body=body)

        with pytest.raises(TranslationError):
            await translator.translate("Hello", "en", "de")

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        """Undecodable body is a translation error."""
        translator = LibreTranslateTranslator()
        session = _mock_session()
        response = session.post.return_value.__aenter__.return_value
        response.json = AsyncMock(side_effect=ValueError("Expecting value"))
        translator._session = session

        with pytest.raises(TranslationError, match="invalid JSON"):
            await translator.translate("Hello", "en", "de")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_rejected_credentials(self, status: int) -> None:
        """Authentication failures are configuration errors."""
        translator = LibreTranslateTranslator(api_key="bad")
        translator._session = _mock_session(status=status)

        with pytest.raises(ConfigurationError):
            await translator.translate("Hello", "en", "de")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 429, 500, 503])
    async def test_error_status(self, status: int) -> None:
        """Other non-200 statuses are translation errors."""
        translator = LibreTranslateTranslator()
        translator._session = _mock_session(status=status, text="bad request")

        with pytest.raises(TranslationError):
            await translator.translate("Hello", "en", "de")

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        """aiohttp errors are wrapped in TranslationError."""
        translator = LibreTranslateTranslator()
        session = _mock_session()
        session.post = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))
        translator._session = session

        with pytest.raises(TranslationError, match="request failed"):
            await translator.translate("Hello", "en", "de")

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        """close() closes and forgets the session."""
        translator = LibreTranslateTranslator()
        session = _mock_session()
        translator._session = session

        await translator.close()

        session.close.assert_awaited_once()
        assert translator._session is None


class TestDeepLTranslatorUnit:
    """Unit tests for DeepLTranslator (mocked)."""

    def test_requires_api_key(self) -> None:
        """DeepLTranslator should require API key."""
        with pytest.raises(ConfigurationError) as exc_info:
            DeepLTranslator(api_key="")
        assert "API key is required" in str(exc_info.value)

    def test_name(self) -> None:
        """DeepLTranslator should have name 'deepl'."""
        assert DeepLTranslator(api_key="test-key").name == "deepl"

    def test_custom_api_url(self) -> None:
        """DeepLTranslator should accept custom API URL."""
        translator = DeepLTranslator(
            api_key="test-key",
            api_url="https://api.deepl.com/v2/translate",
        )
        assert translator._api_url == "https://api.deepl.com/v2/translate"

    @pytest.mark.asyncio
    async def test_translate_empty_string(self) -> None:
        """Empty string should return as-is."""
        translator = DeepLTranslator(api_key="test-key")
        assert await translator.translate("", "en", "ja") == ""

    @pytest.mark.asyncio
    async def test_translate_mocked(self) -> None:
        """Test translation with mocked API."""
        translator = DeepLTranslator(api_key="test-key")
        translator._session = _mock_session(body={"translations": [{"text": "こんにちは"}]})

        result = await translator.translate("Hello", "en", "ja")

        assert result == "こんにちは"
        _, kwargs = translator._session.post.call_args
        assert ("target_lang", "JA") in kwargs["data"]
        assert ("source_lang", "EN") in kwargs["data"]
        assert kwargs["headers"] == {"Authorization": "DeepL-Auth-Key test-key"}

    @pytest.mark.asyncio
    async def test_auto_source_omitted(self) -> None:
        """source_lang is not sent for auto-detection."""
        translator = DeepLTranslator(api_key="test-key")
        translator._session = _mock_session(body={"translations": [{"text": "Hallo"}]})

        await translator.translate("Hello", "auto", "de")

        _, kwargs = translator._session.post.call_args
        assert all(name != "source_lang" for name, _ in kwargs["data"])

    @pytest.mark.asyncio
    async def test_invalid_key(self) -> None:
        """403 should raise ConfigurationError."""
        translator = DeepLTranslator(api_key="test-key")
        translator._session = _mock_session(status=403)

        with pytest.raises(ConfigurationError):
            await translator.translate("Hello", "en", "ja")

    @pytest.mark.asyncio
    async def test_empty_translations(self) -> None:
        """Response without translations is a translation error."""
        translator = DeepLTranslator(api_key="test-key")
        translator._session = _mock_session(body={"translations": []})

        with pytest.raises(TranslationError):
            await translator.translate("Hello", "en", "ja")


class TestGoogleTranslator:
    """Test GoogleTranslator."""

    def test_name(self) -> None:
        """GoogleTranslator should have name 'google'."""
        GoogleTranslator = get_google_translator()
        assert GoogleTranslator().name == "google"

    @pytest.mark.asyncio
    async def test_translate_whitespace_only(self) -> None:
        """Whitespace-only string should return as-is."""
        GoogleTranslator = get_google_translator()
        result = await GoogleTranslator().translate("   ", "en", "ja")
        assert result == "   "

    @pytest.mark.asyncio
    async def test_translate_mocked(self) -> None:
        """Test translate with mocked sync function."""
        GoogleTranslator = get_google_translator()
        translator = GoogleTranslator()

        with patch.object(translator, "_translate_sync", return_value="こんにちは"):
            result = await translator.translate("Hello", "en", "ja")
            assert result == "こんにちは"

    def test_translate_sync_error_handling(self) -> None:
        """_translate_sync should wrap exceptions in TranslationError."""
        GoogleTranslator = get_google_translator()
        translator = GoogleTranslator()

        with patch("locale_translator.translators.google.DeepGoogleTranslator") as mock_class:
            mock_class.return_value.translate.side_effect = Exception("API error")
            with pytest.raises(TranslationError) as exc_info:
                translator._translate_sync("Hello", "en", "ja")
            assert "Google Translate failed" in str(exc_info.value)

    def test_translate_sync_none_result(self) -> None:
        """A None result is a translation error."""
        GoogleTranslator = get_google_translator()
        translator = GoogleTranslator()

        with patch("locale_translator.translators.google.DeepGoogleTranslator") as mock_class:
            mock_class.return_value.translate.return_value = None
            with pytest.raises(TranslationError):
                translator._translate_sync("Hello", "en", "ja")


@pytest.mark.skipif(
    os.environ.get("RUN_INTEGRATION") != "1",
    reason="Integration tests disabled (set RUN_INTEGRATION=1 to run)",
)
class TestLibreTranslateIntegration:
    """Integration tests against a running LibreTranslate server.

    Run with: RUN_INTEGRATION=1 LIBRETRANSLATE_URL=... pytest tests/test_translators.py
    """

    @pytest.mark.asyncio
    async def test_real_translation_en_to_de(self) -> None:
        """Test real translation from English to German."""
        url = os.environ.get("LIBRETRANSLATE_URL")
        async with LibreTranslateTranslator(api_url=url, timeout=30) as translator:
            result = await translator.translate("Hello", "en", "de")
        assert result != "Hello"
        assert len(result) > 0
