# SPDX-License-Identifier: Apache-2.0
"""Base classes and protocols for translation backends."""

from typing import Protocol, runtime_checkable


class TranslatorError(Exception):
    """Base exception for translator module."""

    pass


class TranslationError(TranslatorError):
    """Error during translation (API call failure, rate limit, bad response, etc.).

    This error type is potentially retryable.
    """

    pass


class ConfigurationError(TranslatorError):
    """Configuration error (missing API key, rejected credentials, etc.).

    This error type is NOT retryable - fix the configuration first.
    """

    pass


@runtime_checkable
class TranslatorBackend(Protocol):
    """Protocol definition for translation backends.

    All translator implementations must conform to this protocol.
    """

    @property
    def name(self) -> str:
        """Backend name ("libretranslate", "deepl", "google")."""
        ...

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str:
        """Translate a single text.

        Args:
            text: Text to translate.
            source_lang: Source language code ("en", "de", "auto").
            target_lang: Target language code ("de", "ja").

        Returns:
            Translated text.

        Raises:
            TranslationError: On translation failure.
            ConfigurationError: On authentication failure.
        """
        ...

    async def close(self) -> None:
        """Release network resources held by the backend."""
        ...
