# SPDX-License-Identifier: Apache-2.0
"""Per-document, per-language translation lookup."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from locale_translator.core.models import Fallback, TranslationOutcome

logger = logging.getLogger(__name__)


class LanguageCache:
    """Source text to translated text for one document and one language.

    Built from the fetch outcomes of a single fetch cycle and only read
    afterwards. Adding an outcome for a text that is already present is a
    no-op; the first outcome is kept.
    """

    def __init__(self, target_lang: str) -> None:
        self.target_lang = target_lang
        self._entries: dict[str, str] = {}
        self._fallback_reasons: dict[str, str] = {}

    @classmethod
    def from_outcomes(
        cls,
        target_lang: str,
        outcomes: Iterable[TranslationOutcome],
    ) -> LanguageCache:
        cache = cls(target_lang)
        for outcome in outcomes:
            cache.add(outcome)
        return cache

    def add(self, outcome: TranslationOutcome) -> None:
        if outcome.target_lang != self.target_lang:
            raise ValueError(
                f"Outcome for '{outcome.target_lang}' added to '{self.target_lang}' cache"
            )
        if outcome.source_text in self._entries:
            logger.debug(
                "Duplicate outcome for %r (%s) ignored",
                outcome.source_text,
                self.target_lang,
            )
            return
        self._entries[outcome.source_text] = outcome.translated_text
        if isinstance(outcome, Fallback):
            self._fallback_reasons[outcome.source_text] = outcome.reason

    def get(self, text: str) -> str:
        """Return the translation of text, or text itself if it has none."""
        return self._entries.get(text, text)

    def apply(self, entries: Mapping[str, str]) -> dict[str, str]:
        """Translate every value of a flat mapping, keeping its keys."""
        translated: dict[str, str] = {}
        for key, text in entries.items():
            if text not in self._entries:
                logger.warning(
                    "No %s translation cached for key '%s'; keeping source text",
                    self.target_lang,
                    key,
                )
            translated[key] = self.get(text)
        return translated

    @property
    def fallback_reasons(self) -> dict[str, str]:
        return dict(self._fallback_reasons)

    @property
    def fallback_count(self) -> int:
        return len(self._fallback_reasons)

    def __contains__(self, text: object) -> bool:
        return text in self._entries

    def __len__(self) -> int:
        return len(self._entries)
