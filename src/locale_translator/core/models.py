# SPDX-License-Identifier: Apache-2.0
"""Data models shared by the translation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from .tree import unique_texts


@dataclass
class SourceDocument:
    """A source localization file, flattened.

    Attributes:
        path: Path of the source file.
        relative_path: Path relative to the source root, reused for outputs.
        entries: Flat ``{dotted_key: string}`` mapping, sorted by key.
    """

    path: Path
    relative_path: Path
    entries: dict[str, str] = field(default_factory=dict)

    @property
    def unique_texts(self) -> frozenset[str]:
        """Distinct source strings in this document."""
        return unique_texts(self.entries)


@dataclass(frozen=True)
class TranslationUnit:
    """A single (source text, target language) request."""

    text: str
    target_lang: str


@dataclass(frozen=True)
class Translated:
    """Successful translation of a source string."""

    source_text: str
    target_lang: str
    text: str

    @property
    def translated_text(self) -> str:
        return self.text

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class Fallback:
    """Failed translation; the source text is used unchanged.

    Attributes:
        source_text: Text that was submitted.
        target_lang: Requested language.
        reason: Why the backend result could not be used.
    """

    source_text: str
    target_lang: str
    reason: str

    @property
    def translated_text(self) -> str:
        return self.source_text

    @property
    def is_fallback(self) -> bool:
        return True


TranslationOutcome = Union[Translated, Fallback]


@dataclass
class OutputDocument:
    """Translated tree for one language, ready to be serialized."""

    target_lang: str
    relative_path: Path
    tree: dict[str, Any]
