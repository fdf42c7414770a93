# SPDX-License-Identifier: Apache-2.0
"""Translation pipeline implementation."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from locale_translator.core.discovery import find_json_files, output_path_for
from locale_translator.core.models import (
    Fallback,
    OutputDocument,
    SourceDocument,
    Translated,
    TranslationOutcome,
    TranslationUnit,
)
from locale_translator.core.tree import TreeConflictError, build_tree, flatten_tree
from locale_translator.output.writer import serialize_tree, write_if_changed
from locale_translator.pipeline.errors import (
    DocumentParseError,
    DocumentReadError,
    PipelineError,
    ReconstructionConflict,
    WriteFailure,
)
from locale_translator.pipeline.language_cache import LanguageCache
from locale_translator.pipeline.limiter import RequestLimiter
from locale_translator.pipeline.progress import ProgressCallback
from locale_translator.translators.base import (
    ConfigurationError,
    TranslationError,
    TranslatorBackend,
)

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 40


@dataclass
class PipelineConfig:
    """Translation pipeline configuration."""

    source_dir: Path = Path("locales/en")
    output_dir: Path = Path("locales")
    target_langs: Sequence[str] = ("de", "id", "ja")
    source_lang: str = "en"

    # Total simultaneous backend calls across all documents and languages
    concurrency: int = 10

    # Per backend call, in seconds (None: no limit)
    request_timeout: float | None = 30.0

    # 0 = a failed call falls back immediately
    max_retries: int = 0
    retry_delay: float = 1.0


@dataclass
class DocumentReport:
    """Outcome of translating one source document."""

    path: Path
    error: PipelineError | None = None
    written: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    failed: dict[str, PipelineError] = field(default_factory=dict)
    unique_strings: int = 0
    fallbacks: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed


@dataclass
class RunSummary:
    """Result of a full pipeline run."""

    reports: list[DocumentReport]
    peak_in_flight: int = 0

    @property
    def failed(self) -> list[DocumentReport]:
        return [report for report in self.reports if not report.ok]

    @property
    def stats(self) -> dict[str, Any]:
        return {
            "documents": len(self.reports),
            "failed_documents": len(self.failed),
            "written": sum(len(r.written) for r in self.reports),
            "unchanged": sum(len(r.unchanged) for r in self.reports),
            "unique_strings": sum(r.unique_strings for r in self.reports),
            "fallbacks": sum(r.fallbacks for r in self.reports),
            "peak_in_flight": self.peak_in_flight,
        }


class TranslationPipeline:
    """Localization tree translation pipeline.

    Each document is flattened, its distinct strings are translated once per
    target language, and one tree per language is rebuilt and written. All
    backend calls of a run share one :class:`RequestLimiter`.
    """

    def __init__(
        self,
        translator: TranslatorBackend,
        config: PipelineConfig | None = None,
        progress_callback: ProgressCallback | None = None,
        limiter: RequestLimiter | None = None,
    ) -> None:
        """Initialize TranslationPipeline."""
        self._translator = translator
        self._config = config or PipelineConfig()
        self._progress_callback = progress_callback
        self._limiter = limiter or RequestLimiter(self._config.concurrency)
        self._target_langs = self._resolve_target_langs()

    @property
    def limiter(self) -> RequestLimiter:
        return self._limiter

    @property
    def target_langs(self) -> list[str]:
        return list(self._target_langs)

    async def run(self, paths: Sequence[Path] | None = None) -> RunSummary:
        """Translate every document concurrently.

        Args:
            paths: Source documents. Defaults to every ``.json`` file under
                ``config.source_dir``.

        Returns:
            Summary with one report per document.
        """
        if paths is None:
            paths = find_json_files(self._config.source_dir)
        total = len(paths)
        completed = 0

        async def _run_one(path: Path) -> DocumentReport:
            nonlocal completed
            report = await self.translate_document(path)
            completed += 1
            self._notify("document", completed, total, str(path))
            return report

        reports = await asyncio.gather(*(_run_one(Path(p)) for p in paths))
        return RunSummary(reports=list(reports), peak_in_flight=self._limiter.peak)

    async def translate_document(self, path: Path) -> DocumentReport:
        """Translate one document into every target language.

        Failures are recorded on the returned report instead of raised.
        """
        report = DocumentReport(path=path)
        try:
            document = self._stage_load(path)
        except PipelineError as exc:
            logger.error("Skipping %s: %s", path, exc)
            report.error = exc
            return report

        logger.info(
            "Translating %s (%d keys, %d unique strings)",
            document.relative_path,
            len(document.entries),
            len(document.unique_texts),
        )
        await asyncio.gather(
            *(self._translate_language(document, lang, report) for lang in self._target_langs)
        )
        return report

    async def _translate_language(
        self,
        document: SourceDocument,
        lang: str,
        report: DocumentReport,
    ) -> None:
        cache = await self._stage_fetch(document, lang)
        report.unique_strings += len(cache)
        report.fallbacks += cache.fallback_count

        try:
            output = self._stage_rebuild(document, cache)
            changed = self._stage_write(output)
        except PipelineError as exc:
            logger.error("Failed %s output for %s: %s", lang, document.path, exc)
            report.failed[lang] = exc
        else:
            if changed:
                report.written.append(lang)
            else:
                report.unchanged.append(lang)

        done = len(report.written) + len(report.unchanged) + len(report.failed)
        self._notify("language", done, len(self._target_langs), f"{document.relative_path} [{lang}]")

    def _stage_load(self, path: Path) -> SourceDocument:
        try:
            relative_path = path.relative_to(Path(self._config.source_dir))
        except ValueError as exc:
            raise DocumentReadError(
                f"{path} is not inside {self._config.source_dir}", cause=exc
            ) from exc

        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentReadError(f"Cannot read {path}", cause=exc) from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DocumentParseError(f"Invalid JSON in {path}", cause=exc) from exc
        if not isinstance(data, dict):
            raise DocumentParseError(
                f"Root of {path} is {type(data).__name__}, expected an object"
            )

        return SourceDocument(
            path=path,
            relative_path=relative_path,
            entries=flatten_tree(data),
        )

    async def _stage_fetch(self, document: SourceDocument, lang: str) -> LanguageCache:
        units = [TranslationUnit(text, lang) for text in sorted(document.unique_texts)]
        outcomes = await asyncio.gather(*(self._fetch_one(unit) for unit in units))
        return LanguageCache.from_outcomes(lang, outcomes)

    def _stage_rebuild(self, document: SourceDocument, cache: LanguageCache) -> OutputDocument:
        flat = cache.apply(document.entries)
        try:
            tree = build_tree(flat)
        except TreeConflictError as exc:
            raise ReconstructionConflict(
                f"Conflicting key '{exc.key}' in {document.relative_path} ({cache.target_lang})",
                key=exc.key,
                cause=exc,
            ) from exc
        return OutputDocument(
            target_lang=cache.target_lang,
            relative_path=document.relative_path,
            tree=tree,
        )

    def _stage_write(self, output: OutputDocument) -> bool:
        path = output_path_for(self._config.output_dir, output.target_lang, output.relative_path)
        content = serialize_tree(output.tree)
        try:
            return write_if_changed(path, content)
        except OSError as exc:
            raise WriteFailure(f"Cannot write {path}", path=path, cause=exc) from exc

    async def _fetch_one(self, unit: TranslationUnit) -> TranslationOutcome:
        try:
            translated = await self._translate_with_retry(unit.text, unit.target_lang)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning(
                "Keeping source text for %s translation of %r: %s",
                unit.target_lang,
                _preview(unit.text),
                reason,
            )
            return Fallback(source_text=unit.text, target_lang=unit.target_lang, reason=reason)
        return Translated(source_text=unit.text, target_lang=unit.target_lang, text=translated)

    async def _translate_with_retry(self, text: str, lang: str) -> str:
        last_error: Exception | None = None
        for attempt in range(self._config.max_retries + 1):
            try:
                return await self._limiter.run(self._call_backend, text, lang)
            except ConfigurationError:
                raise
            except (TranslationError, asyncio.TimeoutError) as exc:
                last_error = exc
                if attempt < self._config.max_retries:
                    delay = self._config.retry_delay * (2**attempt)
                    await asyncio.sleep(delay)

        if self._config.max_retries == 0 and last_error is not None:
            raise last_error
        raise TranslationError(
            f"Translation failed after {self._config.max_retries} retries: {last_error}"
        )

    async def _call_backend(self, text: str, lang: str) -> str:
        call = self._translator.translate(text, self._config.source_lang, lang)
        if self._config.request_timeout is not None:
            result = await asyncio.wait_for(call, timeout=self._config.request_timeout)
        else:
            result = await call

        if not isinstance(result, str):
            raise TranslationError(f"Backend returned {type(result).__name__} instead of text")
        if not result and text:
            raise TranslationError("Backend returned an empty translation")
        return result

    def _resolve_target_langs(self) -> list[str]:
        langs: list[str] = []
        for lang in self._config.target_langs:
            lang = lang.strip()
            if not lang or lang in langs:
                continue
            if lang == self._config.source_lang:
                logger.warning(
                    "Skipping target language '%s': it is the source language", lang
                )
                continue
            langs.append(lang)
        return langs

    def _notify(self, stage: str, current: int, total: int, message: str = "") -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(stage, current, total, message)


def _preview(text: str) -> str:
    if len(text) <= PREVIEW_LENGTH:
        return text
    return text[: PREVIEW_LENGTH - 3] + "..."
