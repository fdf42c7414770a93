# SPDX-License-Identifier: Apache-2.0
"""Translation pipeline package."""

from .errors import (
    DocumentParseError,
    DocumentReadError,
    PipelineError,
    ReconstructionConflict,
    WriteFailure,
)
from .language_cache import LanguageCache
from .limiter import RequestLimiter
from .progress import ProgressCallback
from .translation_pipeline import (
    DocumentReport,
    PipelineConfig,
    RunSummary,
    TranslationPipeline,
)

__all__ = [
    "DocumentParseError",
    "DocumentReadError",
    "DocumentReport",
    "LanguageCache",
    "PipelineConfig",
    "PipelineError",
    "ProgressCallback",
    "ReconstructionConflict",
    "RequestLimiter",
    "RunSummary",
    "TranslationPipeline",
    "WriteFailure",
]
