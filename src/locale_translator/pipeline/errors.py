# SPDX-License-Identifier: Apache-2.0
"""Pipeline error definitions."""

from __future__ import annotations

from pathlib import Path


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    default_stage = "pipeline"

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage
        self.cause = cause

    def __str__(self) -> str:
        text = f"[{self.stage}] {self.message}"
        if self.cause is not None:
            text += f" (caused by {type(self.cause).__name__}: {self.cause})"
        return text


class DocumentReadError(PipelineError):
    """Source document could not be read."""

    default_stage = "read"


class DocumentParseError(PipelineError):
    """Source document is not a JSON object."""

    default_stage = "parse"


class ReconstructionConflict(PipelineError):
    """A flat key collides with a leaf/object at the same path while rebuilding."""

    default_stage = "rebuild"

    def __init__(
        self,
        message: str,
        key: str,
        stage: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, stage=stage, cause=cause)
        self.key = key


class WriteFailure(PipelineError):
    """Output document could not be written."""

    default_stage = "write"

    def __init__(
        self,
        message: str,
        path: Path,
        stage: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, stage=stage, cause=cause)
        self.path = path
