# SPDX-License-Identifier: Apache-2.0
"""Progress callback protocol for translation pipeline."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressCallback(Protocol):
    """Progress callback protocol.

    Stages:
        "language": one language output of a document finished;
            ``current``/``total`` count the document's languages and
            ``message`` is ``"<relative path> [<lang>]"``.
        "document": a document finished (successfully or not);
            ``current``/``total`` count documents and ``message`` is its path.
    """

    def __call__(
        self,
        stage: str,
        current: int,
        total: int,
        message: str = "",
    ) -> None: ...
