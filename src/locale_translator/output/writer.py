# SPDX-License-Identifier: Apache-2.0
"""Canonical JSON serialization and change-only file writes."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

JSON_INDENT = 2


def serialize_tree(tree: dict[str, Any]) -> str:
    """Serialize a tree to canonical JSON.

    Keys are sorted and indentation is fixed so that the same tree always
    produces the same text.
    """
    return json.dumps(tree, indent=JSON_INDENT, ensure_ascii=False, sort_keys=True) + "\n"


def read_existing(path: Path) -> str | None:
    """Read current file content, or None if it is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read existing %s (%s); it will be replaced", path, exc)
        return None


def write_if_changed(path: Path, content: str) -> bool:
    """Write content to path unless the file already holds exactly that content.

    The new content is written to a temporary file in the same directory and
    moved into place with :func:`os.replace`, so readers see either the old or
    the new file.

    Args:
        path: Destination file.
        content: Candidate file content.

    Returns:
        True if the file was written, False if it was already up to date.

    Raises:
        OSError: If directories or the file cannot be written.
    """
    if read_existing(path) == content:
        logger.debug("Unchanged: %s", path)
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise

    logger.debug("Wrote %s", path)
    return True
