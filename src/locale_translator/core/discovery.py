# SPDX-License-Identifier: Apache-2.0
"""Locate source localization files and map them to output paths."""

from __future__ import annotations

from pathlib import Path

JSON_SUFFIX = ".json"


def find_json_files(source_dir: Path | str) -> list[Path]:
    """Recursively list ``.json`` files under a directory.

    Args:
        source_dir: Root directory to search.

    Returns:
        Sorted list of file paths. Empty if the directory does not exist.
    """
    root = Path(source_dir)
    if not root.is_dir():
        return []
    return sorted(
        path for path in root.rglob(f"*{JSON_SUFFIX}") if path.is_file()
    )


def output_path_for(
    output_dir: Path | str,
    target_lang: str,
    relative_path: Path,
) -> Path:
    """Return ``<output_dir>/<target_lang>/<relative_path>``."""
    return Path(output_dir) / target_lang / relative_path
