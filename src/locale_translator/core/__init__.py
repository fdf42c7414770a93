# SPDX-License-Identifier: Apache-2.0
"""Core tree transforms and data models."""

from .discovery import find_json_files, output_path_for
from .models import (
    Fallback,
    OutputDocument,
    SourceDocument,
    Translated,
    TranslationOutcome,
    TranslationUnit,
)
from .tree import (
    SEPARATOR,
    ObjectNode,
    OtherLeaf,
    StringLeaf,
    TreeConflictError,
    build_tree,
    flatten_tree,
    to_node,
    unique_texts,
)

__all__ = [
    "SEPARATOR",
    "Fallback",
    "ObjectNode",
    "OtherLeaf",
    "OutputDocument",
    "SourceDocument",
    "StringLeaf",
    "Translated",
    "TranslationOutcome",
    "TranslationUnit",
    "TreeConflictError",
    "build_tree",
    "find_json_files",
    "flatten_tree",
    "output_path_for",
    "to_node",
    "unique_texts",
]
