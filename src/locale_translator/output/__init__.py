# SPDX-License-Identifier: Apache-2.0
"""Output serialization and file writing."""

from .writer import read_existing, serialize_tree, write_if_changed

__all__ = [
    "read_existing",
    "serialize_tree",
    "write_if_changed",
]
