# SPDX-License-Identifier: Apache-2.0
"""Flatten and rebuild nested localization trees.

A localization document is a JSON object whose values are either nested
objects or strings. Only string leaves are translatable; numbers, booleans,
null and arrays are dropped when flattening.

Flattened keys join the object keys from the root with ``SEPARATOR``:

    {"menu": {"open": "Open"}}  <->  {"menu.open": "Open"}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

SEPARATOR = "."


@dataclass(frozen=True)
class ObjectNode:
    """Object node mapping keys to child nodes."""

    children: dict[str, Node]


@dataclass(frozen=True)
class StringLeaf:
    """Translatable string leaf."""

    value: str


@dataclass(frozen=True)
class OtherLeaf:
    """Non-string leaf (number, boolean, null, array). Never translated."""

    value: Any


Node = Union[ObjectNode, StringLeaf, OtherLeaf]


class TreeConflictError(ValueError):
    """A flat key needs an object where a string leaf already sits (or vice versa).

    Attributes:
        key: The flat key that could not be placed.
        path: The path at which the conflicting node was found.
    """

    def __init__(self, key: str, path: str) -> None:
        super().__init__(f"Key '{key}' conflicts with existing node at '{path}'")
        self.key = key
        self.path = path


def to_node(value: Any) -> Node:
    """Convert decoded JSON data into the tagged node representation."""
    if isinstance(value, dict):
        return ObjectNode({str(k): to_node(v) for k, v in value.items()})
    if isinstance(value, str):
        return StringLeaf(value)
    return OtherLeaf(value)


def flatten_tree(tree: Node | Mapping[str, Any]) -> dict[str, str]:
    """Flatten a tree into a ``{dotted_key: string}`` mapping sorted by key.

    Children are visited in sorted key order. If two different paths produce
    the same dotted key (a key that itself contains ``SEPARATOR``), the one
    visited last wins.

    Args:
        tree: Decoded JSON data or an already converted node.

    Returns:
        Mapping from dotted key to string value, in lexicographic key order.
    """
    node = tree if isinstance(tree, (ObjectNode, StringLeaf, OtherLeaf)) else to_node(tree)
    flat: dict[str, str] = {}
    _flatten_into(node, None, flat)
    return dict(sorted(flat.items()))


def _flatten_into(node: Node, prefix: str | None, out: dict[str, str]) -> None:
    # prefix is None only at the root; "" is a real (empty) key
    if isinstance(node, ObjectNode):
        for key in sorted(node.children):
            path = key if prefix is None else f"{prefix}{SEPARATOR}{key}"
            _flatten_into(node.children[key], path, out)
    elif isinstance(node, StringLeaf):
        out["" if prefix is None else prefix] = node.value
    elif isinstance(node, OtherLeaf):
        return
    else:
        raise TypeError(f"Unknown node type: {type(node).__name__}")


def build_tree(flat: Mapping[str, str]) -> dict[str, Any]:
    """Rebuild a nested tree from a flat ``{dotted_key: string}`` mapping.

    Keys are placed in sorted order, so a leaf always lands before any key it
    is a prefix of. The first key to claim a path wins and the later key
    raises; nothing is overwritten.

    Args:
        flat: Flat mapping as produced by :func:`flatten_tree`.

    Returns:
        Nested dictionary.

    Raises:
        TreeConflictError: If a key is both a leaf and a prefix of another key.
    """
    root: dict[str, Any] = {}
    for key in sorted(flat):
        parts = key.split(SEPARATOR)
        node = root
        for depth, part in enumerate(parts[:-1]):
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise TreeConflictError(key, SEPARATOR.join(parts[: depth + 1]))
            node = child

        leaf = parts[-1]
        if isinstance(node.get(leaf), dict):
            raise TreeConflictError(key, key)
        node[leaf] = flat[key]
    return root


def unique_texts(entries: Mapping[str, str] | Iterable[str]) -> frozenset[str]:
    """Return the distinct source strings of a flattened document.

    Comparison is exact: no trimming or case folding.
    """
    values = entries.values() if isinstance(entries, Mapping) else entries
    return frozenset(values)
