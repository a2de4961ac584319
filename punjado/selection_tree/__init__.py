"""Selectable file tree: node types, scanning, invariant, and flattening.

This package has no terminal concerns:
- ``types``: ``Node`` plus selection/kind enums
- ``scan``: directory listing and binary sniffing
- ``store``: tree build and the tri-state selection invariant
- ``flatten``: expand-aware projection into visible rows
"""

from __future__ import annotations

from .flatten import first_visible_index, flatten_visible
from .scan import BINARY_EXTENSIONS, ScanEntry, is_binary_file, list_entries
from .store import SelectionSnapshot, TreeStore, build_tree, derive_state
from .types import Node, NodeKind, SelectionState

__all__ = [
    "BINARY_EXTENSIONS",
    "Node",
    "NodeKind",
    "ScanEntry",
    "SelectionSnapshot",
    "SelectionState",
    "TreeStore",
    "build_tree",
    "derive_state",
    "first_visible_index",
    "flatten_visible",
    "is_binary_file",
    "list_entries",
]
