"""Node datatypes for the selectable file tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class SelectionState(Enum):
    """Tri-state selection marker carried by every node."""

    UNSELECTED = "unselected"
    SELECTED = "selected"
    PARTIAL = "partial"


class NodeKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(eq=False)
class Node:
    """One file or directory in the session tree.

    ``children`` is owned by the node. ``parent`` is only the parent's path
    key; resolve it through ``TreeStore.parent_of`` when walking upward.
    ``has_eligible_children`` is filled in by ``TreeStore`` once the tree is
    complete.
    """

    name: str
    path: Path
    kind: NodeKind
    depth: int
    size: int = 0
    is_binary: bool = False
    parent: Path | None = None
    children: list[Node] = field(default_factory=list)
    expanded: bool = True
    selection: SelectionState = SelectionState.UNSELECTED
    has_eligible_children: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_empty_dir(self) -> bool:
        """Directory with nothing selectable below it, however many children."""
        return self.is_dir and not self.has_eligible_children

    @property
    def is_selectable(self) -> bool:
        """Return whether selection can ever change for this node."""
        return not self.is_binary and not self.is_empty_dir

    @property
    def is_selected(self) -> bool:
        return self.selection is SelectionState.SELECTED

    def eligible_children(self) -> list[Node]:
        """Children that count toward this node's aggregated state."""
        return [child for child in self.children if child.is_selectable]

    def __repr__(self) -> str:
        return f"Node({self.path!s}, {self.kind.value}, {self.selection.value})"


__all__ = [
    "Node",
    "NodeKind",
    "SelectionState",
]
