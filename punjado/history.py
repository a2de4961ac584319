"""Undo/redo history over reversible selection actions.

Actions are plain frozen data: each records what it sets and the prior
state of every node it can touch, so history entries can be inspected and
compared without replaying them. Only selection changes are recorded;
cursor moves and expand/collapse never enter the history.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .selection_tree import Node, SelectionSnapshot, SelectionState, TreeStore

MAX_HISTORY_ENTRIES = 512


def _target_state(target: bool) -> SelectionState:
    return SelectionState.SELECTED if target else SelectionState.UNSELECTED


@dataclass(frozen=True)
class SetSelection:
    """Select or deselect one node (and, through the store, its subtree)."""

    path: Path
    new_state: SelectionState
    previous: SelectionSnapshot

    @classmethod
    def capture(cls, store: TreeStore, node: Node, target: bool) -> SetSelection:
        return cls(
            path=node.path,
            new_state=_target_state(target),
            previous=store.snapshot(store.affected_by([node])),
        )

    @property
    def previous_state(self) -> SelectionState | None:
        """State of the target node itself before the action ran."""
        for path, state in self.previous:
            if path == self.path:
                return state
        return None

    def apply(self, store: TreeStore) -> bool:
        node = store.node(self.path)
        if node is None:
            return False
        return store.set_selected(node, self.new_state is SelectionState.SELECTED)

    def revert(self, store: TreeStore) -> None:
        store.restore(self.previous)


@dataclass(frozen=True)
class BulkSetSelection:
    """Set many nodes to one state as a single undoable step."""

    paths: tuple[Path, ...]
    new_state: SelectionState
    previous: SelectionSnapshot

    @classmethod
    def capture(cls, store: TreeStore, nodes: Iterable[Node], target: bool) -> BulkSetSelection:
        targets = tuple(nodes)
        return cls(
            paths=tuple(node.path for node in targets),
            new_state=_target_state(target),
            previous=store.snapshot(store.affected_by(targets)),
        )

    def apply(self, store: TreeStore) -> bool:
        target = self.new_state is SelectionState.SELECTED
        changed = False
        for path in self.paths:
            node = store.node(path)
            if node is not None and store.set_selected(node, target):
                changed = True
        return changed

    def revert(self, store: TreeStore) -> None:
        store.restore(self.previous)


Action = SetSelection | BulkSetSelection


class HistoryManager:
    """Linear undo/redo stacks bound to one ``TreeStore``.

    Committing a new action discards everything that was undone, so there
    is never more than one future. The undo stack is bounded; the oldest
    entries fall off first.
    """

    def __init__(self, store: TreeStore, max_entries: int = MAX_HISTORY_ENTRIES) -> None:
        self.store = store
        self.max_entries = max(1, max_entries)
        self.undo_stack: list[Action] = []
        self.redo_stack: list[Action] = []

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def commit(self, action: Action) -> bool:
        """Apply ``action``, record it, and clear the redo stack."""
        changed = action.apply(self.store)
        self.undo_stack.append(action)
        overflow = len(self.undo_stack) - self.max_entries
        if overflow > 0:
            del self.undo_stack[:overflow]
        self.redo_stack.clear()
        return changed

    def undo(self) -> Action | None:
        if not self.undo_stack:
            return None
        action = self.undo_stack.pop()
        action.revert(self.store)
        self.redo_stack.append(action)
        return action

    def redo(self) -> Action | None:
        if not self.redo_stack:
            return None
        action = self.redo_stack.pop()
        action.apply(self.store)
        self.undo_stack.append(action)
        return action

    def clear(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()


__all__ = [
    "Action",
    "BulkSetSelection",
    "HistoryManager",
    "MAX_HISTORY_ENTRIES",
    "SetSelection",
]
