"""Selection tree construction and the tri-state selection invariant.

``TreeStore`` is the only writer of ``Node.selection``. Every mutation goes
through ``set_selected`` (or ``restore`` for history reverts), which keeps
each directory's state consistent with its eligible children:

- SELECTED when every eligible child is SELECTED,
- PARTIAL when some eligible child is SELECTED or PARTIAL,
- UNSELECTED otherwise.

Binary files and empty directories are never eligible and never change. A
directory counts as empty when nothing below it is eligible, so a folder of
images behaves like an empty one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from .scan import is_binary_file, list_entries
from .types import Node, NodeKind, SelectionState

logger = logging.getLogger(__name__)

SelectionSnapshot = tuple[tuple[Path, SelectionState], ...]


def derive_state(node: Node) -> SelectionState:
    """Aggregate ``node``'s state from its eligible children.

    Files and non-eligible directories have no eligible children and keep
    their own state.
    """
    eligible = node.eligible_children()
    if not eligible:
        return node.selection
    if all(child.selection is SelectionState.SELECTED for child in eligible):
        return SelectionState.SELECTED
    if any(child.selection is not SelectionState.UNSELECTED for child in eligible):
        return SelectionState.PARTIAL
    return SelectionState.UNSELECTED


class TreeStore:
    """Owns the node tree plus a path index used for parent lookups."""

    def __init__(self, root: Node) -> None:
        self.root = root
        self._nodes: dict[Path, Node] = {}
        for node in self._iter_subtree(root):
            self._nodes[node.path] = node
        self._mark_eligibility(root)

    @staticmethod
    def _iter_subtree(node: Node) -> Iterator[Node]:
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))

    @classmethod
    def _mark_eligibility(cls, root: Node) -> None:
        # Reversed pre-order visits every child before its parent.
        for node in reversed(list(cls._iter_subtree(root))):
            if node.is_dir:
                node.has_eligible_children = any(child.is_selectable for child in node.children)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    def walk(self) -> Iterator[Node]:
        """Yield every node (root included) in pre-order."""
        return self._iter_subtree(self.root)

    def node(self, path: Path) -> Node | None:
        return self._nodes.get(path)

    def find(self, relative_path: str) -> Node | None:
        """Look up a node by its root-relative POSIX path."""
        parts = [part for part in relative_path.strip().split("/") if part and part != "."]
        if not parts:
            return self.root
        return self._nodes.get(self.root.path.joinpath(*parts))

    def relative_path(self, node: Node) -> str:
        return node.path.relative_to(self.root.path).as_posix()

    def parent_of(self, node: Node) -> Node | None:
        if node.parent is None:
            return None
        return self._nodes.get(node.parent)

    def ancestors(self, node: Node) -> Iterator[Node]:
        """Yield ``node``'s ancestors from nearest to the root."""
        parent = self.parent_of(node)
        while parent is not None:
            yield parent
            parent = self.parent_of(parent)

    def selected_leaves(self) -> list[Node]:
        """Return selected files in tree order."""
        return [node for node in self.walk() if not node.is_dir and node.is_selected]

    def set_selected(self, node: Node, target: bool) -> bool:
        """Select or deselect ``node`` and its subtree, then re-derive ancestors.

        Returns whether any node changed state. Binary files and empty
        directories are left untouched.
        """
        if not node.is_selectable:
            return False
        state = SelectionState.SELECTED if target else SelectionState.UNSELECTED
        changed = self._assign_subtree(node, state)
        if self._propagate_up(node):
            changed = True
        return changed

    def _assign_subtree(self, node: Node, state: SelectionState) -> bool:
        changed = False
        for current in self._iter_subtree(node):
            if not current.is_selectable or current.selection is state:
                continue
            current.selection = state
            changed = True
        return changed

    def _propagate_up(self, node: Node) -> bool:
        changed = False
        for ancestor in self.ancestors(node):
            recomputed = derive_state(ancestor)
            if recomputed is ancestor.selection:
                break
            ancestor.selection = recomputed
            changed = True
        return changed

    def toggle_expand(self, node: Node) -> None:
        if node.is_dir:
            node.expanded = not node.expanded

    def set_expanded(self, node: Node, expanded: bool) -> bool:
        """Set directory expansion explicitly, returning whether it changed."""
        if not node.is_dir or node.expanded == expanded:
            return False
        node.expanded = expanded
        return True

    def affected_by(self, nodes: Iterable[Node]) -> list[Node]:
        """Return every node ``set_selected`` on ``nodes`` could touch.

        That is each node's subtree plus its ancestor chain, deduplicated in
        first-seen order.
        """
        seen: dict[Path, Node] = {}
        for node in nodes:
            for current in self._iter_subtree(node):
                seen.setdefault(current.path, current)
            for ancestor in self.ancestors(node):
                seen.setdefault(ancestor.path, ancestor)
        return list(seen.values())

    def snapshot(self, nodes: Iterable[Node]) -> SelectionSnapshot:
        """Capture ``(path, state)`` pairs for selectable ``nodes``."""
        return tuple((node.path, node.selection) for node in nodes if node.is_selectable)

    def restore(self, entries: SelectionSnapshot) -> None:
        """Assign previously captured states back onto their nodes.

        Only meant for history reverts, where ``entries`` covers every node
        changed since the snapshot was taken.
        """
        for path, state in entries:
            node = self._nodes.get(path)
            if node is not None and node.is_selectable:
                node.selection = state


def build_tree(
    root: Path,
    ignore: Iterable[str] = (),
    is_binary: Callable[[Path], bool] = is_binary_file,
) -> TreeStore:
    """Scan ``root`` recursively and return a fully expanded ``TreeStore``.

    Entries whose root-relative POSIX path contains any ``ignore`` substring
    are skipped, and ignored directories are not descended. Unreadable
    entries are dropped; the scan itself never raises.
    """
    root = root.resolve()
    patterns = tuple(pattern for pattern in ignore if pattern)
    root_node = Node(name=root.name or str(root), path=root, kind=NodeKind.DIRECTORY, depth=0)

    def is_ignored(path: Path) -> bool:
        relative = path.relative_to(root).as_posix()
        return any(pattern in relative for pattern in patterns)

    def build_children(directory: Node) -> None:
        entries, scan_error = list_entries(directory.path)
        if scan_error is not None:
            logger.debug("cannot scan %s: %s", directory.path, scan_error)
            return
        for entry in entries:
            if is_ignored(entry.path):
                continue
            if entry.is_dir:
                child = Node(
                    name=entry.name,
                    path=entry.path,
                    kind=NodeKind.DIRECTORY,
                    depth=directory.depth + 1,
                    parent=directory.path,
                )
                build_children(child)
            else:
                try:
                    binary = is_binary(entry.path)
                except OSError as exc:
                    logger.debug("skipping %s: %s", entry.path, exc)
                    continue
                child = Node(
                    name=entry.name,
                    path=entry.path,
                    kind=NodeKind.FILE,
                    depth=directory.depth + 1,
                    size=entry.size,
                    is_binary=binary,
                    parent=directory.path,
                )
            directory.children.append(child)

    build_children(root_node)
    store = TreeStore(root_node)
    logger.debug("scanned %s: %d nodes", root, len(store))
    return store


__all__ = [
    "SelectionSnapshot",
    "TreeStore",
    "build_tree",
    "derive_state",
]
