"""Projection of the expanded tree into the rows the user currently sees."""

from __future__ import annotations

from .types import Node


def flatten_visible(root: Node) -> list[Node]:
    """Return visible nodes in pre-order, starting below ``root``.

    ``root`` itself is never included. Children of a directory are emitted
    only while that directory is expanded, so collapsed subtrees vanish
    from the result entirely.
    """
    visible: list[Node] = []
    if not root.expanded:
        return visible

    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        visible.append(node)
        if node.is_dir and node.expanded:
            stack.extend(reversed(node.children))
    return visible


def first_visible_index(visible: list[Node], node: Node) -> int | None:
    """Return the row index of ``node`` in ``visible``, if shown."""
    for idx, candidate in enumerate(visible):
        if candidate is node:
            return idx
    return None
