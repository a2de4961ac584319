"""Selected-file persistence in the session root.

The selection lives in ``<root>/.punjado``: one root-relative POSIX path per
line, naming selected files only. Directories are never written; loading
re-selects each file and lets the tree re-derive its ancestors. Both
directions are non-fatal: a missing or unreadable file reads as an empty
selection, and write errors are logged and ignored.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Iterable
from pathlib import Path

from .selection_tree import TreeStore

logger = logging.getLogger(__name__)

SELECTION_FILENAME = ".punjado"


def selection_file(root: Path) -> Path:
    return root / SELECTION_FILENAME


def normalize_relative_path(raw: str) -> str:
    """Normalize a user or file supplied path to the stored POSIX form.

    Returns ``""`` for blank input and paths that climb above the root.
    """
    cleaned = raw.strip().replace("\\", "/")
    if not cleaned:
        return ""
    normalized = posixpath.normpath(cleaned)
    if normalized in {".", ""} or normalized == ".." or normalized.startswith("../") or normalized.startswith("/"):
        return ""
    return normalized


def parse_selection(text: str) -> set[str]:
    paths: set[str] = set()
    for line in text.splitlines():
        normalized = normalize_relative_path(line)
        if normalized:
            paths.add(normalized)
    return paths


def load_selection(root: Path) -> set[str]:
    """Read the persisted selection for ``root``."""
    try:
        text = selection_file(root).read_text(encoding="utf-8")
    except FileNotFoundError:
        return set()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("cannot read selection file in %s: %s", root, exc)
        return set()
    return parse_selection(text)


def save_selection(root: Path, paths: Iterable[str]) -> bool:
    """Write ``paths`` sorted, one per line. Returns ``False`` on failure."""
    lines = sorted({normalized for normalized in map(normalize_relative_path, paths) if normalized})
    content = "\n".join(lines)
    if lines:
        content += "\n"
    try:
        selection_file(root).write_text(content, encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write selection file in %s: %s", root, exc)
        return False
    return True


def selected_relative_paths(store: TreeStore) -> list[str]:
    """Return selected files as root-relative paths in tree order."""
    return [store.relative_path(node) for node in store.selected_leaves()]


def restore_selection(store: TreeStore, paths: Iterable[str]) -> list[str]:
    """Select every stored file present in ``store``.

    Returns the paths that were not found (or name directories) so callers
    can report stale entries.
    """
    missing: list[str] = []
    for raw in sorted(paths):
        node = store.find(raw)
        if node is None or node.is_dir or node is store.root:
            missing.append(raw)
            continue
        store.set_selected(node, True)
    if missing:
        logger.debug("stale selection entries: %s", missing)
    return missing


def persist_store(store: TreeStore) -> bool:
    return save_selection(store.root.path, selected_relative_paths(store))


__all__ = [
    "SELECTION_FILENAME",
    "load_selection",
    "normalize_relative_path",
    "parse_selection",
    "persist_store",
    "restore_selection",
    "save_selection",
    "selected_relative_paths",
    "selection_file",
]
