"""Interactive selection controller.

Turns key tokens into tree mutations: the ``KeyResolver`` yields a
``Command``, the matching handler mutates the ``TreeStore`` (selection
changes always go through ``HistoryManager.commit``), and the visible row
list is re-flattened. Cursor, scrolling, and expansion changes are applied
directly and never recorded in history.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .export import ClipboardError, build_context_text, copy_to_clipboard, estimate_tokens
from .history import BulkSetSelection, HistoryManager, SetSelection
from .input import Command, KeyResolver
from .persistence import selected_relative_paths
from .selection_tree import Node, TreeStore, first_visible_index, flatten_visible

logger = logging.getLogger(__name__)


class SelectionController:
    """Own cursor/viewport state and dispatch commands for one session."""

    def __init__(
        self,
        store: TreeStore,
        resolver: KeyResolver,
        history: HistoryManager | None = None,
        on_selection_changed: Callable[[], None] | None = None,
        clipboard: Callable[[str], None] = copy_to_clipboard,
        export_format: str = "plain",
        viewport_rows: int = 20,
    ) -> None:
        self.store = store
        self.resolver = resolver
        self.history = history if history is not None else HistoryManager(store)
        self.on_selection_changed = on_selection_changed
        self.clipboard = clipboard
        self.export_format = export_format
        self.viewport_rows = max(1, viewport_rows)
        self.visible: list[Node] = flatten_visible(store.root)
        self.cursor = 0
        self.top = 0
        self.show_help = False
        self.quitting = False
        self.status_message = ""
        self._handlers: dict[Command, Callable[[], None]] = {
            Command.MOVE_DOWN: lambda: self.move_cursor(1),
            Command.MOVE_UP: lambda: self.move_cursor(-1),
            Command.PAGE_DOWN: lambda: self.move_cursor(self.viewport_rows),
            Command.PAGE_UP: lambda: self.move_cursor(-self.viewport_rows),
            Command.GOTO_TOP: self.goto_top,
            Command.GOTO_BOTTOM: self.goto_bottom,
            Command.TOGGLE_SELECTION: self.toggle_selection,
            Command.TOGGLE_ALL: self.toggle_all,
            Command.TOGGLE_DIRECTORY: self.toggle_directory,
            Command.TOGGLE_EXPAND_ALL: self.toggle_expand_all,
            Command.UNDO: self.undo,
            Command.REDO: self.redo,
            Command.COPY: self.copy_selection,
            Command.TOGGLE_HELP: self.toggle_help,
            Command.CLOSE_HELP: self.close_help,
            Command.QUIT: self.quit,
        }

    @property
    def current_node(self) -> Node | None:
        if not self.visible:
            return None
        return self.visible[self.cursor]

    def handle_key(self, token: str) -> bool:
        """Feed one key token and return ``True`` when the app should quit."""
        command = self.resolver.feed(token)
        if command is not None:
            self.execute(command)
        return self.quitting

    def execute(self, command: Command) -> None:
        logger.debug("running command %s", command.value)
        self.status_message = ""
        self._handlers[command]()

    def set_viewport_rows(self, rows: int) -> None:
        self.viewport_rows = max(1, rows)
        self._scroll_to_cursor()

    def _scroll_to_cursor(self) -> None:
        if self.cursor < self.top:
            self.top = self.cursor
        elif self.cursor >= self.top + self.viewport_rows:
            self.top = self.cursor - self.viewport_rows + 1
        max_top = max(0, len(self.visible) - self.viewport_rows)
        self.top = max(0, min(self.top, max_top))

    def _set_cursor(self, index: int) -> None:
        last = len(self.visible) - 1
        self.cursor = max(0, min(index, last)) if last >= 0 else 0
        self._scroll_to_cursor()

    def refresh(self, keep: Node | None = None) -> None:
        """Re-flatten the tree, keeping the cursor on ``keep`` when possible.

        If ``keep`` is hidden inside a collapsed directory the cursor moves to
        its nearest visible ancestor.
        """
        self.visible = flatten_visible(self.store.root)
        if keep is None:
            self._set_cursor(self.cursor)
            return
        for candidate in (keep, *self.store.ancestors(keep)):
            idx = first_visible_index(self.visible, candidate)
            if idx is not None:
                self._set_cursor(idx)
                return
        self._set_cursor(self.cursor)

    def move_cursor(self, delta: int) -> None:
        self._set_cursor(self.cursor + delta)

    def goto_top(self) -> None:
        self._set_cursor(0)

    def goto_bottom(self) -> None:
        self._set_cursor(len(self.visible) - 1)

    def _selection_changed(self) -> None:
        if self.on_selection_changed is not None:
            self.on_selection_changed()

    def toggle_selection(self) -> None:
        node = self.current_node
        if node is None or not node.is_selectable:
            return
        action = SetSelection.capture(self.store, node, not node.is_selected)
        if self.history.commit(action):
            self._selection_changed()

    def toggle_all(self) -> None:
        """Select every visible eligible row, or deselect all if all are selected."""
        eligible = [node for node in self.visible if node.is_selectable]
        if not eligible:
            return
        target = not all(node.is_selected for node in eligible)
        action = BulkSetSelection.capture(self.store, eligible, target)
        if self.history.commit(action):
            self._selection_changed()

    def toggle_directory(self) -> None:
        node = self.current_node
        if node is None or not node.is_dir:
            return
        self.store.toggle_expand(node)
        self.refresh(keep=node)

    def toggle_expand_all(self) -> None:
        """Expand every visible directory, or collapse them all if all are open."""
        directories = [node for node in self.visible if node.is_dir]
        if not directories:
            return
        expanded = not all(node.expanded for node in directories)
        current = self.current_node
        for node in directories:
            self.store.set_expanded(node, expanded)
        self.refresh(keep=current)

    def undo(self) -> None:
        if self.history.undo() is not None:
            self._selection_changed()
        else:
            self.status_message = "Nothing to undo"

    def redo(self) -> None:
        if self.history.redo() is not None:
            self._selection_changed()
        else:
            self.status_message = "Nothing to redo"

    def copy_selection(self) -> None:
        paths = selected_relative_paths(self.store)
        if not paths:
            self.status_message = "Nothing selected"
            return
        text = build_context_text(self.store.root.path, paths, self.export_format)
        try:
            self.clipboard(text)
        except ClipboardError as exc:
            logger.warning("clipboard copy failed: %s", exc)
            self.status_message = f"Clipboard error: {exc}"
            return
        noun = "file" if len(paths) == 1 else "files"
        self.status_message = f"Copied {len(paths)} {noun} to clipboard"

    def toggle_help(self) -> None:
        self.show_help = not self.show_help

    def close_help(self) -> None:
        self.show_help = False

    def quit(self) -> None:
        self.quitting = True

    def selected_bytes(self) -> int:
        return sum(node.size for node in self.store.selected_leaves())

    def token_estimate(self) -> int:
        return estimate_tokens(self.selected_bytes())

    @property
    def root_path(self) -> Path:
        return self.store.root.path
