"""Interactive session bootstrap.

Scans the root, overlays the persisted selection, wires the controller,
and runs the terminal loop. The selection is written after every change
and once more on exit.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from ..controller import SelectionController
from ..input import KeyResolver, build_keymap, format_key_sequence
from ..logs import configure_logging
from ..persistence import load_selection, persist_store, restore_selection
from ..selection_tree import TreeStore, build_tree
from ..ui_theme import resolve_theme
from . import config
from .loop import RuntimeLoopOptions, run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def load_session(root: Path) -> TreeStore:
    """Build the tree for ``root`` and apply its saved selection."""
    store = build_tree(root, ignore=config.load_ignore_patterns())
    missing = restore_selection(store, load_selection(store.root.path))
    if missing:
        logger.info("%d saved entries no longer match a file", len(missing))
    return store


def build_resolver() -> KeyResolver:
    resolver = KeyResolver(build_keymap(config.load_keymap_overrides()))
    for sequence in resolver.shadowed():
        logger.warning("key binding %r is unreachable behind a shorter binding", format_key_sequence(sequence))
    return resolver


def run_tui(
    root: Path,
    theme_name: str | None = None,
    no_color: bool = False,
    export_format: str = "plain",
) -> None:
    """Open the interactive selector on ``root``."""
    configure_logging()
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("punjado needs an interactive terminal; use list/copy for scripting.")

    logger.info("starting punjado TUI at %s", root)
    store = load_session(root)
    controller = SelectionController(
        store,
        build_resolver(),
        on_selection_changed=lambda: persist_store(store),
        export_format=export_format,
    )
    theme = resolve_theme(theme_name or config.load_theme_name(), no_color=no_color)
    options = RuntimeLoopOptions(theme=theme, token_warning=config.load_token_warning())

    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    try:
        with terminal.raw_mode():
            run_main_loop(controller, terminal, stdin_fd, options)
    finally:
        persist_store(store)
