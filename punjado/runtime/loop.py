"""Main interactive event loop for the terminal UI.

Strictly one event at a time: render, block for a key, dispatch it through
the controller. The loop owns no feature logic of its own.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..controller import SelectionController
from ..input import UNKNOWN_KEY, read_key
from ..render import body_rows, render_screen
from ..ui_theme import UITheme
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopOptions:
    """Presentation settings for ``run_main_loop``."""

    theme: UITheme
    token_warning: int


def run_main_loop(
    controller: SelectionController,
    terminal: TerminalController,
    stdin_fd: int,
    options: RuntimeLoopOptions,
    read_key_fn: Callable[[int], str] = read_key,
    terminal_size: Callable[[], tuple[int, int]] | None = None,
) -> None:
    """Run until the controller reports a quit or stdin reaches EOF."""

    def current_size() -> tuple[int, int]:
        if terminal_size is not None:
            return terminal_size()
        size = shutil.get_terminal_size((80, 24))
        return size.columns, size.lines

    while True:
        columns, lines = current_size()
        controller.set_viewport_rows(body_rows(controller, lines))
        terminal.draw(render_screen(controller, columns, lines, options.token_warning, options.theme))

        key = read_key_fn(stdin_fd)
        if not key:
            return
        if key == UNKNOWN_KEY:
            continue
        if controller.handle_key(key):
            return
