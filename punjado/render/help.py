"""Footer hints and the expanded help panel.

Both are derived from the active key map, so user overrides show up in
the help text. Rendering here is presentation-only and side-effect free.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..input import Command, KeySequence, format_key_sequence
from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import display_width, pad_ansi_line

HELP_GROUPS: tuple[tuple[str, tuple[tuple[Command, str], ...]], ...] = (
    (
        "NAVIGATION",
        (
            (Command.MOVE_UP, "Up"),
            (Command.MOVE_DOWN, "Down"),
            (Command.PAGE_UP, "Page Up"),
            (Command.PAGE_DOWN, "Page Down"),
            (Command.GOTO_TOP, "Go to Top"),
            (Command.GOTO_BOTTOM, "Go to Bottom"),
        ),
    ),
    (
        "SELECTION",
        (
            (Command.TOGGLE_SELECTION, "Toggle Selection"),
            (Command.TOGGLE_ALL, "Toggle All Visible"),
            (Command.TOGGLE_DIRECTORY, "Open/Close Dir"),
            (Command.TOGGLE_EXPAND_ALL, "Expand/Collapse All"),
            (Command.UNDO, "Undo"),
            (Command.REDO, "Redo"),
        ),
    ),
    (
        "ACTIONS",
        (
            (Command.COPY, "Copy to Clipboard"),
            (Command.TOGGLE_HELP, "Toggle Help"),
            (Command.CLOSE_HELP, "Close Help"),
            (Command.QUIT, "Quit"),
        ),
    ),
)

FOOTER_HINTS: tuple[tuple[Command, str], ...] = (
    (Command.MOVE_DOWN, "move"),
    (Command.TOGGLE_SELECTION, "select"),
    (Command.TOGGLE_DIRECTORY, "open dir"),
    (Command.TOGGLE_ALL, "toggle all"),
    (Command.UNDO, "undo"),
    (Command.COPY, "copy"),
    (Command.TOGGLE_HELP, "help"),
    (Command.QUIT, "quit"),
)

HELP_COLUMN_GAP = 4


def keys_for(bindings: Mapping[KeySequence, Command], command: Command) -> list[str]:
    """Return display labels for every sequence bound to ``command``."""
    labels = [format_key_sequence(sequence) for sequence, bound in bindings.items() if bound is command]
    return sorted(labels, key=lambda label: (len(label), label))


def format_footer(
    bindings: Mapping[KeySequence, Command],
    width: int,
    pending: KeySequence = (),
    status: str = "",
    theme: UITheme | None = None,
) -> str:
    """Key hints on the left; pending chord or status message on the right."""
    active_theme = theme or DEFAULT_THEME
    parts: list[str] = []
    for command, desc in FOOTER_HINTS:
        labels = keys_for(bindings, command)
        if not labels:
            continue
        parts.append(
            f"{active_theme.footer_key} {labels[0]} {active_theme.reset}"
            f" {active_theme.footer_desc}{desc}{active_theme.reset}  "
        )
    left = "".join(parts)

    right = ""
    if pending:
        right = f"{active_theme.footer_pending}{format_key_sequence(pending)}{active_theme.reset}"
    elif status:
        right = f"{active_theme.footer_status}{status}{active_theme.reset}"

    right_width = display_width(right)
    left = pad_ansi_line(left, max(0, width - right_width))
    return pad_ansi_line(left + right, width) + active_theme.reset


def help_columns(bindings: Mapping[KeySequence, Command], theme: UITheme | None = None) -> list[list[str]]:
    active_theme = theme or DEFAULT_THEME
    columns: list[list[str]] = []
    for title, entries in HELP_GROUPS:
        lines = [f"{active_theme.help_heading}{title}{active_theme.reset}"]
        for command, desc in entries:
            labels = keys_for(bindings, command)
            if not labels:
                continue
            keys = "/".join(labels)
            lines.append(
                f"{active_theme.footer_key} {keys} {active_theme.reset} {active_theme.footer_desc}{desc}{active_theme.reset}"
            )
        columns.append(lines)
    return columns


def format_help_panel(
    bindings: Mapping[KeySequence, Command],
    width: int,
    theme: UITheme | None = None,
) -> list[str]:
    """Return the divider line plus side-by-side command columns."""
    active_theme = theme or DEFAULT_THEME
    prefix = "─── Help "
    divider = f"{active_theme.help_divider}{prefix}{'─' * max(0, width - len(prefix))}{active_theme.reset}"
    columns = help_columns(bindings, active_theme)
    widths = [max(display_width(line) for line in column) for column in columns]
    height = max(len(column) for column in columns)

    rows = [pad_ansi_line(divider, width) + active_theme.reset]
    for row_idx in range(height):
        cells: list[str] = []
        for column, column_width in zip(columns, widths):
            cell = column[row_idx] if row_idx < len(column) else ""
            cells.append(pad_ansi_line(cell, column_width + HELP_COLUMN_GAP))
        rows.append(pad_ansi_line("".join(cells), width) + active_theme.reset)
    return rows


def help_panel_height(bindings: Mapping[KeySequence, Command]) -> int:
    return 1 + max(len(column) for column in help_columns(bindings))
