"""Screen composition for the selection TUI.

``render_screen`` turns controller state into exactly ``height`` display
rows: a header, the visible slice of the flattened tree, and either the
footer or the expanded help panel.
"""

from __future__ import annotations

from ..controller import SelectionController
from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import clip_ansi_line, display_width, pad_ansi_line
from .help import format_footer, format_help_panel, help_panel_height
from .tree import format_header, format_node_row

HEADER_ROWS = 1
FOOTER_ROWS = 1


def body_rows(controller: SelectionController, height: int) -> int:
    """Number of tree rows that fit between header and footer/help."""
    bottom = FOOTER_ROWS
    if controller.show_help:
        bottom += help_panel_height(controller.resolver.bindings)
    return max(1, height - HEADER_ROWS - bottom)


def render_screen(
    controller: SelectionController,
    width: int,
    height: int,
    token_warning: int,
    theme: UITheme | None = None,
) -> list[str]:
    active_theme = theme or DEFAULT_THEME
    bindings = controller.resolver.bindings
    rows = [format_header(controller.token_estimate(), width, token_warning, active_theme)]

    tree_rows = body_rows(controller, height)
    window = controller.visible[controller.top : controller.top + tree_rows]
    for offset, node in enumerate(window):
        is_cursor = controller.top + offset == controller.cursor
        rows.append(format_node_row(node, width, is_cursor=is_cursor, theme=active_theme))
    if not controller.visible:
        rows.append(pad_ansi_line(f"{active_theme.row_dim}(empty directory){active_theme.reset}", width))
    while len(rows) < HEADER_ROWS + tree_rows:
        rows.append(" " * width)

    if controller.show_help:
        rows.extend(format_help_panel(bindings, width, active_theme))
    rows.append(
        format_footer(
            bindings,
            width,
            pending=controller.resolver.pending,
            status=controller.status_message,
            theme=active_theme,
        )
    )
    return rows[:height]


__all__ = [
    "body_rows",
    "clip_ansi_line",
    "display_width",
    "format_footer",
    "format_header",
    "format_help_panel",
    "format_node_row",
    "render_screen",
]
