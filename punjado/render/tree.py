"""Tree row and header formatting."""

from __future__ import annotations

from ..selection_tree import Node, SelectionState
from ..ui_theme import DEFAULT_THEME, UITheme
from .ansi import display_width, pad_ansi_line

APP_TITLE = "Punjado"

SELECTION_MARKS = {
    SelectionState.SELECTED: "●",
    SelectionState.PARTIAL: "◐",
    SelectionState.UNSELECTED: "○",
}


def row_style(node: Node, theme: UITheme) -> str:
    if node.selection is SelectionState.SELECTED:
        return theme.row_selected
    if node.selection is SelectionState.PARTIAL:
        return theme.row_partial
    if not node.is_selectable:
        return theme.row_dim
    return theme.row_text


def format_node_label(node: Node) -> str:
    """Plain row text: indent, fold marker, selection mark, and name."""
    indent = "  " * max(0, node.depth - 1)
    if node.is_dir and node.children:
        fold = "▼" if node.expanded else "▶"
    else:
        fold = " "
    mark = SELECTION_MARKS[node.selection] if node.is_selectable else " "
    name = node.name + ("/" if node.is_dir else "")
    suffix = " (bin)" if node.is_binary else ""
    return f"{indent}{fold} {mark} {name}{suffix}"


def format_node_row(node: Node, width: int, is_cursor: bool = False, theme: UITheme | None = None) -> str:
    """Render one tree row padded to ``width`` columns."""
    active_theme = theme or DEFAULT_THEME
    style = row_style(node, active_theme)
    if is_cursor:
        style = active_theme.cursor + style
    return style + pad_ansi_line(format_node_label(node), width) + active_theme.reset


def format_header(token_count: int, width: int, token_warning: int, theme: UITheme | None = None) -> str:
    """Title on the left, token estimate on the right (red past the warning)."""
    active_theme = theme or DEFAULT_THEME
    title = f" {APP_TITLE} "
    tokens = f" {token_count:,} tokens "
    token_style = active_theme.header_tokens_warning if token_count > token_warning else active_theme.header_tokens
    gap = max(1, width - display_width(title) - display_width(tokens))
    line = (
        f"{active_theme.header_title}{title}{active_theme.reset}"
        f"{' ' * gap}"
        f"{token_style}{tokens}{active_theme.reset}"
    )
    return pad_ansi_line(line, width) + active_theme.reset
