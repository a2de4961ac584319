"""UI theme definitions and selection helpers.

Themes are plain ANSI palettes handed to the renderer; nothing in the
selection core reads them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    header_title: str
    header_tokens: str
    header_tokens_warning: str
    row_text: str
    row_dim: str
    row_selected: str
    row_partial: str
    cursor: str
    footer_key: str
    footer_desc: str
    footer_pending: str
    footer_status: str
    help_heading: str
    help_divider: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header_title="\033[1;38;2;250;250;250;48;2;125;86;244m",
    header_tokens="\033[38;2;250;250;250;48;2;90;90;90m",
    header_tokens_warning="\033[38;2;250;250;250;48;2;224;58;62m",
    row_text="\033[38;2;250;250;250m",
    row_dim="\033[38;2;144;144;144m",
    row_selected="\033[1;38;2;184;187;38m",
    row_partial="\033[38;2;255;160;0m",
    cursor="\033[48;2;68;68;68m",
    footer_key="\033[38;2;250;250;250;48;2;60;60;60m",
    footer_desc="\033[38;2;160;160;160m",
    footer_pending="\033[1;38;2;255;160;0m",
    footer_status="\033[38;5;81m",
    help_heading="\033[1;38;2;250;250;250m",
    help_divider="\033[38;2;98;98;98m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    header_title="\033[1;38;5;255;48;5;24m",
    header_tokens="\033[38;5;255;48;5;238m",
    header_tokens_warning="\033[38;5;255;48;5;160m",
    row_text="\033[38;5;252m",
    row_dim="\033[2;38;5;110m",
    row_selected="\033[1;38;5;84m",
    row_partial="\033[38;5;215m",
    cursor="\033[48;5;237m",
    footer_key="\033[38;5;255;48;5;24m",
    footer_desc="\033[38;5;110m",
    footer_pending="\033[1;38;5;215m",
    footer_status="\033[38;5;45m",
    help_heading="\033[1;38;5;45m",
    help_divider="\033[38;5;31m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    header_title="",
    header_tokens="",
    header_tokens_warning="",
    row_text="",
    row_dim="",
    row_selected="",
    row_partial="",
    cursor="\033[7m",
    footer_key="",
    footer_desc="",
    footer_pending="",
    footer_status="",
    help_heading="",
    help_divider="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
