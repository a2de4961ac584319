"""Context export: concatenate selected files for pasting into a prompt.

Two layouts are supported. ``plain`` separates files with
``--- FILE: <path> ---`` banners; ``markdown`` uses a heading per file and a
fenced block tagged with the language pygments associates with the file
name. The destination (clipboard or stdout) is the caller's choice.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import pyperclip
from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("plain", "markdown")


class ClipboardError(RuntimeError):
    """Raised when the system clipboard cannot be written."""


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def language_for(path: str) -> str:
    """Return a code-fence language tag for ``path`` (``""`` if unknown)."""
    try:
        lexer = get_lexer_for_filename(Path(path).name)
    except ClassNotFound:
        return ""
    aliases = getattr(lexer, "aliases", None) or ()
    return aliases[0] if aliases else ""


def _fence_for(content: str) -> str:
    fence = "```"
    while fence in content:
        fence += "`"
    return fence


def build_context_text(root: Path, paths: Iterable[str], fmt: str = "plain") -> str:
    """Concatenate the files at ``paths`` (relative to ``root``).

    Unreadable files are kept in the output with an inline error note.
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"unknown export format: {fmt!r}")

    parts: list[str] = []
    for rel in paths:
        try:
            content = read_text(root / rel)
            error: OSError | None = None
        except OSError as exc:
            logger.debug("cannot read %s: %s", rel, exc)
            content = ""
            error = exc

        if fmt == "plain":
            parts.append(f"\n--- FILE: {rel} ---\n")
            parts.append(f"(Error reading file: {error})\n" if error is not None else content)
            parts.append("\n")
            continue

        parts.append(f"## {rel}\n\n")
        if error is not None:
            parts.append(f"(Error reading file: {error})\n\n")
            continue
        fence = _fence_for(content)
        body = content if content.endswith("\n") or not content else content + "\n"
        parts.append(f"{fence}{language_for(rel)}\n{body}{fence}\n\n")
    return "".join(parts)


def copy_to_clipboard(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        raise ClipboardError(str(exc)) from exc


def estimate_tokens(total_bytes: int) -> int:
    """Rough token count used by the header: one token per four bytes."""
    return max(0, total_bytes) // 4


__all__ = [
    "ClipboardError",
    "EXPORT_FORMATS",
    "build_context_text",
    "copy_to_clipboard",
    "estimate_tokens",
    "language_for",
    "read_text",
]
