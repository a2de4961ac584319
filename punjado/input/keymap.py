"""Command identifiers, key-sequence parsing, and the default key map.

Key sequences are tuples of tokens as produced by ``read_key``: printable
characters stand for themselves and named keys use upper-case tokens such
as ``ENTER``, ``ESC``, ``UP`` or ``CTRL_R``. In config files a sequence is
written as a string where ``<name>`` spells a named key, e.g. ``"gg"``,
``"<ctrl+r>"`` or ``"<space>"``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from enum import Enum

logger = logging.getLogger(__name__)

KeySequence = tuple[str, ...]


class Command(Enum):
    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    PAGE_DOWN = "page_down"
    PAGE_UP = "page_up"
    GOTO_TOP = "goto_top"
    GOTO_BOTTOM = "goto_bottom"
    TOGGLE_SELECTION = "toggle_selection"
    TOGGLE_ALL = "toggle_all"
    TOGGLE_DIRECTORY = "toggle_directory"
    TOGGLE_EXPAND_ALL = "toggle_expand_all"
    UNDO = "undo"
    REDO = "redo"
    COPY = "copy"
    TOGGLE_HELP = "toggle_help"
    CLOSE_HELP = "close_help"
    QUIT = "quit"


NAMED_KEYS: dict[str, str] = {
    "enter": "ENTER",
    "cr": "ENTER",
    "return": "ENTER",
    "esc": "ESC",
    "escape": "ESC",
    "space": " ",
    "tab": "TAB",
    "backspace": "BACKSPACE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "lt": "<",
}

_NAMED_KEY_RE = re.compile(r"<([^<>]+)>")
_CTRL_RE = re.compile(r"^(?:ctrl|c)[+-]([a-z])$")

DEFAULT_KEYMAP: tuple[tuple[str, Command], ...] = (
    ("j", Command.MOVE_DOWN),
    ("<down>", Command.MOVE_DOWN),
    ("k", Command.MOVE_UP),
    ("<up>", Command.MOVE_UP),
    ("<ctrl+d>", Command.PAGE_DOWN),
    ("<ctrl+u>", Command.PAGE_UP),
    ("gg", Command.GOTO_TOP),
    ("G", Command.GOTO_BOTTOM),
    ("<space>", Command.TOGGLE_SELECTION),
    ("s", Command.TOGGLE_SELECTION),
    ("a", Command.TOGGLE_ALL),
    ("<enter>", Command.TOGGLE_DIRECTORY),
    ("T", Command.TOGGLE_EXPAND_ALL),
    ("u", Command.UNDO),
    ("<ctrl+r>", Command.REDO),
    ("y", Command.COPY),
    ("?", Command.TOGGLE_HELP),
    ("<esc>", Command.CLOSE_HELP),
    ("q", Command.QUIT),
    ("ZZ", Command.QUIT),
    ("<ctrl+c>", Command.QUIT),
)


def _named_token(name: str) -> str | None:
    folded = name.strip().lower()
    if folded in NAMED_KEYS:
        return NAMED_KEYS[folded]
    match = _CTRL_RE.match(folded)
    if match:
        return f"CTRL_{match.group(1).upper()}"
    return None


def parse_key_sequence(text: str) -> KeySequence:
    """Parse a config-style key string into a token tuple.

    Raises ``ValueError`` for empty strings and unknown ``<name>`` keys.
    """
    if not text:
        raise ValueError("empty key sequence")
    tokens: list[str] = []
    pos = 0
    for match in _NAMED_KEY_RE.finditer(text):
        tokens.extend(text[pos : match.start()])
        token = _named_token(match.group(1))
        if token is None:
            raise ValueError(f"unknown key name: {match.group(0)!r}")
        tokens.append(token)
        pos = match.end()
    tokens.extend(text[pos:])
    return tuple(tokens)


def format_key_sequence(sequence: KeySequence) -> str:
    """Render a token tuple back into compact display text."""
    labels = {
        "ENTER": "enter",
        "ESC": "esc",
        " ": "space",
        "TAB": "tab",
        "BACKSPACE": "backspace",
        "UP": "↑",
        "DOWN": "↓",
        "LEFT": "←",
        "RIGHT": "→",
    }
    out: list[str] = []
    for token in sequence:
        if token in labels:
            out.append(labels[token])
        elif token.startswith("CTRL_"):
            out.append(f"ctrl+{token[5:].lower()}")
        else:
            out.append(token)
    return "".join(out)


def build_keymap(overrides: Mapping[str, str] | None = None) -> dict[KeySequence, Command]:
    """Return the default bindings merged with user ``overrides``.

    ``overrides`` maps key strings to command names (``Command`` values).
    Entries that fail to parse or name an unknown command are dropped with a
    warning; a command name of ``"none"`` removes the binding.
    """
    keymap: dict[KeySequence, Command] = {parse_key_sequence(keys): command for keys, command in DEFAULT_KEYMAP}
    if not overrides:
        return keymap

    for raw_keys, raw_command in overrides.items():
        if not isinstance(raw_keys, str) or not isinstance(raw_command, str):
            logger.warning("ignoring keymap entry %r -> %r", raw_keys, raw_command)
            continue
        try:
            sequence = parse_key_sequence(raw_keys)
        except ValueError as exc:
            logger.warning("ignoring keymap entry %r: %s", raw_keys, exc)
            continue
        command_name = raw_command.strip().lower()
        if command_name == "none":
            keymap.pop(sequence, None)
            continue
        try:
            keymap[sequence] = Command(command_name)
        except ValueError:
            logger.warning("ignoring keymap entry %r: unknown command %r", raw_keys, raw_command)
    return keymap


__all__ = [
    "Command",
    "DEFAULT_KEYMAP",
    "KeySequence",
    "NAMED_KEYS",
    "build_keymap",
    "format_key_sequence",
    "parse_key_sequence",
]
