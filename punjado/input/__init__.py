"""Input-layer public API: key decoding, key map, and chord resolution."""

from .keymap import (
    DEFAULT_KEYMAP,
    Command,
    KeySequence,
    build_keymap,
    format_key_sequence,
    parse_key_sequence,
)
from .reader import ESC_SEQUENCE_TIMEOUT_MS, UNKNOWN_KEY, read_key
from .resolver import KeyResolver

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "UNKNOWN_KEY",
    "Command",
    "DEFAULT_KEYMAP",
    "KeySequence",
    "KeyResolver",
    "build_keymap",
    "format_key_sequence",
    "parse_key_sequence",
]
