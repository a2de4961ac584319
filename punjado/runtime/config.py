"""Persistent JSON config helpers.

Stores the scan ignore list, key map overrides, UI theme, and the token
warning threshold. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..persistence import SELECTION_FILENAME

logger = logging.getLogger(__name__)

APP_NAME = "punjado"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (".git", SELECTION_FILENAME, "node_modules")
DEFAULT_TOKEN_WARNING = 32_000


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError) as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def load_ignore_patterns() -> tuple[str, ...]:
    """Return configured ignore substrings, or the defaults.

    Only a list of non-empty strings replaces the defaults.
    """
    value = load_config().get("ignore")
    if not isinstance(value, list):
        return DEFAULT_IGNORE_PATTERNS
    patterns = tuple(item for item in value if isinstance(item, str) and item)
    if SELECTION_FILENAME not in patterns:
        patterns += (SELECTION_FILENAME,)
    return patterns


def load_keymap_overrides() -> dict[str, str]:
    """Return ``{key string: command name}`` overrides with string entries only."""
    value = load_config().get("keymap")
    if not isinstance(value, dict):
        return {}
    return {key: command for key, command in value.items() if isinstance(key, str) and isinstance(command, str)}


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(name: str) -> None:
    """Remember ``name`` as the theme for later sessions; blank names are ignored."""
    stripped = name.strip()
    if not stripped:
        return
    data = load_config()
    data["theme"] = stripped
    save_config(data)


def load_token_warning() -> int:
    """Token count above which the header turns red.

    Booleans and non-positive values fall back to the default.
    """
    value = load_config().get("token_warning")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_TOKEN_WARNING
    return value
