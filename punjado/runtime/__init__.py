"""Public runtime entry points.

This package groups the interactive bootstrap (``run_tui``), the event
loop, terminal control, and persistent user config.
"""

from __future__ import annotations


def run_tui(*args, **kwargs):
    """Lazily import the TUI bootstrap so CLI subcommands stay lightweight."""
    from .app import run_tui as _run_tui

    return _run_tui(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = ["run_tui", "run_main_loop"]
