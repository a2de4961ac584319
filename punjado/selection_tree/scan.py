"""Filesystem scanning helpers and binary-file detection."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

BINARY_SNIFF_BYTES = 512
BINARY_EXTENSIONS = frozenset(
    {
        # images
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".ico",
        ".webp",
        # archives and documents
        ".pdf",
        ".zip",
        ".tar",
        ".gz",
        ".7z",
        ".rar",
        # executables
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".bin",
        # media
        ".mp3",
        ".mp4",
        ".wav",
        ".avi",
        ".mov",
    }
)


@dataclass(frozen=True)
class ScanEntry:
    """One directory child observed during a scan."""

    name: str
    path: Path
    is_dir: bool
    size: int = 0


def is_binary_file(path: Path) -> bool:
    """Return whether ``path`` looks like a binary file.

    Known binary extensions short-circuit without touching the disk. Other
    files are sniffed for a NUL byte in their first 512 bytes; files that
    cannot be read are treated as text.
    """
    if path.suffix.lower() in BINARY_EXTENSIONS:
        return True
    try:
        with path.open("rb") as handle:
            head = handle.read(BINARY_SNIFF_BYTES)
    except OSError:
        return False
    return b"\x00" in head


def list_entries(directory: Path) -> tuple[list[ScanEntry], Exception | None]:
    """List children of ``directory`` sorted directories-first by folded name.

    Returns ``(entries, scan_error)``. Entries whose metadata cannot be read
    are dropped; ``scan_error`` is set only when the directory itself cannot
    be listed.
    """
    entries: list[ScanEntry] = []
    try:
        with os.scandir(directory) as it:
            for child in it:
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                    size = 0 if is_dir else int(child.stat(follow_symlinks=False).st_size)
                except OSError as exc:
                    logger.debug("skipping %s: %s", child.path, exc)
                    continue
                entries.append(ScanEntry(name=child.name, path=Path(child.path), is_dir=is_dir, size=size))
    except OSError as exc:
        return [], exc

    entries.sort(key=lambda item: (not item.is_dir, item.name.casefold()))
    return entries, None


__all__ = [
    "BINARY_EXTENSIONS",
    "BINARY_SNIFF_BYTES",
    "ScanEntry",
    "is_binary_file",
    "list_entries",
]
