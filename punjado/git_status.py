"""Changed-file discovery through ``git status``."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 5.0


class GitError(RuntimeError):
    """Raised when ``git`` cannot report status for a directory."""


def _run_git(cwd: Path, args: list[str]) -> str:
    try:
        proc = subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise GitError(f"cannot run git: {exc}") from exc
    if proc.returncode != 0:
        raise GitError("git status failed; is this a git repository?")
    return proc.stdout


def parse_porcelain_z(output: str) -> list[str]:
    """Extract paths from ``git status --porcelain -z`` output.

    Renames and copies report their destination path.
    """
    paths: list[str] = []
    records = output.split("\0")
    idx = 0
    while idx < len(records):
        record = records[idx]
        idx += 1
        if len(record) < 4:
            continue
        status, path = record[:2], record[3:]
        if "R" in status or "C" in status:
            # The source path follows as its own record.
            idx += 1
        if path.endswith("/"):
            path = path[:-1]
        paths.append(path)
    return paths


def changed_paths(root: Path) -> list[str]:
    """Return changed or untracked paths under ``root``, relative to it."""
    root = root.resolve()
    toplevel = Path(_run_git(root, ["rev-parse", "--show-toplevel"]).strip()).resolve()
    output = _run_git(root, ["status", "--porcelain", "-z", "--untracked-files=all"])

    relative: list[str] = []
    for repo_path in parse_porcelain_z(output):
        absolute = toplevel / repo_path
        try:
            relative.append(absolute.relative_to(root).as_posix())
        except ValueError:
            logger.debug("ignoring change outside %s: %s", root, repo_path)
    return relative
