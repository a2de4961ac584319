"""Command-line front door for punjado.

With no subcommand (or ``open``) the interactive selector starts. The other
subcommands edit or read the ``.punjado`` selection file directly and never
touch the terminal UI; they share nothing with it but the file format.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .export import EXPORT_FORMATS, ClipboardError, build_context_text, copy_to_clipboard
from .git_status import GitError, changed_paths
from .persistence import load_selection, normalize_relative_path, save_selection
from .runtime import config, run_tui
from .selection_tree import build_tree
from .ui_theme import available_theme_names

COMMANDS = ("open", "add", "remove", "toggle", "list", "status", "git", "copy", "help")

HELP_TEXT = """\
Punjado - Context Manager

Usage:
  punjado [path]           Open TUI in directory
  punjado open [path]      Open TUI in directory
  punjado add <files>      Add files (or every text file in a directory) to context
  punjado remove <files>   Remove files (or a directory's files) from context
  punjado toggle <file>    Toggle file context
  punjado list             List selected files
  punjado status <file>    Print 1 if the file is selected, else 0
  punjado copy             Copy context to clipboard (--stdout to print, --format markdown)
  punjado git              Add all changed git files

Common flags:
  -d, --dir DIR            Session root (default: current directory)
  --version                Print version and exit
"""


def _root_from(args: argparse.Namespace) -> Path:
    root = Path(args.dir).expanduser()
    if not root.is_dir():
        raise SystemExit(f"Error: directory '{args.dir}' doesn't exist")
    return root.resolve()


def _write(root: Path, paths: set[str]) -> None:
    if not save_selection(root, paths):
        raise SystemExit(f"Error: cannot write selection file in '{root}'")


def _clean_or_exit(raw: str) -> str:
    clean = normalize_relative_path(raw)
    if not clean:
        raise SystemExit(f"Error: '{raw}' is not a path inside the session directory")
    return clean


def _files_under(root: Path, directory: str) -> list[str]:
    """Return selectable files below ``directory`` as the TUI would select them."""
    store = build_tree(root, ignore=config.load_ignore_patterns())
    node = store.find(directory)
    if node is None:
        return []
    store.set_selected(node, True)
    prefix = store.relative_path(node) + "/"
    return [store.relative_path(leaf) for leaf in store.selected_leaves() if store.relative_path(leaf).startswith(prefix)]


def cmd_add(args: argparse.Namespace) -> int:
    root = _root_from(args)
    selection = load_selection(root)
    for raw in args.files:
        clean = _clean_or_exit(raw)
        target = root / clean
        if target.is_dir():
            added = _files_under(root, clean)
            selection.update(added)
            for path in added:
                print(f"Added: {path}")
            continue
        if not target.is_file():
            raise SystemExit(f"Error: File '{raw}' doesn't exist in directory '{args.dir}'")
        selection.add(clean)
        print(f"Added: {clean}")
    _write(root, selection)
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    root = _root_from(args)
    selection = load_selection(root)
    for raw in args.files:
        clean = _clean_or_exit(raw)
        removed = sorted(path for path in selection if path == clean or path.startswith(clean + "/"))
        selection.difference_update(removed)
        for path in removed or [clean]:
            print(f"Removed: {path}")
    _write(root, selection)
    return 0


def cmd_toggle(args: argparse.Namespace) -> int:
    root = _root_from(args)
    selection = load_selection(root)
    clean = _clean_or_exit(args.file)
    if clean in selection:
        selection.discard(clean)
        print(f"Removed: {clean}")
    else:
        if not (root / clean).is_file():
            raise SystemExit(f"Error: File '{args.file}' doesn't exist in directory '{args.dir}'")
        selection.add(clean)
        print(f"Added: {clean}")
    _write(root, selection)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    root = _root_from(args)
    for path in sorted(load_selection(root)):
        print(path)
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    root = _root_from(args)
    clean = normalize_relative_path(args.file)
    print(1 if clean and clean in load_selection(root) else 0)
    return 0


def cmd_git(args: argparse.Namespace) -> int:
    root = _root_from(args)
    try:
        changed = changed_paths(root)
    except GitError as exc:
        raise SystemExit(f"Error running git status: {exc}") from exc

    selection = load_selection(root)
    count = 0
    for path in changed:
        if path in selection or not (root / path).is_file():
            continue
        selection.add(path)
        print(f"Git file added: {path}")
        count += 1
    _write(root, selection)
    print(f"Successfully added {count} files from git status.")
    return 0


def cmd_copy(args: argparse.Namespace) -> int:
    root = _root_from(args)
    paths = sorted(load_selection(root))
    text = build_context_text(root, paths, args.format)
    if args.stdout:
        sys.stdout.write(text)
        return 0
    try:
        copy_to_clipboard(text)
    except ClipboardError as exc:
        print(f"Error copying to clipboard (install xclip/wl-copy on Linux): {exc}", file=sys.stderr)
        return 1
    print(f"Copied {len(paths)} files to clipboard!")
    return 0


def cmd_open(args: argparse.Namespace) -> int:
    target = args.path if args.path is not None else args.dir
    root = Path(target).expanduser()
    if not root.is_dir():
        raise SystemExit(f"Path not found: {root}")
    theme_name = None
    if args.theme is not None:
        theme_name = args.theme.strip().lower()
        if theme_name not in available_theme_names():
            raise SystemExit(f"Unknown theme: {args.theme} (choose from {', '.join(available_theme_names())})")
        config.save_theme_name(theme_name)
    run_tui(root.resolve(), theme_name=theme_name, no_color=args.no_color, export_format=args.format)
    return 0


def cmd_help(args: argparse.Namespace) -> int:
    print(HELP_TEXT, end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-d", "--dir", default=".", help="Session root directory (default: current directory).")

    parser = argparse.ArgumentParser(
        prog="punjado",
        description="Pick files from a directory tree as context and export them.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", metavar="command")

    open_parser = sub.add_parser("open", parents=[common], help="Open the interactive selector.")
    open_parser.add_argument("path", nargs="?", default=None, help="Directory to open (overrides --dir).")
    open_parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name, remembered for later sessions ({', '.join(available_theme_names())}).",
    )
    open_parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    open_parser.add_argument("--format", choices=EXPORT_FORMATS, default="plain", help="Clipboard export layout.")
    open_parser.set_defaults(handler=cmd_open)

    add_parser = sub.add_parser("add", parents=[common], help="Add files to the selection.")
    add_parser.add_argument("files", nargs="+")
    add_parser.set_defaults(handler=cmd_add)

    remove_parser = sub.add_parser("remove", parents=[common], help="Remove files from the selection.")
    remove_parser.add_argument("files", nargs="+")
    remove_parser.set_defaults(handler=cmd_remove)

    toggle_parser = sub.add_parser("toggle", parents=[common], help="Toggle one file.")
    toggle_parser.add_argument("file")
    toggle_parser.set_defaults(handler=cmd_toggle)

    list_parser = sub.add_parser("list", parents=[common], help="List selected files.")
    list_parser.set_defaults(handler=cmd_list)

    status_parser = sub.add_parser("status", parents=[common], help="Print 1 if a file is selected, else 0.")
    status_parser.add_argument("file")
    status_parser.set_defaults(handler=cmd_status)

    git_parser = sub.add_parser("git", parents=[common], help="Add files changed according to git status.")
    git_parser.set_defaults(handler=cmd_git)

    copy_parser = sub.add_parser("copy", parents=[common], help="Export the selection.")
    copy_parser.add_argument("--stdout", action="store_true", help="Print instead of copying to the clipboard.")
    copy_parser.add_argument("--format", choices=EXPORT_FORMATS, default="plain", help="Export layout.")
    copy_parser.set_defaults(handler=cmd_copy)

    help_parser = sub.add_parser("help", help="Show usage overview.")
    help_parser.set_defaults(handler=cmd_help)
    return parser


def _normalize_argv(argv: Sequence[str]) -> list[str]:
    """Route ``punjado [path]`` and flag-only invocations to ``open``."""
    args = list(argv)
    if not args:
        return ["open"]
    first = args[0]
    if first in COMMANDS or first in {"-h", "--help", "--version"}:
        return args
    return ["open", *args]


def main(argv: Sequence[str] | None = None) -> int:
    """Parse CLI arguments and run the selected subcommand."""
    raw = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(_normalize_argv(raw))
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
