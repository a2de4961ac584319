"""Tests for the ``.punjado`` selection file.

Covers round-tripping, path normalization, stale entries, and the
non-fatal handling of missing or unwritable files.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from punjado.persistence import (
    SELECTION_FILENAME,
    load_selection,
    normalize_relative_path,
    parse_selection,
    persist_store,
    restore_selection,
    save_selection,
)
from punjado.selection_tree import SelectionState, build_tree


def _states(store) -> dict[str, SelectionState]:
    return {store.relative_path(node): node.selection for node in store.walk()}

class NormalizeRelativePathTests(unittest.TestCase):
    def test_normalizes_separators_and_dots(self) -> None:
        self.assertEqual(normalize_relative_path(" src\\pkg\\mod.py "), "src/pkg/mod.py")
        self.assertEqual(normalize_relative_path("./src//main.py"), "src/main.py")
        self.assertEqual(normalize_relative_path("src/../setup.cfg"), "setup.cfg")

    def test_rejects_blank_and_escaping_paths(self) -> None:
        for raw in ("", "   ", ".", "..", "../outside.txt", "/etc/passwd"):
            with self.subTest(raw=raw):
                self.assertEqual(normalize_relative_path(raw), "")

    def test_parse_selection_skips_junk_lines(self) -> None:
        text = "b.py\n\n../nope\na.py\r\na.py\n"
        self.assertEqual(parse_selection(text), {"a.py", "b.py"})


class SelectionFileTests(unittest.TestCase):
    def test_save_writes_sorted_unique_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)

            self.assertTrue(save_selection(root, ["src/b.py", "a.py", "src/b.py"]))

            self.assertEqual((root / SELECTION_FILENAME).read_text(encoding="utf-8"), "a.py\nsrc/b.py\n")
            self.assertEqual(load_selection(root), {"a.py", "src/b.py"})

    def test_empty_selection_writes_empty_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)

            save_selection(root, [])

            self.assertEqual((root / SELECTION_FILENAME).read_text(encoding="utf-8"), "")

    def test_missing_file_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(load_selection(Path(tmp)), set())

    def test_unwritable_location_returns_false(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertLogs("punjado.persistence", level="WARNING"):
                ok = save_selection(Path(tmp) / "missing-dir", ["a.py"])

            self.assertFalse(ok)

    def test_restore_selection_reports_stale_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "src").mkdir()
            (root / "src" / "main.py").write_text("x\n", encoding="utf-8")
            (root / "notes.txt").write_text("n\n", encoding="utf-8")
            store = build_tree(root)

            missing = restore_selection(store, {"src/main.py", "src", "gone.py"})

            self.assertEqual(missing, ["gone.py", "src"])
            self.assertIs(store.find("src").selection, SelectionState.SELECTED)
            self.assertIs(store.find("notes.txt").selection, SelectionState.UNSELECTED)
            self.assertIs(store.root.selection, SelectionState.PARTIAL)

    def _reload(self, root: Path):
        reloaded = build_tree(root, ignore=(SELECTION_FILENAME,))
        self.assertEqual(restore_selection(reloaded, load_selection(root)), [])
        return reloaded

    def test_persist_store_round_trips_through_a_fresh_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "lib" / "sub").mkdir(parents=True)
            (root / "lib" / "a.py").write_text("a\n", encoding="utf-8")
            (root / "lib" / "b.py").write_text("b\n", encoding="utf-8")
            (root / "lib" / "img.png").write_bytes(b"\x89PNG")
            (root / "lib" / "sub" / "c.py").write_text("c\n", encoding="utf-8")
            (root / "lib" / "sub" / "d.py").write_text("d\n", encoding="utf-8")
            (root / "top.txt").write_text("top\n", encoding="utf-8")
            store = build_tree(root, ignore=(SELECTION_FILENAME,))
            store.set_selected(store.find("lib/a.py"), True)
            store.set_selected(store.find("lib/sub/c.py"), True)
            self.assertIs(store.find("lib/sub").selection, SelectionState.PARTIAL)
            self.assertIs(store.find("lib").selection, SelectionState.PARTIAL)

            self.assertTrue(persist_store(store))
            reloaded = self._reload(root)

            self.assertEqual(_states(reloaded), _states(store))
            self.assertEqual(load_selection(root), {"lib/a.py", "lib/sub/c.py"})

    def test_selecting_root_round_trips_with_image_only_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "assets").mkdir()
            (root / "assets" / "logo.png").write_bytes(b"\x89PNG")
            (root / "main.py").write_text("main()\n", encoding="utf-8")
            store = build_tree(root, ignore=(SELECTION_FILENAME,))
            store.set_selected(store.root, True)

            self.assertTrue(persist_store(store))
            reloaded = self._reload(root)

            self.assertEqual(_states(reloaded), _states(store))
            self.assertIs(reloaded.root.selection, SelectionState.SELECTED)
            self.assertIs(reloaded.find("assets").selection, SelectionState.UNSELECTED)
            self.assertEqual(load_selection(root), {"main.py"})


if __name__ == "__main__":
    unittest.main()
