"""Tests for expand-aware flattening of the tree into visible rows."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from punjado.selection_tree import SelectionState, build_tree, first_visible_index, flatten_visible


class FlattenVisibleTests(unittest.TestCase):
    def _store(self, root: Path):
        (root / "src" / "pkg").mkdir(parents=True)
        (root / "src" / "pkg" / "mod.py").write_text("x = 1\n", encoding="utf-8")
        (root / "src" / "main.py").write_text("main()\n", encoding="utf-8")
        (root / "setup.cfg").write_text("[metadata]\n", encoding="utf-8")
        return build_tree(root)

    def test_fully_expanded_tree_is_pre_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = self._store(Path(tmp))

            visible = flatten_visible(store.root)

            self.assertEqual(
                [store.relative_path(node) for node in visible],
                ["src", "src/pkg", "src/pkg/mod.py", "src/main.py", "setup.cfg"],
            )

    def test_collapsed_directory_hides_its_subtree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = self._store(Path(tmp))
            store.toggle_expand(store.find("src"))

            visible = flatten_visible(store.root)

            self.assertEqual([store.relative_path(node) for node in visible], ["src", "setup.cfg"])
            self.assertIsNone(first_visible_index(visible, store.find("src/main.py")))
            self.assertEqual(first_visible_index(visible, store.find("setup.cfg")), 1)

    def test_collapsed_root_shows_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = self._store(Path(tmp))
            store.root.expanded = False

            self.assertEqual(flatten_visible(store.root), [])

    def test_collapse_and_reexpand_around_a_selected_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "dirA").mkdir()
            (root / "dirA" / "f1.txt").write_text("one", encoding="utf-8")
            (root / "dirA" / "f2.bin").write_bytes(b"\x00")
            (root / "f3.txt").write_text("three", encoding="utf-8")
            store = build_tree(root)
            dir_a = store.find("dirA")
            expanded_rows = [store.relative_path(node) for node in flatten_visible(store.root)]

            store.set_selected(store.find("dirA/f1.txt"), True)
            self.assertIs(dir_a.selection, SelectionState.SELECTED)

            store.toggle_expand(dir_a)
            self.assertEqual([store.relative_path(node) for node in flatten_visible(store.root)], ["dirA", "f3.txt"])

            store.toggle_expand(dir_a)
            self.assertEqual([store.relative_path(node) for node in flatten_visible(store.root)], expanded_rows)
            self.assertEqual(expanded_rows, ["dirA", "dirA/f1.txt", "dirA/f2.bin", "f3.txt"])

    def test_set_expanded_reports_changes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = self._store(Path(tmp))
            src = store.find("src")

            self.assertFalse(store.set_expanded(src, True))
            self.assertTrue(store.set_expanded(src, False))
            self.assertFalse(store.set_expanded(store.find("setup.cfg"), False))


if __name__ == "__main__":
    unittest.main()
