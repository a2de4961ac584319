"""Tests for undo/redo history over selection actions.

Checks exact state restoration (including partial directories), redo
invalidation on new commits, bulk actions as one step, and the stack bound.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from punjado.history import BulkSetSelection, HistoryManager, SetSelection
from punjado.selection_tree import SelectionState, TreeStore, build_tree


def _build(root: Path) -> TreeStore:
    (root / "dirA").mkdir()
    for name in ("f1.txt", "f3.txt"):
        (root / "dirA" / name).write_text(name, encoding="utf-8")
    (root / "dirA" / "f2.bin").write_bytes(b"\x00")
    (root / "top.txt").write_text("top", encoding="utf-8")
    return build_tree(root)


def _states(store: TreeStore) -> list[tuple[Path, SelectionState]]:
    return [(node.path, node.selection) for node in store.walk()]


class HistoryManagerTests(unittest.TestCase):
    def test_undo_restores_partial_directory_exactly(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = _build(Path(tmp))
            history = HistoryManager(store)
            history.commit(SetSelection.capture(store, store.find("dirA/f1.txt"), True))
            before = _states(store)
            self.assertIs(store.find("dirA").selection, SelectionState.PARTIAL)

            action = SetSelection.capture(store, store.find("dirA"), True)
            self.assertIs(action.previous_state, SelectionState.PARTIAL)
            history.commit(action)
            self.assertIs(store.find("dirA/f3.txt").selection, SelectionState.SELECTED)

            self.assertIs(history.undo(), action)
            self.assertEqual(_states(store), before)

    def test_redo_reapplies_undone_action(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = _build(Path(tmp))
            history = HistoryManager(store)
            history.commit(SetSelection.capture(store, store.find("dirA"), True))
            after = _states(store)

            history.undo()
            self.assertTrue(history.can_redo)
            history.redo()

            self.assertEqual(_states(store), after)
            self.assertFalse(history.can_redo)

    def test_undo_all_returns_to_initial_state(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = _build(Path(tmp))
            history = HistoryManager(store)
            initial = _states(store)

            history.commit(SetSelection.capture(store, store.find("top.txt"), True))
            history.commit(SetSelection.capture(store, store.find("dirA"), True))
            history.commit(SetSelection.capture(store, store.find("dirA/f3.txt"), False))
            history.commit(SetSelection.capture(store, store.root, False))

            while history.undo() is not None:
                pass
            self.assertEqual(_states(store), initial)

    def test_commit_after_undo_clears_redo(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = _build(Path(tmp))
            history = HistoryManager(store)
            history.commit(SetSelection.capture(store, store.find("top.txt"), True))
            history.undo()
            self.assertEqual(len(history.redo_stack), 1)

            history.commit(SetSelection.capture(store, store.find("dirA/f1.txt"), True))

            self.assertEqual(history.redo_stack, [])
            self.assertIsNone(history.redo())

    def test_undo_and_redo_on_empty_stacks_are_no_ops(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = _build(Path(tmp))
            history = HistoryManager(store)
            initial = _states(store)

            self.assertIsNone(history.undo())
            self.assertIsNone(history.redo())
            self.assertEqual(_states(store), initial)

    def test_bulk_action_undoes_in_one_step(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = _build(Path(tmp))
            history = HistoryManager(store)
            initial = _states(store)
            targets = [store.find("dirA/f1.txt"), store.find("dirA/f3.txt"), store.find("top.txt")]

            changed = history.commit(BulkSetSelection.capture(store, targets, True))

            self.assertTrue(changed)
            self.assertIs(store.root.selection, SelectionState.SELECTED)
            self.assertEqual(len(history.undo_stack), 1)
            history.undo()
            self.assertEqual(_states(store), initial)

    def test_undo_stack_is_bounded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = _build(Path(tmp))
            history = HistoryManager(store, max_entries=2)
            node = store.find("top.txt")

            for target in (True, False, True):
                history.commit(SetSelection.capture(store, node, target))

            self.assertEqual(len(history.undo_stack), 2)
            self.assertEqual([action.new_state for action in history.undo_stack], [SelectionState.UNSELECTED, SelectionState.SELECTED])

    def test_actions_are_plain_comparable_data(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = _build(Path(tmp))
            node = store.find("top.txt")

            first = SetSelection.capture(store, node, True)
            second = SetSelection.capture(store, node, True)

            self.assertEqual(first, second)
            self.assertEqual(first.path, node.path)


if __name__ == "__main__":
    unittest.main()
