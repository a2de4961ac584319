"""Tests for key-sequence parsing, formatting, and keymap overrides."""

from __future__ import annotations

import unittest

from punjado.input import Command, build_keymap, format_key_sequence, parse_key_sequence


class ParseKeySequenceTests(unittest.TestCase):
    def test_plain_characters_become_single_tokens(self) -> None:
        self.assertEqual(parse_key_sequence("gg"), ("g", "g"))
        self.assertEqual(parse_key_sequence("G"), ("G",))

    def test_named_keys(self) -> None:
        self.assertEqual(parse_key_sequence("<enter>"), ("ENTER",))
        self.assertEqual(parse_key_sequence("<Space>"), (" ",))
        self.assertEqual(parse_key_sequence("<ctrl+r>"), ("CTRL_R",))
        self.assertEqual(parse_key_sequence("<C-d>"), ("CTRL_D",))
        self.assertEqual(parse_key_sequence("g<down>"), ("g", "DOWN"))
        self.assertEqual(parse_key_sequence("<lt>"), ("<",))

    def test_invalid_sequences_raise(self) -> None:
        with self.assertRaises(ValueError):
            parse_key_sequence("")
        with self.assertRaises(ValueError):
            parse_key_sequence("<hyper>")

    def test_format_key_sequence(self) -> None:
        self.assertEqual(format_key_sequence(("CTRL_R",)), "ctrl+r")
        self.assertEqual(format_key_sequence((" ",)), "space")
        self.assertEqual(format_key_sequence(("g", "g")), "gg")
        self.assertEqual(format_key_sequence(("UP",)), "↑")


class BuildKeymapTests(unittest.TestCase):
    def test_defaults_cover_core_bindings(self) -> None:
        keymap = build_keymap()

        self.assertIs(keymap[("j",)], Command.MOVE_DOWN)
        self.assertIs(keymap[("DOWN",)], Command.MOVE_DOWN)
        self.assertIs(keymap[("g", "g")], Command.GOTO_TOP)
        self.assertIs(keymap[("CTRL_R",)], Command.REDO)
        self.assertIs(keymap[(" ",)], Command.TOGGLE_SELECTION)
        self.assertIs(keymap[("Z", "Z")], Command.QUIT)
        self.assertIs(keymap[("ENTER",)], Command.TOGGLE_DIRECTORY)

    def test_overrides_add_and_remove_bindings(self) -> None:
        keymap = build_keymap({"x": "toggle_selection", "q": "none", "<ctrl+n>": "MOVE_DOWN"})

        self.assertIs(keymap[("x",)], Command.TOGGLE_SELECTION)
        self.assertNotIn(("q",), keymap)
        self.assertIs(keymap[("CTRL_N",)], Command.MOVE_DOWN)

    def test_invalid_overrides_are_dropped(self) -> None:
        with self.assertLogs("punjado.input.keymap", level="WARNING"):
            keymap = build_keymap({"<hyper>": "quit", "w": "fly_away"})

        self.assertEqual(keymap, build_keymap())


if __name__ == "__main__":
    unittest.main()
