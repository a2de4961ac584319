"""ANSI-aware width, clipping, and padding tests."""

from __future__ import annotations

import unittest

from punjado.render.ansi import clip_ansi_line, display_width, pad_ansi_line


class AnsiTests(unittest.TestCase):
    def test_display_width_ignores_escape_sequences(self) -> None:
        self.assertEqual(display_width("\033[1;31mhello\033[0m"), 5)

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(display_width("é"), 1)

    def test_clip_preserves_escapes_and_stops_at_width(self) -> None:
        self.assertEqual(clip_ansi_line("\033[31mabcdef\033[0m", 3), "\033[31mabc")
        self.assertEqual(clip_ansi_line("日本語", 3), "日")
        self.assertEqual(clip_ansi_line("abc", 0), "")

    def test_pad_fills_to_width(self) -> None:
        self.assertEqual(pad_ansi_line("ab", 4), "ab  ")
        self.assertEqual(pad_ansi_line("abcdef", 4), "abcd")


if __name__ == "__main__":
    unittest.main()
