from __future__ import annotations

import unittest

from lazybranch.ansi import clip_ansi_line, display_width, pad_to_width, truncate_to_width


class AnsiWidthTests(unittest.TestCase):
    def test_display_width_ignores_escape_sequences_and_counts_wide_glyphs(self) -> None:
        self.assertEqual(display_width("\033[1mmain\033[0m"), 4)
        self.assertEqual(display_width("日本語"), 6)
        self.assertEqual(display_width("é"), 1)

    def test_truncate_keeps_fitting_text_unchanged(self) -> None:
        self.assertEqual(truncate_to_width("main", 4), "main")
        self.assertEqual(truncate_to_width("main", 10), "main")

    def test_truncate_marks_the_cut_with_ellipsis(self) -> None:
        self.assertEqual(truncate_to_width("feature/login", 8), "featu...")
        self.assertEqual(display_width(truncate_to_width("feature/login", 8)), 8)

    def test_truncate_never_splits_wide_characters(self) -> None:
        self.assertEqual(truncate_to_width("日本語ab", 6), "日...")

    def test_truncate_with_tiny_width_clips_the_ellipsis(self) -> None:
        self.assertEqual(truncate_to_width("feature", 2), "..")
        self.assertEqual(truncate_to_width("feature", 0), "")

    def test_pad_to_width(self) -> None:
        self.assertEqual(pad_to_width("ab", 4), "ab  ")
        self.assertEqual(pad_to_width("abcdef", 4), "abcdef")

    def test_clip_ansi_line_keeps_trailing_reset(self) -> None:
        self.assertEqual(clip_ansi_line("\033[31mabc\033[0m", 2), "\033[31mab")
        self.assertEqual(clip_ansi_line("\033[31mabc\033[0m", 3), "\033[31mabc\033[0m")

    def test_clip_ansi_line_expands_tabs(self) -> None:
        self.assertEqual(clip_ansi_line("a\tb", 10), "a" + " " * 7 + "b")


if __name__ == "__main__":
    unittest.main()
