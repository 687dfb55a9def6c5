"""Regression tests for ANSI width and clipping primitives.

These protect thread-line and pager row layout from width-math regressions.
"""

import unittest

from lazymail import ansi as ansi_mod


class DisplayWidthTests(unittest.TestCase):
    def test_escapes_do_not_count(self) -> None:
        self.assertEqual(ansi_mod.display_width("\033[1;31mabc\033[0m"), 3)

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(ansi_mod.display_width("漢x"), 3)
        self.assertEqual(ansi_mod.display_width("é"), 1)

    def test_tabs_expand_to_next_stop(self) -> None:
        self.assertEqual(ansi_mod.display_width("ab\tc"), 9)


class ClipTests(unittest.TestCase):
    def test_clip_keeps_escape_sequences(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("\033[32mabcdef", 3), "\033[32mabc")

    def test_clip_never_splits_wide_character(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("a漢b", 2), "a")

    def test_clip_to_zero(self) -> None:
        self.assertEqual(ansi_mod.clip_ansi_line("abc", 0), "")

    def test_pad_to_width(self) -> None:
        self.assertEqual(ansi_mod.pad_to_width("ab", 4), "ab  ")
        self.assertEqual(ansi_mod.pad_to_width("abcdef", 4, "."), "abcd")


class SanitizeTests(unittest.TestCase):
    def test_plain_text_is_untouched(self) -> None:
        text = "Re: hello\tworld"
        self.assertIs(ansi_mod.sanitize_terminal_text(text), text)

    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(ansi_mod.sanitize_terminal_text("a\x1b[2J\x00"), "a\\x1b[2J\\x00")


if __name__ == "__main__":
    unittest.main()
