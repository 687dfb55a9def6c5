from __future__ import annotations

import unittest

from lazymail.scrollable import Scrollable, ScrollableError


class RecordingPanel:
    def __init__(self) -> None:
        self.erased = 0
        self.drawn: list[tuple[object, bool]] = []

    def erase(self) -> None:
        self.erased += 1
        self.drawn = []


class ScrollableConstructionTests(unittest.TestCase):
    def test_empty_list_has_no_cursor(self) -> None:
        self.assertIsNone(Scrollable([]).cursor)
        self.assertIsNone(Scrollable.with_cursor([]).cursor)
        self.assertIsNone(Scrollable.with_cursor([]).get_cursor_line())

    def test_with_cursor_starts_at_first_line(self) -> None:
        scrollable = Scrollable.with_cursor(["a", "b"])
        self.assertEqual(scrollable.cursor, 0)
        self.assertEqual(scrollable.top, 0)
        self.assertEqual(scrollable.get_cursor_line(), (0, "a"))

    def test_get_line_out_of_range_is_none(self) -> None:
        scrollable = Scrollable(["a"])
        self.assertIsNone(scrollable.get_line(1))
        self.assertIsNone(scrollable.get_line(-1))


class ScrollableCursorTests(unittest.TestCase):
    def test_set_cursor_centred_uses_half_the_rows(self) -> None:
        for cursor, rows in [(0, 5), (1, 4), (5, 4), (7, 3), (9, 10)]:
            scrollable = Scrollable.with_cursor(range(10))
            scrollable.set_cursor_centred(cursor, rows)
            self.assertEqual(scrollable.cursor, cursor)
            self.assertEqual(scrollable.top, max(0, cursor - rows // 2))

    def test_set_cursor_centred_is_not_clamped_against_end(self) -> None:
        scrollable = Scrollable.with_cursor(range(10))
        scrollable.set_cursor_centred(9, 4)
        self.assertEqual(scrollable.top, 7)

    def test_move_cursor_scrolls_minimally(self) -> None:
        scrollable = Scrollable.with_cursor(range(10))
        self.assertFalse(scrollable.move_cursor(3, 1))
        self.assertEqual((scrollable.cursor, scrollable.top), (1, 0))
        self.assertFalse(scrollable.move_cursor(3, 2))
        self.assertEqual((scrollable.cursor, scrollable.top), (3, 3))
        self.assertFalse(scrollable.move_cursor(3, -1))
        self.assertEqual((scrollable.cursor, scrollable.top), (2, 0))

    def test_move_cursor_reports_limit(self) -> None:
        scrollable = Scrollable.with_cursor(range(3))
        self.assertTrue(scrollable.move_cursor(3, -1))
        scrollable.move_cursor(3, 5)
        self.assertEqual(scrollable.cursor, 2)
        self.assertTrue(scrollable.move_cursor(3, 1))

    def test_move_cursor_without_cursor_does_nothing(self) -> None:
        scrollable = Scrollable(range(3))
        self.assertFalse(scrollable.move_cursor(3, 1))
        self.assertIsNone(scrollable.cursor)

    def test_set_cursor_line_without_cursor_raises(self) -> None:
        with self.assertRaises(ScrollableError):
            Scrollable(["a"]).set_cursor_line("b")

    def test_set_line_and_map_lines(self) -> None:
        scrollable = Scrollable.with_cursor(["a", "b"])
        scrollable.set_line(1, "B")
        scrollable.set_cursor_line("A")
        self.assertEqual(list(scrollable.lines), ["A", "B"])
        scrollable.map_lines(str.lower)
        self.assertEqual(list(scrollable.lines), ["a", "b"])
        with self.assertRaises(ScrollableError):
            scrollable.set_line(2, "c")


class ScrollableScrollTests(unittest.TestCase):
    def test_scroll_clamps_and_reports_limits(self) -> None:
        scrollable = Scrollable(range(10))
        self.assertFalse(scrollable.scroll(4, 3))
        self.assertEqual(scrollable.top, 3)
        self.assertFalse(scrollable.scroll(4, 10))
        self.assertEqual(scrollable.top, 6)
        self.assertTrue(scrollable.scroll(4, 1))
        self.assertFalse(scrollable.scroll(4, -100))
        self.assertEqual(scrollable.top, 0)
        self.assertTrue(scrollable.scroll(4, -1))

    def test_zero_delta_is_not_a_limit(self) -> None:
        self.assertFalse(Scrollable(range(3)).scroll(4, 0))

    def test_scroll_never_pulls_top_back_below_its_current_value(self) -> None:
        scrollable = Scrollable.with_cursor(range(10))
        scrollable.set_cursor_centred(9, 2)
        self.assertEqual(scrollable.top, 8)
        self.assertTrue(scrollable.scroll(4, 1))
        self.assertEqual(scrollable.top, 8)
        self.assertFalse(scrollable.scroll(4, -1))
        self.assertEqual(scrollable.top, 7)


class ScrollableSearchTests(unittest.TestCase):
    def test_search_forward_returns_least_index_at_or_after_start(self) -> None:
        scrollable = Scrollable([1, 2, 3, 4, 5])
        is_even = lambda n: n % 2 == 0  # noqa: E731
        self.assertEqual(scrollable.search_forward(is_even, 0), (1, 2))
        self.assertEqual(scrollable.search_forward(is_even, 1), (1, 2))
        self.assertEqual(scrollable.search_forward(is_even, 2), (3, 4))
        self.assertIsNone(scrollable.search_forward(is_even, 4))
        self.assertIsNone(scrollable.search_forward(is_even, 9))

    def test_search_reverse_returns_greatest_index_before_start(self) -> None:
        scrollable = Scrollable([1, 2, 3, 4, 5])
        is_even = lambda n: n % 2 == 0  # noqa: E731
        self.assertEqual(scrollable.search_reverse(is_even, 5), 3)
        self.assertEqual(scrollable.search_reverse(is_even, 3), 1)
        self.assertIsNone(scrollable.search_reverse(is_even, 1))


class ScrollableDrawTests(unittest.TestCase):
    def test_draw_marks_cursor_row_and_leaves_extra_rows_blank(self) -> None:
        scrollable = Scrollable.with_cursor(["a", "b", "c"])
        scrollable.move_cursor(5, 1)
        panels = [RecordingPanel() for _ in range(5)]

        def draw_line(panel, line, is_cursor):
            panel.drawn.append((line, is_cursor))

        scrollable.draw(panels, draw_line)

        self.assertTrue(all(panel.erased == 1 for panel in panels))
        self.assertEqual(panels[0].drawn, [("a", False)])
        self.assertEqual(panels[1].drawn, [("b", True)])
        self.assertEqual(panels[2].drawn, [("c", False)])
        self.assertEqual(panels[3].drawn, [])
        self.assertEqual(panels[4].drawn, [])

    def test_draw_starts_at_top(self) -> None:
        scrollable = Scrollable(["a", "b", "c"])
        scrollable.scroll(2, 1)
        panels = [RecordingPanel() for _ in range(2)]
        scrollable.draw(panels, lambda panel, line, is_cursor: panel.drawn.append((line, is_cursor)))
        self.assertEqual([p.drawn for p in panels], [[("b", False)], [("c", False)]])


if __name__ == "__main__":
    unittest.main()
