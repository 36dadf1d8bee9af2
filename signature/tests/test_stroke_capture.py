"""
signature/tests/test_stroke_capture.py

Stroke capture session: commit order, clear and out-of-order input.
Uses unittest to avoid external test dependencies.
"""

from __future__ import annotations

import unittest

from signature.logic.stroke_capture import StrokeCapture
from signature.models.stroke import Point


class TestStrokeCapture(unittest.TestCase):
    def setUp(self) -> None:
        self.cap = StrokeCapture()

    def test_commit_keeps_points_in_call_order(self) -> None:
        self.cap.begin_stroke((10, 20))
        self.cap.extend_stroke((11, 21))
        self.cap.extend_stroke(Point(12, 22))
        self.cap.end_stroke()

        self.assertEqual(len(self.cap.lines), 1)
        self.assertEqual(self.cap.lines[0].points, [Point(10, 20), Point(11, 21), Point(12, 22)])
        self.assertFalse(self.cap.is_stroke_open)
        self.assertFalse(self.cap.is_empty)

    def test_lines_kept_in_commit_order(self) -> None:
        for x in (1, 2, 3):
            self.cap.begin_stroke((x, x))
            self.cap.end_stroke()
        self.assertEqual([l.points[0].x for l in self.cap.lines], [1, 2, 3])

    def test_tap_commits_single_point_line(self) -> None:
        self.cap.begin_stroke((5, 5))
        self.cap.end_stroke()
        self.assertEqual(self.cap.lines[0].points, [Point(5, 5)])

    def test_end_without_begin_commits_nothing(self) -> None:
        self.cap.end_stroke()
        self.assertTrue(self.cap.is_empty)
        self.assertEqual(self.cap.lines, [])

    def test_extend_without_begin_is_ignored(self) -> None:
        self.cap.extend_stroke((1, 1))
        self.assertIsNone(self.cap.current_line)
        self.assertTrue(self.cap.is_empty)

    def test_begin_while_open_keeps_current_stroke(self) -> None:
        self.cap.begin_stroke((1, 1))
        self.cap.begin_stroke((9, 9))
        self.cap.extend_stroke((2, 2))
        self.cap.end_stroke()
        self.assertEqual(self.cap.lines[0].points, [Point(1, 1), Point(2, 2)])

    def test_current_line_visible_while_drawing(self) -> None:
        self.cap.begin_stroke((1, 1))
        self.cap.extend_stroke((2, 2))
        self.assertTrue(self.cap.is_stroke_open)
        self.assertEqual(len(self.cap.current_line), 2)
        self.assertTrue(self.cap.is_empty)

    def test_clear_all_is_idempotent(self) -> None:
        self.cap.begin_stroke((1, 1))
        self.cap.end_stroke()
        self.cap.begin_stroke((2, 2))

        self.cap.clear_all()
        once = (self.cap.lines, self.cap.current_line, self.cap.is_empty)
        self.cap.clear_all()
        twice = (self.cap.lines, self.cap.current_line, self.cap.is_empty)

        self.assertEqual(once, ([], None, True))
        self.assertEqual(once, twice)

    def test_lines_are_copies(self) -> None:
        self.cap.begin_stroke((1, 1))
        self.cap.end_stroke()
        self.cap.lines[0].points.append(Point(99, 99))
        self.assertEqual(len(self.cap.lines[0]), 1)


if __name__ == "__main__":
    unittest.main()
