# signature/logic/stroke_capture.py
from __future__ import annotations

from typing import Optional

from ..models.stroke import Line, Point


class StrokeCapture:
    """
    Records freehand pointer input as committed lines.

    The GUI maps pointer events 1:1: press -> begin_stroke, drag ->
    extend_stroke, release -> end_stroke. Out-of-order calls (a release
    without a press, a drag after clear_all) are ignored.
    """

    def __init__(self) -> None:
        self._lines: list[Line] = []
        self._current: Optional[Line] = None

    # -------- Input ----------------------------------------------------------
    def begin_stroke(self, point: Point | tuple[float, float]) -> None:
        """Open a new line; no-op while another stroke is open."""
        if self._current is not None:
            return
        self._current = Line(points=[Point(*point)])

    def extend_stroke(self, point: Point | tuple[float, float]) -> None:
        if self._current is None:
            return
        self._current.points.append(Point(*point))

    def end_stroke(self) -> None:
        """Commit the open line if it holds at least one point."""
        line, self._current = self._current, None
        if line is not None and len(line) >= 1:
            self._lines.append(line)

    def clear_all(self) -> None:
        self._lines = []
        self._current = None

    # -------- State ----------------------------------------------------------
    @property
    def lines(self) -> list[Line]:
        """Committed lines in commit order (copies; callers cannot mutate the session)."""
        return [Line(points=list(l.points)) for l in self._lines]

    @property
    def current_line(self) -> Optional[Line]:
        return self._current

    @property
    def is_stroke_open(self) -> bool:
        return self._current is not None

    @property
    def is_empty(self) -> bool:
        return not self._lines
