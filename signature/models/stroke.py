# signature/models/stroke.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import NamedTuple


class Point(NamedTuple):
    """Canvas coordinates in reference-canvas units (see RasterSize.FULL)."""
    x: float
    y: float


@dataclass
class Line:
    """One continuous pen stroke; point order defines the path."""
    points: list[Point] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def scaled(self, sx: float, sy: float) -> list[tuple[float, float]]:
        return [(p.x * sx, p.y * sy) for p in self.points]
