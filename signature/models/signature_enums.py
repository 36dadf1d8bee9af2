# signature/models/signature_enums.py
from __future__ import annotations
from enum import Enum


class RasterSize(Enum):
    """
    Canonical raster targets. FULL is also the reference canvas that
    captured coordinates are expressed in.
    """
    FULL = (1000, 600)
    PREVIEW = (800, 500)
    THUMBNAIL = (200, 120)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]


REFERENCE_CANVAS: tuple[int, int] = RasterSize.FULL.value
