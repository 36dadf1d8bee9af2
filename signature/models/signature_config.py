# signature/models/signature_config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


def hex_to_rgb(hexstr: str) -> Tuple[int, int, int]:
    """
    Convert hex color (#RRGGBB or #RGB) into an RGB tuple for PIL.
    """
    s = (hexstr or "#000000").strip()
    if not s.startswith("#"):
        s = "#" + s
    if len(s) == 4:
        r = int(s[1] * 2, 16); g = int(s[2] * 2, 16); b = int(s[3] * 2, 16)
    else:
        r = int(s[1:3], 16); g = int(s[3:5], 16); b = int(s[5:7], 16)
    return (r, g, b)


@dataclass(frozen=True)
class RasterStyle:
    """Pen and paper used when rasterizing strokes."""
    stroke_width: int = 4
    stroke_color: Tuple[int, int, int] = (0, 0, 0)
    background_color: Tuple[int, int, int] = (255, 255, 255)

    @classmethod
    def from_config(cls, cfg) -> "RasterStyle":
        """Build from ``config_service.signature``."""
        return cls(
            stroke_width=max(1, int(cfg.stroke_width)),
            stroke_color=hex_to_rgb(cfg.stroke_color),
            background_color=hex_to_rgb(cfg.background_color),
        )
