# signature/logic/signature_service.py
from __future__ import annotations

from typing import Iterable, Optional, Tuple, Union

from PIL import Image, ImageDraw

from core.contracts.imaging import IImageCodec
from core.logging.logic.logger import logger

from ..models.signature_config import RasterStyle
from ..models.signature_enums import REFERENCE_CANVAS, RasterSize
from ..models.stroke import Line
from .image_codec import PngImageCodec

_FEATURE = "Signature"

Size = Tuple[int, int]
Target = Union[RasterSize, Size]

_CODEC_ERRORS = (OSError, ValueError, Image.DecompressionBombError)


def _size_of(target: Target) -> Optional[Size]:
    """Pixel size of *target*; None if it is not a positive (w, h) pair."""
    if isinstance(target, RasterSize):
        return target.value
    try:
        w, h = int(target[0]), int(target[1])
    except (TypeError, ValueError, IndexError):
        return None
    if w <= 0 or h <= 0:
        return None
    return w, h


def _invalid_size(target) -> None:
    logger.log(_FEATURE, "InvalidSize", level="ERROR", message=f"{target!r}")


def fit_rect(source: Size, target: Size) -> Tuple[float, float, float, float]:
    """
    Aspect-preserving placement of *source* centered inside *target*.

    Returns ``(x, y, width, height)`` with
    ``scale = min(W/w, H/h)``, ``x = (W - w*scale)/2``, ``y = (H - h*scale)/2``.
    """
    sw, sh = source
    tw, th = target
    scale = min(tw / sw, th / sh)
    w, h = sw * scale, sh * scale
    return (tw - w) / 2, (th - h) / 2, w, h


class SignatureService:
    """
    Signature rasterizer (no UI).

    Strokes arrive in reference-canvas units (1000x600) and are scaled per
    axis to the requested target; stored signatures are PNG bytes that can be
    re-rendered into any box with aspect-preserving centering.
    """

    def __init__(self, *, codec: Optional[IImageCodec] = None,
                 style: Optional[RasterStyle] = None) -> None:
        self._codec = codec or PngImageCodec()
        self._style = style or RasterStyle()

    @property
    def style(self) -> RasterStyle:
        return self._style

    # -------- Canvas strokes -> image ---------------------------------------
    def render_image(self, lines: Iterable[Line], target: Target,
                     style: Optional[RasterStyle] = None) -> Image.Image:
        """
        Draw *lines* onto a fresh canvas, in commit order.

        Each line is a polyline with round joins and round caps at a constant
        pixel width; a single-point line becomes a dot, an empty line is skipped.

        :raises ValueError: if *target* is not a positive size
        """
        st = style or self._style
        size = _size_of(target)
        if size is None:
            raise ValueError(f"Invalid raster size {target!r}")
        w, h = size
        ref_w, ref_h = REFERENCE_CANVAS
        sx, sy = w / ref_w, h / ref_h
        if abs(w / h - ref_w / ref_h) > 1e-3:
            logger.log(_FEATURE, "NonUniformScale", level="WARNING",
                       message=f"{ref_w}x{ref_h} -> {w}x{h} stretches strokes")

        img = Image.new("RGB", (w, h), st.background_color)
        drw = ImageDraw.Draw(img)
        r = st.stroke_width / 2
        for line in lines:
            if not line.points:
                continue
            pts = line.scaled(sx, sy)
            if len(pts) >= 2:
                drw.line(pts, fill=st.stroke_color, width=st.stroke_width, joint="curve")
            for x, y in (pts[0], pts[-1]):
                # bbox is inclusive: stroke_width pixels across, like the line body
                drw.ellipse((x - r, y - r, x + r - 1, y + r - 1), fill=st.stroke_color)
        return img

    def rasterize(self, lines: Iterable[Line], target: Target = RasterSize.FULL,
                  style: Optional[RasterStyle] = None) -> bytes | None:
        """
        Render and encode *lines*. Returns None if the size is invalid or
        encoding fails.
        """
        if _size_of(target) is None:
            _invalid_size(target)
            return None
        img = self.render_image(lines, target, style)
        try:
            return self._codec.encode(img)
        except _CODEC_ERRORS as exc:
            logger.log(_FEATURE, "EncodeFailed", level="ERROR", message=repr(exc))
            return None

    def create_high_quality(self, lines: Iterable[Line]) -> bytes | None:
        return self.rasterize(lines, RasterSize.FULL)

    def create_preview(self, lines: Iterable[Line]) -> bytes | None:
        return self.rasterize(lines, RasterSize.PREVIEW)

    def create_thumbnail(self, lines: Iterable[Line]) -> bytes | None:
        return self.rasterize(lines, RasterSize.THUMBNAIL)

    # -------- Stored PNG -> other size --------------------------------------
    def rerender(self, signature_png: bytes | None, target: Target) -> bytes | None:
        """
        Draw a stored signature into a white canvas of *target* size,
        scaled to fit and centered. Returns None if there is nothing to draw,
        if the size is invalid, or if the codec fails.
        """
        if not signature_png:
            return None
        size = _size_of(target)
        if size is None:
            _invalid_size(target)
            return None
        tw, th = size
        try:
            src = self._codec.decode(signature_png).convert("RGBA")
        except _CODEC_ERRORS as exc:
            logger.log(_FEATURE, "DecodeFailed", level="ERROR", message=repr(exc))
            return None

        x, y, w, h = fit_rect(src.size, (tw, th))
        scaled = src.resize((max(1, round(w)), max(1, round(h))), Image.Resampling.LANCZOS)
        canvas = Image.new("RGB", (tw, th), (255, 255, 255))
        canvas.paste(scaled, (round(x), round(y)), scaled)
        try:
            return self._codec.encode(canvas)
        except _CODEC_ERRORS as exc:
            logger.log(_FEATURE, "EncodeFailed", level="ERROR", message=repr(exc))
            return None
