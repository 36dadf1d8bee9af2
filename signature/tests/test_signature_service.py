"""Rasterization and aspect-preserving rerender."""
from __future__ import annotations

import io

import pytest
from PIL import Image

from core.contracts.imaging import IImageCodec
from signature.logic.image_codec import PngImageCodec
from signature.logic.signature_service import SignatureService, fit_rect
from signature.models.signature_config import RasterStyle, hex_to_rgb
from signature.models.signature_enums import RasterSize
from signature.models.stroke import Line, Point

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def _open(png: bytes) -> Image.Image:
    return Image.open(io.BytesIO(png)).convert("RGB")


def _horizontal() -> list[Line]:
    return [Line(points=[Point(100, 100), Point(900, 100)])]


class _BrokenCodec(IImageCodec):
    def encode(self, image: Image.Image) -> bytes:
        raise OSError("disk full")

    def decode(self, data: bytes) -> Image.Image:
        raise OSError("unreadable")


@pytest.fixture
def service() -> SignatureService:
    return SignatureService()


@pytest.mark.parametrize("target", list(RasterSize))
def test_intent_sizes(service: SignatureService, target: RasterSize) -> None:
    png = service.rasterize(_horizontal(), target)
    assert png is not None
    assert _open(png).size == target.value


def test_intent_helpers(service: SignatureService) -> None:
    assert _open(service.create_high_quality(_horizontal())).size == (1000, 600)
    assert _open(service.create_preview(_horizontal())).size == (800, 500)
    assert _open(service.create_thumbnail(_horizontal())).size == (200, 120)


def test_rasterize_is_deterministic(service: SignatureService) -> None:
    lines = [Line(points=[Point(10, 10), Point(300, 250), Point(600, 80)]),
             Line(points=[Point(700, 500)])]
    assert service.rasterize(lines, RasterSize.FULL) == service.rasterize(lines, RasterSize.FULL)


def test_stroke_pixels_are_scaled_per_axis(service: SignatureService) -> None:
    full = _open(service.rasterize(_horizontal(), RasterSize.FULL))
    assert full.getpixel((500, 100)) == BLACK
    assert full.getpixel((500, 300)) == WHITE
    assert full.getpixel((50, 100)) == WHITE

    thumb = _open(service.rasterize(_horizontal(), RasterSize.THUMBNAIL))
    assert thumb.getpixel((100, 20)) == BLACK
    assert thumb.getpixel((100, 60)) == WHITE


def test_single_point_renders_a_dot(service: SignatureService) -> None:
    img = _open(service.rasterize([Line(points=[Point(500, 300)])], RasterSize.FULL))
    assert img.getpixel((500, 300)) == BLACK
    assert img.getpixel((520, 300)) == WHITE


def test_dot_is_stroke_width_across() -> None:
    style = RasterStyle(stroke_width=10, stroke_color=BLACK, background_color=WHITE)
    img = _open(SignatureService(style=style).rasterize([Line(points=[Point(500, 300)])],
                                                        RasterSize.FULL))
    row = [img.getpixel((x, 300)) for x in range(480, 521)]
    assert 9 <= row.count(BLACK) <= style.stroke_width


def test_empty_lines_are_skipped(service: SignatureService) -> None:
    blank = service.rasterize([], RasterSize.THUMBNAIL)
    assert service.rasterize([Line()], RasterSize.THUMBNAIL) == blank
    assert _open(blank).getextrema() == ((255, 255), (255, 255), (255, 255))


def test_style_is_applied() -> None:
    style = RasterStyle(stroke_width=10, stroke_color=hex_to_rgb("#F00"),
                        background_color=hex_to_rgb("#0000ff"))
    img = _open(SignatureService(style=style).rasterize(_horizontal(), RasterSize.FULL))
    assert img.getpixel((500, 100)) == (255, 0, 0)
    assert img.getpixel((500, 103)) == (255, 0, 0)
    assert img.getpixel((5, 5)) == (0, 0, 255)


@pytest.mark.parametrize("target", [(0, 100), (200, -1), ("wide", 10), (5,)])
def test_invalid_size_yields_none(service: SignatureService, target) -> None:
    assert service.rasterize(_horizontal(), target) is None
    png = service.rasterize(_horizontal(), RasterSize.THUMBNAIL)
    assert service.rerender(png, target) is None


def test_render_image_rejects_invalid_size(service: SignatureService) -> None:
    with pytest.raises(ValueError):
        service.render_image(_horizontal(), (0, 10))


def test_codec_failure_yields_none() -> None:
    broken = SignatureService(codec=_BrokenCodec())
    assert broken.rasterize(_horizontal(), RasterSize.FULL) is None
    assert broken.rerender(b"\x89PNG", (200, 120)) is None


@pytest.mark.parametrize("source,target,expected", [
    ((100, 50), (200, 200), (0.0, 50.0, 200.0, 100.0)),
    ((1000, 600), (400, 240), (0.0, 0.0, 400.0, 240.0)),
    ((100, 100), (300, 200), (50.0, 0.0, 200.0, 200.0)),
])
def test_fit_rect(source, target, expected) -> None:
    assert fit_rect(source, target) == pytest.approx(expected)


def test_rerender_centres_and_keeps_aspect(service: SignatureService) -> None:
    src = PngImageCodec().encode(Image.new("RGB", (100, 50), BLACK))
    out = _open(service.rerender(src, (200, 200)))
    assert out.size == (200, 200)
    assert out.getpixel((100, 20)) == WHITE      # band above
    assert out.getpixel((100, 180)) == WHITE     # band below
    assert out.getpixel((100, 100)) == BLACK
    assert out.getpixel((5, 100)) == BLACK


def test_rerender_of_nothing_or_garbage(service: SignatureService) -> None:
    assert service.rerender(None, RasterSize.THUMBNAIL) is None
    assert service.rerender(b"", RasterSize.THUMBNAIL) is None
    assert service.rerender(b"not an image", RasterSize.THUMBNAIL) is None


def test_raster_style_from_config() -> None:
    class _Cfg:
        stroke_width = 0
        stroke_color = "#112233"
        background_color = "FFFFFF"

    style = RasterStyle.from_config(_Cfg())
    assert style.stroke_width == 1
    assert style.stroke_color == (0x11, 0x22, 0x33)
    assert style.background_color == WHITE
