# signature/logic/image_codec.py
from __future__ import annotations

import io

from PIL import Image

from core.contracts.imaging import IImageCodec


class PngImageCodec(IImageCodec):
    """PNG via Pillow. Output is byte-stable for identical pixel data."""

    def encode(self, image: Image.Image) -> bytes:
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()

    def decode(self, data: bytes) -> Image.Image:
        img = Image.open(io.BytesIO(data))
        img.load()
        return img
