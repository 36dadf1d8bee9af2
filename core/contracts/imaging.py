"""core/contracts/imaging.py
========================

Image codec contract used by the signature rasterizer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from PIL import Image


class IImageCodec(ABC):
    """Turns raster images into encoded bytes and back."""

    @abstractmethod
    def encode(self, image: Image.Image) -> bytes:
        """Encode *image*; raises OSError/ValueError on failure."""

    @abstractmethod
    def decode(self, data: bytes) -> Image.Image:
        """Decode *data*; raises OSError/ValueError on failure."""
