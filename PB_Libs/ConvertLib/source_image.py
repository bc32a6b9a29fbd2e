"""
Source image model for PixelBead conversions.

Image decoding happens outside the conversion core; the pipelines only
receive a ready RGBA byte buffer with its dimensions. SourceImage is that
boundary record, with helpers to move between it, Pillow images and numpy
arrays.

Classes:
    SourceImage: Width, height and a row-major RGBA byte buffer
"""

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from PB_Libs.pillow_compat import Image

RgbaPixel = Tuple[int, int, int, int]


@dataclass(frozen=True)
class SourceImage:
    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(
                f"RGBA buffer holds {len(self.pixels)} bytes, expected {expected} "
                f"for a {self.width}x{self.height} image"
            )

    @classmethod
    def from_image(cls, image: Any) -> "SourceImage":
        """Create from a PIL Image, converting it to RGBA first."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        width, height = image.size
        return cls(width=width, height=height, pixels=image.tobytes())

    @classmethod
    def from_array(cls, array: np.ndarray) -> "SourceImage":
        """Create from an (H, W, 4) uint8 array."""
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"Expected an (H, W, 4) array, got shape {array.shape}")
        height, width = array.shape[:2]
        return cls(width=width, height=height, pixels=np.ascontiguousarray(array, dtype=np.uint8).tobytes())

    def to_image(self) -> Any:
        return Image.frombytes("RGBA", (self.width, self.height), self.pixels)

    def to_array(self) -> np.ndarray:
        """Read-only (H, W, 4) uint8 view of the buffer."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, 4)

    def pixel(self, x: int, y: int) -> RgbaPixel:
        index = (y * self.width + x) * 4
        r, g, b, a = self.pixels[index:index + 4]
        return r, g, b, a
