"""
Raster pixel buffer for Sprite Splitter.

A Raster is a plain owned RGBA buffer: row-major, 4 bytes per pixel, stored
as a NumPy array of shape (height, width, 4) and dtype uint8. All pixel work
(masking, erasing, cropping) operates directly on this buffer; Pillow is only
used at the edges to decode and encode image files.

Classes:
    Raster: Width, height and RGBA pixel array
"""

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
from PIL import Image

from SS_Libs.constants import ALPHA_CHANNEL, CHANNELS


@dataclass(eq=False)
class Raster:
    """RGBA pixel buffer.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        pixels: uint8 array of shape (height, width, 4)
    """
    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Raster size must be non-negative, got {self.width}x{self.height}")
        expected = (self.height, self.width, CHANNELS)
        if not isinstance(self.pixels, np.ndarray):
            raise TypeError(f"Expected numpy array for pixels, got {type(self.pixels)}")
        if self.pixels.shape != expected:
            raise ValueError(f"Pixel array shape {self.pixels.shape} does not match {expected}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Pixel array must be uint8, got {self.pixels.dtype}")

    @classmethod
    def blank(cls, width: int, height: int) -> "Raster":
        """Create a fully transparent raster."""
        return cls(width, height, np.zeros((height, width, CHANNELS), dtype=np.uint8))

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "Raster":
        """
        Create a raster from a row-major RGBA byte buffer.

        Raises:
            ValueError: If the buffer length does not equal width * height * 4
        """
        expected = width * height * CHANNELS
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}")
        array = np.frombuffer(bytes(data), dtype=np.uint8).reshape((height, width, CHANNELS))
        return cls(width, height, array.copy())

    @classmethod
    def from_image(cls, image: Any) -> "Raster":
        """Create a raster from a PIL Image (converted to RGBA)."""
        if not hasattr(image, "mode"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        rgba = image.convert("RGBA")
        array = np.array(rgba, dtype=np.uint8)
        return cls(rgba.width, rgba.height, array)

    def to_image(self) -> "Image.Image":
        """Return a PIL RGBA Image holding a copy of the pixels."""
        return Image.fromarray(self.pixels.copy())

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def copy(self) -> "Raster":
        return Raster(self.width, self.height, self.pixels.copy())

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def alpha(self) -> np.ndarray:
        """View of the alpha channel, shape (height, width)."""
        return self.pixels[:, :, ALPHA_CHANNEL]

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.pixels, other.pixels)

    def __repr__(self) -> str:
        return f"Raster({self.width}x{self.height})"
