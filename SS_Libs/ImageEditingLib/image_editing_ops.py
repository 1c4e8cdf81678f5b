"""
Core pixel operations for Sprite Splitter.

This module provides the low-level raster functions used by extraction,
the erase session and the crop editor, plus image decoding and encoding.

Functions:
    decode_image: Decode image file bytes into an RGBA Raster
    load_image_path: Decode an image file from disk
    encode_png: Encode a Raster as lossless PNG bytes
    erase_circle: Clear a filled circle of pixels to full transparency
    erase_segment: Clear a round-capped line of pixels to full transparency
    crop_region: Copy a rectangle out of a Raster
    validate_sprite_name: Reject names unsafe as file or archive entry names
    save_sprites: Batch save named sprites to a directory
"""

import io
import math
from pathlib import Path
from typing import Iterable, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from SS_Libs.constants import (
    DEFAULT_OUTPUT_FORMAT,
    INVALID_NAME_SEQUENCES,
    SPRITE_FILE_EXTENSION,
)
from SS_Libs.ImageEditingLib.image_models import Sprite
from SS_Libs.ImageEditingLib.raster import Raster


def decode_image(data: bytes) -> Raster:
    """
    Decode image file bytes into an RGBA Raster.

    Args:
        data: Encoded image bytes in any format Pillow can read

    Returns:
        The decoded image as an RGBA Raster

    Raises:
        ValueError: If the bytes are not a readable image
    """
    if not data:
        raise ValueError("Unsupported or corrupt image: no data")
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            return Raster.from_image(image)
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValueError(f"Unsupported or corrupt image: {e}") from e


def load_image_path(path: Path) -> Raster:
    """Decode an image file from disk. Raises ValueError for non-images."""
    return decode_image(Path(path).read_bytes())


def encode_png(raster: Raster) -> bytes:
    """Encode a Raster as PNG bytes. Decoding the result gives identical pixels."""
    buffer = io.BytesIO()
    raster.to_image().save(buffer, format=DEFAULT_OUTPUT_FORMAT)
    return buffer.getvalue()


def _stroke_window(
    raster: Raster, x0: float, y0: float, x1: float, y1: float, radius: float
) -> Tuple[int, int, int, int]:
    left = max(0, int(math.floor(min(x0, x1) - radius)))
    top = max(0, int(math.floor(min(y0, y1) - radius)))
    right = min(raster.width, int(math.ceil(max(x0, x1) + radius)) + 1)
    bottom = min(raster.height, int(math.ceil(max(y0, y1) + radius)) + 1)
    return left, top, right, bottom


def erase_segment(
    raster: Raster, x0: float, y0: float, x1: float, y1: float, diameter: float
) -> int:
    """
    Clear every pixel whose centre lies within diameter/2 of the segment
    (x0, y0)-(x1, y1). Ends are round, so a zero-length segment is a circle.

    Cleared pixels become (0, 0, 0, 0), the result of a destination-out
    composite with a fully opaque brush.

    Returns:
        Number of pixels inside the brush footprint
    """
    radius = diameter / 2.0
    left, top, right, bottom = _stroke_window(raster, x0, y0, x1, y1, radius)
    if left >= right or top >= bottom:
        return 0

    ys, xs = np.mgrid[top:bottom, left:right]
    px = xs + 0.5
    py = ys + 0.5

    dx = x1 - x0
    dy = y1 - y0
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        t = 0.0
    else:
        t = np.clip(((px - x0) * dx + (py - y0) * dy) / length_sq, 0.0, 1.0)
    nearest_x = x0 + t * dx
    nearest_y = y0 + t * dy
    inside = (px - nearest_x) ** 2 + (py - nearest_y) ** 2 <= radius * radius

    region = raster.pixels[top:bottom, left:right]
    region[inside] = 0
    return int(inside.sum())


def erase_circle(raster: Raster, cx: float, cy: float, diameter: float) -> int:
    """Clear a filled circle centred on (cx, cy)."""
    return erase_segment(raster, cx, cy, cx, cy, diameter)


def crop_region(raster: Raster, x: int, y: int, width: int, height: int) -> Raster:
    """
    Copy a rectangle out of a raster.

    Parts of the rectangle that fall outside the source stay transparent.

    Raises:
        ValueError: If width or height is not positive
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Crop size must be positive, got {width}x{height}")

    cropped = Raster.blank(width, height)

    src_left = max(0, x)
    src_top = max(0, y)
    src_right = min(raster.width, x + width)
    src_bottom = min(raster.height, y + height)

    if src_right > src_left and src_bottom > src_top:
        paste_x = src_left - x
        paste_y = src_top - y
        cropped.pixels[
            paste_y:paste_y + (src_bottom - src_top),
            paste_x:paste_x + (src_right - src_left),
        ] = raster.pixels[src_top:src_bottom, src_left:src_right]

    return cropped


def validate_sprite_name(name: str) -> str:
    """
    Check that a sprite name is safe to use as a file or archive entry name.

    Args:
        name: Display name of a sprite

    Returns:
        The name unchanged

    Raises:
        ValueError: If the name is blank or contains a path separator, '..' or NUL
    """
    if not name or not name.strip():
        raise ValueError("Sprite name cannot be empty")
    for forbidden in INVALID_NAME_SEQUENCES:
        if forbidden in name:
            raise ValueError(f"Sprite name contains {forbidden!r}: {name!r}")
    return name


def save_sprites(named_sprites: Iterable[Tuple[str, Sprite]], output_dir: Path) -> int:
    """
    Save named sprites to disk as ``{name}.png`` files.

    Args:
        named_sprites: (name, Sprite) pairs
        output_dir: Directory path where images should be saved

    Returns:
        The number of images saved

    Raises:
        ValueError: If a name is unsafe as a file name
        OSError: If directory cannot be accessed or files cannot be written
    """
    output_dir = Path(output_dir)
    if not output_dir.exists():
        raise OSError(f"Output directory does not exist: {output_dir}")

    if not output_dir.is_dir():
        raise OSError(f"Output path is not a directory: {output_dir}")

    saved_count = 0
    for name, sprite in named_sprites:
        validate_sprite_name(name)
        save_path = output_dir / f"{name}{SPRITE_FILE_EXTENSION}"
        save_path.write_bytes(encode_png(sprite.raster))
        saved_count += 1
    return saved_count
