"""
ImageEditingLib - Raster buffer, sprite models and pixel operations

This module provides the pixel-level building blocks for the
Sprite Splitter project.
"""

from SS_Libs.ImageEditingLib.raster import Raster
from SS_Libs.ImageEditingLib.image_models import Bounds, Sprite, SpriteIdAllocator
from SS_Libs.ImageEditingLib.image_editing_ops import (
    decode_image,
    load_image_path,
    encode_png,
    erase_circle,
    erase_segment,
    crop_region,
    save_sprites,
)

__all__ = [
    "Raster",
    "Bounds",
    "Sprite",
    "SpriteIdAllocator",
    "decode_image",
    "load_image_path",
    "encode_png",
    "erase_circle",
    "erase_segment",
    "crop_region",
    "save_sprites",
]
