"""
Sprite construction from connected components.

Each component is cropped out of the source with its padding, then every
pixel that is not a member of the component has its alpha forced to 0.
The masking keeps a neighbour whose bounding box overlaps this one from
showing up inside the cropped sprite.
"""

from typing import Optional

import numpy as np

from SS_Libs.ImageEditingLib.image_editing_ops import crop_region
from SS_Libs.ImageEditingLib.image_models import Bounds, Sprite
from SS_Libs.ImageEditingLib.raster import Raster
from SS_Libs.SegmentationLib.connected_components import Component


def membership_mask(source_width: int, component: Component, padding: int) -> np.ndarray:
    """
    Boolean map of the padded sprite rectangle, True where the source pixel
    belongs to the component.
    """
    bounds = component.bounds
    width, height = bounds.padded_size(padding)
    member = np.zeros((height, width), dtype=bool)
    if not component.pixels:
        return member

    indices = np.fromiter(component.pixels, dtype=np.int64, count=len(component.pixels))
    src_y, src_x = np.divmod(indices, source_width)
    member[src_y - bounds.min_y + padding, src_x - bounds.min_x + padding] = True
    return member


def build_sprite(
    source: Raster,
    component: Component,
    padding: int,
    sprite_id: str,
    min_size: int = 1,
) -> Optional[Sprite]:
    """
    Crop one component out of the source raster.

    Args:
        source: Source spritesheet raster
        component: Component bounds and member pixels
        padding: Transparent margin added on every side
        sprite_id: Identifier for the new sprite
        min_size: Minimum side length of the final raster

    Returns:
        The sprite, or None if its raster is smaller than min_size
    """
    bounds = component.bounds
    width, height = bounds.padded_size(padding)
    if width < min_size or height < min_size:
        return None

    x = bounds.min_x - padding
    y = bounds.min_y - padding
    raster = crop_region(source, x, y, width, height)
    raster.alpha[~membership_mask(source.width, component, padding)] = 0

    return Sprite(id=sprite_id, bounds=Bounds(x, y, width, height), raster=raster)
