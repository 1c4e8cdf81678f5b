"""
SegmentationLib - Sprite segmentation

This module turns a spritesheet raster into individual masked sprites:
alpha masking, connected component extraction and sprite building.
"""

from SS_Libs.SegmentationLib.alpha_mask import AlphaMask, build_alpha_mask
from SS_Libs.SegmentationLib.connected_components import (
    Component,
    ComponentBounds,
    extract_components,
    find_empty_lines,
    flood_fill,
)
from SS_Libs.SegmentationLib.sprite_builder import build_sprite, membership_mask
from SS_Libs.SegmentationLib.extraction import ExtractionSettings, extract_sprites

__all__ = [
    "AlphaMask",
    "build_alpha_mask",
    "Component",
    "ComponentBounds",
    "extract_components",
    "find_empty_lines",
    "flood_fill",
    "build_sprite",
    "membership_mask",
    "ExtractionSettings",
    "extract_sprites",
]
