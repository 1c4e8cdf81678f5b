"""
Pytest configuration and shared fixtures for Sprite Splitter tests.

This module provides synthetic rasters used across multiple test modules.
"""

import numpy as np
import pytest

from SS_Libs.ImageEditingLib.raster import Raster


def paint_rects(width, height, rects):
    """
    Build a transparent raster and fill rectangles into it.

    Args:
        width, height: Raster size
        rects: Iterable of (x, y, w, h, rgba) tuples

    Returns:
        Raster with the rectangles painted
    """
    raster = Raster.blank(width, height)
    for x, y, w, h, color in rects:
        raster.pixels[y:y + h, x:x + w] = color
    return raster


@pytest.fixture
def raster_factory():
    """Provide the paint_rects helper as a fixture."""
    return paint_rects


@pytest.fixture
def two_squares():
    """
    64x64 raster with two opaque 10x10 squares at (0, 0) and (40, 40).

    Returns:
        Raster, everything else fully transparent
    """
    return paint_rects(64, 64, [
        (0, 0, 10, 10, (255, 0, 0, 255)),
        (40, 40, 10, 10, (0, 0, 255, 255)),
    ])


@pytest.fixture
def gradient_sheet():
    """
    Provide a 40x30 raster with distinct colour per pixel and a transparent
    left half, for checking unmasked copies.
    """
    ys, xs = np.mgrid[0:30, 0:40]
    pixels = np.zeros((30, 40, 4), dtype=np.uint8)
    pixels[:, :, 0] = xs * 6
    pixels[:, :, 1] = ys * 8
    pixels[:, :, 2] = 77
    pixels[:, 20:, 3] = 255
    return Raster(40, 30, pixels)


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 128),  # Half-transparent white
        (0, 0, 0, 0),        # Transparent
    ]
