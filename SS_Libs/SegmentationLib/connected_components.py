"""
Connected component extraction over an alpha mask.

Opaque pixels are grouped with an explicit-stack flood fill using
8-connectivity. Seeds are taken in row-major order, so components come out
in the order their first pixel is met by the scan.

A step in x is refused when it would enter a column with no opaque pixel
anywhere, and likewise for rows. With single-pixel steps the target pixel
itself is opaque, so its row and column are never empty; the guard is kept
so that any future wider neighbourhood cannot bridge an empty gutter.

Classes:
    ComponentBounds: Inclusive tight bounding box of a component
    Component: Bounding box plus the flat indices of its member pixels

Functions:
    find_empty_lines: Rows and columns of the mask with no opaque pixel
    flood_fill: Collect one component starting at a seed pixel
    extract_components: All components whose padded size reaches min_size
"""

from dataclasses import dataclass, field
from typing import List, Set, Tuple
import logging

import numpy as np

from SS_Libs.SegmentationLib.alpha_mask import AlphaMask

logger = logging.getLogger(__name__)

NEIGHBOR_OFFSETS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


@dataclass(frozen=True)
class ComponentBounds:
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def padded_size(self, padding: int) -> Tuple[int, int]:
        return (self.width + 2 * padding, self.height + 2 * padding)


@dataclass
class Component:
    bounds: ComponentBounds
    pixels: Set[int] = field(default_factory=set)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def find_empty_lines(mask: AlphaMask) -> Tuple[Set[int], Set[int]]:
    """Return (empty_rows, empty_cols) for the mask."""
    empty_rows = set(np.flatnonzero(~mask.opaque.any(axis=1)).tolist())
    empty_cols = set(np.flatnonzero(~mask.opaque.any(axis=0)).tolist())
    return empty_rows, empty_cols


def flood_fill(
    opaque: List[bool],
    width: int,
    height: int,
    start_x: int,
    start_y: int,
    visited: bytearray,
    empty_rows: Set[int],
    empty_cols: Set[int],
) -> Component:
    """
    Collect the component containing (start_x, start_y).

    Args:
        opaque: Flat row-major opacity flags
        width, height: Mask dimensions
        start_x, start_y: Seed pixel, must be opaque
        visited: Flat visited flags, updated in place
        empty_rows, empty_cols: Lines no step may enter

    Returns:
        The component with its tight bounds and member pixel indices
    """
    stack = [(start_x, start_y)]
    pixels: Set[int] = set()
    min_x = max_x = start_x
    min_y = max_y = start_y

    while stack:
        x, y = stack.pop()
        idx = y * width + x
        if visited[idx] or not opaque[idx]:
            continue
        visited[idx] = 1
        pixels.add(idx)

        if x < min_x:
            min_x = x
        elif x > max_x:
            max_x = x
        if y < min_y:
            min_y = y
        elif y > max_y:
            max_y = y

        for dx, dy in NEIGHBOR_OFFSETS:
            nx = x + dx
            ny = y + dy
            if nx < 0 or nx >= width or ny < 0 or ny >= height:
                continue
            if dx != 0 and (x + _sign(dx)) in empty_cols:
                continue
            if dy != 0 and (y + _sign(dy)) in empty_rows:
                continue
            nidx = ny * width + nx
            if not visited[nidx] and opaque[nidx]:
                stack.append((nx, ny))

    return Component(ComponentBounds(min_x, min_y, max_x, max_y), pixels)


def extract_components(mask: AlphaMask, min_size: int, padding: int) -> List[Component]:
    """
    Find every connected component of opaque pixels.

    Components whose padded width or height is below min_size are dropped.
    A padded size exactly equal to min_size is kept.

    Args:
        mask: Opacity mask to segment
        min_size: Minimum padded side length in pixels
        padding: Margin added on every side before the size check

    Returns:
        Components in seed (row-major) order
    """
    width, height = mask.width, mask.height
    opaque = mask.opaque.ravel().tolist()
    visited = bytearray(width * height)
    empty_rows, empty_cols = find_empty_lines(mask)

    components: List[Component] = []
    dropped = 0
    for idx in np.flatnonzero(mask.opaque.ravel()).tolist():
        if visited[idx]:
            continue
        seed_y, seed_x = divmod(idx, width)
        component = flood_fill(
            opaque, width, height, seed_x, seed_y, visited, empty_rows, empty_cols
        )
        padded_width, padded_height = component.bounds.padded_size(padding)
        if padded_width < min_size or padded_height < min_size:
            dropped += 1
            logger.debug(
                f"Dropped component at ({seed_x}, {seed_y}): "
                f"{padded_width}x{padded_height} < {min_size}"
            )
            continue
        components.append(component)

    logger.debug(f"Found {len(components)} components ({dropped} below min_size)")
    return components
