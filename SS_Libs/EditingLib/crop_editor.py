"""
Interactive crop rectangle for cutting a new sprite out of the source sheet.

Pointer positions arrive in display coordinates and are converted to
source-image pixels with the display/source scale. Pressing near a corner
(within CORNER_HIT_RADIUS display pixels on both axes) starts a resize of
that corner; pressing anywhere else starts a translate. A move that would
leave the rectangle smaller than MIN_CROP_SIZE or outside the image is
rejected whole; the rectangle is never clamped.

Classes:
    CropRectangle: Position, size and active corner
    CropRectangleEditor: Pointer-driven resize/translate and commit
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple
import logging
import math

from SS_Libs.constants import (
    CORNER_BOTTOM_LEFT,
    CORNER_BOTTOM_RIGHT,
    CORNER_HIT_RADIUS,
    CORNER_TOP_LEFT,
    CORNER_TOP_RIGHT,
    CORNERS,
    DEFAULT_CROP_SIZE,
    MIN_CROP_SIZE,
)
from SS_Libs.ImageEditingLib.image_editing_ops import crop_region
from SS_Libs.ImageEditingLib.image_models import Bounds, Sprite
from SS_Libs.ImageEditingLib.raster import Raster

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class CropRectangle:
    """Crop rectangle in source-image pixel coordinates.

    Attributes:
        x, y: Top-left corner
        width, height: Size (at least MIN_CROP_SIZE)
        corner: Corner being dragged ('tl', 'tr', 'bl', 'br') or None
    """
    x: float
    y: float
    width: float
    height: float
    corner: Optional[str] = None

    def fits(self, image_width: int, image_height: int) -> bool:
        """True if the rectangle is large enough and inside the image."""
        return (
            self.width >= MIN_CROP_SIZE
            and self.height >= MIN_CROP_SIZE
            and self.x >= 0
            and self.y >= 0
            and self.x + self.width <= image_width
            and self.y + self.height <= image_height
        )

    def rounded(self) -> Bounds:
        """Integer bounds with each edge rounded half-up."""
        left = _round_half_up(self.x)
        top = _round_half_up(self.y)
        right = _round_half_up(self.x + self.width)
        bottom = _round_half_up(self.y + self.height)
        return Bounds(left, top, right - left, bottom - top)

    def corner_points(self) -> Tuple[Tuple[str, float, float], ...]:
        right = self.x + self.width
        bottom = self.y + self.height
        return (
            (CORNER_TOP_LEFT, self.x, self.y),
            (CORNER_TOP_RIGHT, right, self.y),
            (CORNER_BOTTOM_LEFT, self.x, bottom),
            (CORNER_BOTTOM_RIGHT, right, bottom),
        )


class CropRectangleEditor:
    """
    Resize or move a crop rectangle over the source image.

    Example:
        >>> editor = CropRectangleEditor.for_new_sprite(sheet)
        >>> editor.set_display_size(sheet.width // 2, sheet.height // 2)
        >>> editor.pointer_down(50, 50)    # bottom-right corner at half scale
        >>> editor.pointer_move(60, 70)
        >>> editor.pointer_up()
        >>> sprite = editor.commit("sprite-9")
    """

    def __init__(self, source: Raster, rect: CropRectangle):
        if not isinstance(source, Raster):
            raise TypeError(f"Expected Raster, got {type(source)}")
        if not rect.fits(source.width, source.height):
            raise ValueError(
                f"Crop rectangle {rect} does not fit a {source.width}x{source.height} image"
            )
        self.source = source
        self._rect = replace(rect, corner=None)
        self.scale_x = 1.0
        self.scale_y = 1.0
        self._dragging = False
        self._drag_start: Tuple[float, float] = (0.0, 0.0)

    @classmethod
    def for_new_sprite(cls, source: Raster) -> "CropRectangleEditor":
        """Start with a DEFAULT_CROP_SIZE square at the origin, shrunk to fit the image."""
        return cls(
            source,
            CropRectangle(
                0,
                0,
                min(DEFAULT_CROP_SIZE, source.width),
                min(DEFAULT_CROP_SIZE, source.height),
            ),
        )

    @classmethod
    def for_sprite(cls, source: Raster, sprite: Sprite) -> "CropRectangleEditor":
        """Start from a sprite's bounds, clipped into the image and grown to the minimum size."""
        bounds = sprite.bounds
        left = max(0, bounds.x)
        top = max(0, bounds.y)
        right = min(source.width, bounds.x + bounds.width)
        bottom = min(source.height, bounds.y + bounds.height)

        width = max(MIN_CROP_SIZE, right - left)
        height = max(MIN_CROP_SIZE, bottom - top)
        left = max(0, min(left, source.width - width))
        top = max(0, min(top, source.height - height))
        return cls(source, CropRectangle(left, top, width, height))

    @property
    def rect(self) -> CropRectangle:
        """A copy of the current rectangle."""
        return replace(self._rect)

    @property
    def is_dragging(self) -> bool:
        return self._dragging

    def set_display_size(self, display_width: float, display_height: float) -> None:
        """Set the on-screen size of the source image; pointer input is scaled by it."""
        if display_width <= 0 or display_height <= 0:
            raise ValueError(f"Display size must be positive, got {display_width}x{display_height}")
        self.scale_x = self.source.width / display_width
        self.scale_y = self.source.height / display_height

    def hit_test(self, x: float, y: float) -> Optional[str]:
        """Return the corner under display point (x, y), if any."""
        for corner, corner_x, corner_y in self._rect.corner_points():
            display_x = corner_x / self.scale_x
            display_y = corner_y / self.scale_y
            if abs(x - display_x) < CORNER_HIT_RADIUS and abs(y - display_y) < CORNER_HIT_RADIUS:
                return corner
        return None

    def pointer_down(self, x: float, y: float) -> Optional[str]:
        """
        Start a drag at display point (x, y).

        Returns:
            The corner being resized, or None for a translate
        """
        self._rect.corner = self.hit_test(x, y)
        self._dragging = True
        self._drag_start = (x, y)
        return self._rect.corner

    def pointer_move(self, x: float, y: float) -> bool:
        """
        Continue the drag to display point (x, y).

        Returns:
            True if the rectangle changed, False if idle or the move was rejected
        """
        if not self._dragging:
            return False

        dx = (x - self._drag_start[0]) * self.scale_x
        dy = (y - self._drag_start[1]) * self.scale_y
        self._drag_start = (x, y)

        if self._rect.corner is not None:
            candidate = resize_corner(self._rect, self._rect.corner, dx, dy)
        else:
            candidate = replace(self._rect, x=self._rect.x + dx, y=self._rect.y + dy)

        if not candidate.fits(self.source.width, self.source.height):
            logger.debug(f"Rejected crop move to {candidate}")
            return False

        self._rect = candidate
        return True

    def pointer_up(self) -> None:
        self._dragging = False
        self._rect.corner = None

    def commit(self, sprite_id: str) -> Sprite:
        """Copy the rectangle out of the source, unmasked, as a new sprite."""
        bounds = self._rect.rounded()
        raster = crop_region(self.source, bounds.x, bounds.y, bounds.width, bounds.height)
        logger.info(f"Cropped new sprite {sprite_id} at {bounds}")
        return Sprite(id=sprite_id, bounds=bounds, raster=raster)


def resize_corner(rect: CropRectangle, corner: str, dx: float, dy: float) -> CropRectangle:
    """
    Move one corner by (dx, dy), keeping the opposite corner fixed.

    Raises:
        ValueError: If corner is not one of 'tl', 'tr', 'bl', 'br'
    """
    if corner not in CORNERS:
        raise ValueError(f"Unknown corner: {corner}. Must be one of {', '.join(CORNERS)}")

    x, y, width, height = rect.x, rect.y, rect.width, rect.height
    if corner == CORNER_TOP_LEFT:
        x += dx
        y += dy
        width -= dx
        height -= dy
    elif corner == CORNER_TOP_RIGHT:
        width += dx
        y += dy
        height -= dy
    elif corner == CORNER_BOTTOM_LEFT:
        x += dx
        width -= dx
        height += dy
    else:
        width += dx
        height += dy
    return CropRectangle(x, y, width, height, corner)
