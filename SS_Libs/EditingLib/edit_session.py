"""
Erase session with undo/redo for a single sprite.

The session works on its own copy of the sprite's raster. A stroke erases
a circle at its start point and a round-capped segment for every pointer
move, so fast pointer motion still leaves a continuous trail. Only the end
of a stroke commits an undo entry; the sprite itself changes only on save().

Classes:
    RasterEditSession: Idle/erasing state machine with snapshot history
"""

from typing import List, Optional, Tuple
import logging

from SS_Libs.constants import DEFAULT_BRUSH_SIZE, MAX_BRUSH_SIZE, MIN_BRUSH_SIZE
from SS_Libs.ImageEditingLib.image_editing_ops import erase_circle, erase_segment
from SS_Libs.ImageEditingLib.image_models import Sprite
from SS_Libs.ImageEditingLib.raster import Raster

logger = logging.getLogger(__name__)

STATE_IDLE = "idle"
STATE_ERASING = "erasing"


class RasterEditSession:
    """
    Brush-erase editing of one sprite.

    The undo stack is never empty while the session is open: index 0 is the
    pristine baseline. Any committed stroke empties the redo stack.

    Example:
        >>> session = RasterEditSession(sprite, brush_size=4)
        >>> session.start_stroke(2, 2)
        >>> session.move_stroke(6, 2)
        >>> session.end_stroke()
        >>> session.undo()
        >>> session.save()
    """

    def __init__(self, sprite: Sprite, brush_size: int = DEFAULT_BRUSH_SIZE):
        if not isinstance(sprite, Sprite):
            raise TypeError(f"Expected Sprite, got {type(sprite)}")
        self.sprite = sprite
        self.brush_size = brush_size
        self._live = sprite.raster.copy()
        self._undo_stack: List[Raster] = [self._live.copy()]
        self._redo_stack: List[Raster] = []
        self._last_point: Optional[Tuple[float, float]] = None
        self._closed = False

    @property
    def brush_size(self) -> int:
        return self._brush_size

    @brush_size.setter
    def brush_size(self, value: int) -> None:
        if not MIN_BRUSH_SIZE <= value <= MAX_BRUSH_SIZE:
            raise ValueError(f"brush_size must be {MIN_BRUSH_SIZE}-{MAX_BRUSH_SIZE}, got {value}")
        self._brush_size = value

    @property
    def live_raster(self) -> Raster:
        """The working raster. Treat as read-only; mutate through strokes."""
        return self._live

    @property
    def state(self) -> str:
        return STATE_ERASING if self._last_point is not None else STATE_IDLE

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def can_undo(self) -> bool:
        return self._last_point is None and len(self._undo_stack) > 1

    def can_redo(self) -> bool:
        return self._last_point is None and bool(self._redo_stack)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"Edit session for sprite {self.sprite.id} is closed")

    def start_stroke(self, x: float, y: float) -> None:
        """Begin a stroke and erase one brush circle at (x, y)."""
        self._ensure_open()
        self._last_point = (x, y)
        erase_circle(self._live, x, y, self._brush_size)

    def move_stroke(self, x: float, y: float) -> None:
        """Erase from the previous point to (x, y). Ignored while idle."""
        self._ensure_open()
        if self._last_point is None:
            return
        last_x, last_y = self._last_point
        erase_segment(self._live, last_x, last_y, x, y, self._brush_size)
        self._last_point = (x, y)

    def end_stroke(self) -> None:
        """Finish the stroke and commit it as one undo entry."""
        self._ensure_open()
        if self._last_point is None:
            return
        self._last_point = None
        self._undo_stack.append(self._live.copy())
        self._redo_stack.clear()
        logger.debug(f"Committed stroke on {self.sprite.id} (undo depth {len(self._undo_stack)})")

    def undo(self) -> bool:
        """
        Step back one committed stroke.

        Returns:
            False if already at the baseline or a stroke is in progress,
            True otherwise
        """
        self._ensure_open()
        if self._last_point is not None or len(self._undo_stack) <= 1:
            return False
        self._redo_stack.append(self._live.copy())
        self._undo_stack.pop()
        self._live = self._undo_stack[-1].copy()
        return True

    def redo(self) -> bool:
        """
        Reapply the most recently undone stroke.

        Returns:
            False if there is nothing to redo or a stroke is in progress,
            True otherwise
        """
        self._ensure_open()
        if self._last_point is not None or not self._redo_stack:
            return False
        next_state = self._redo_stack.pop()
        self._live = next_state.copy()
        self._undo_stack.append(next_state)
        return True

    def save(self) -> Sprite:
        """Copy the live raster into the sprite and close the session."""
        self._ensure_open()
        self.sprite.raster = self._live.copy()
        self.close()
        logger.info(f"Saved edits to sprite {self.sprite.id}")
        return self.sprite

    def close(self) -> None:
        """Close without saving; pending edits are discarded."""
        self._last_point = None
        self._undo_stack.clear()
        self._redo_stack.clear()
        self._closed = True
