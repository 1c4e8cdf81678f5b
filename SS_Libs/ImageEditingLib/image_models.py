"""
Sprite data models for Sprite Splitter.

This module defines core data structures shared by extraction, editing
and export.

Classes:
    Bounds: Sprite position and size in source-image coordinates
    Sprite: Identity, bounds and owned raster of one extracted sprite
    SpriteIdAllocator: Sequential id source owned by whatever creates Sprites
"""

from dataclasses import dataclass

from SS_Libs.constants import SPRITE_ID_PREFIX
from SS_Libs.ImageEditingLib.raster import Raster


@dataclass(frozen=True)
class Bounds:
    x: int
    y: int
    width: int
    height: int


@dataclass
class Sprite:
    """One extracted sprite.

    Width and height in ``bounds`` already include padding and always match
    the raster size.
    """
    id: str
    bounds: Bounds
    raster: Raster


class SpriteIdAllocator:
    """Hands out unique sprite ids (``sprite-1``, ``sprite-2``, ...)."""

    def __init__(self, prefix: str = SPRITE_ID_PREFIX, start: int = 1):
        self.prefix = prefix
        self._next = start

    def next_id(self) -> str:
        sprite_id = f"{self.prefix}{self._next}"
        self._next += 1
        return sprite_id

    def peek(self) -> str:
        """Return the id the next call to next_id() will produce."""
        return f"{self.prefix}{self._next}"
