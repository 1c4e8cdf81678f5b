"""
Sprite extraction from a spritesheet raster.

Extraction is a pure function from (raster, settings) to a list of Sprites:
the raster is masked by alpha, segmented into 8-connected components, and
each component large enough is cropped into its own masked sprite.

Example:
    >>> from SS_Libs.ImageEditingLib import load_image_path
    >>> sheet = load_image_path("sheet.png")
    >>> sprites = extract_sprites(sheet, ExtractionSettings(min_size=8, padding=0))
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional
import logging

from SS_Libs.constants import (
    ALPHA_CUTOFF,
    DEFAULT_MIN_SIZE,
    DEFAULT_PADDING,
    DEFAULT_THRESHOLD,
    MAX_MIN_SIZE,
    MAX_PADDING,
    MAX_THRESHOLD,
    MIN_MIN_SIZE,
    MIN_PADDING,
    MIN_THRESHOLD,
)
from SS_Libs.ImageEditingLib.image_models import Sprite, SpriteIdAllocator
from SS_Libs.ImageEditingLib.raster import Raster
from SS_Libs.SegmentationLib.alpha_mask import build_alpha_mask
from SS_Libs.SegmentationLib.connected_components import extract_components
from SS_Libs.SegmentationLib.sprite_builder import build_sprite

logger = logging.getLogger(__name__)


@dataclass
class ExtractionSettings:
    """Configuration for sprite extraction.

    Attributes:
        threshold: Opacity threshold 0-255 (only used when use_threshold is set)
        min_size: Minimum padded sprite side length in pixels (1-100)
        padding: Transparent margin added on every side (0-10)
        use_threshold: Decide opacity with ``alpha > threshold`` instead of the
                       fixed ALPHA_CUTOFF
        retain_on_failure: Keep the previous sprite set when a re-extraction fails
    """
    threshold: int = DEFAULT_THRESHOLD
    min_size: int = DEFAULT_MIN_SIZE
    padding: int = DEFAULT_PADDING
    use_threshold: bool = False
    retain_on_failure: bool = False

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        if not MIN_THRESHOLD <= self.threshold <= MAX_THRESHOLD:
            raise ValueError(
                f"threshold must be {MIN_THRESHOLD}-{MAX_THRESHOLD}, got {self.threshold}"
            )
        if not MIN_MIN_SIZE <= self.min_size <= MAX_MIN_SIZE:
            raise ValueError(
                f"min_size must be {MIN_MIN_SIZE}-{MAX_MIN_SIZE}, got {self.min_size}"
            )
        if not MIN_PADDING <= self.padding <= MAX_PADDING:
            raise ValueError(
                f"padding must be {MIN_PADDING}-{MAX_PADDING}, got {self.padding}"
            )

    @property
    def alpha_cutoff(self) -> int:
        return self.threshold if self.use_threshold else ALPHA_CUTOFF

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionSettings":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                    if k in cls.__dataclass_fields__}
        return cls(**filtered)


def extract_sprites(
    source: Raster,
    settings: Optional[ExtractionSettings] = None,
    id_allocator: Optional[SpriteIdAllocator] = None,
) -> List[Sprite]:
    """
    Extract every sprite from a spritesheet raster.

    Args:
        source: Decoded RGBA spritesheet
        settings: Extraction settings (defaults if None)
        id_allocator: Source of sprite ids (a fresh allocator if None)

    Returns:
        Sprites in the row-major order of their first pixel

    Raises:
        TypeError: If source is not a Raster
        ValueError: If settings are out of range
    """
    if not isinstance(source, Raster):
        raise TypeError(f"Expected Raster, got {type(source)}")

    settings = settings or ExtractionSettings()
    settings.validate()
    id_allocator = id_allocator or SpriteIdAllocator()

    mask = build_alpha_mask(source, settings.alpha_cutoff)
    components = extract_components(mask, settings.min_size, settings.padding)

    sprites: List[Sprite] = []
    for component in components:
        sprite = build_sprite(
            source,
            component,
            settings.padding,
            id_allocator.peek(),
            settings.min_size,
        )
        if sprite is None:
            continue
        id_allocator.next_id()
        sprites.append(sprite)

    logger.info(
        f"Extracted {len(sprites)} sprites from {source.width}x{source.height} raster "
        f"(min_size={settings.min_size}, padding={settings.padding})"
    )
    return sprites
