"""
Alpha mask construction.

Converts an RGBA raster into a binary opacity map. A pixel is opaque when
its alpha channel is strictly greater than the cutoff; by default the
cutoff is the fixed ALPHA_CUTOFF, not the user-facing threshold setting.
"""

from dataclasses import dataclass

import numpy as np

from SS_Libs.constants import ALPHA_CUTOFF
from SS_Libs.ImageEditingLib.raster import Raster


@dataclass(eq=False)
class AlphaMask:
    """Binary opacity map of shape (height, width)."""
    width: int
    height: int
    opaque: np.ndarray

    @property
    def opaque_count(self) -> int:
        return int(self.opaque.sum())


def build_alpha_mask(raster: Raster, cutoff: int = ALPHA_CUTOFF) -> AlphaMask:
    """
    Build the opacity mask for a raster.

    Args:
        raster: Source RGBA raster
        cutoff: Alpha values strictly above this count as opaque

    Returns:
        AlphaMask with the same width and height as the raster

    Raises:
        TypeError: If raster is not a Raster
    """
    if not isinstance(raster, Raster):
        raise TypeError(f"Expected Raster, got {type(raster)}")
    return AlphaMask(raster.width, raster.height, raster.alpha > cutoff)
