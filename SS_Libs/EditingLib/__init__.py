"""
EditingLib - Interactive sprite refinement

This module provides the erase session (brush erase with undo/redo) and
the crop rectangle editor used to cut new sprites from the source sheet.
"""

from SS_Libs.EditingLib.edit_session import RasterEditSession, STATE_IDLE, STATE_ERASING
from SS_Libs.EditingLib.crop_editor import CropRectangle, CropRectangleEditor, resize_corner

__all__ = [
    "RasterEditSession",
    "STATE_IDLE",
    "STATE_ERASING",
    "CropRectangle",
    "CropRectangleEditor",
    "resize_corner",
]
