"""
SS_Libs - Sprite Splitter Library Modules

This package contains core functionality for the Sprite Splitter project,
organized into specialized sub-packages:

- ImageEditingLib: Raster buffer, sprite models and low-level pixel operations
- SegmentationLib: Alpha masking, connected component extraction and sprite building
- EditingLib: Interactive erase session (undo/redo) and crop rectangle editor
- ProjStoreLib: Sprite collection workspace and export
"""

__version__ = "0.1.0"
