"""
ProjStoreLib - Sprite collection and export

This module holds the workspace for a loaded spritesheet and the
functions that package its sprites for export.
"""

from SS_Libs.ProjStoreLib.sprite_export import (
    default_sprite_name,
    export_sprite_png,
    unique_entry_names,
    build_sprite_archive,
    save_sprite_archive,
)
from SS_Libs.ProjStoreLib.sprite_workspace import SpriteWorkspace

__all__ = [
    "default_sprite_name",
    "export_sprite_png",
    "unique_entry_names",
    "build_sprite_archive",
    "save_sprite_archive",
    "SpriteWorkspace",
]
