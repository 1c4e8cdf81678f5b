"""
Sprite workspace: the state behind one loaded spritesheet.

The workspace owns the decoded source raster, the current sprite
collection with display names, and at most one interactive editor at a
time (either an erase session or a crop editor).

Loading a new sheet or re-extracting clears the current collection before
the new pass runs. If the pass fails the collection stays empty, unless
``ExtractionSettings.retain_on_failure`` is set, in which case the
previous collection is put back before the error is re-raised.

Classes:
    SpriteWorkspace: Source image, sprites, names, editors and export
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple
import logging

from SS_Libs.constants import DEFAULT_BRUSH_SIZE
from SS_Libs.EditingLib.crop_editor import CropRectangleEditor
from SS_Libs.EditingLib.edit_session import STATE_ERASING, RasterEditSession
from SS_Libs.ImageEditingLib.image_editing_ops import (
    decode_image,
    save_sprites,
    validate_sprite_name,
)
from SS_Libs.ImageEditingLib.image_models import Bounds, Sprite, SpriteIdAllocator
from SS_Libs.ImageEditingLib.raster import Raster
from SS_Libs.ProjStoreLib.sprite_export import (
    build_sprite_archive,
    default_sprite_name,
    export_sprite_png,
)
from SS_Libs.SegmentationLib.extraction import ExtractionSettings, extract_sprites

logger = logging.getLogger(__name__)


class SpriteWorkspace:
    """
    Holds one spritesheet and the sprites cut from it.

    Example:
        >>> workspace = SpriteWorkspace(ExtractionSettings(min_size=8))
        >>> workspace.load_image(Path("sheet.png").read_bytes())
        >>> session = workspace.open_edit_session(workspace.sprites[0].id)
        >>> session.start_stroke(4, 4); session.end_stroke()
        >>> workspace.save_edit_session()
        >>> archive = workspace.export_archive()
    """

    def __init__(self, settings: Optional[ExtractionSettings] = None):
        self.settings = settings or ExtractionSettings()
        self.settings.validate()
        self.source: Optional[Raster] = None
        self.sprites: List[Sprite] = []
        self.edit_session: Optional[RasterEditSession] = None
        self.crop_editor: Optional[CropRectangleEditor] = None
        self._names: Dict[str, str] = {}
        self._ids = SpriteIdAllocator()

    # ------------------------------------------------------------------
    # Source image and extraction
    # ------------------------------------------------------------------

    def load_image(self, data: bytes) -> List[Sprite]:
        """
        Decode an uploaded image and extract its sprites.

        Raises:
            ValueError: If the data is not a readable image (workspace unchanged)
        """
        raster = decode_image(data)
        return self.load_raster(raster)

    def load_raster(self, raster: Raster) -> List[Sprite]:
        """Replace the source image with an already decoded raster and extract."""
        if not isinstance(raster, Raster):
            raise TypeError(f"Expected Raster, got {type(raster)}")
        self.source = raster
        return self.extract()

    def apply_settings(self, settings: ExtractionSettings) -> List[Sprite]:
        """Validate and store new settings, then re-extract if a sheet is loaded."""
        settings.validate()
        self.settings = settings
        if self.source is None:
            return []
        return self.extract()

    def extract(self) -> List[Sprite]:
        """
        Run extraction on the current source image.

        Raises:
            RuntimeError: If no source image is loaded
        """
        if self.source is None:
            raise RuntimeError("No source image loaded")

        self._close_editors()
        previous_sprites = self.sprites
        previous_names = self._names
        self.sprites = []
        self._names = {}

        try:
            extracted = extract_sprites(self.source, self.settings, self._ids)
        except Exception as e:
            logger.error(f"Sprite extraction failed: {e}")
            if self.settings.retain_on_failure:
                self.sprites = previous_sprites
                self._names = previous_names
            raise

        self.sprites = extracted
        return list(self.sprites)

    def clear(self) -> None:
        """Discard the source image, all sprites and any open editor."""
        self._close_editors()
        self.source = None
        self.sprites = []
        self._names = {}

    # ------------------------------------------------------------------
    # Collection and names
    # ------------------------------------------------------------------

    def get_sprite(self, sprite_id: str) -> Sprite:
        for sprite in self.sprites:
            if sprite.id == sprite_id:
                return sprite
        raise ValueError(f"Unknown sprite: {sprite_id}")

    def index_of(self, sprite_id: str) -> int:
        for index, sprite in enumerate(self.sprites):
            if sprite.id == sprite_id:
                return index
        raise ValueError(f"Unknown sprite: {sprite_id}")

    def add_sprite(self, sprite: Sprite) -> None:
        self.sprites.append(sprite)

    def sprite_name(self, sprite_id: str) -> str:
        """Display name of a sprite, ``sprite_{index}`` unless renamed."""
        index = self.index_of(sprite_id)
        return self._names.get(sprite_id) or default_sprite_name(index)

    def rename_sprite(self, sprite_id: str, name: str) -> None:
        """
        Set a display name; a blank name restores the default.

        Raises:
            ValueError: If no sprite has this id, or the name contains a path
                separator, '..' or NUL
        """
        self.index_of(sprite_id)
        name = name.strip()
        if name:
            self._names[sprite_id] = validate_sprite_name(name)
        else:
            self._names.pop(sprite_id, None)

    def named_sprites(self) -> List[Tuple[str, Sprite]]:
        return [(self.sprite_name(sprite.id), sprite) for sprite in self.sprites]

    def overlay_bounds(self) -> List[Bounds]:
        """Bounds of every sprite, for drawing outlines over the sheet."""
        return [sprite.bounds for sprite in self.sprites]

    # ------------------------------------------------------------------
    # Erase session
    # ------------------------------------------------------------------

    def open_edit_session(
        self, sprite_id: str, brush_size: int = DEFAULT_BRUSH_SIZE
    ) -> RasterEditSession:
        """
        Open an erase session on a sprite.

        Any other open session is discarded without saving, and an open
        crop editor is cancelled.
        """
        sprite = self.get_sprite(sprite_id)
        self._close_editors()
        self.edit_session = RasterEditSession(sprite, brush_size)
        return self.edit_session

    def save_edit_session(self) -> Sprite:
        session = self._require_session()
        self.edit_session = None
        return session.save()

    def close_edit_session(self) -> None:
        """Close the session without saving."""
        session = self._require_session()
        self.edit_session = None
        session.close()

    def _require_session(self) -> RasterEditSession:
        if self.edit_session is None:
            raise RuntimeError("No edit session is open")
        return self.edit_session

    # ------------------------------------------------------------------
    # Crop editor
    # ------------------------------------------------------------------

    def start_crop(self, sprite_id: Optional[str] = None) -> CropRectangleEditor:
        """
        Open the crop editor, starting from a sprite's bounds or, with no
        sprite, from the default rectangle at the image origin.
        """
        if self.source is None:
            raise RuntimeError("No source image loaded")
        sprite = self.get_sprite(sprite_id) if sprite_id is not None else None
        self._close_editors()
        if sprite is None:
            self.crop_editor = CropRectangleEditor.for_new_sprite(self.source)
        else:
            self.crop_editor = CropRectangleEditor.for_sprite(self.source, sprite)
        return self.crop_editor

    def commit_crop(self) -> Sprite:
        """Cut the crop rectangle into a new sprite appended to the collection."""
        editor = self._require_crop_editor()
        sprite = editor.commit(self._ids.next_id())
        self.crop_editor = None
        self.add_sprite(sprite)
        return sprite

    def cancel_crop(self) -> None:
        self._require_crop_editor()
        self.crop_editor = None

    def _require_crop_editor(self) -> CropRectangleEditor:
        if self.crop_editor is None:
            raise RuntimeError("No crop is in progress")
        return self.crop_editor

    def _close_editors(self) -> None:
        if self.edit_session is not None:
            if self.edit_session.undo_depth > 1 or self.edit_session.state == STATE_ERASING:
                logger.warning(
                    f"Discarding unsaved edits to sprite {self.edit_session.sprite.id}"
                )
            self.edit_session.close()
            self.edit_session = None
        self.crop_editor = None

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_sprite(self, sprite_id: str) -> bytes:
        return export_sprite_png(self.get_sprite(sprite_id))

    def export_archive(self) -> bytes:
        return build_sprite_archive(self.named_sprites())

    def save_to_directory(self, output_dir: Path) -> int:
        return save_sprites(self.named_sprites(), output_dir)
