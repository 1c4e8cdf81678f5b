"""
Sprite export for Sprite Splitter.

Sprites are exported as lossless PNG bytes. Bulk export packages every
sprite into one ZIP archive with entries named ``{name}.png``.

Functions:
    default_sprite_name: Default display name for a sprite position
    export_sprite_png: PNG bytes for a single sprite
    unique_entry_names: Archive entry names with duplicates suffixed
    build_sprite_archive: ZIP archive bytes for named sprites
    save_sprite_archive: Write the ZIP archive to disk
"""

from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple
import io
import logging
import zipfile

from SS_Libs.constants import SPRITE_FILE_EXTENSION, SPRITE_NAME_TEMPLATE
from SS_Libs.ImageEditingLib.image_editing_ops import encode_png, validate_sprite_name
from SS_Libs.ImageEditingLib.image_models import Sprite

logger = logging.getLogger(__name__)


def default_sprite_name(index: int) -> str:
    return SPRITE_NAME_TEMPLATE.format(index=index)


def export_sprite_png(sprite: Sprite) -> bytes:
    return encode_png(sprite.raster)


def unique_entry_names(names: Sequence[str]) -> List[str]:
    """
    Turn display names into archive entry names.

    A repeated name gets ``_1``, ``_2``, ... appended so no sprite
    overwrites another inside the archive.

    Raises:
        ValueError: If a name is unsafe as an entry name
    """
    seen: Dict[str, int] = {}
    taken = set()
    entries = []
    for name in names:
        validate_sprite_name(name)
        candidate = name
        while candidate in taken:
            seen[name] = seen.get(name, 0) + 1
            candidate = f"{name}_{seen[name]}"
        taken.add(candidate)
        entries.append(f"{candidate}{SPRITE_FILE_EXTENSION}")
    return entries


def build_sprite_archive(named_sprites: Iterable[Tuple[str, Sprite]]) -> bytes:
    """
    Package named sprites into a ZIP archive.

    Args:
        named_sprites: (name, Sprite) pairs in export order

    Returns:
        The archive as bytes
    """
    pairs = list(named_sprites)
    entries = unique_entry_names([name for name, _ in pairs])

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for entry, (_, sprite) in zip(entries, pairs):
            archive.writestr(entry, export_sprite_png(sprite))

    logger.info(f"Packaged {len(pairs)} sprites into archive")
    return buffer.getvalue()


def save_sprite_archive(
    named_sprites: Iterable[Tuple[str, Sprite]],
    output_path: Path,
    overwrite: bool = False,
) -> Path:
    """
    Write the sprite archive to disk.

    Raises:
        ValueError: If the file exists and overwrite is False
        OSError: If the file cannot be written
    """
    output_path = Path(output_path)
    if output_path.exists() and not overwrite:
        raise ValueError(
            f"Output file already exists: {output_path}. "
            f"Set overwrite=True to replace."
        )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(build_sprite_archive(named_sprites))
    return output_path
