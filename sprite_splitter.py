"""
Sprite Splitter - extract individual sprites from a spritesheet.

Reads one image, finds every group of connected non-transparent pixels,
and writes each group as its own PNG, either into a ZIP archive or into
a directory.
"""

from pathlib import Path
import logging
import sys

from SS_Libs.constants import DEFAULT_ARCHIVE_NAME
from SS_Libs.ProjStoreLib.sprite_export import save_sprite_archive
from SS_Libs.ProjStoreLib.sprite_workspace import SpriteWorkspace
from SS_Libs.SegmentationLib.extraction import ExtractionSettings


def split_spritesheet(input_path, output_path=None, min_size=None, padding=None):
    """
    Extract sprites from a spritesheet file and save them.

    Args:
        input_path: Path to the spritesheet image
        output_path: ``.zip`` file or directory (default: sprites.zip beside the input)
        min_size: Minimum sprite side length (default from ExtractionSettings)
        padding: Transparent margin around each sprite (default from ExtractionSettings)

    Returns:
        Number of sprites written
    """
    input_path = Path(input_path)
    settings = ExtractionSettings()
    if min_size is not None:
        settings.min_size = int(min_size)
    if padding is not None:
        settings.padding = int(padding)

    workspace = SpriteWorkspace(settings)
    workspace.load_image(input_path.read_bytes())

    if output_path is None:
        output_path = input_path.parent / DEFAULT_ARCHIVE_NAME
    output_path = Path(output_path)

    if output_path.suffix.lower() == ".zip":
        save_sprite_archive(workspace.named_sprites(), output_path, overwrite=True)
        print(f"Saved {len(workspace.sprites)} sprites to {output_path}")
        return len(workspace.sprites)

    output_path.mkdir(parents=True, exist_ok=True)
    count = workspace.save_to_directory(output_path)
    print(f"Saved {count} sprites to {output_path}")
    return count


def main():
    """Main function to run the sprite splitter."""
    if len(sys.argv) < 2:
        print("Usage:")
        print("  python sprite_splitter.py <spritesheet> [output.zip | output_dir] [min_size] [padding]")
        print("\nDefaults: output sprites.zip beside the input, min_size 20, padding 1")
        print("\nExamples:")
        print("  python sprite_splitter.py sheet.png")
        print("  python sprite_splitter.py sheet.png sprites/ 8 0")
        return 1

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    input_path = sys.argv[1]
    output_path = sys.argv[2] if len(sys.argv) >= 3 else None
    min_size = sys.argv[3] if len(sys.argv) >= 4 else None
    padding = sys.argv[4] if len(sys.argv) >= 5 else None

    try:
        split_spritesheet(input_path, output_path, min_size, padding)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
