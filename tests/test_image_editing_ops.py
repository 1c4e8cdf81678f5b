"""
Unit tests for image_editing_ops module.

Tests decoding and encoding, brush erasing, rectangular cropping and
saving sprites to disk.
"""

import tempfile
from pathlib import Path

import numpy as np
import pytest

from SS_Libs.ImageEditingLib.image_editing_ops import (
    crop_region,
    decode_image,
    encode_png,
    erase_circle,
    erase_segment,
    load_image_path,
    save_sprites,
    validate_sprite_name,
)
from SS_Libs.ImageEditingLib.image_models import Bounds, Sprite
from SS_Libs.ImageEditingLib.raster import Raster


def _opaque(width, height, color=(255, 0, 0, 255)):
    raster = Raster.blank(width, height)
    raster.pixels[:, :] = color
    return raster


class TestDecodeEncode:
    """Tests for decode_image, load_image_path and encode_png."""

    def test_png_round_trip_is_lossless(self, gradient_sheet):
        """Export-then-reimport should reproduce every pixel value."""
        decoded = decode_image(encode_png(gradient_sheet))

        assert decoded == gradient_sheet

    def test_round_trip_keeps_partial_alpha(self, sample_rgba_colors):
        raster = Raster.blank(len(sample_rgba_colors), 1)
        for x, color in enumerate(sample_rgba_colors):
            raster.pixels[0, x] = color

        decoded = decode_image(encode_png(raster))

        for x, color in enumerate(sample_rgba_colors):
            if color[3] == 0:
                assert decoded.get_pixel(x, 0)[3] == 0
            else:
                assert decoded.get_pixel(x, 0) == color

    def test_rejects_non_image(self):
        with pytest.raises(ValueError, match="Unsupported or corrupt image"):
            decode_image(b"definitely not a png")

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            decode_image(b"")

    def test_load_image_path(self, two_squares):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "sheet.png"
            path.write_bytes(encode_png(two_squares))

            assert load_image_path(path) == two_squares


class TestErase:
    """Tests for erase_circle and erase_segment."""

    def test_circle_clears_pixels_fully(self):
        raster = _opaque(9, 9)

        count = erase_circle(raster, 4.5, 4.5, 2)

        # centre plus its four orthogonal neighbours
        assert count == 5
        assert raster.get_pixel(4, 4) == (0, 0, 0, 0)
        assert raster.get_pixel(3, 4) == (0, 0, 0, 0)
        assert raster.get_pixel(3, 3) == (255, 0, 0, 255)

    def test_segment_is_continuous(self):
        raster = _opaque(20, 9)

        erase_segment(raster, 1.5, 4.5, 18.5, 4.5, 2)

        assert not raster.alpha[4, 1:19].any()
        assert raster.alpha[0].all()

    def test_diagonal_segment_leaves_no_gaps(self):
        raster = _opaque(20, 20)

        erase_segment(raster, 0.5, 0.5, 19.5, 19.5, 2)

        for i in range(20):
            assert raster.alpha[i, i] == 0

    def test_outside_raster_is_noop(self):
        raster = _opaque(5, 5)

        count = erase_circle(raster, 50, 50, 4)

        assert count == 0
        assert raster.alpha.all()

    def test_partially_outside_clips(self):
        raster = _opaque(5, 5)

        erase_circle(raster, 0, 0, 4)

        assert raster.alpha[0, 0] == 0
        assert raster.alpha[4, 4] == 255


class TestCropRegion:
    """Tests for crop_region."""

    def test_inside_copy(self, gradient_sheet):
        cropped = crop_region(gradient_sheet, 5, 3, 10, 8)

        assert cropped.size == (10, 8)
        assert np.array_equal(cropped.pixels, gradient_sheet.pixels[3:11, 5:15])

    def test_out_of_bounds_area_is_transparent(self, gradient_sheet):
        cropped = crop_region(gradient_sheet, 35, -2, 10, 5)

        assert cropped.size == (10, 5)
        assert not cropped.pixels[:2].any()
        assert not cropped.pixels[:, 5:].any()
        assert np.array_equal(cropped.pixels[2:, :5], gradient_sheet.pixels[0:3, 35:40])

    def test_fully_outside(self, gradient_sheet):
        cropped = crop_region(gradient_sheet, 100, 100, 4, 4)

        assert not cropped.pixels.any()

    def test_invalid_size(self, gradient_sheet):
        with pytest.raises(ValueError):
            crop_region(gradient_sheet, 0, 0, 0, 5)


class TestSaveSprites:
    """Tests for save_sprites function."""

    def _sprite(self, sprite_id):
        return Sprite(sprite_id, Bounds(0, 0, 3, 3), _opaque(3, 3))

    def test_saves_named_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output_dir = Path(tmpdir)
            named = [("hero", self._sprite("a")), ("coin", self._sprite("b"))]

            count = save_sprites(named, output_dir)

            assert count == 2
            assert (output_dir / "hero.png").exists()
            assert load_image_path(output_dir / "coin.png") == _opaque(3, 3)

    def test_raises_on_nonexistent_directory(self):
        with pytest.raises(OSError, match="does not exist"):
            save_sprites([], Path("/nonexistent/directory"))

    def test_raises_on_file_instead_of_directory(self):
        with tempfile.NamedTemporaryFile() as tmpfile:
            with pytest.raises(OSError, match="not a directory"):
                save_sprites([], Path(tmpfile.name))

    def test_empty_list(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            assert save_sprites([], Path(tmpdir)) == 0

    def test_rejects_traversal_name(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output_dir = Path(tmpdir) / "out"
            output_dir.mkdir()

            with pytest.raises(ValueError):
                save_sprites([("../escaped", self._sprite("a"))], output_dir)

            assert not (Path(tmpdir) / "escaped.png").exists()
            assert list(output_dir.iterdir()) == []


class TestValidateSpriteName:
    """Tests for validate_sprite_name function."""

    def test_accepts_plain_names(self):
        assert validate_sprite_name("hero_idle-2") == "hero_idle-2"
        assert validate_sprite_name("coin v2.final") == "coin v2.final"

    @pytest.mark.parametrize("name", ["../x", "a/b", "a\\b", "..", "a\0b", "", "  "])
    def test_rejects_unsafe_names(self, name):
        with pytest.raises(ValueError):
            validate_sprite_name(name)
