"""
Unit tests for photo_rasterizer and source_image modules.

Tests downsampling, transparency handling and palette matching of photos.
"""

import numpy as np
import pytest

from PB_Libs.ColorLib.palette_matcher import EmptyPaletteError, PaletteCache
from PB_Libs.ConvertLib.conversion_models import round_half_up
from PB_Libs.ConvertLib.photo_rasterizer import (
    rasterize_photo,
    suggest_target_width,
    target_height_for,
)
from PB_Libs.ConvertLib.source_image import SourceImage
from PB_Libs.pillow_compat import Image


class TestSourceImage:
    """Tests for SourceImage boundary record."""

    def test_rejects_wrong_buffer_length(self):
        """A buffer that is not width*height*4 bytes should raise."""
        with pytest.raises(ValueError):
            SourceImage(2, 2, bytes(15))

    def test_rejects_empty_dimensions(self):
        """Zero-sized images should raise."""
        with pytest.raises(ValueError):
            SourceImage(0, 3, b"")

    def test_from_image_converts_to_rgba(self):
        """An RGB Pillow image should be converted to RGBA."""
        image = Image.new("RGB", (3, 2), (10, 20, 30))

        source = SourceImage.from_image(image)

        assert (source.width, source.height) == (3, 2)
        assert source.pixel(2, 1) == (10, 20, 30, 255)

    def test_array_round_trip(self):
        """to_array should expose the same pixels that from_array received."""
        array = np.zeros((2, 3, 4), dtype=np.uint8)
        array[1, 2] = (1, 2, 3, 4)

        source = SourceImage.from_array(array)

        assert source.pixel(2, 1) == (1, 2, 3, 4)
        assert np.array_equal(source.to_array(), array)


class TestSizing:
    """Tests for target size helpers."""

    def test_round_half_up(self):
        """Should round .5 up, unlike round()."""
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4999) == 2
        assert round_half_up(0.5) == 1

    def test_suggest_target_width(self):
        """Should cap the suggestion at 50 cells."""
        assert suggest_target_width(30) == 30
        assert suggest_target_width(400) == 50
        assert suggest_target_width(0) == 1

    def test_target_height_keeps_aspect(self, solid_source):
        """Height should follow the aspect ratio, rounded half up."""
        assert target_height_for(solid_source(4, 3, (0, 0, 0, 255)), 2) == 2
        assert target_height_for(solid_source(100, 50, (0, 0, 0, 255)), 40) == 20
        assert target_height_for(solid_source(100, 1, (0, 0, 0, 255)), 10) == 1


class TestRasterizePhoto:
    """Tests for rasterize_photo function."""

    def test_solid_image(self, palette, solid_source):
        """A solid red image should become a grid of the red bead."""
        result = rasterize_photo(solid_source(8, 8, (250, 5, 5, 255)), 4, palette)

        assert (result.width, result.height) == (4, 4)
        assert result.filled_cells == 16
        assert set(result.grid.values()) == {"MARD_F5"}
        assert set(result.grid) == {(x, y) for x in range(4) for y in range(4)}

    def test_box_filter_averages_blocks(self, palette):
        """Each output cell should come from its own block of source pixels."""
        array = np.zeros((2, 4, 4), dtype=np.uint8)
        array[:, :2] = (255, 0, 0, 255)
        array[:, 2:] = (0, 0, 255, 255)

        result = rasterize_photo(SourceImage.from_array(array), 2, palette)

        assert result.height == 1
        assert result.grid == {(0, 0): "MARD_F5", (1, 0): "COCO_C8"}

    def test_transparent_cells_stay_empty(self, palette, solid_source):
        """Cells with alpha below 128 should not get a bead."""
        assert rasterize_photo(solid_source(4, 4, (255, 0, 0, 127)), 2, palette).grid == {}
        assert rasterize_photo(solid_source(4, 4, (255, 0, 0, 128)), 2, palette).filled_cells == 4

    def test_rejects_zero_width(self, palette, solid_source):
        """target_width below 1 should raise ValueError."""
        with pytest.raises(ValueError):
            rasterize_photo(solid_source(4, 4, (0, 0, 0, 255)), 0, palette)

    def test_empty_palette_raises(self, solid_source):
        """An empty palette should raise EmptyPaletteError."""
        with pytest.raises(EmptyPaletteError):
            rasterize_photo(solid_source(4, 4, (0, 0, 0, 255)), 2, PaletteCache([]))
