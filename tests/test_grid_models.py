"""
Unit tests for grid_models module.

Tests PixelGrid validation, constructors, and conversion to and from
PIL images.
"""

import pytest
from PIL import Image

from PD_Libs.DiffLib.grid_models import PixelGrid

from conftest import BLACK, BLUE, WHITE


class TestPixelGridValidation:
    """Tests for PixelGrid construction checks."""

    def test_rejects_wrong_row_count(self):
        """Should reject a grid whose row count differs from height."""
        with pytest.raises(ValueError, match="declares 2 rows"):
            PixelGrid(width=1, height=2, rows=((WHITE,),))

    def test_rejects_ragged_rows(self):
        """Should reject rows that are not exactly width pixels long."""
        with pytest.raises(ValueError, match="Row 1 has 1 pixels"):
            PixelGrid(width=2, height=2, rows=((WHITE, BLACK), (WHITE,)))

    def test_rejects_negative_dimensions(self):
        """Should reject negative sizes."""
        with pytest.raises(ValueError):
            PixelGrid(width=-1, height=0, rows=())

    def test_rejects_wrong_channel_count(self):
        """Every pixel must carry four channels."""
        with pytest.raises(ValueError, match=r"Pixel \(1, 0\) has 3 channels"):
            PixelGrid(width=2, height=1, rows=((WHITE, (0, 0, 0)),))

    def test_is_immutable(self):
        """Grids should be frozen."""
        grid = PixelGrid.filled(1, 1, WHITE)
        with pytest.raises(AttributeError):
            grid.width = 5


class TestPixelGridConstructors:
    """Tests for PixelGrid class constructors."""

    def test_from_rows(self):
        """Should freeze nested lists into tuples."""
        grid = PixelGrid.from_rows([[list(WHITE), list(BLACK)], [list(BLUE), list(WHITE)]])

        assert grid.size == (2, 2)
        assert grid.pixel(1, 0) == BLACK
        assert grid.pixel(0, 1) == BLUE
        assert isinstance(grid.rows[0], tuple)
        assert isinstance(grid.rows[0][0], tuple)

    def test_from_rows_makes_rgb_opaque(self):
        """Three-channel pixels should gain an opaque alpha channel."""
        grid = PixelGrid.from_rows([[(255, 255, 255), BLACK]])

        assert grid.rows == ((WHITE, BLACK),)

    def test_from_rows_rejects_two_channel_pixels(self):
        """Pixels that are neither RGB nor RGBA are rejected."""
        with pytest.raises(ValueError, match="2 channels"):
            PixelGrid.from_rows([[(0, 0)]])

    def test_from_rows_empty(self):
        """An empty row list should give a 0x0 grid."""
        grid = PixelGrid.from_rows([])

        assert grid.size == (0, 0)

    def test_filled(self):
        """Every pixel should carry the fill color."""
        grid = PixelGrid.filled(3, 2, BLUE)

        assert grid.size == (3, 2)
        assert all(pixel == BLUE for row in grid.rows for pixel in row)

    def test_filled_with_rgb_color(self):
        """An RGB fill color should become opaque RGBA."""
        grid = PixelGrid.filled(2, 1, (0, 0, 255))

        assert grid.rows == ((BLUE, BLUE),)

    def test_equality(self):
        """Grids with the same pixels should compare equal."""
        assert PixelGrid.filled(2, 2, WHITE) == PixelGrid.filled(2, 2, WHITE)
        assert PixelGrid.filled(2, 2, WHITE) != PixelGrid.filled(2, 2, BLACK)


class TestPixelGridImages:
    """Tests for PIL image conversion."""

    def test_from_rgba_image(self):
        """Should read pixels row-major from an RGBA image."""
        image = Image.new("RGBA", (3, 2), WHITE)
        image.putpixel((2, 1), BLUE)

        grid = PixelGrid.from_image(image)

        assert grid.size == (3, 2)
        assert grid.pixel(2, 1) == BLUE
        assert grid.pixel(0, 0) == WHITE

    def test_from_rgb_image_adds_alpha(self):
        """RGB images should be normalized to opaque RGBA."""
        image = Image.new("RGB", (2, 2), (10, 20, 30))

        grid = PixelGrid.from_image(image)

        assert grid.pixel(1, 1) == (10, 20, 30, 255)

    def test_from_image_rejects_non_images(self):
        """Should raise TypeError for objects that are not PIL images."""
        with pytest.raises(TypeError):
            PixelGrid.from_image("not an image")

    def test_to_image(self, checkerboard_grid):
        """Should render an RGBA image with the same pixels."""
        image = checkerboard_grid.to_image()

        assert image.mode == "RGBA"
        assert image.size == (4, 3)
        assert image.getpixel((0, 0)) == WHITE
        assert image.getpixel((1, 0)) == BLACK

    def test_image_conversion_preserves_pixels(self, checkerboard_grid):
        """Converting to an image and back should give an equal grid."""
        assert PixelGrid.from_image(checkerboard_grid.to_image()) == checkerboard_grid
