"""
Tests for image file loading and saving.
"""

import pytest
from PIL import Image

from PD_Libs.DiffLib.grid_io import get_save_kwargs, load_grid, save_grid
from PD_Libs.DiffLib.grid_models import PixelGrid
from PD_Libs.errors import ResultUnwritableError, SourceUnreadableError

from conftest import BLACK, BLUE, WHITE


class TestLoadGrid:
    """Tests for load_grid function."""

    def test_loads_png(self, solid_png):
        """Should decode a PNG into an RGBA grid."""
        path = solid_png("solid.png", size=(3, 2), color=BLUE)

        grid = load_grid(path)

        assert grid.size == (3, 2)
        assert grid.pixel(2, 1) == BLUE

    def test_accepts_string_paths(self, solid_png):
        """Should accept plain string paths."""
        path = solid_png("solid.png")

        assert load_grid(str(path)).size == (3, 2)

    def test_missing_file(self, tmp_path):
        """A missing file is SourceUnreadable."""
        with pytest.raises(SourceUnreadableError, match="not found"):
            load_grid(tmp_path / "missing.png")

    def test_corrupt_file(self, tmp_path):
        """Bytes that are not an image are SourceUnreadable."""
        path = tmp_path / "corrupt.png"
        path.write_bytes(b"definitely not a png")

        with pytest.raises(SourceUnreadableError, match="Cannot decode"):
            load_grid(path)

    def test_directory_is_unreadable(self, tmp_path):
        """A directory path is SourceUnreadable."""
        with pytest.raises(SourceUnreadableError):
            load_grid(tmp_path)


class TestSaveGrid:
    """Tests for save_grid function."""

    def test_saves_png_and_creates_directories(self, tmp_path, checkerboard_grid):
        """Should create missing parent directories and write the PNG."""
        path = tmp_path / "nested" / "dir" / "diff.png"

        saved = save_grid(checkerboard_grid, path)

        assert saved == path
        assert path.exists()
        with Image.open(path) as image:
            assert image.mode == "RGBA"
            assert image.size == (4, 3)

    def test_saved_png_loads_back_equal(self, tmp_path, checkerboard_grid):
        """A saved PNG should load back to the same pixels."""
        path = save_grid(checkerboard_grid, tmp_path / "diff.png")

        assert load_grid(path) == checkerboard_grid

    def test_jpeg_is_written_without_alpha(self, tmp_path):
        """JPEG output should be converted to RGB."""
        path = tmp_path / "diff.jpg"

        save_grid(PixelGrid.filled(2, 2, WHITE), path)

        with Image.open(path) as image:
            assert image.format == "JPEG"
            assert image.mode == "RGB"

    def test_unsupported_extension(self, tmp_path):
        """Unknown extensions cannot be written."""
        with pytest.raises(ResultUnwritableError, match="Unsupported output format"):
            save_grid(PixelGrid.filled(1, 1, BLACK), tmp_path / "diff.unknown")

    def test_unwritable_destination(self, tmp_path):
        """A destination under a regular file cannot be written."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")

        with pytest.raises(ResultUnwritableError):
            save_grid(PixelGrid.filled(1, 1, BLACK), blocker / "diff.png")


class TestGetSaveKwargs:
    """Tests for get_save_kwargs function."""

    @pytest.mark.parametrize("name, expected", [
        ("a.png", "PNG"),
        ("a.PNG", "PNG"),
        ("a.jpg", "JPEG"),
        ("a.jpeg", "JPEG"),
        ("a.bmp", "BMP"),
    ])
    def test_format_from_extension(self, name, expected):
        """The extension should select the Pillow format."""
        assert get_save_kwargs(name) == {"format": expected}
