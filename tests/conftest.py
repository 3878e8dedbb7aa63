"""
Pytest configuration and shared fixtures for Pixel Diff tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from PIL import Image

from PD_Libs.DiffLib.grid_models import PixelGrid

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)
BLUE = (0, 0, 255, 255)
RED = (255, 0, 0, 255)


@pytest.fixture
def checkerboard_grid():
    """A 4x3 grid alternating white and black pixels."""
    return PixelGrid.from_rows(
        [[WHITE if (x + y) % 2 == 0 else BLACK for x in range(4)] for y in range(3)]
    )


@pytest.fixture
def write_image(tmp_path):
    """
    Provide a factory writing a PixelGrid as a PNG file under tmp_path.

    Returns:
        Callable (grid, name) -> Path
    """
    def _write(grid, name):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        grid.to_image().save(path, format="PNG")
        return path

    return _write


@pytest.fixture
def solid_png(tmp_path):
    """
    Provide a factory writing a solid-color PNG with Pillow directly.

    Returns:
        Callable (name, size, color) -> Path
    """
    def _solid(name, size=(3, 2), color=WHITE):
        path = tmp_path / name
        Image.new("RGBA", size, color).save(path, format="PNG")
        return path

    return _solid
