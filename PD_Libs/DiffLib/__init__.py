"""
DiffLib - Pixel grid diffing

This module provides pixel grid models, image file I/O, the row diff
mapper, and the diff compositor.
"""

from PD_Libs.DiffLib.grid_models import Pixel, Row, PixelGrid
from PD_Libs.DiffLib.diff_config import DiffConfig, RgbaColor, parse_color
from PD_Libs.DiffLib.row_diff_mapper import check_dimensions, map_row_diffs
from PD_Libs.DiffLib.diff_compositor import (
    DiffStats,
    blend_pixel,
    composite_row,
    composite_diff,
    count_highlighted,
)
from PD_Libs.DiffLib.grid_io import load_grid, save_grid

__all__ = [
    "Pixel",
    "Row",
    "PixelGrid",
    "DiffConfig",
    "RgbaColor",
    "parse_color",
    "check_dimensions",
    "map_row_diffs",
    "DiffStats",
    "blend_pixel",
    "composite_row",
    "composite_diff",
    "count_highlighted",
    "load_grid",
    "save_grid",
]
