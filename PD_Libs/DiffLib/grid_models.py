"""
Pixel grid data models for Pixel Diff.

This module defines the core data structures the diff engine works on.

Classes:
    PixelGrid: Immutable width x height grid of pixels stored row-major

Type Aliases:
    Pixel: A tuple of 4 integers representing RGBA channel values (0-255)
    Row: A tuple of Pixels, one per column
"""

from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Tuple

import numpy as np
from PIL import Image

from PD_Libs.constants import CHANNEL_COUNT, CHANNEL_MAX, PIXEL_MODE

Pixel = Tuple[int, ...]
Row = Tuple[Pixel, ...]


def _to_rgba(pixel: Sequence[int]) -> Pixel:
    values = tuple(pixel)
    if len(values) == CHANNEL_COUNT - 1:
        return values + (CHANNEL_MAX,)
    return values


@dataclass(frozen=True)
class PixelGrid:
    """Immutable grid of pixels.

    Attributes:
        width: Number of pixels per row
        height: Number of rows
        rows: Row-major tuple of rows, each exactly ``width`` pixels long
    """

    width: int
    height: int
    rows: Tuple[Row, ...]

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {self.width}x{self.height}")

        if len(self.rows) != self.height:
            raise ValueError(f"Grid declares {self.height} rows but holds {len(self.rows)}")

        for y, row in enumerate(self.rows):
            if len(row) != self.width:
                raise ValueError(
                    f"Row {y} has {len(row)} pixels, expected width {self.width}"
                )
            for x, pixel in enumerate(row):
                if len(pixel) != CHANNEL_COUNT:
                    raise ValueError(
                        f"Pixel ({x}, {y}) has {len(pixel)} channels, expected {CHANNEL_COUNT}"
                    )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def pixel(self, x: int, y: int) -> Pixel:
        """Return the pixel at column x of row y."""
        return self.rows[y][x]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Sequence[int]]]) -> "PixelGrid":
        """
        Build a grid from nested sequences of pixels.

        Args:
            rows: Iterable of rows, each a sequence of channel tuples/lists
                  (RGB pixels are made opaque RGBA)

        Returns:
            A new PixelGrid; width is taken from the first row (0 when empty)
        """
        frozen = tuple(tuple(_to_rgba(pixel) for pixel in row) for row in rows)
        width = len(frozen[0]) if frozen else 0
        return cls(width=width, height=len(frozen), rows=frozen)

    @classmethod
    def filled(cls, width: int, height: int, color: Pixel) -> "PixelGrid":
        """Build a grid where every pixel is ``color``."""
        pixel = _to_rgba(color)
        row = tuple(pixel for _ in range(width))
        return cls(width=width, height=height, rows=tuple(row for _ in range(height)))

    @classmethod
    def from_image(cls, image: Any) -> "PixelGrid":
        """
        Build a grid from a PIL Image, normalized to RGBA.

        Args:
            image: A PIL Image object

        Returns:
            PixelGrid with one RGBA tuple per pixel
        """
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        if image.mode != PIXEL_MODE:
            image = image.convert(PIXEL_MODE)

        width, height = image.size
        data = np.asarray(image, dtype=np.uint8).reshape(height, width, CHANNEL_COUNT)
        return cls(
            width=width,
            height=height,
            rows=tuple(tuple(map(tuple, row)) for row in data.tolist()),
        )

    def to_image(self) -> Any:
        """
        Render the grid as a new RGBA PIL Image.

        Returns:
            PIL Image of size (width, height)
        """
        if self.width == 0 or self.height == 0:
            return Image.new(PIXEL_MODE, (self.width, self.height))

        data = np.array(self.rows, dtype=np.uint8).reshape(self.height, self.width, CHANNEL_COUNT)
        return Image.fromarray(data)
