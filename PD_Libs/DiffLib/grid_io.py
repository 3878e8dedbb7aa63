"""
Image file I/O for pixel grids.

Functions:
    load_grid: Decode an image file into an RGBA PixelGrid
    save_grid: Encode a PixelGrid to an image file
    get_save_kwargs: PIL Image.save() kwargs for a destination path
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

from PIL import Image, UnidentifiedImageError

from PD_Libs.constants import FORMATS_WITHOUT_ALPHA
from PD_Libs.DiffLib.grid_models import PixelGrid
from PD_Libs.errors import ResultUnwritableError, SourceUnreadableError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_grid(path: PathLike) -> PixelGrid:
    """
    Load an image file as an RGBA pixel grid.

    Args:
        path: Path to the image file

    Returns:
        PixelGrid of the decoded image

    Raises:
        SourceUnreadableError: If the file is missing, unreadable, or not an image
    """
    path = Path(path)

    if not path.is_file():
        raise SourceUnreadableError(f"Image file not found: {path}")

    try:
        with Image.open(path) as image:
            image.load()
            grid = PixelGrid.from_image(image)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise SourceUnreadableError(f"Cannot decode image {path}: {e}") from e

    logger.debug(f"Loaded {path} ({grid.width}x{grid.height})")
    return grid


def get_save_kwargs(path: PathLike) -> Dict[str, Any]:
    """Get PIL Image.save() kwargs based on the destination extension."""
    extension = Path(path).suffix.lower()
    save_format = Image.registered_extensions().get(extension)
    if save_format is None:
        raise ResultUnwritableError(f"Unsupported output format: '{extension or path}'")
    return {"format": save_format}


def save_grid(grid: PixelGrid, path: PathLike) -> Path:
    """
    Save a pixel grid to disk, creating parent directories as needed.

    Formats without an alpha channel (JPEG, BMP) are written as RGB.

    Args:
        grid: Grid to save
        path: Destination path; the extension selects the format

    Returns:
        Path where the image was saved

    Raises:
        ResultUnwritableError: If the format is unsupported or the file cannot be written
    """
    path = Path(path)
    kwargs = get_save_kwargs(path)

    image = grid.to_image()
    if kwargs["format"] in FORMATS_WITHOUT_ALPHA:
        image = image.convert("RGB")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        image.save(path, **kwargs)
    except (OSError, ValueError) as e:
        raise ResultUnwritableError(f"Failed to save image to {path}: {e}") from e

    logger.debug(f"Saved {path}")
    return path
