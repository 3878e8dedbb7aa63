"""
Row Diff Mapper.

Aligns two equally sized pixel grids row by row. Row ``y`` of the before
grid is aligned against row ``y`` of the after grid and nothing else, so
rows may be processed in any order or in parallel.

Functions:
    check_dimensions: Raise if two grids differ in size
    map_row_diffs: Produce one edit script per row
"""

import concurrent.futures
import logging
from typing import List, Optional

from PD_Libs.AlignLib.sequence_aligner import EditOp, align_sequences
from PD_Libs.DiffLib.grid_models import PixelGrid
from PD_Libs.errors import DimensionMismatchError

logger = logging.getLogger(__name__)

EditScript = List[EditOp]


def check_dimensions(before: PixelGrid, after: PixelGrid) -> None:
    """
    Ensure both grids have the same width and height.

    Raises:
        DimensionMismatchError: If width or height differ
    """
    if before.size != after.size:
        raise DimensionMismatchError(before.size, after.size)


def map_row_diffs(
    before: PixelGrid,
    after: PixelGrid,
    max_workers: Optional[int] = None,
) -> List[EditScript]:
    """
    Align every row of ``before`` with the same row of ``after``.

    Dimensions are checked before any row is aligned, so a mismatched pair
    never yields partial results.

    Args:
        before: The original grid (sequence A of each row)
        after: The changed grid (sequence B of each row)
        max_workers: Threads used for row alignment; None or 1 aligns sequentially

    Returns:
        List of edit scripts, index y holding the script of row y

    Raises:
        DimensionMismatchError: If the grids differ in size
    """
    check_dimensions(before, after)

    scripts: List[Optional[EditScript]] = [None] * before.height

    if max_workers and max_workers > 1 and before.height > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = {
                executor.submit(align_sequences, before.rows[y], after.rows[y]): y
                for y in range(before.height)
            }
            for future in concurrent.futures.as_completed(futures):
                scripts[futures[future]] = future.result()
    else:
        for y in range(before.height):
            scripts[y] = align_sequences(before.rows[y], after.rows[y])

    logger.debug(f"Aligned {before.height} rows of width {before.width}")
    return scripts
