"""
Diff Compositor.

Turns per-row edit scripts into the output diff grid. Each output row is a
preallocated list of ``width`` slots filled by index:

- MATCH writes the matched pixel at its column in the after row
- INSERT writes the highlight at its column in the after row
- DELETE marks its column in the before row as highlighted

A highlight mark always wins over a matched pixel in the same column.
Deleted and inserted pixels share one highlight color.

For a before row [white, white, black] and an after row
[white, black, black] the output row is [white, highlight, black].

Classes:
    DiffStats: Summary counts of a composited diff

Functions:
    blend_pixel: Blend a highlight color over a pixel
    count_highlighted: Count the pixels an edit script set will highlight
    composite_row: Build one output row from its edit script
    composite_diff: Build the output grid from all edit scripts
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from PD_Libs.AlignLib.sequence_aligner import EditKind, EditOp, tally_edit_script
from PD_Libs.DiffLib.diff_config import DiffConfig, RgbaColor
from PD_Libs.DiffLib.grid_models import Pixel, PixelGrid, Row
from PD_Libs.errors import AlignmentInvariantError


@dataclass(frozen=True)
class DiffStats:
    """Summary of a composited diff.

    Attributes:
        rows: Total number of rows
        changed_rows: Rows containing at least one highlighted pixel
        highlighted_pixels: Number of highlighted output pixels
    """
    rows: int = 0
    changed_rows: int = 0
    highlighted_pixels: int = 0

    @property
    def identical(self) -> bool:
        return self.highlighted_pixels == 0


def blend_pixel(base: Pixel, color: RgbaColor, rate: float) -> Pixel:
    """
    Blend ``color`` over ``base`` at the given rate, keeping the base alpha.

    A rate of 1.0 returns the highlight color itself, alpha included.
    """
    if rate >= 1.0:
        return tuple(color)
    return (
        int(base[0] * (1.0 - rate) + color[0] * rate),
        int(base[1] * (1.0 - rate) + color[1] * rate),
        int(base[2] * (1.0 - rate) + color[2] * rate),
        base[3],
    )


def _check_totals(script: Sequence[EditOp], width: int, y: int) -> None:
    counts = tally_edit_script(script)
    matches = counts[EditKind.MATCH]
    if matches + counts[EditKind.DELETE] != width or matches + counts[EditKind.INSERT] != width:
        raise AlignmentInvariantError(
            f"Row {y}: edit script does not cover width {width} "
            f"(matches={matches}, deletes={counts[EditKind.DELETE]}, "
            f"inserts={counts[EditKind.INSERT]})"
        )


def _column(index: Optional[int], width: int, y: int, op: EditOp) -> int:
    if index is None or not (0 <= index < width):
        raise AlignmentInvariantError(
            f"Row {y}: {op.kind.value} refers to column {index} outside width {width}"
        )
    return index


def composite_row(
    script: Sequence[EditOp],
    width: int,
    config: DiffConfig,
    before_row: Optional[Row] = None,
    y: int = 0,
) -> Tuple[Row, int]:
    """
    Build one output row from its edit script.

    Args:
        script: Edit script of the row
        width: Width of the row in pixels
        config: Diff configuration (highlight color and opacity)
        before_row: Original row, only needed to blend DELETE-only columns
                    when highlight_opacity < 1
        y: Row index, used in error messages

    Returns:
        Tuple of (output row, number of highlighted pixels)

    Raises:
        AlignmentInvariantError: If the script does not fill exactly ``width`` columns
    """
    _check_totals(script, width, y)

    slots: List[Optional[Pixel]] = [None] * width
    inserted: Set[int] = set()
    deleted: Set[int] = set()

    for op in script:
        if op.kind is EditKind.DELETE:
            deleted.add(_column(op.old_index, width, y, op))
            continue

        x = _column(op.new_index, width, y, op)
        if slots[x] is not None:
            raise AlignmentInvariantError(f"Row {y}: column {x} written twice")
        slots[x] = op.value
        if op.kind is EditKind.INSERT:
            inserted.add(x)

    if any(slot is None for slot in slots):
        missing = [x for x, slot in enumerate(slots) if slot is None]
        raise AlignmentInvariantError(f"Row {y}: columns never written: {missing}")

    color = config.highlight_color
    rate = config.highlight_opacity
    highlighted = inserted | deleted

    for x in highlighted:
        if rate >= 1.0:
            slots[x] = color
        elif x in inserted or before_row is None:
            slots[x] = blend_pixel(slots[x], color, rate)
        else:
            slots[x] = blend_pixel(before_row[x], color, rate)

    return tuple(slots), len(highlighted)


def count_highlighted(scripts: Sequence[Sequence[EditOp]]) -> int:
    """
    Count the pixels that compositing the given row scripts highlights.

    A column counts once per row even when both a DELETE and an INSERT
    land on it, matching what composite_row paints.
    """
    total = 0
    for script in scripts:
        columns = set()
        for op in script:
            if op.kind is EditKind.INSERT:
                columns.add(op.new_index)
            elif op.kind is EditKind.DELETE:
                columns.add(op.old_index)
        total += len(columns)
    return total


def composite_diff(
    before: PixelGrid,
    scripts: Sequence[Sequence[EditOp]],
    config: Optional[DiffConfig] = None,
) -> Tuple[PixelGrid, DiffStats]:
    """
    Build the output diff grid from per-row edit scripts.

    Args:
        before: The before grid; supplies the dimensions and DELETE blend bases
        scripts: One edit script per row, in row order
        config: Diff configuration (default: DiffConfig())

    Returns:
        Tuple of (new PixelGrid, DiffStats)

    Raises:
        AlignmentInvariantError: If the script count or any script does not fit the grid
    """
    config = config or DiffConfig()

    if len(scripts) != before.height:
        raise AlignmentInvariantError(
            f"Expected {before.height} row scripts, got {len(scripts)}"
        )

    rows: List[Row] = []
    changed_rows = 0
    highlighted_pixels = 0
    for y, script in enumerate(scripts):
        row, count = composite_row(script, before.width, config, before.rows[y], y)
        rows.append(row)
        if count:
            changed_rows += 1
            highlighted_pixels += count

    grid = PixelGrid(width=before.width, height=before.height, rows=tuple(rows))
    stats = DiffStats(
        rows=before.height,
        changed_rows=changed_rows,
        highlighted_pixels=highlighted_pixels,
    )
    return grid, stats
