"""
Performance demonstration for the LCS diff engine.

Times LCS table construction on short integer sequences, then full image
diffs on generated images, sequentially and with row-level threads.
Run this script to see how the engine scales on your system.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import random
import time

from PD_Libs.AlignLib.sequence_aligner import build_lcs_table
from PD_Libs.BatchLib.batch_scheduler import diff_grids
from PD_Libs.DiffLib.diff_config import DiffConfig
from PD_Libs.DiffLib.grid_models import PixelGrid


def benchmark_lcs_table(length, iterations=5):
    """Benchmark LCS table construction for two random sequences."""
    rng = random.Random(length)
    old = [rng.randint(0, 100) for _ in range(length)]
    new = [rng.randint(0, 100) for _ in range(length)]

    times = []
    for _ in range(iterations):
        start = time.time()
        build_lcs_table(old, new)
        times.append(time.time() - start)

    print(f"  lcs table {length} x {length}: {sum(times) / len(times) * 1000:.3f} ms")


def make_noisy_pair(width, height, changed_fraction, seed=0):
    """Create a before grid and an after grid with a fraction of pixels changed."""
    rng = random.Random(seed)
    palette = [(255, 255, 255, 255), (0, 0, 0, 255), (30, 144, 255, 255)]
    before_rows = [[rng.choice(palette) for _ in range(width)] for _ in range(height)]
    after_rows = [list(row) for row in before_rows]
    for row in after_rows:
        for x in range(width):
            if rng.random() < changed_fraction:
                row[x] = rng.choice(palette)
    return PixelGrid.from_rows(before_rows), PixelGrid.from_rows(after_rows)


def benchmark_image_diff(size, changed_fraction, row_workers=None):
    """Benchmark a full grid diff."""
    before, after = make_noisy_pair(size, size, changed_fraction)
    config = DiffConfig(row_workers=row_workers)

    start = time.time()
    _, stats = diff_grids(before, after, config)
    elapsed = time.time() - start

    label = f"{row_workers} row workers" if row_workers else "sequential"
    print(
        f"  {size}x{size}, {changed_fraction:.0%} changed, {label}: {elapsed:.3f}s "
        f"({stats.highlighted_pixels} highlighted)"
    )


if __name__ == "__main__":
    print("LCS table construction")
    print("-" * 60)
    for length in (5, 50, 500):
        benchmark_lcs_table(length)

    print("\nImage diff")
    print("-" * 60)
    benchmark_image_diff(64, 0.0)
    benchmark_image_diff(64, 0.05)
    benchmark_image_diff(128, 0.05)
    benchmark_image_diff(128, 0.05, row_workers=4)
