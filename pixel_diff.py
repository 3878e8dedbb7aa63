"""
Pixel Diff command line.

Single pair:
    python pixel_diff.py -b before.png -a after.png -d diff.png

Batch:
    python pixel_diff.py -j batch.json
"""

import argparse
import logging
import sys
from typing import List, Optional

from PD_Libs import __version__
from PD_Libs.BatchLib.batch_scheduler import diff_images, run_batch
from PD_Libs.BatchLib.diff_jobs import load_manifest
from PD_Libs.DiffLib.diff_config import DiffConfig, parse_color
from PD_Libs.constants import EXIT_JOB_FAILED, EXIT_OK, EXIT_USAGE
from PD_Libs.errors import ManifestMalformedError, PixelDiffError

logger = logging.getLogger("pixel_diff")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="PNG diff tool with LCS algorithm: highlight changed pixels between two images"
    )
    parser.add_argument("-b", "--before-png", help="path to the before image")
    parser.add_argument("-a", "--after-png", help="path to the after image")
    parser.add_argument("-d", "--diff-png", help="path to the diff result image")
    parser.add_argument("-j", "--batch-json", help="path to the batch diff JSON manifest")
    parser.add_argument(
        "--highlight",
        type=parse_color,
        default=None,
        help="highlight color as #rrggbb, #rrggbbaa or r,g,b[,a] (default: opaque red)",
    )
    parser.add_argument(
        "--opacity",
        type=float,
        default=None,
        help="blend rate of the highlight over changed pixels, 0 < rate <= 1 (default: 1)",
    )
    parser.add_argument(
        "-w", "--workers", type=int, default=None,
        help="maximum parallel jobs in batch mode (default: CPU count)",
    )
    parser.add_argument(
        "--row-workers", type=int, default=None,
        help="threads aligning rows of one image pair (default: sequential)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _build_config(args: argparse.Namespace) -> DiffConfig:
    values = {"row_workers": args.row_workers}
    if args.highlight is not None:
        values["highlight_color"] = args.highlight
    if args.opacity is not None:
        values["highlight_opacity"] = args.opacity
    return DiffConfig(**values)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    single = (args.before_png, args.after_png, args.diff_png)
    if args.batch_json and any(single):
        parser.error("use either -j/--batch-json or -b/-a/-d, not both")
    if not args.batch_json and not all(single):
        parser.error("single-pair mode requires -b/--before-png, -a/--after-png and -d/--diff-png")

    try:
        config = _build_config(args)
    except (TypeError, ValueError) as e:
        parser.error(str(e))

    if not args.batch_json:
        try:
            outcome = diff_images(args.before_png, args.after_png, args.diff_png, config)
        except PixelDiffError as e:
            logger.error(f"Diff failed [{e.kind}]: {e}")
            return EXIT_JOB_FAILED
        print(outcome.describe())
        return EXIT_OK

    try:
        jobs = load_manifest(args.batch_json)
    except ManifestMalformedError as e:
        logger.error(str(e))
        return EXIT_USAGE

    try:
        result = run_batch(jobs, config, max_workers=args.workers)
    except ValueError as e:
        parser.error(str(e))

    print(result.summary())
    return EXIT_OK if result.ok else EXIT_JOB_FAILED


if __name__ == "__main__":
    sys.exit(main())
