"""
BatchLib - Batch diffing

This module handles diff jobs, batch manifests, and the parallel
batch scheduler.
"""

from PD_Libs.BatchLib.diff_jobs import (
    DiffJob,
    derive_result_path,
    parse_manifest,
    load_manifest,
)
from PD_Libs.BatchLib.batch_scheduler import (
    JobOutcome,
    BatchResult,
    diff_grids,
    diff_images,
    execute_diff_job,
    run_batch,
)

__all__ = [
    "DiffJob",
    "derive_result_path",
    "parse_manifest",
    "load_manifest",
    "JobOutcome",
    "BatchResult",
    "diff_grids",
    "diff_images",
    "execute_diff_job",
    "run_batch",
]
