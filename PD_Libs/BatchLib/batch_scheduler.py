"""
Batch Scheduler for image diffing.

Runs the full diff pipeline (load -> align rows -> composite -> save) for
many image pairs on a bounded pool of worker threads. Each batch owns its
own ThreadPoolExecutor, which is drained before results are returned.
A failing job is recorded in the BatchResult and never stops its siblings.

Classes:
    JobOutcome: Result of one job
    BatchResult: Thread-safe mapping of job id -> JobOutcome

Functions:
    diff_grids: In-memory diff of two pixel grids
    diff_images: Diff one image pair on disk (errors are raised)
    execute_diff_job: Run the pipeline for one DiffJob (errors are raised)
    run_batch: Run many DiffJobs in parallel and collect every outcome
"""

import concurrent.futures
import logging
import os
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from PD_Libs.BatchLib.diff_jobs import DiffJob
from PD_Libs.DiffLib.diff_compositor import DiffStats, composite_diff
from PD_Libs.DiffLib.diff_config import DiffConfig
from PD_Libs.DiffLib.grid_io import load_grid, save_grid
from PD_Libs.DiffLib.grid_models import PixelGrid
from PD_Libs.DiffLib.row_diff_mapper import map_row_diffs
from PD_Libs.errors import PixelDiffError

logger = logging.getLogger(__name__)

GridLoader = Callable[[Path], PixelGrid]
GridSaver = Callable[[PixelGrid, Path], Any]

UNEXPECTED_ERROR_KIND = "unexpected"


@dataclass(frozen=True)
class JobOutcome:
    """Outcome of one diff job.

    Attributes:
        job_id: Identity of the job
        succeeded: True when the result was produced
        result_path: Where the result was written (None on failure)
        error: Failure reason (None on success)
        error_kind: Short error kind, e.g. "dimension_mismatch" (None on success)
        elapsed: Seconds spent on the job
        stats: Diff statistics (None on failure)
    """
    job_id: str
    succeeded: bool
    result_path: Optional[Path] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    elapsed: float = 0.0
    stats: Optional[DiffStats] = None

    def describe(self) -> str:
        """One-line human readable status."""
        if self.succeeded:
            return f"{self.job_id}: ok -> {self.result_path} ({self.elapsed:.3f}s)"
        return f"{self.job_id}: FAILED [{self.error_kind}] {self.error}"


class BatchResult:
    """
    Outcomes of a batch, keyed by job id.

    Outcomes may be recorded from several worker threads at once.
    """

    def __init__(self):
        self._outcomes: Dict[str, JobOutcome] = {}
        self._lock = threading.Lock()

    def record(self, outcome: JobOutcome) -> None:
        """
        Record the outcome of a job.

        Raises:
            ValueError: If an outcome for the same job id was already recorded
        """
        with self._lock:
            if outcome.job_id in self._outcomes:
                raise ValueError(f"Outcome for job '{outcome.job_id}' already recorded")
            self._outcomes[outcome.job_id] = outcome

    def __len__(self) -> int:
        return len(self._outcomes)

    def __contains__(self, job_id: str) -> bool:
        return job_id in self._outcomes

    def __getitem__(self, job_id: str) -> JobOutcome:
        return self._outcomes[job_id]

    @property
    def outcomes(self) -> Dict[str, JobOutcome]:
        with self._lock:
            return dict(self._outcomes)

    @property
    def succeeded(self) -> List[JobOutcome]:
        return [o for o in self.outcomes.values() if o.succeeded]

    @property
    def failed(self) -> List[JobOutcome]:
        return [o for o in self.outcomes.values() if not o.succeeded]

    @property
    def ok(self) -> bool:
        """True when every recorded job succeeded."""
        return not self.failed

    def summary(self) -> str:
        """Multi-line status list, sorted by job id, with an aggregate line."""
        outcomes = self.outcomes
        lines = [outcomes[job_id].describe() for job_id in sorted(outcomes)]
        failed = sum(1 for o in outcomes.values() if not o.succeeded)
        lines.append(
            f"{len(outcomes) - failed} succeeded, {failed} failed, {len(outcomes)} total"
        )
        return "\n".join(lines)


def diff_grids(
    before: PixelGrid,
    after: PixelGrid,
    config: Optional[DiffConfig] = None,
) -> Tuple[PixelGrid, DiffStats]:
    """
    Diff two pixel grids in memory.

    Args:
        before: Original grid
        after: Changed grid, same dimensions as ``before``
        config: Diff configuration (default: DiffConfig())

    Returns:
        Tuple of (diff grid, DiffStats)

    Raises:
        DimensionMismatchError: If the grids differ in size
        AlignmentInvariantError: If an edit script does not fit its row
    """
    config = config or DiffConfig()
    scripts = map_row_diffs(before, after, max_workers=config.row_workers)
    return composite_diff(before, scripts, config)


def execute_diff_job(
    job: DiffJob,
    config: Optional[DiffConfig] = None,
    loader: GridLoader = load_grid,
    saver: GridSaver = save_grid,
) -> JobOutcome:
    """
    Run the diff pipeline for one job.

    Args:
        job: The job to run
        config: Diff configuration (default: DiffConfig())
        loader: Callable loading a PixelGrid from a path
        saver: Callable storing a PixelGrid at a path

    Returns:
        Successful JobOutcome

    Raises:
        PixelDiffError: Any pipeline failure (unreadable source, dimension
                        mismatch, invariant violation, unwritable result)
    """
    config = config or DiffConfig()
    start_time = time.perf_counter()

    result_path = job.resolve_result_path(config.result_suffix)
    before = loader(job.before)
    after = loader(job.after)
    grid, stats = diff_grids(before, after, config)
    saver(grid, result_path)

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"{result_path}: {elapsed:.3f}s "
        f"({stats.highlighted_pixels} highlighted pixel(s) in {stats.changed_rows} row(s))"
    )
    return JobOutcome(
        job_id=job.job_id,
        succeeded=True,
        result_path=result_path,
        elapsed=elapsed,
        stats=stats,
    )


def diff_images(
    before_path: Any,
    after_path: Any,
    result_path: Any = None,
    config: Optional[DiffConfig] = None,
) -> JobOutcome:
    """
    Diff a single image pair on disk.

    Unlike run_batch(), errors propagate directly to the caller.

    Args:
        before_path: Path to the original image
        after_path: Path to the changed image
        result_path: Destination (None = derived from before_path)
        config: Diff configuration

    Returns:
        Successful JobOutcome
    """
    job = DiffJob.create(before_path, after_path, result_path)
    return execute_diff_job(job, config)


def _run_isolated(
    job: DiffJob,
    config: DiffConfig,
    loader: GridLoader,
    saver: GridSaver,
) -> JobOutcome:
    start_time = time.perf_counter()
    try:
        return execute_diff_job(job, config, loader, saver)
    except PixelDiffError as e:
        logger.warning(f"Job {job.job_id} failed: {e}")
        return JobOutcome(
            job_id=job.job_id,
            succeeded=False,
            error=str(e),
            error_kind=e.kind,
            elapsed=time.perf_counter() - start_time,
        )
    except Exception as e:
        logger.exception(f"Job {job.job_id} failed unexpectedly")
        return JobOutcome(
            job_id=job.job_id,
            succeeded=False,
            error=f"{type(e).__name__}: {e}",
            error_kind=UNEXPECTED_ERROR_KIND,
            elapsed=time.perf_counter() - start_time,
        )


def run_batch(
    jobs: Iterable[DiffJob],
    config: Optional[DiffConfig] = None,
    max_workers: Optional[int] = None,
    loader: GridLoader = load_grid,
    saver: GridSaver = save_grid,
) -> BatchResult:
    """
    Run diff jobs on a bounded thread pool.

    Every job runs to completion; its success or failure is recorded in the
    returned BatchResult under its job id. Jobs may finish in any order.

    Args:
        jobs: Jobs to run; job ids must be unique
        config: Diff configuration shared by all jobs
        max_workers: Maximum worker threads (default: None = CPU count)
        loader: Callable loading a PixelGrid from a path
        saver: Callable storing a PixelGrid at a path

    Returns:
        BatchResult with exactly one outcome per job

    Raises:
        ValueError: If max_workers < 1 or two jobs share an id

    Example:
        >>> jobs = load_manifest("batch.json")
        >>> result = run_batch(jobs, max_workers=4)
        >>> result.ok
        True
    """
    config = config or DiffConfig()
    jobs = list(jobs)

    if max_workers is None:
        max_workers = os.cpu_count() or 1
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")

    job_ids = [job.job_id for job in jobs]
    if len(job_ids) != len(set(job_ids)):
        duplicates = sorted({jid for jid in job_ids if job_ids.count(jid) > 1})
        raise ValueError(f"Duplicate job ids in batch: {', '.join(duplicates)}")

    batch_result = BatchResult()
    if not jobs:
        return batch_result

    workers = min(max_workers, len(jobs))
    logger.info(f"Running {len(jobs)} diff job(s) on {workers} worker(s)")
    start_time = time.perf_counter()

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_run_isolated, job, config, loader, saver)
            for job in jobs
        ]
        for future in concurrent.futures.as_completed(futures):
            batch_result.record(future.result())

    logger.info(
        f"Batch finished in {time.perf_counter() - start_time:.3f}s: "
        f"{len(batch_result.succeeded)} succeeded, {len(batch_result.failed)} failed"
    )
    return batch_result
