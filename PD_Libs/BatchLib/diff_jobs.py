"""
Diff jobs and batch manifests.

A batch manifest is a JSON array of entries, each naming a ``before`` and an
``after`` image and optionally a ``result`` destination and an ``id``:

    [
        {"before": "shots/home.png", "after": "new/home.png"},
        {"id": "pricing", "before": "a.png", "after": "b.png", "result": "out/pricing.png"}
    ]

Entries without a result write next to the before image with a suffix added
to its name (``shots/home.png`` -> ``shots/home_result.png``).

Classes:
    DiffJob: One before/after/result unit of batch work

Functions:
    derive_result_path: Default result destination for a before path
    parse_manifest: Validate decoded manifest data into DiffJobs
    load_manifest: Read and validate a manifest file
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Set

from PD_Libs.constants import (
    DEFAULT_OUTPUT_EXTENSION,
    FIELD_AFTER,
    FIELD_BEFORE,
    FIELD_JOB_ID,
    FIELD_RESULT,
    JOB_ID_PREFIX,
    RESULT_SUFFIX,
)
from PD_Libs.errors import ManifestMalformedError

logger = logging.getLogger(__name__)

KNOWN_FIELDS = {FIELD_JOB_ID, FIELD_BEFORE, FIELD_AFTER, FIELD_RESULT}


def derive_result_path(before: Path, suffix: str = RESULT_SUFFIX) -> Path:
    """
    Derive the default result path from a before path.

    The suffix is appended to the file stem and the extension is kept.
    A before path without an extension gets ``.png``.

    Example:
        >>> derive_result_path(Path("a/b.png"))
        PosixPath('a/b_result.png')
    """
    before = Path(before)
    extension = before.suffix or DEFAULT_OUTPUT_EXTENSION
    return before.with_name(f"{before.stem}{suffix}{extension}")


@dataclass(frozen=True)
class DiffJob:
    """One unit of batch work.

    Attributes:
        job_id: Identity of the job within its batch
        before: Path to the original image
        after: Path to the changed image
        result: Destination of the diff image (None = derived from before)
    """
    job_id: str
    before: Path
    after: Path
    result: Optional[Path] = None

    def resolve_result_path(self, suffix: str = RESULT_SUFFIX) -> Path:
        """Return the explicit result path, or the one derived from ``before``."""
        if self.result is not None:
            return Path(self.result)
        return derive_result_path(self.before, suffix)

    @classmethod
    def create(
        cls,
        before: Any,
        after: Any,
        result: Any = None,
        job_id: Optional[str] = None,
    ) -> "DiffJob":
        """Build a job from path-like values."""
        return cls(
            job_id=str(job_id) if job_id is not None else str(before),
            before=Path(before),
            after=Path(after),
            result=Path(result) if result is not None else None,
        )


def _require_path(entry: dict, field_name: str, index: int, required: bool) -> Optional[str]:
    value = entry.get(field_name)
    if value is None:
        if required:
            raise ManifestMalformedError(f"Entry {index}: missing required field '{field_name}'")
        return None
    if not isinstance(value, str) or not value.strip():
        raise ManifestMalformedError(
            f"Entry {index}: field '{field_name}' must be a non-empty string, got {value!r}"
        )
    return value


def parse_manifest(data: Any) -> List[DiffJob]:
    """
    Validate decoded manifest data and build its jobs.

    Args:
        data: The decoded JSON document

    Returns:
        List of DiffJob in manifest order

    Raises:
        ManifestMalformedError: If the document does not follow the manifest schema
    """
    if not isinstance(data, list):
        raise ManifestMalformedError(
            f"Manifest must be a JSON array of entries, got {type(data).__name__}"
        )

    jobs: List[DiffJob] = []
    seen_ids: Set[str] = set()

    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ManifestMalformedError(
                f"Entry {index}: expected an object, got {type(entry).__name__}"
            )

        unknown = set(entry) - KNOWN_FIELDS
        if unknown:
            logger.warning(f"Entry {index}: ignoring unknown fields: {', '.join(sorted(unknown))}")

        before = _require_path(entry, FIELD_BEFORE, index, required=True)
        after = _require_path(entry, FIELD_AFTER, index, required=True)
        result = _require_path(entry, FIELD_RESULT, index, required=False)
        job_id = _require_path(entry, FIELD_JOB_ID, index, required=False)
        if job_id is None:
            job_id = f"{JOB_ID_PREFIX}{index}"

        if job_id in seen_ids:
            raise ManifestMalformedError(f"Entry {index}: duplicate job id '{job_id}'")
        seen_ids.add(job_id)

        jobs.append(DiffJob.create(before, after, result, job_id=job_id))

    return jobs


def load_manifest(path: Any) -> List[DiffJob]:
    """
    Read a batch manifest file.

    Args:
        path: Path to the JSON manifest

    Returns:
        List of DiffJob in manifest order

    Raises:
        ManifestMalformedError: If the file cannot be read, is not JSON,
                                or fails validation
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ManifestMalformedError(f"Cannot read manifest {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ManifestMalformedError(f"Manifest {path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestMalformedError(f"Manifest {path} is not valid JSON: {e}") from e

    jobs = parse_manifest(data)
    logger.info(f"Loaded {len(jobs)} job(s) from {path}")
    return jobs
