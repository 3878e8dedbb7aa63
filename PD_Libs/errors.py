"""Custom exceptions used across Pixel Diff.

Every error carries a short ``kind`` string that batch results use to
report why a job failed. Each class also derives from the closest built-in
exception so callers may catch ``ValueError`` or ``OSError`` as usual.
"""

__all__ = [
    "PixelDiffError",
    "SourceUnreadableError",
    "DimensionMismatchError",
    "ManifestMalformedError",
    "AlignmentInvariantError",
    "ResultUnwritableError",
]


class PixelDiffError(Exception):
    """Base class for all diff engine errors."""

    kind = "error"


class SourceUnreadableError(PixelDiffError, OSError):
    """Raised when a source image is missing, corrupt, or undecodable."""

    kind = "source_unreadable"


class DimensionMismatchError(PixelDiffError, ValueError):
    """Raised when the before and after grids differ in width or height."""

    kind = "dimension_mismatch"

    def __init__(self, before_size, after_size):
        self.before_size = tuple(before_size)
        self.after_size = tuple(after_size)
        super().__init__(
            f"Image dimensions differ: before is {self.before_size[0]}x{self.before_size[1]}, "
            f"after is {self.after_size[0]}x{self.after_size[1]}"
        )


class ManifestMalformedError(PixelDiffError, ValueError):
    """Raised when a batch manifest cannot be read or fails validation."""

    kind = "manifest_malformed"


class AlignmentInvariantError(PixelDiffError, RuntimeError):
    """Raised when an edit script does not fit the row it was built for."""

    kind = "alignment_invariant"


class ResultUnwritableError(PixelDiffError, OSError):
    """Raised when a diff result cannot be written to its destination."""

    kind = "result_unwritable"
