"""
Diff configuration for Pixel Diff.

Classes:
    DiffConfig: Settings shared by the compositor, row mapper and batch scheduler

Functions:
    parse_color: Parse a color string into an RGBA tuple
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Sequence, Tuple

from PD_Libs.constants import (
    CHANNEL_MAX,
    DEFAULT_HIGHLIGHT_COLOR,
    DEFAULT_HIGHLIGHT_OPACITY,
    RESULT_SUFFIX,
)

RgbaColor = Tuple[int, int, int, int]


def _validate_color(color: Sequence[int]) -> RgbaColor:
    values = tuple(color)
    if len(values) == 3:
        values = values + (CHANNEL_MAX,)
    if len(values) != 4:
        raise ValueError(f"Color must have 3 or 4 channels, got {len(values)}")
    for value in values:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Color channels must be integers, got {value!r}")
        if not (0 <= value <= CHANNEL_MAX):
            raise ValueError(f"Color channel out of range 0-{CHANNEL_MAX}: {value}")
    return values


def parse_color(text: str) -> RgbaColor:
    """
    Parse a color string into an RGBA tuple.

    Accepted forms: ``#rrggbb``, ``#rrggbbaa``, ``r,g,b`` and ``r,g,b,a``.
    Missing alpha defaults to fully opaque.

    Raises:
        ValueError: If the string is not a recognised color

    Example:
        >>> parse_color("#ff7777")
        (255, 119, 119, 255)
        >>> parse_color("0, 128, 0")
        (0, 128, 0, 255)
    """
    text = str(text).strip()

    if text.startswith("#"):
        hex_digits = text[1:]
        if len(hex_digits) not in (6, 8):
            raise ValueError(f"Hex color must be #rrggbb or #rrggbbaa, got '{text}'")
        try:
            channels = [int(hex_digits[i:i + 2], 16) for i in range(0, len(hex_digits), 2)]
        except ValueError:
            raise ValueError(f"Invalid hex color: '{text}'")
        return _validate_color(channels)

    try:
        channels = [int(part.strip()) for part in text.split(",")]
    except ValueError:
        raise ValueError(f"Invalid color '{text}': expected #rrggbb or r,g,b[,a]")
    return _validate_color(channels)


@dataclass
class DiffConfig:
    """Configuration for diff execution.

    Attributes:
        highlight_color: RGBA color marking inserted and deleted pixels (default: opaque red)
        highlight_opacity: Blend rate of the highlight over the underlying pixel, 0 < rate <= 1
                           (default: 1.0, the plain highlight color)
        result_suffix: Appended to the before file's stem when a job has no result path
        row_workers: Threads used to align rows of one image pair (None or 1 = sequential)
    """
    highlight_color: RgbaColor = DEFAULT_HIGHLIGHT_COLOR
    highlight_opacity: float = DEFAULT_HIGHLIGHT_OPACITY
    result_suffix: str = RESULT_SUFFIX
    row_workers: Optional[int] = None

    def __post_init__(self):
        """Validate and normalize configuration values."""
        if isinstance(self.highlight_color, str):
            self.highlight_color = parse_color(self.highlight_color)
        else:
            self.highlight_color = _validate_color(self.highlight_color)

        self.highlight_opacity = float(self.highlight_opacity)
        if not (0.0 < self.highlight_opacity <= 1.0):
            raise ValueError(
                f"highlight_opacity must be 0 < rate <= 1, got {self.highlight_opacity}"
            )

        if not self.result_suffix:
            raise ValueError("result_suffix cannot be empty")

        if self.row_workers is not None:
            self.row_workers = int(self.row_workers)
            if self.row_workers < 1:
                raise ValueError(f"row_workers must be >= 1, got {self.row_workers}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiffConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)
