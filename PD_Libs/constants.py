"""
Constants and configuration values for Pixel Diff.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the diff engine.
"""

# Highlight colors (RGBA)
RED = (255, 0, 0, 255)
DEFAULT_HIGHLIGHT_COLOR = RED
DEFAULT_HIGHLIGHT_OPACITY = 1.0

# Pixel layout
PIXEL_MODE = "RGBA"
CHANNEL_COUNT = 4
CHANNEL_MAX = 255

# Result file naming
RESULT_SUFFIX = "_result"
DEFAULT_OUTPUT_EXTENSION = ".png"

# Batch manifest field names
FIELD_JOB_ID = "id"
FIELD_BEFORE = "before"
FIELD_AFTER = "after"
FIELD_RESULT = "result"
JOB_ID_PREFIX = "job-"

# Output formats without an alpha channel
FORMATS_WITHOUT_ALPHA = {"JPEG", "BMP"}

# Exit codes
EXIT_OK = 0
EXIT_JOB_FAILED = 1
EXIT_USAGE = 2
