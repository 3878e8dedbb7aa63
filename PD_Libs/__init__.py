"""
PD_Libs - Pixel Diff Library Modules

This package contains the LCS-based image diff engine,
organized into specialized sub-packages:

- AlignLib: Generic longest-common-subsequence sequence alignment
- DiffLib: Pixel grids, row diff mapping, and diff compositing
- BatchLib: Diff jobs, batch manifests, and the parallel batch scheduler
"""

__version__ = "0.3.1"
