"""
AlignLib - Sequence alignment

This module provides the exact LCS aligner used to diff pixel rows.
"""

from PD_Libs.AlignLib.sequence_aligner import (
    EditKind,
    EditOp,
    build_lcs_table,
    lcs_length,
    align_sequences,
    tally_edit_script,
)

__all__ = [
    "EditKind",
    "EditOp",
    "build_lcs_table",
    "lcs_length",
    "align_sequences",
    "tally_edit_script",
]
