"""
Longest Common Subsequence alignment for arbitrary sequences.

This module computes an exact LCS alignment between two ordered sequences
and expresses it as an edit script of MATCH / DELETE / INSERT operations.
Elements only need to support ``==``; pixels, strings and integers all work.

The dynamic-programming table is stored in a single flat list addressed
with a row stride instead of nested lists, so one allocation serves the
whole alignment.

Tie-break rule:
    While backtracking from the bottom-right cell, when two neighbouring
    cells hold the same LCS length the step goes up (DELETE) before left
    (INSERT). The rule is fixed so equal-length alternative alignments
    always produce the same script.

Classes:
    EditKind: Enumeration of edit operation kinds
    EditOp: One classified element of an edit script

Functions:
    build_lcs_table: Build the flat LCS length table for two sequences
    lcs_length: Length of the longest common subsequence
    align_sequences: Compute the edit script transforming A into B
    tally_edit_script: Count operations of each kind in an edit script
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


class EditKind(Enum):
    """Kind of an edit operation."""

    MATCH = "match"
    DELETE = "delete"
    INSERT = "insert"


@dataclass(frozen=True)
class EditOp:
    """One element of an edit script.

    Attributes:
        kind: MATCH, DELETE or INSERT
        value: The element itself (taken from B for MATCH and INSERT, from A for DELETE)
        old_index: Position in sequence A, None for INSERT
        new_index: Position in sequence B, None for DELETE
    """

    kind: EditKind
    value: Any
    old_index: Optional[int] = None
    new_index: Optional[int] = None


def build_lcs_table(a: Sequence[Any], b: Sequence[Any]) -> Tuple[List[int], int]:
    """
    Build the LCS length table for sequences A and B.

    ``table[i * stride + j]`` holds the LCS length of ``a[:i]`` and ``b[:j]``.

    Args:
        a: First sequence (length m)
        b: Second sequence (length n)

    Returns:
        Tuple of (flat table of (m+1)*(n+1) ints, stride = n+1)

    Example:
        >>> table, stride = build_lcs_table("ab", "b")
        >>> table[2 * stride + 1]
        1
    """
    m = len(a)
    n = len(b)
    stride = n + 1
    table = [0] * ((m + 1) * stride)

    for i in range(1, m + 1):
        a_item = a[i - 1]
        row = i * stride
        prev_row = row - stride
        for j in range(1, n + 1):
            if a_item == b[j - 1]:
                table[row + j] = table[prev_row + j - 1] + 1
            else:
                up = table[prev_row + j]
                left = table[row + j - 1]
                table[row + j] = up if up >= left else left

    return table, stride


def lcs_length(a: Sequence[Any], b: Sequence[Any]) -> int:
    """Return the length of the longest common subsequence of A and B."""
    table, stride = build_lcs_table(a, b)
    return table[len(a) * stride + len(b)]


def _common_suffix_length(a: Sequence[Any], b: Sequence[Any]) -> int:
    limit = min(len(a), len(b))
    size = 0
    while size < limit and a[len(a) - 1 - size] == b[len(b) - 1 - size]:
        size += 1
    return size


def align_sequences(a: Sequence[Any], b: Sequence[Any]) -> List[EditOp]:
    """
    Compute the LCS edit script that transforms A into B.

    Every element of A appears exactly once as MATCH or DELETE, and every
    element of B exactly once as MATCH or INSERT, in forward order.

    The common suffix of both sequences is matched directly without entering
    the table. Backtracking matches equal trailing elements first anyway, so
    the script is identical to the one built from the full table.

    Args:
        a: The "before" sequence
        b: The "after" sequence

    Returns:
        List of EditOp in forward order

    Example:
        >>> [op.kind.value for op in align_sequences("abc", "abd")]
        ['match', 'match', 'insert', 'delete']
    """
    m = len(a)
    n = len(b)

    if m == 0:
        return [EditOp(EditKind.INSERT, b[j], None, j) for j in range(n)]
    if n == 0:
        return [EditOp(EditKind.DELETE, a[i], i, None) for i in range(m)]

    suffix = _common_suffix_length(a, b)
    core_m = m - suffix
    core_n = n - suffix

    # Collected back to front, reversed at the end
    reversed_ops: List[EditOp] = [
        EditOp(EditKind.MATCH, b[n - 1 - k], m - 1 - k, n - 1 - k)
        for k in range(suffix)
    ]

    if core_m and core_n:
        table, stride = build_lcs_table(a[:core_m], b[:core_n])
    else:
        table, stride = [], core_n + 1

    i = core_m
    j = core_n
    while i > 0 and j > 0:
        if a[i - 1] == b[j - 1]:
            reversed_ops.append(EditOp(EditKind.MATCH, b[j - 1], i - 1, j - 1))
            i -= 1
            j -= 1
        elif table[(i - 1) * stride + j] >= table[i * stride + j - 1]:
            reversed_ops.append(EditOp(EditKind.DELETE, a[i - 1], i - 1, None))
            i -= 1
        else:
            reversed_ops.append(EditOp(EditKind.INSERT, b[j - 1], None, j - 1))
            j -= 1

    while i > 0:
        reversed_ops.append(EditOp(EditKind.DELETE, a[i - 1], i - 1, None))
        i -= 1
    while j > 0:
        reversed_ops.append(EditOp(EditKind.INSERT, b[j - 1], None, j - 1))
        j -= 1

    reversed_ops.reverse()
    return reversed_ops


def tally_edit_script(script: Sequence[EditOp]) -> Dict[EditKind, int]:
    """
    Count operations of each kind in an edit script.

    For a script built from A and B:
    ``counts[MATCH] + counts[DELETE] == len(A)`` and
    ``counts[MATCH] + counts[INSERT] == len(B)``.

    Returns:
        Dictionary mapping every EditKind to its count (zero when absent)
    """
    counts = {kind: 0 for kind in EditKind}
    for op in script:
        counts[op.kind] += 1
    return counts
