# -*- coding: utf-8 -*-
"""
QR Code Mask Penalty Evaluation Module

This module implements the mask pattern evaluation algorithm according to
ISO/IEC 18004:2015 section 7.8.3. A masked symbol is scored against four
criteria (N1-N4); the mask with the lowest total penalty is selected.

All functions take the symbol as a list of rows (True = dark), format and
version information included.

Functions:
    penalty_N1: Evaluate adjacent modules in runs (Rule N1)
    penalty_N2: Evaluate 2x2 blocks of same color (Rule N2)
    penalty_N3: Evaluate finder-like patterns (Rule N3)
    penalty_N4: Evaluate dark/light module ratio (Rule N4)
    compute_mask_penalty: Calculate total penalty score
"""

from collections import deque
from typing import Deque, List, Sequence

PENALTY_N1 = 3
PENALTY_N2 = 3
PENALTY_N3 = 40
PENALTY_N4 = 10


def _columns(rows: Sequence[Sequence[bool]]) -> List[List[bool]]:
    return [list(col) for col in zip(*rows)]


def _run_penalty(line: Sequence[bool]) -> int:
    score = 0
    run = 1
    for i in range(1, len(line)):
        if line[i] == line[i - 1]:
            run += 1
        else:
            if run >= 5:
                score += PENALTY_N1 + (run - 5)
            run = 1
    if run >= 5:
        score += PENALTY_N1 + (run - 5)
    return score


def penalty_N1(rows: Sequence[Sequence[bool]]) -> int:
    """
    Calculate penalty for adjacent modules in runs (Rule N1).

    Runs of 5 or more same-colored modules, in rows and columns, score
    3 + (run_length - 5).

    Example:
        >>> penalty_N1([[True, True, True, True, True, False]])
        3
    """
    return (sum(_run_penalty(row) for row in rows)
            + sum(_run_penalty(col) for col in _columns(rows)))


def penalty_N2(rows: Sequence[Sequence[bool]]) -> int:
    """
    Calculate penalty for 2x2 blocks of same color (Rule N2).

    Overlapping blocks are counted individually, 3 points each.

    Example:
        >>> penalty_N2([[True, True], [True, True]])
        3
    """
    score = 0
    for r in range(len(rows) - 1):
        for c in range(len(rows[r]) - 1):
            value = rows[r][c]
            if (rows[r][c + 1] == value and
                    rows[r + 1][c] == value and
                    rows[r + 1][c + 1] == value):
                score += PENALTY_N2
    return score


def _add_history(run_length: int, history: Deque[int], border: int) -> None:
    if history[0] == 0:
        # first run of the line: the light area outside the symbol joins it
        run_length += border
    history.appendleft(run_length)


def _count_finder_patterns(history: Deque[int]) -> int:
    # history[1..5] must be dark:light:dark:light:dark in 1:1:3:1:1,
    # with light runs of at least 4n on one side and n on the other.
    n = history[1]
    core = (n > 0 and history[2] == history[4] == history[5] == n
            and history[3] == n * 3)
    return (int(core and history[0] >= n * 4 and history[6] >= n)
            + int(core and history[6] >= n * 4 and history[0] >= n))


def _finder_penalty(line: Sequence[bool]) -> int:
    # light border as long as the line (ISO/IEC 18004 7.8.3.1), not a fixed 7
    border = len(line)
    history: Deque[int] = deque([0] * 7, maxlen=7)
    run_color = False
    run_length = 0
    count = 0
    for dark in line:
        if dark == run_color:
            run_length += 1
        else:
            _add_history(run_length, history, border)
            if not run_color:
                count += _count_finder_patterns(history)
            run_color = dark
            run_length = 1
    if run_color:
        _add_history(run_length, history, border)
        run_length = 0
    _add_history(run_length + border, history, border)
    count += _count_finder_patterns(history)
    return count * PENALTY_N3


def penalty_N3(rows: Sequence[Sequence[bool]]) -> int:
    """
    Calculate penalty for finder-like patterns (Rule N3).

    Looks for dark:light:dark:light:dark runs in the ratio 1:1:3:1:1 preceded
    or followed by a light run of at least four times the unit width. A sliding
    history of the last seven runs is kept per row and column; the area outside
    the symbol counts as light. Each occurrence scores 40, and a pattern with
    light space on both sides counts once for each side.

    Example:
        >>> penalty_N3([[True, False, True, True, True, False, True, False, False, False, False]])
        80
    """
    return (sum(_finder_penalty(row) for row in rows)
            + sum(_finder_penalty(col) for col in _columns(rows)))


def penalty_N4(rows: Sequence[Sequence[bool]]) -> int:
    """
    Calculate penalty for dark/light module ratio (Rule N4).

    10 points for each full 5% step the dark module proportion lies away from
    the 45%-55% band: k = ceil(|20 * dark - 10 * total| / total) - 1.

    Example:
        >>> penalty_N4([[True] * 5] * 3 + [[False] * 5] * 2)  # 60% dark
        10
    """
    total = sum(len(row) for row in rows)
    dark = sum(1 for row in rows for v in row if v)
    k = (abs(dark * 20 - total * 10) + total - 1) // total - 1
    return max(k, 0) * PENALTY_N4


def compute_mask_penalty(matrix_bool: Sequence[Sequence[bool]]) -> int:
    """
    Calculate total mask penalty score for a QR code matrix.

    Args:
        matrix_bool (Sequence[Sequence[bool]]): QR matrix (truthy = dark)

    Returns:
        int: Total penalty score (lower is better)
    """
    rows = [[bool(v) for v in row] for row in matrix_bool]
    return penalty_N1(rows) + penalty_N2(rows) + penalty_N3(rows) + penalty_N4(rows)
