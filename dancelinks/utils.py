"""Helpers for reading and checking solutions.

Two kinds of answers are handled here:

- decision lists returned by a :class:`~dancelinks.engine.DLX` search, which
  are turned back into column names for display;
- decoded results (a set of matrix rows, or an N-Queens board encoded as
  ``board[col] = row``) which are checked independently of the engine.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, Sequence

import numpy as np

from .engine import DLX


def format_solution(dlx: DLX, answer: Sequence[int]) -> str:
    """One line per chosen row, with the row's column names space separated."""
    return "\n".join(" ".join(str(name) for name in dlx.row_names(node)) for node in answer)


def conflicts(board: Sequence[int]) -> int:
    """Count attacking queen pairs on a ``board[col] = row`` board in O(N).

    Columns are distinct by construction, so only shared rows and shared
    diagonals are counted.
    """
    rows: Counter[int] = Counter()
    diagonals: Counter[int] = Counter()
    anti_diagonals: Counter[int] = Counter()
    for column, row in enumerate(board):
        rows[row] += 1
        diagonals[row + column] += 1
        anti_diagonals[row - column] += 1
    return sum(
        count * (count - 1) // 2
        for counter in (rows, diagonals, anti_diagonals)
        for count in counter.values()
    )


def is_valid_solution(board: Sequence[int]) -> bool:
    """Return True if ``board`` places N non-attacking queens on an N×N board."""
    n = len(board)
    if n == 0:
        return False
    for row in board:
        if not isinstance(row, int) or row < 0 or row >= n:
            return False
    return conflicts(board) == 0


def is_exact_cover(matrix: Any, rows: Iterable[int]) -> bool:
    """Return True if the selected matrix rows cover every column exactly once."""
    grid = np.asarray(matrix)
    selected = list(rows)
    if not selected:
        return False
    totals = grid[selected].sum(axis=0)
    return bool(np.all(totals == 1))
