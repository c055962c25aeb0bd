"""Exact cover over a plain 0/1 matrix."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .engine import DLX

# Matrix (3) from Knuth's "Dancing Links" paper; columns A..G.
KNUTH_MATRIX: List[List[int]] = [
    [0, 0, 1, 0, 1, 1, 0],
    [1, 0, 0, 1, 0, 0, 1],
    [0, 1, 1, 0, 0, 1, 0],
    [1, 0, 0, 1, 0, 0, 0],
    [0, 1, 0, 0, 0, 0, 1],
    [0, 0, 0, 1, 1, 0, 1],
]


def default_column_names(width: int) -> List[str]:
    """Letters ``A``..``Z``, then ``C26``, ``C27``, ... for wider matrices."""
    return [chr(ord("A") + c) if c < 26 else f"C{c}" for c in range(width)]


class ExactCoverDLX(DLX):
    """DLX structure whose columns are matrix columns and rows matrix rows.

    Parameters
    ----------
    matrix : array-like
        Two-dimensional 0/1 matrix; rows are the candidate choices.
    optimized : bool, default True
        Column selection policy passed to :class:`DLX`.
    names : sequence, optional
        Column names; defaults to :func:`default_column_names`.

    Raises
    ------
    ValueError
        If the matrix is not 2-D, has no columns, holds values other than
        0 and 1, or ``names`` has the wrong length.
    """

    def __init__(self, matrix: Any, optimized: bool = True, names: Optional[Sequence[Any]] = None) -> None:
        super().__init__(optimized)
        grid = np.asarray(matrix)
        if grid.ndim != 2:
            raise ValueError(f"Exact cover matrix must be 2-D, got {grid.ndim} dimension(s)")
        height, width = grid.shape
        if width == 0:
            raise ValueError("Exact cover matrix needs at least one column")
        if not np.isin(grid, (0, 1)).all():
            raise ValueError("Exact cover matrix may only contain 0 and 1")
        if names is None:
            names = default_column_names(width)
        elif len(names) != width:
            raise ValueError(f"Expected {width} column names, got {len(names)}")

        self.matrix = grid.astype(np.int8)
        self._row_of_node: Dict[int, int] = {}
        self._build(names)

    def _build(self, names: Sequence[Any]) -> None:
        links = self.links
        height, width = self.matrix.shape

        headers: List[int] = []
        last = self.root
        for name in names:
            last = self.new_column(name, last)
            headers.append(last)

        # Column by column, so every row cycle follows column order.
        rightmost: List[Optional[int]] = [None] * height
        for col, header in enumerate(headers):
            for row in np.flatnonzero(self.matrix[:, col]):
                row = int(row)
                node = links.append_node(header, self.new_node())
                if rightmost[row] is not None:
                    links.insert(rightmost[row], node)
                rightmost[row] = node
                self._row_of_node[node] = row

    def row_index(self, node: int) -> int:
        """Matrix row represented by ``node``."""
        return self._row_of_node[node]

    def rows(self, answer: Sequence[int]) -> List[int]:
        """Sorted matrix row indices of a decision list."""
        return sorted(self._row_of_node[node] for node in answer)
