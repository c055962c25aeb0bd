"""N-Queens as an exact cover problem.

Encoding
--------
- Primary columns: ranks ``R0..R{n-1}`` then files ``F0..F{n-1}``; each must
    hold exactly one queen.
- Secondary columns: diagonals ``A{rank+file}`` and anti-diagonals
    ``B{n-1-rank+file}``. They are chained in their own cycle, away from the
    root, so they never drive column selection: a diagonal may stay empty but
    is covered (at most one queen) whenever a square on it is chosen.
- Rows: one per square, visited rank by rank then file by file; each row
    cycle reads ``R``, ``F``, ``A``, ``B`` from left to right.

Boards decoded from an answer use the ``board[file] = rank`` convention.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .engine import DLX


class QueensDLX(DLX):
    """Dancing-links structure for an ``n``-by-``n`` board."""

    def __init__(self, n: int, optimized: bool = True) -> None:
        if n < 1:
            raise ValueError(f"Board size must be >= 1, got {n}")
        super().__init__(optimized)
        self.n = n
        self._cells: Dict[Tuple[int, int], int] = {}
        self._placement: Dict[int, Tuple[int, int]] = {}
        self._build()

    def _add_columns(self, count: int, prefix: str, last: Optional[int]) -> List[int]:
        headers = []
        for index in range(count):
            last = self.new_column(f"{prefix}{index}", last)
            headers.append(last)
        return headers

    def _build(self) -> None:
        n = self.n
        links = self.links
        ranks = self._add_columns(n, "R", self.root)
        files = self._add_columns(n, "F", ranks[-1])
        # Detached chain: diagonals are secondary constraints.
        diagonals = self._add_columns(2 * n - 1, "A", None)
        anti_diagonals = self._add_columns(2 * n - 1, "B", diagonals[-1])

        for rank in range(n):
            for file in range(n):
                start = links.append_node(ranks[rank], self.new_node())
                current = links.insert(start, links.append_node(files[file], self.new_node()))
                current = links.insert(current, links.append_node(diagonals[rank + file], self.new_node()))
                links.insert(current, links.append_node(anti_diagonals[n - 1 - rank + file], self.new_node()))
                self._cells[(rank, file)] = start
                for member in links.row(start):
                    self._placement[member] = (rank, file)

    def cell(self, rank: int, file: int) -> int:
        """Node starting the row of square (``rank``, ``file``)."""
        if not (0 <= rank < self.n and 0 <= file < self.n):
            raise ValueError(f"Square ({rank}, {file}) is off a {self.n}x{self.n} board")
        return self._cells[(rank, file)]

    def placement(self, node: int) -> Tuple[int, int]:
        """``(rank, file)`` of the square whose row contains ``node``."""
        return self._placement[node]

    def board(self, answer: Sequence[int]) -> List[int]:
        """Decode a decision list into ``board[file] = rank`` (``-1`` if empty)."""
        board = [-1] * self.n
        for node in answer:
            rank, file = self._placement[node]
            board[file] = rank
        return board
