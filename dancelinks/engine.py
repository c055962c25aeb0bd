"""Iterative dancing-links search engine (Knuth's Algorithm X).

The engine owns the root header of a :class:`~dancelinks.links.Links` arena
and drives an explicit, non-recursive backtracking search over it. Subclasses
build the problem-specific columns and rows (see ``dancelinks.matrix`` and
``dancelinks.queens``); the engine never interprets what a row or column
means.

Entry points
------------
- ``search()``: find the first solution, starting from the current state.
- ``next(answer)``: continue from a previously returned answer and find the
    next solution. ``answer`` is mutated in place and returned.
- ``random_search(rng=None)``: find one solution, choosing rows uniformly at
    random (without replacement) inside each selected column.
- ``undo(stack)``: roll back a list of committed rows (an answer, or a
    partial solution built with ``remove_row``).
- ``remove_row(node, stack)``: commit one row by hand, as if the search had
    chosen it, and push it on ``stack``.
- ``solutions()`` / ``search_all(limit=None)``: convenience wrappers that
    loop ``next`` over the previous answer and restore the structure when done.

Every search result is a *decision list*: a ``list[int]`` of node indices, one
per chosen row. Read a row back with ``row(node)`` or ``row_names(node)``. An
empty list means that no (more) solutions exist.

Implementation overview
-----------------------
- State machine: three actions replace the recursion of Algorithm X:
    - ``NEW``: choose a column, cover it, push its first row (or the header
        itself when the column is empty) and go to ``PROC``.
    - ``PROC``: if the top is a header, the column ran out of rows: pop it,
        uncover it and go to ``NEXT``. Otherwise cover the rest of the row; if
        no active column is left the decision list is a solution, else ``NEW``.
    - ``NEXT``: if the list is empty the search is exhausted. Otherwise undo
        the top row and replace it with the next row down its column (the
        header once the column is exhausted), then ``PROC``.
- State between calls: the structure itself. A returned answer matches the
    covered state of the arena, so ``next`` only needs the answer to resume.
    To get back to the initial state call ``undo`` with (a copy of) the answer.

Column selection
----------------
- optimized (default): the active column with the fewest rows. Ties go to
    the first such column in the current root order, which keeps solution
    order reproducible.
- unoptimized: always the first active column right of the root.

Contract
--------
- Single-threaded: search, undo and remove_row all mutate the same links
    and sizes; interleaving two sequences corrupts the structure.
- Decision lists passed to ``next`` and ``undo`` must come from this engine,
    in the order they were committed. Nothing is validated.
"""

from __future__ import annotations

import random
import sys
from enum import Enum
from typing import Any, Iterator, List, Optional

from .links import Links


class Action(Enum):
    NEW = "new"
    PROC = "proc"
    NEXT = "next"


class DLX:
    """Root header plus the iterative search over one dancing-links structure.

    Parameters
    ----------
    optimized : bool, default True
        Use the minimum-size column heuristic; when False the first active
        column is always chosen.
    """

    def __init__(self, optimized: bool = True) -> None:
        self.links = Links()
        self.root = self.links.new_header(None)
        self.optimized = optimized
        self._primary_count = 0

    # -- construction helpers for subclasses ------------------------------

    def new_column(self, name: Any, after: Optional[int] = None) -> int:
        """Create a header and link it to the right of ``after``.

        With ``after=None`` the header stays out of the root cycle: it never
        drives column selection but is still covered whenever a row using it
        is chosen (a secondary constraint). Chaining further headers after a
        detached one puts them in the same detached cycle.
        """
        header = self.links.new_header(name)
        if after is not None:
            self.links.insert(after, header)
            if self._reaches_root(header):
                self._primary_count += 1
        return header

    def new_node(self) -> int:
        return self.links.new_node()

    def _reaches_root(self, header: int) -> bool:
        nodes = self.links.nodes
        current = nodes[header].right
        while current != header:
            if current == self.root:
                return True
            current = nodes[current].right
        return False

    # -- inspection --------------------------------------------------------

    def active_headers(self) -> List[int]:
        """Headers currently in the root cycle, in root order."""
        nodes = self.links.nodes
        headers = []
        current = nodes[self.root].right
        while current != self.root:
            headers.append(current)
            current = nodes[current].right
        return headers

    def is_solved(self) -> bool:
        return self.links.nodes[self.root].right == self.root

    def is_clean(self) -> bool:
        """True when no primary header is covered."""
        return len(self.active_headers()) == self._primary_count

    def row(self, node: int) -> List[int]:
        return self.links.row(node)

    def row_names(self, node: int) -> List[Any]:
        links = self.links
        return [links.name(links.column_of(member)) for member in links.row(node)]

    # -- column selection --------------------------------------------------

    def _select_min_column(self) -> int:
        nodes = self.links.nodes
        best = -1
        smallest = sys.maxsize
        current = nodes[self.root].right
        while current != self.root:
            size = nodes[current].header.size
            # Strict comparison: the first minimum in root order wins.
            if size < smallest:
                smallest = size
                best = current
            current = nodes[current].right
        return best

    def _select_next_column(self) -> int:
        return self.links.nodes[self.root].right

    def _select_column(self) -> int:
        if self.optimized:
            return self._select_min_column()
        return self._select_next_column()

    def _cover_row(self, node: int) -> None:
        """Cover every header of ``node``'s row except its own, left to right."""
        links = self.links
        nodes = links.nodes
        current = nodes[node].right
        while current != node:
            links.cover(nodes[current].column)
            current = nodes[current].right

    def _uncover_row(self, node: int) -> None:
        """Undo :meth:`_cover_row`, right to left."""
        links = self.links
        nodes = links.nodes
        current = nodes[node].left
        while current != node:
            links.uncover(nodes[current].column)
            current = nodes[current].left

    # -- search ------------------------------------------------------------

    def search(self) -> List[int]:
        """Return the first solution found from the current state, or ``[]``."""
        return self.next([])

    def next(self, answer: List[int]) -> List[int]:
        """Continue a previous search and return the next solution.

        ``answer`` must be the list returned by the previous ``search``/``next``
        call (or an empty list to start fresh). It is modified in place; copy
        it first if the previous solution must be kept.
        """
        links = self.links
        nodes = links.nodes
        root = self.root
        action = Action.NEXT if nodes[root].right == root else Action.NEW

        while True:
            if action is Action.NEW:
                header = self._select_column()
                links.cover(header)
                # An empty column pushes its own header: nothing to try here.
                answer.append(nodes[header].down)
                action = Action.PROC
            elif action is Action.NEXT:
                if not answer:
                    return answer
                self._uncover_row(answer[-1])
                answer.append(nodes[answer.pop()].down)
                action = Action.PROC
            else:
                top = answer[-1]
                if links.is_header(top):
                    answer.pop()
                    links.uncover(top)
                    action = Action.NEXT
                else:
                    self._cover_row(top)
                    if nodes[root].right == root:
                        return answer
                    action = Action.NEW

    def random_search(self, rng: Any = None) -> List[int]:
        """Find one solution, picking rows at random inside each column.

        Columns are still chosen by minimum size. Within the chosen column the
        rows are tried in a random order, each exactly once, so the search
        stays exhaustive if early picks lead to dead ends. The result is
        random per branch, not uniform over all solutions.

        Parameters
        ----------
        rng : object with ``randrange``, optional
            Randomness source, e.g. ``random.Random(seed)``. Defaults to the
            module-level ``random`` generator (seed it for reproducibility).

        Notes
        -----
        The structure must be in its initial, fully uncovered state; ``undo``
        any previous answer first.
        """
        rng = random if rng is None else rng
        links = self.links
        nodes = links.nodes
        root = self.root
        answer: List[int] = []
        # Per-decision candidates not tried yet, parallel to ``answer``.
        untried: List[List[int]] = []

        if nodes[root].right == root:
            return answer

        action = Action.NEW
        while True:
            if action is Action.NEW:
                header = self._select_min_column()
                links.cover(header)
                candidates = list(links.column(header))
                untried.append(candidates)
                if candidates:
                    answer.append(candidates.pop(rng.randrange(len(candidates))))
                else:
                    answer.append(header)
                action = Action.PROC
            elif action is Action.NEXT:
                if not answer:
                    return answer
                top = answer.pop()
                self._uncover_row(top)
                candidates = untried[-1]
                if candidates:
                    answer.append(candidates.pop(rng.randrange(len(candidates))))
                else:
                    answer.append(nodes[top].column)
                action = Action.PROC
            else:
                top = answer[-1]
                if links.is_header(top):
                    answer.pop()
                    links.uncover(top)
                    untried.pop()
                    action = Action.NEXT
                else:
                    self._cover_row(top)
                    if nodes[root].right == root:
                        return answer
                    action = Action.NEW

    def undo(self, stack: List[int]) -> List[int]:
        """Roll back committed rows, last first; returns the emptied ``stack``.

        ``stack`` is consumed. Passing a list that does not describe the
        current covered state (or undoing it twice) silently corrupts the
        structure.
        """
        links = self.links
        nodes = links.nodes
        while stack:
            self._uncover_row(stack[-1])
            links.uncover(nodes[stack.pop()].column)
        return stack

    def remove_row(self, node: int, stack: List[int]) -> List[int]:
        """Commit the row of ``node`` by hand and push it on ``stack``.

        Used to fix part of a solution before searching for the rest; undo it
        later with ``undo(stack)``.
        """
        self.links.cover(self.links.column_of(node))
        self._cover_row(node)
        stack.append(node)
        return stack

    # -- enumeration -------------------------------------------------------

    def solutions(self) -> Iterator[List[int]]:
        """Yield a copy of every solution reachable from the current state.

        When the generator is exhausted the structure is back where it
        started; closing it early undoes the solution in flight.
        """
        answer: List[int] = []
        try:
            self.next(answer)
            while answer:
                yield list(answer)
                self.next(answer)
        finally:
            if answer:
                self.undo(answer)

    def search_all(self, limit: Optional[int] = None) -> List[List[int]]:
        """Collect solutions (at most ``limit`` when given) as decision lists."""
        found: List[List[int]] = []
        if limit is not None and limit <= 0:
            return found
        stream = self.solutions()
        try:
            for solution in stream:
                found.append(solution)
                if limit is not None and len(found) >= limit:
                    break
        finally:
            stream.close()
        return found
