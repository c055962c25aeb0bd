"""Arena of dancing-links nodes.

Every node of the toroidal sparse matrix lives in one list and is addressed by
its integer index; the four neighbor fields and the owning-column field are
indices into the same list. A column header is an ordinary record that also
carries a :class:`HeaderPayload` (live ``size`` and an opaque ``name``).

Removal is always a reversible splice: records are never deleted, so an index
stays valid for the lifetime of the arena.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

import numpy as np


@dataclass
class HeaderPayload:
    """Extra state carried by a column header."""

    name: Any
    size: int = 0


@dataclass
class LinkNode:
    left: int
    right: int
    up: int
    down: int
    column: int = -1
    header: Optional[HeaderPayload] = None


class Links:
    """Growable arena holding every node and header of one structure."""

    def __init__(self) -> None:
        self.nodes: List[LinkNode] = []
        # Vertical hides performed by cover(), Knuth's "updates" measure.
        self.updates = 0

    def __len__(self) -> int:
        return len(self.nodes)

    # -- construction ------------------------------------------------------

    def new_node(self) -> int:
        """Allocate a node that forms a 1-cycle in both directions."""
        index = len(self.nodes)
        self.nodes.append(LinkNode(index, index, index, index))
        return index

    def new_header(self, name: Any) -> int:
        """Allocate a header owning itself, with an empty column."""
        index = self.new_node()
        record = self.nodes[index]
        record.column = index
        record.header = HeaderPayload(name)
        return index

    def insert(self, at: int, node: int) -> int:
        """Splice ``node`` into the row cycle of ``at``, immediately to its right."""
        nodes = self.nodes
        right = nodes[at].right
        nodes[right].left = node
        nodes[node].right = right
        nodes[node].left = at
        nodes[at].right = node
        return node

    def append_node(self, header: int, node: int) -> int:
        """Insert ``node`` at the bottom of ``header``'s column."""
        nodes = self.nodes
        head = nodes[header]
        bottom = head.up
        head.header.size += 1
        record = nodes[node]
        record.column = header
        record.down = header
        record.up = bottom
        nodes[bottom].down = node
        head.up = node
        return node

    # -- queries -----------------------------------------------------------

    def is_header(self, index: int) -> bool:
        return self.nodes[index].header is not None

    def size(self, header: int) -> int:
        return self.nodes[header].header.size

    def name(self, header: int) -> Any:
        return self.nodes[header].header.name

    def column_of(self, node: int) -> int:
        return self.nodes[node].column

    def row(self, node: int) -> List[int]:
        """Indices of the row cycle through ``node``, starting with ``node``."""
        members = [node]
        current = self.nodes[node].right
        while current != node:
            members.append(current)
            current = self.nodes[current].right
        return members

    def column(self, header: int) -> Iterator[int]:
        """Iterate the uncovered members of a column from top to bottom."""
        current = self.nodes[header].down
        while current != header:
            yield current
            current = self.nodes[current].down

    def snapshot(self) -> np.ndarray:
        """Return an ``(len, 6)`` array of ``left, right, up, down, column, size``.

        Non-header rows carry ``-1`` in the size field. Two snapshots compare
        equal (``np.array_equal``) exactly when every link and size matches.
        """
        table = np.empty((len(self.nodes), 6), dtype=np.int64)
        for index, record in enumerate(self.nodes):
            size = record.header.size if record.header is not None else -1
            table[index] = (record.left, record.right, record.up, record.down, record.column, size)
        return table

    # -- splices -----------------------------------------------------------

    def hide(self, node: int) -> None:
        nodes = self.nodes
        record = nodes[node]
        nodes[record.up].down = record.down
        nodes[record.down].up = record.up

    def show(self, node: int) -> None:
        nodes = self.nodes
        record = nodes[node]
        nodes[record.up].down = node
        nodes[record.down].up = node

    def hide_header(self, header: int) -> None:
        nodes = self.nodes
        record = nodes[header]
        nodes[record.left].right = record.right
        nodes[record.right].left = record.left

    def show_header(self, header: int) -> None:
        nodes = self.nodes
        record = nodes[header]
        nodes[record.left].right = header
        nodes[record.right].left = header

    def cover(self, header: int) -> None:
        """Remove a constraint and every row that conflicts with it.

        Column is walked top to bottom and each row left to right;
        :meth:`uncover` must replay in the opposite directions.
        """
        nodes = self.nodes
        self.hide_header(header)
        i = nodes[header].down
        while i != header:
            j = nodes[i].right
            while j != i:
                self.hide(j)
                nodes[nodes[j].column].header.size -= 1
                self.updates += 1
                j = nodes[j].right
            i = nodes[i].down

    def uncover(self, header: int) -> None:
        """Exact inverse of :meth:`cover` for the most recently covered header."""
        nodes = self.nodes
        i = nodes[header].up
        while i != header:
            j = nodes[i].left
            while j != i:
                nodes[nodes[j].column].header.size += 1
                self.show(j)
                j = nodes[j].left
            i = nodes[i].up
        self.show_header(header)
