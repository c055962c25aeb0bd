"""Dancing-links exact cover solver with N-Queens and 0/1 matrix front ends."""

from .engine import DLX, Action
from .links import HeaderPayload, LinkNode, Links
from .matrix import KNUTH_MATRIX, ExactCoverDLX
from .queens import QueensDLX
from .utils import conflicts, format_solution, is_exact_cover, is_valid_solution

__all__ = [
    "DLX",
    "Action",
    "Links",
    "LinkNode",
    "HeaderPayload",
    "ExactCoverDLX",
    "KNUTH_MATRIX",
    "QueensDLX",
    "format_solution",
    "conflicts",
    "is_valid_solution",
    "is_exact_cover",
]
