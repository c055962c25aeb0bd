"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for experiment outputs and provides utilities
to summarize per-run metrics of the random sampling experiments.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, TypedDict

import numpy as np


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]


class EnumerationEntry(TypedDict):
    solutions: int
    updates: int
    time: float
    exhausted: bool


class RandomRecord(TypedDict):
    valid: bool
    updates: int
    time: float
    board: List[int]


class RandomResultEntry(TypedDict, total=False):
    total_runs: int
    valid_runs: int
    valid_rate: float
    distinct_boards: int
    all_updates: StatsSummary
    all_time: StatsSummary
    raw_runs: List[RandomRecord]


class PartialEntry(TypedDict):
    cells: List[List[int]]
    solutions: int
    restored: bool
    time: float


class ExperimentResults(TypedDict):
    # N -> policy label ("optimized" / "unoptimized") -> entry
    ENUM: Dict[int, Dict[str, EnumerationEntry]]
    RANDOM: Dict[int, RandomResultEntry]
    PARTIAL: Dict[int, PartialEntry]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps expected; values <= 0 are coerced to 1.
    label : str
        Short label printed in front of the counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: Sequence[float]) -> StatsSummary:
    """Summarize a numeric sequence.

    Returns count, mean, median, population std, min, max and the 25th/75th
    percentiles. Empty input yields ``count=0`` and ``None`` everywhere else
    so CSV rows keep a fixed shape.
    """
    if len(values) == 0:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
        }

    data = np.asarray(values, dtype=float)
    q25, median, q75 = np.percentile(data, [25, 50, 75])
    return {
        "count": int(data.size),
        "mean": float(data.mean()),
        "median": float(median),
        "std": float(data.std()),
        "min": float(data.min()),
        "max": float(data.max()),
        "q25": float(q25),
        "q75": float(q75),
    }


def summarize_random_runs(runs: List[RandomRecord]) -> RandomResultEntry:
    """Aggregate raw ``random_search`` runs for one board size."""
    valid = [r for r in runs if r["valid"]]
    return {
        "total_runs": len(runs),
        "valid_runs": len(valid),
        "valid_rate": len(valid) / len(runs) if runs else 0.0,
        "distinct_boards": len({tuple(r["board"]) for r in valid}),
        "all_updates": compute_detailed_statistics([r["updates"] for r in runs]),
        "all_time": compute_detailed_statistics([r["time"] for r in runs]),
        "raw_runs": runs,
    }
