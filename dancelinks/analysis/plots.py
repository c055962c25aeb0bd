"""Visualization utilities for analysis outputs.

Charts are written as PNG files into ``out_dir``; filenames carry a two-digit
prefix for stable ordering and the run suffix from ``settings``.

Chart map
---------
- 01_solutions_vs_N.png: solutions found per N (log scale). Both selection
    policies must agree whenever enumeration was exhaustive.
- 02_updates_vs_N.png: Knuth's "updates" (vertical hides during cover) per
    N, optimized vs unoptimized column selection (log scale). This is the
    hardware independent cost of the search.
- 03_time_vs_N.png: wall-clock enumeration time per N and policy.
- 04_random_updates_boxplot.png: spread of updates per random_search run.
- board_N{N}.png: one rendered solution per N, when a board is supplied.
"""
from __future__ import annotations

import os
from typing import Dict, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from . import settings
from .stats import ExperimentResults


def _png(out_dir: str, stem: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    return os.path.join(out_dir, f"{stem}{settings.filename_suffix()}.png")


def enumeration_frame(results: ExperimentResults, N_values: List[int]) -> pd.DataFrame:
    """Long-format table: one row per (N, policy) enumeration."""
    rows = []
    for N in N_values:
        for policy, entry in results["ENUM"].get(N, {}).items():
            rows.append({
                "n": N,
                "policy": policy,
                "solutions": entry["solutions"],
                "updates": entry["updates"],
                "time": entry["time"],
                "exhausted": entry["exhausted"],
            })
    return pd.DataFrame(rows, columns=["n", "policy", "solutions", "updates", "time", "exhausted"])


def random_frame(results: ExperimentResults, N_values: List[int]) -> pd.DataFrame:
    """One row per random_search run."""
    rows = []
    for N in N_values:
        for run in results["RANDOM"].get(N, {}).get("raw_runs", []):
            rows.append({"n": N, "valid": run["valid"], "updates": run["updates"], "time": run["time"]})
    return pd.DataFrame(rows, columns=["n", "valid", "updates", "time"])


def _line_chart(frame: pd.DataFrame, column: str, ylabel: str, title: str, path: str, log: bool) -> None:
    fig, ax = plt.subplots(figsize=(8, 5))
    sns.lineplot(data=frame, x="n", y=column, hue="policy", marker="o", ax=ax)
    if log and (frame[column] > 0).all():
        ax.set_yscale("log")
    ax.set_xlabel("N (board size)")
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)


def plot_enumeration_analysis(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Charts 01-03; returns the written paths (empty when nothing was enumerated)."""
    frame = enumeration_frame(results, N_values)
    if frame.empty:
        print("No enumeration results to plot.")
        return []

    written = []
    charts = [
        ("solutions", "Solutions", "Solutions vs N", "01_solutions_vs_N", True),
        ("updates", "Updates (cover hides)", "Search cost vs N", "02_updates_vs_N", True),
        ("time", "Time [s]", "Enumeration time vs N", "03_time_vs_N", True),
    ]
    for column, ylabel, title, stem, log in charts:
        path = _png(out_dir, stem)
        _line_chart(frame, column, ylabel, title, path, log)
        written.append(path)
    return written


def plot_random_sampling(results: ExperimentResults, N_values: List[int], out_dir: str) -> Optional[str]:
    """Chart 04: box plot of updates per random_search run, by N."""
    frame = random_frame(results, N_values)
    if frame.empty:
        print("No random sampling results to plot.")
        return None

    path = _png(out_dir, "04_random_updates_boxplot")
    fig, ax = plt.subplots(figsize=(8, 5))
    sns.boxplot(data=frame, x="n", y="updates", ax=ax)
    ax.set_xlabel("N (board size)")
    ax.set_ylabel("Updates per run")
    ax.set_title("random_search cost distribution")
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


def plot_board(board: Sequence[int], path: str, title: str = "") -> str:
    """Render a ``board[file] = rank`` placement as a checkerboard PNG."""
    n = len(board)
    checker = np.indices((n, n)).sum(axis=0) % 2
    fig, ax = plt.subplots(figsize=(max(3, n * 0.5), max(3, n * 0.5)))
    ax.imshow(checker, cmap="Greys", alpha=0.35, origin="upper")
    for file, rank in enumerate(board):
        if rank >= 0:
            ax.text(file, rank, "♛", ha="center", va="center", fontsize=max(8, 160 // n))
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xlabel("file")
    ax.set_ylabel("rank")
    if title:
        ax.set_title(title)
    fig.tight_layout()
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path


def plot_and_save(
    results: ExperimentResults,
    N_values: List[int],
    out_dir: str,
    boards: Optional[Dict[int, List[int]]] = None,
) -> List[str]:
    """Produce every chart for one run of the pipeline."""
    written = plot_enumeration_analysis(results, N_values, out_dir)
    sampling = plot_random_sampling(results, N_values, out_dir)
    if sampling:
        written.append(sampling)
    for N, board in (boards or {}).items():
        written.append(plot_board(board, _png(out_dir, f"board_N{N}"), title=f"{N}-Queens"))
    print(f"{len(written)} chart(s) saved to {out_dir}")
    return written
