"""CSV export utilities for experiment outputs (aggregates and raw runs).

These helpers materialize concise CSV summaries as well as full per-run raw
data of the random sampling experiments for downstream analysis or
spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import Any, List

from . import settings
from .stats import ExperimentResults, StatsSummary


def _output_path(out_dir: str, stem: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    return os.path.join(out_dir, f"{stem}{settings.filename_suffix()}.csv")


def _stat(summary: StatsSummary, key: str) -> Any:
    value = summary.get(key) if summary else None
    return "" if value is None else value


def save_results_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write one row per N with enumeration, sampling and partial-solution aggregates.

    Column names use lowercase snake_case with subsystem prefixes:
    - opt_* / unopt_* for enumeration with and without the size heuristic,
    - rnd_* for random sampling, partial_* for forced-queen runs.

    Returns the path of the written file.
    """
    filename = _output_path(out_dir, "results_dlx")
    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "n",
            "opt_solutions",
            "opt_updates",
            "opt_time_seconds",
            "opt_exhausted",
            "unopt_solutions",
            "unopt_updates",
            "unopt_time_seconds",
            "unopt_exhausted",
            "rnd_total_runs",
            "rnd_valid_runs",
            "rnd_valid_rate",
            "rnd_distinct_boards",
            "rnd_updates_mean",
            "rnd_updates_median",
            "rnd_time_mean",
            "rnd_time_median",
            "partial_cells",
            "partial_solutions",
            "partial_restored",
        ])

        for N in N_values:
            enum = results["ENUM"].get(N, {})
            opt = enum.get("optimized")
            unopt = enum.get("unoptimized")
            rnd = results["RANDOM"].get(N, {})
            partial = results["PARTIAL"].get(N)

            row: List[Any] = [N]
            for entry in (opt, unopt):
                if entry:
                    row.extend([entry["solutions"], entry["updates"], entry["time"], entry["exhausted"]])
                else:
                    row.extend(["", "", "", ""])
            row.extend([
                rnd.get("total_runs", ""),
                rnd.get("valid_runs", ""),
                rnd.get("valid_rate", ""),
                rnd.get("distinct_boards", ""),
                _stat(rnd.get("all_updates", {}), "mean"),
                _stat(rnd.get("all_updates", {}), "median"),
                _stat(rnd.get("all_time", {}), "mean"),
                _stat(rnd.get("all_time", {}), "median"),
            ])
            if partial:
                cells = " ".join(f"R{r}F{f}" for r, f in partial["cells"])
                row.extend([cells, partial["solutions"], partial["restored"]])
            else:
                row.extend(["", "", ""])
            writer.writerow(row)

    print(f"Results written to {filename}")
    return filename


def save_raw_data_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write every random_search run (one row per run) to CSV.

    Boards are serialized as space separated ranks in file order (``-1`` for
    a file left empty when no solution was found).
    """
    filename = _output_path(out_dir, "raw_random_runs")
    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["n", "run", "valid", "updates", "time_seconds", "board"])
        for N in N_values:
            runs = results["RANDOM"].get(N, {}).get("raw_runs", [])
            for index, run in enumerate(runs, start=1):
                writer.writerow([
                    N,
                    index,
                    run["valid"],
                    run["updates"],
                    run["time"],
                    " ".join(str(rank) for rank in run["board"]),
                ])

    print(f"Raw random runs written to {filename}")
    return filename
