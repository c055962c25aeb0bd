"""Command-line interface and high-level pipelines for dancing-links runs.

This module wires together configuration loading, the experiment suite, and
small interactive modes that print solutions (all solutions of a board or a
0/1 matrix, random solutions, solutions extending forced queens). It isolates
I/O, argument parsing, and progress reporting from the core modules so that
the rest of the codebase remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import random
import re
import tempfile
from pathlib import Path
from typing import Any, List, Optional, Tuple

import numpy as np

from . import settings
from .experiments import check_non_attacking, run_experiments, run_partial_solution
from .reporting import save_raw_data_to_csv, save_results_to_csv
from config_manager import ConfigManager
from dancelinks.engine import DLX
from dancelinks.matrix import KNUTH_MATRIX, ExactCoverDLX
from dancelinks.queens import QueensDLX
from dancelinks.utils import format_solution, is_exact_cover, is_valid_solution


# ------------- Utils --------------------------------------------------------

_CELL_PATTERN = re.compile(r"^\s*(?:R(\d+)F(\d+)|(\d+)\s*,\s*(\d+))\s*$", re.IGNORECASE)


def parse_cells(cell_args: Optional[List[str]]) -> Optional[List[Tuple[int, int]]]:
    """Normalize forced-queen CLI inputs into ``(rank, file)`` tuples.

    Accepts ``R0F2`` style names or ``rank,file`` pairs, repeated flags, and
    ``;``-separated lists (e.g. ``--cell "R0F2;R3F3"``). Returns ``None`` when
    nothing was given so callers can fall back to the configured squares.
    """
    if not cell_args:
        return None
    cells: List[Tuple[int, int]] = []
    for entry in cell_args:
        for token in entry.split(";"):
            if not token.strip():
                continue
            match = _CELL_PATTERN.match(token)
            if not match:
                raise ValueError(f"Cannot parse square '{token.strip()}'. Use R<rank>F<file> or rank,file")
            rank = match.group(1) or match.group(3)
            file = match.group(2) or match.group(4)
            cells.append((int(rank), int(file)))
    return cells or None


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and update the global ``settings`` module in-place."""
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.N_VALUES = [int(n) for n in experiment_settings.get("N_values", settings.N_VALUES)]
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)
        runs_random = int(experiment_settings.get("runs_random", settings.RUNS_RANDOM))
    else:
        runs_random = settings.RUNS_RANDOM

    search_settings = config_mgr.get_search_settings()
    settings.OPTIMIZED = bool(search_settings.get("optimized", settings.OPTIMIZED))
    settings.set_limits(
        solution_limit=search_settings.get("solution_limit", settings.SOLUTION_LIMIT),
        runs_random=runs_random,
        seed=search_settings.get("seed", settings.SEED),
    )

    partial = config_mgr.get_partial_solutions()
    if partial:
        settings.PARTIAL_SOLUTIONS = partial

    if any(n < 1 for n in settings.N_VALUES):
        raise ValueError(f"Board sizes must be >= 1, got {settings.N_VALUES}")
    return config_mgr


def print_solutions(dlx: DLX, limit: Optional[int] = None, header: str = "Solution") -> int:
    """Print every solution reachable from the current state; return how many."""
    count = 0
    if limit is not None and limit <= 0:
        return count
    stream = dlx.solutions()
    try:
        for answer in stream:
            count += 1
            print(f"{header} #{count}:")
            print(format_solution(dlx, answer))
            print()
            if limit is not None and count >= limit:
                break
    finally:
        stream.close()
    return count


# ------------- Modes --------------------------------------------------------

def main_experiments(validate: bool = False, plots: bool = False) -> None:
    """Run the configured experiment suite and export CSV (and charts)."""
    N_values = settings.N_VALUES
    results = run_experiments(
        N_values,
        runs_random=settings.RUNS_RANDOM,
        solution_limit=settings.SOLUTION_LIMIT,
        seed=settings.SEED,
        partial_solutions=settings.PARTIAL_SOLUTIONS,
        progress_label="Experiments",
        validate=validate,
    )
    save_results_to_csv(results, N_values, settings.OUT_DIR)
    save_raw_data_to_csv(results, N_values, settings.OUT_DIR)

    if plots:
        from .plots import plot_and_save

        boards = {}
        for N in N_values:
            runs = results["RANDOM"].get(N, {}).get("raw_runs", [])
            valid = [run["board"] for run in runs if run["valid"]]
            if valid:
                boards[N] = valid[0]
        plot_and_save(results, N_values, settings.OUT_DIR, boards=boards)


def main_enumerate(n: int, optimized: bool, limit: Optional[int]) -> int:
    dlx = QueensDLX(n, optimized=optimized)
    count = print_solutions(dlx, limit)
    print(f"{count} solution(s) for N={n}")
    return count


def main_random(n: int, runs: int, seed: Optional[int]) -> None:
    """Print ``runs`` random solutions, undoing each before the next search."""
    rng = random.Random(seed)
    dlx = QueensDLX(n)
    for index in range(1, runs + 1):
        answer = dlx.random_search(rng)
        if not answer:
            print(f"No solution exists for N={n}")
            return
        print(f"Random Solution #{index}:")
        print(format_solution(dlx, answer))
        print(f"Board: {dlx.board(answer)}")
        print()
        dlx.undo(answer)


def main_partial(n: int, cells: List[Tuple[int, int]], limit: Optional[int]) -> int:
    """Force queens on ``cells`` and print every completion."""
    check_non_attacking(cells)
    dlx = QueensDLX(n)
    partial: List[int] = []
    for rank, file in cells:
        dlx.remove_row(dlx.cell(rank, file), partial)

    print("Using the partial solution:")
    print(format_solution(dlx, partial))
    print()
    count = print_solutions(dlx, limit)
    dlx.undo(partial)
    print(f"{count} solution(s) extend {len(cells)} forced queen(s) on N={n}")
    return count


def main_matrix(matrix_path: Optional[str], optimized: bool, limit: Optional[int]) -> int:
    """Solve a whitespace separated 0/1 matrix file (Knuth's example by default)."""
    if matrix_path:
        matrix = np.loadtxt(matrix_path, dtype=int, ndmin=2)
    else:
        matrix = np.asarray(KNUTH_MATRIX)
    dlx = ExactCoverDLX(matrix, optimized=optimized)
    print("Optimized" if optimized else "Un-optimized")
    count = print_solutions(dlx, limit)
    print(f"{count} exact cover(s)")
    return count


# ------------- Quick regression ---------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test of every engine entry point.

    Verifies that:
    - Knuth's example matrix has exactly one exact cover under both policies.
    - 4-Queens has 2 solutions and 8-Queens has 92, with valid boards.
    - random_search returns valid boards and undo restores the structure.
    - Forcing R0F2 and R3F3 restricts the solutions and undo restores all 92.
    - The experiment pipeline produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests...")

    for optimized in (True, False):
        dlx = ExactCoverDLX(KNUTH_MATRIX, optimized=optimized)
        covers = [dlx.rows(answer) for answer in dlx.solutions()]
        if covers != [[0, 3, 4]]:
            raise AssertionError(f"Knuth matrix (optimized={optimized}) gave {covers}, expected [[0, 3, 4]]")
        if not is_exact_cover(KNUTH_MATRIX, covers[0]):
            raise AssertionError("Knuth matrix solution is not an exact cover.")
    print("  Knuth matrix: 1 exact cover under both policies")

    for n, expected in ((4, 2), (8, 92)):
        dlx = QueensDLX(n)
        boards = [dlx.board(answer) for answer in dlx.solutions()]
        if len(boards) != expected or len({tuple(b) for b in boards}) != expected:
            raise AssertionError(f"{n}-Queens gave {len(boards)} solutions, expected {expected}.")
        if not all(is_valid_solution(b) for b in boards):
            raise AssertionError(f"{n}-Queens produced an invalid board.")
        print(f"  {n}-Queens: {expected} solutions")

    dlx = QueensDLX(8)
    rng = random.Random(42)
    for _ in range(2):
        answer = dlx.random_search(rng)
        if not is_valid_solution(dlx.board(answer)):
            raise AssertionError(f"random_search returned an invalid board: {dlx.board(answer)}")
        dlx.undo(answer)
    if not dlx.is_clean():
        raise AssertionError("undo did not restore the structure after random_search.")
    print("  random_search: 2 valid boards")

    partial = run_partial_solution(8, [(0, 2), (3, 3)], validate=True)
    if not partial["restored"] or partial["solutions"] >= 92:
        raise AssertionError(f"Partial solution run misbehaved: {partial}")
    print(f"  Partial R0F2+R3F3: {partial['solutions']} completion(s)")

    results = run_experiments([4, 5], runs_random=3, seed=42, progress_label="Quick regression experiments", validate=True)
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, [4, 5], tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Results CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Exact cover with dancing links: N-Queens and 0/1 matrices.")
    parser.add_argument(
        "--mode",
        choices=["experiments", "enumerate", "random", "partial", "matrix"],
        default="experiments",
        help="What to run: the configured experiment suite (default), or print solutions.",
    )
    parser.add_argument("--n", type=int, default=8, help="Board size for enumerate/random/partial (default: 8).")
    parser.add_argument(
        "--cell",
        "-c",
        action="append",
        help="Forced queen for partial mode, as R<rank>F<file> or rank,file (repeatable).",
    )
    parser.add_argument(
        "--save-partial",
        action="store_true",
        help="In partial mode, store the --cell squares for --n in the configuration file.",
    )
    parser.add_argument("--matrix", help="Whitespace separated 0/1 matrix file for matrix mode (default: Knuth's example).")
    parser.add_argument("--limit", type=int, help="Stop after this many solutions.")
    parser.add_argument("--runs", type=int, default=2, help="Random solutions to print in random mode (default: 2).")
    parser.add_argument("--seed", type=int, help="Seed for random mode (overrides the configured seed).")
    parser.add_argument("--unoptimized", action="store_true", help="Pick the first active column instead of the smallest.")
    parser.add_argument("--config", default="config.json", help="Path to configuration file (default: config.json).")
    parser.add_argument("--plots", action="store_true", help="Save PNG charts after the experiment suite.")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    parser.add_argument("--validate", action="store_true", help="Validate every solution and every undo (extra assertions).")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen mode."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        cells = parse_cells(args.cell)
        if args.mode == "experiments" or Path(args.config).exists():
            apply_configuration(args.config)
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    optimized = settings.OPTIMIZED and not args.unoptimized
    limit = args.limit if args.limit is not None else settings.SOLUTION_LIMIT
    seed = args.seed if args.seed is not None else settings.SEED

    try:
        if args.mode == "experiments":
            main_experiments(validate=args.validate, plots=args.plots)
        elif args.mode == "enumerate":
            main_enumerate(args.n, optimized, limit)
        elif args.mode == "random":
            main_random(args.n, args.runs, seed)
        elif args.mode == "partial":
            forced: Any = cells or settings.PARTIAL_SOLUTIONS.get(args.n)
            if not forced:
                raise ValueError(f"No forced queens given for N={args.n}; use --cell or config.json")
            main_partial(args.n, forced, limit)
            if args.save_partial and cells:
                ConfigManager(args.config).save_partial_solution(args.n, cells)
        else:
            main_matrix(args.matrix, optimized, limit)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except (ValueError, OSError) as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc
