"""Experiment runners for the dancing-links engine on N-Queens boards.

Three kinds of runs are supported for each board size N:

- enumeration: ``search`` followed by ``next`` until exhausted (or until a
    solution limit), once per column selection policy;
- random sampling: repeated ``random_search`` with ``undo`` in between;
- partial solutions: queens forced with ``remove_row`` before enumerating
    the remaining placements, then ``undo`` back to the initial state.

Outputs are structured dictionaries suitable for CSV export and plotting.
Validation hooks optionally check every decoded board.
"""
from __future__ import annotations

import random
from time import perf_counter
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .stats import (
    EnumerationEntry,
    ExperimentResults,
    PartialEntry,
    ProgressPrinter,
    RandomRecord,
    summarize_random_runs,
)
from dancelinks.queens import QueensDLX
from dancelinks.utils import is_valid_solution


POLICIES: Dict[str, bool] = {"optimized": True, "unoptimized": False}


def run_enumeration(
    n: int,
    optimized: bool = True,
    limit: Optional[int] = None,
    validate: bool = False,
) -> EnumerationEntry:
    """Enumerate N-Queens solutions with one engine instance.

    The structure is left clean afterwards, whether or not ``limit`` stopped
    the enumeration early.
    """
    dlx = QueensDLX(n, optimized=optimized)
    if limit is not None and limit <= 0:
        return {"solutions": 0, "updates": 0, "time": 0.0, "exhausted": False}
    start = perf_counter()
    solutions = 0
    exhausted = True
    stream = dlx.solutions()
    try:
        for answer in stream:
            if validate and not is_valid_solution(dlx.board(answer)):
                raise AssertionError(f"Invalid board for N={n}: {dlx.board(answer)}")
            solutions += 1
            if limit is not None and solutions >= limit:
                exhausted = False
                break
    finally:
        stream.close()
    elapsed = perf_counter() - start
    if validate and not dlx.is_clean():
        raise AssertionError(f"Structure not restored after enumeration for N={n}")
    return {
        "solutions": solutions,
        "updates": dlx.links.updates,
        "time": elapsed,
        "exhausted": exhausted,
    }


def run_random_sampling(
    n: int,
    runs: int,
    seed: Optional[int] = None,
    validate: bool = False,
) -> List[RandomRecord]:
    """Draw ``runs`` random solutions from one board, undoing after each."""
    rng = random.Random(seed)
    dlx = QueensDLX(n)
    records: List[RandomRecord] = []
    for _ in range(runs):
        before = dlx.links.updates
        start = perf_counter()
        answer = dlx.random_search(rng)
        elapsed = perf_counter() - start
        board = dlx.board(answer)
        valid = bool(answer) and is_valid_solution(board)
        if validate and answer and not valid:
            raise AssertionError(f"random_search returned an invalid board for N={n}: {board}")
        dlx.undo(list(answer))
        records.append({
            "valid": valid,
            "updates": dlx.links.updates - before,
            "time": elapsed,
            "board": board,
        })
    if validate and not dlx.is_clean():
        raise AssertionError(f"Structure not restored after random sampling for N={n}")
    return records


def check_non_attacking(cells: Sequence[Tuple[int, int]]) -> None:
    """Raise ValueError if two forced queens share a rank, file or diagonal."""
    seen: Dict[str, set] = {"rank": set(), "file": set(), "diag": set(), "anti": set()}
    for rank, file in cells:
        keys = {"rank": rank, "file": file, "diag": rank + file, "anti": rank - file}
        for kind, key in keys.items():
            if key in seen[kind]:
                raise ValueError(f"Forced queens attack each other at ({rank}, {file})")
            seen[kind].add(key)


def run_partial_solution(
    n: int,
    cells: Sequence[Tuple[int, int]],
    limit: Optional[int] = None,
    validate: bool = False,
) -> PartialEntry:
    """Count the solutions that extend a set of forced queens.

    Raises
    ------
    ValueError
        If a square is off the board or two forced queens attack each other.
    """
    cells = [(int(rank), int(file)) for rank, file in cells]
    check_non_attacking(cells)
    dlx = QueensDLX(n)
    initial = dlx.links.snapshot()

    start = perf_counter()
    partial: List[int] = []
    for rank, file in cells:
        dlx.remove_row(dlx.cell(rank, file), partial)

    solutions = dlx.search_all(limit)
    if validate:
        for answer in solutions:
            board = dlx.board(answer + partial)
            if not is_valid_solution(board) or any(board[f] != r for r, f in cells):
                raise AssertionError(f"Solution ignores the forced queens for N={n}: {board}")

    dlx.undo(partial)
    elapsed = perf_counter() - start
    restored = dlx.is_clean() and bool(np.array_equal(dlx.links.snapshot(), initial))
    if validate and not restored:
        raise AssertionError(f"undo did not restore the board for N={n}")
    return {
        "cells": [[rank, file] for rank, file in cells],
        "solutions": len(solutions),
        "restored": restored,
        "time": elapsed,
    }


def run_experiments(
    N_values: List[int],
    runs_random: int,
    solution_limit: Optional[int] = None,
    seed: Optional[int] = None,
    partial_solutions: Optional[Dict[int, List[Tuple[int, int]]]] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    include_enum: bool = True,
    include_random: bool = True,
    policies: Optional[List[str]] = None,
) -> ExperimentResults:
    """Run the enumeration, sampling and partial-solution suites for each N."""
    results: Any = {"ENUM": {}, "RANDOM": {}, "PARTIAL": {}}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None
    selected = policies or list(POLICIES)
    unknown = set(selected).difference(POLICIES)
    if unknown:
        raise ValueError("Unknown selection policy: " + ", ".join(sorted(unknown)) + ". Available: " + ", ".join(POLICIES))

    for index, N in enumerate(N_values, start=1):
        if progress:
            progress.update(index, f"N={N}")
        print(f"=== N = {N} ===")

        if include_enum:
            entries: Dict[str, EnumerationEntry] = {}
            for label in selected:
                entry = run_enumeration(N, optimized=POLICIES[label], limit=solution_limit, validate=validate)
                entries[label] = entry
                print(f"  [{label}] solutions={entry['solutions']}, updates={entry['updates']}, time={entry['time']:.4f}s")
            results["ENUM"][N] = entries

        if include_random and runs_random > 0:
            # Offset the seed per N so sizes do not share one random stream.
            run_seed = None if seed is None else seed + N
            summary = summarize_random_runs(run_random_sampling(N, runs_random, run_seed, validate=validate))
            results["RANDOM"][N] = summary
            print(f"  [random] valid {summary['valid_runs']}/{summary['total_runs']}, distinct boards={summary['distinct_boards']}")

        if partial_solutions and N in partial_solutions:
            partial_entry = run_partial_solution(N, partial_solutions[N], limit=solution_limit, validate=validate)
            results["PARTIAL"][N] = partial_entry
            print(
                f"  [partial] forced={partial_entry['cells']} solutions={partial_entry['solutions']} "
                f"restored={partial_entry['restored']}"
            )

    return results
