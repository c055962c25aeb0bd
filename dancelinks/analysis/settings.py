"""Global settings for the dancing-links analysis pipeline.

Values can be overridden at runtime via the configuration loader in
`dancelinks.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple
from datetime import datetime

# Board sizes to enumerate (in ascending order) for scalability analysis
N_VALUES: List[int] = [4, 5, 6, 7, 8, 9, 10]

# Number of random_search runs per N
RUNS_RANDOM: int = 20

# Stop enumeration after this many solutions (None = enumerate everything)
SOLUTION_LIMIT: Optional[int] = None

# Column selection policy for enumeration runs launched from the CLI
OPTIMIZED: bool = True

# Seed for the random sampling runs (None = nondeterministic)
SEED: Optional[int] = 42

# Forced queens per board size, as (rank, file) squares
PARTIAL_SOLUTIONS: Dict[int, List[Tuple[int, int]]] = {8: [(0, 2), (3, 3)]}

# Output directory for CSV and charts
OUT_DIR: str = "results_dlx"

# Output naming policy --------------------------------------------------------

# When True, results and plots include a datestamp suffix (e.g., _20251113-142530)
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to filenames
RUN_TAG: Optional[str] = None


def set_limits(
        solution_limit: Optional[int] = None,
        runs_random: int = 20,
        seed: Optional[int] = 42,
) -> None:
        """Configure enumeration and sampling limits.

        Parameters
        - solution_limit: stop each enumeration after this many solutions
            (None enumerates the whole solution space).
        - runs_random: number of random_search runs per N.
        - seed: seed for the sampling generator (None disables seeding).

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active limits explicit at run start.
        """
        global SOLUTION_LIMIT, RUNS_RANDOM, SEED
        SOLUTION_LIMIT = solution_limit
        RUNS_RANDOM = runs_random
        SEED = seed

        print("Search limits configured:")
        print(f"   - Solutions: {SOLUTION_LIMIT}" if SOLUTION_LIMIT is not None else "   - Solutions: unlimited")
        print(f"   - Random runs per N: {RUNS_RANDOM}")
        print(f"   - Seed: {SEED}" if SEED is not None else "   - Seed: none")


def filename_suffix() -> str:
    """Suffix shared by every artifact of one run (tag and datestamp)."""
    parts: List[str] = []
    if RUN_TAG:
        parts.append(RUN_TAG)
    if DATE_IN_FILENAMES:
        parts.append(RUN_ID)
    return ("_" + "_".join(parts)) if parts else ""
