"""JSON configuration for dancing-links runs.

One file drives the experiment pipeline and the interactive CLI modes:

- experiment_settings: board sizes, random_search runs per size, output dir.
- search_settings: ``optimized`` column policy, ``solution_limit`` and ``seed``.
- partial_solutions: ``{"N": [[rank, file], ...]}`` queens forced with
  ``remove_row`` before enumerating the rest of the board.

Only the shape of ``partial_solutions`` is checked here; ranges and attacks
are checked when the board is built.
"""
import json
from pathlib import Path


class ConfigManager:
    """Read and write one JSON configuration file.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Location of the file; it must exist.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Copy config.json from the repository root as a starting point"
            )
        with open(self.config_path, 'r') as f:
            return json.load(f)

    def save_config(self):
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Board sizes (``N_values``), ``runs_random`` and ``output_dir``."""
        return self.config.get("experiment_settings", {})

    def get_search_settings(self):
        """Column policy, solution limit and random seed."""
        return self.config.get("search_settings", {})

    def get_partial_solutions(self):
        """Forced queens keyed by integer board size, squares as ``(rank, file)``.

        Raises
        ------
        ValueError
            If a square is not a pair of integers.
        """
        raw = self.config.get("partial_solutions", {})
        forced = {}
        for n, cells in raw.items():
            squares = []
            for cell in cells:
                if len(cell) != 2 or not all(isinstance(v, int) for v in cell):
                    raise ValueError(f"partial_solutions[{n}]: expected [rank, file], got {cell!r}")
                squares.append((cell[0], cell[1]))
            forced[int(n)] = squares
        return forced

    def save_partial_solution(self, n, cells):
        """Store the forced squares for board size ``n`` and write the file."""
        section = self.config.setdefault("partial_solutions", {})
        section[str(n)] = [[int(rank), int(file)] for rank, file in cells]
        self.save_config()
        print(f"Partial solution for N={n} saved to {self.config_path}")

    def update_setting(self, section, key, value):
        """Set ``section.key`` and persist immediately."""
        self.config.setdefault(section, {})[key] = value
        self.save_config()
