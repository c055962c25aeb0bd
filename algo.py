"""Script entry point: ``python algo.py --mode enumerate --n 8``.

Kept at the repository root next to ``config.json`` so the default
configuration path resolves when run from a checkout.
"""
from dancelinks.analysis.cli import main, run_quick_regression_tests

__all__ = ["main", "run_quick_regression_tests"]


if __name__ == "__main__":
    main()
