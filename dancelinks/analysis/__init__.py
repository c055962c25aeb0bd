"""
Analysis and orchestration package for dancing-links experiments.

This package contains:
- settings: global knobs and limits
- stats: typed summaries and aggregation helpers
- experiments: runners for enumeration, random sampling and partial solutions
- reporting: CSV exports and raw-data writers
- plots: all visualization utilities
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    EnumerationEntry,
    RandomRecord,
    RandomResultEntry,
    PartialEntry,
    ExperimentResults,
    compute_detailed_statistics,
    summarize_random_runs,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "EnumerationEntry",
    "RandomRecord",
    "RandomResultEntry",
    "PartialEntry",
    "ExperimentResults",
    # utils
    "compute_detailed_statistics",
    "summarize_random_runs",
    "ProgressPrinter",
    # settings module
    "settings",
]
