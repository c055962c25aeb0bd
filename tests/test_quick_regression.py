"""Quick regression tests for the dancing-links pipeline."""

from contextlib import redirect_stdout
import io
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import algo


class QuickRegressionTests(unittest.TestCase):
    """Verify that the lightweight regression checks pass."""

    def test_engine_entry_points_and_csv_generation(self):
        """Knuth's matrix, 4/8-Queens, random and partial searches, and CSV export."""
        with redirect_stdout(io.StringIO()):
            algo.run_quick_regression_tests()


if __name__ == "__main__":
    unittest.main()
