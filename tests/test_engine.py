"""Tests for the iterative search engine (search, next, random_search, undo)."""

from itertools import combinations
from pathlib import Path
import random
import sys
import unittest

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dancelinks.engine import DLX
from dancelinks.matrix import KNUTH_MATRIX, ExactCoverDLX
from dancelinks.utils import format_solution, is_exact_cover

# Eight rows over four columns with several exact covers.
SMALL_MATRIX = [
    [1, 0, 0, 1],
    [0, 1, 1, 0],
    [1, 1, 0, 0],
    [0, 0, 1, 1],
    [1, 0, 0, 0],
    [0, 1, 0, 0],
    [0, 0, 1, 0],
    [0, 0, 0, 1],
]


def brute_force_covers(matrix):
    """Every exact cover, as sorted row tuples, by checking all row subsets."""
    height = len(matrix)
    found = set()
    for size in range(1, height + 1):
        for rows in combinations(range(height), size):
            if is_exact_cover(matrix, rows):
                found.add(rows)
    return found


class KnuthExampleTests(unittest.TestCase):
    """The 6x7 matrix from the dancing links paper has exactly one cover."""

    def test_single_solution_under_both_policies(self):
        for optimized in (True, False):
            dlx = ExactCoverDLX(KNUTH_MATRIX, optimized=optimized)
            answer = dlx.search()
            self.assertEqual(dlx.rows(answer), [0, 3, 4])
            self.assertEqual(dlx.next(answer), [])
            self.assertTrue(dlx.is_clean())

    def test_row_names_recover_the_chosen_rows(self):
        dlx = ExactCoverDLX(KNUTH_MATRIX)
        answer = dlx.search()
        chosen = {tuple(sorted(dlx.row_names(node))) for node in answer}
        self.assertEqual(chosen, {("A", "D"), ("B", "G"), ("C", "E", "F")})
        lines = format_solution(dlx, answer).splitlines()
        self.assertEqual(len(lines), 3)
        self.assertEqual({tuple(sorted(line.split())) for line in lines}, chosen)


class SearchContractTests(unittest.TestCase):
    """Round trips, resumability and determinism."""

    def test_search_then_undo_restores_initial_state(self):
        dlx = ExactCoverDLX(SMALL_MATRIX)
        initial = dlx.links.snapshot()
        active = dlx.active_headers()
        answer = dlx.search()
        self.assertTrue(answer)
        self.assertTrue(dlx.is_solved())
        self.assertEqual(dlx.undo(list(answer)), [])
        self.assertEqual(dlx.active_headers(), active)
        np.testing.assert_array_equal(initial, dlx.links.snapshot())

    def test_next_enumerates_every_cover_exactly_once(self):
        expected = brute_force_covers(SMALL_MATRIX)
        for optimized in (True, False):
            dlx = ExactCoverDLX(SMALL_MATRIX, optimized=optimized)
            seen = []
            answer = dlx.search()
            while answer:
                seen.append(tuple(dlx.rows(answer)))
                dlx.next(answer)
            self.assertEqual(len(seen), len(set(seen)))
            self.assertEqual(set(seen), expected)
            self.assertTrue(dlx.is_clean())

    def test_unoptimized_order_is_reproducible(self):
        fresh = ExactCoverDLX(SMALL_MATRIX, optimized=False)
        first = [fresh.rows(a) for a in fresh.search_all()]
        dlx = ExactCoverDLX(SMALL_MATRIX, optimized=False)
        runs = [[dlx.rows(a) for a in dlx.search_all()] for _ in range(2)]
        self.assertEqual(runs[0], runs[1])
        self.assertEqual(first, runs[0])

    def test_min_column_ties_go_to_first_in_root_order(self):
        dlx = ExactCoverDLX([[1, 0], [0, 1], [1, 1]])
        first_header = dlx.active_headers()[0]
        answer = dlx.search()
        self.assertEqual(dlx.links.column_of(answer[0]), first_header)

    def test_min_column_prefers_smallest(self):
        dlx = ExactCoverDLX([[0, 0, 1], [1, 1, 0], [1, 0, 0]])
        smallest = dlx.active_headers()[1]
        answer = dlx.search()
        self.assertEqual(dlx.links.column_of(answer[0]), smallest)

    def test_unoptimized_takes_first_active_column(self):
        dlx = ExactCoverDLX([[0, 0, 1], [1, 1, 0], [1, 0, 0]], optimized=False)
        first = dlx.active_headers()[0]
        answer = dlx.search()
        self.assertEqual(dlx.links.column_of(answer[0]), first)

    def test_empty_column_means_no_solution(self):
        dlx = ExactCoverDLX([[1, 0, 0], [1, 0, 1]])
        initial = dlx.links.snapshot()
        self.assertEqual(dlx.search(), [])
        np.testing.assert_array_equal(initial, dlx.links.snapshot())

    def test_structure_without_columns_has_no_solution(self):
        self.assertEqual(DLX().search(), [])
        self.assertEqual(DLX().random_search(random.Random(0)), [])


class EnumerationHelperTests(unittest.TestCase):
    """solutions() and search_all() leave the structure as they found it."""

    def test_search_all_matches_brute_force(self):
        dlx = ExactCoverDLX(SMALL_MATRIX)
        covers = {tuple(dlx.rows(a)) for a in dlx.search_all()}
        self.assertEqual(covers, brute_force_covers(SMALL_MATRIX))
        self.assertTrue(dlx.is_clean())

    def test_limit_stops_early_and_restores(self):
        dlx = ExactCoverDLX(SMALL_MATRIX)
        initial = dlx.links.snapshot()
        self.assertEqual(len(dlx.search_all(limit=2)), 2)
        self.assertEqual(dlx.search_all(limit=0), [])
        np.testing.assert_array_equal(initial, dlx.links.snapshot())

    def test_closing_the_generator_undoes_the_answer(self):
        dlx = ExactCoverDLX(SMALL_MATRIX)
        stream = dlx.solutions()
        next(stream)
        self.assertTrue(dlx.is_solved())
        stream.close()
        self.assertTrue(dlx.is_clean())


class RandomSearchTests(unittest.TestCase):
    """random_search returns valid covers and is reproducible with a seed."""

    def test_random_answers_are_exact_covers(self):
        dlx = ExactCoverDLX(SMALL_MATRIX)
        rng = random.Random(3)
        expected = brute_force_covers(SMALL_MATRIX)
        for _ in range(10):
            answer = dlx.random_search(rng)
            self.assertIn(tuple(dlx.rows(answer)), expected)
            dlx.undo(answer)
            self.assertTrue(dlx.is_clean())

    def test_seeded_sources_agree(self):
        first = ExactCoverDLX(SMALL_MATRIX)
        second = ExactCoverDLX(SMALL_MATRIX)
        self.assertEqual(
            first.rows(first.random_search(random.Random(11))),
            second.rows(second.random_search(random.Random(11))),
        )

    def test_no_solution_returns_empty_and_clean(self):
        dlx = ExactCoverDLX([[1, 1, 0], [0, 1, 1], [1, 0, 1]])
        initial = dlx.links.snapshot()
        self.assertEqual(dlx.random_search(random.Random(0)), [])
        np.testing.assert_array_equal(initial, dlx.links.snapshot())

    def test_dead_end_candidates_force_backtracking(self):
        # Column A (first of the smallest) holds rows 0, 1 and 2; only row 2 completes.
        matrix = [
            [1, 1, 1, 0],
            [1, 1, 0, 1],
            [1, 0, 0, 0],
            [0, 1, 1, 1],
            [0, 1, 1, 0],
            [0, 0, 1, 1],
        ]
        self.assertEqual(brute_force_covers(matrix), {(2, 3)})
        dlx = ExactCoverDLX(matrix)
        for seed in range(20):
            with self.subTest(seed=seed):
                answer = dlx.random_search(random.Random(seed))
                self.assertEqual(dlx.rows(answer), [2, 3])
                dlx.undo(answer)
                self.assertTrue(dlx.is_clean())

    def test_defaults_to_module_random(self):
        dlx = ExactCoverDLX(KNUTH_MATRIX)
        random.seed(5)
        self.assertEqual(dlx.rows(dlx.random_search()), [0, 3, 4])


class RemoveRowTests(unittest.TestCase):
    """Manual commitment of rows and its undo."""

    def test_forced_row_appears_in_every_completion(self):
        dlx = ExactCoverDLX(SMALL_MATRIX)
        initial = dlx.links.snapshot()
        # Row 1 is {B, C}; its node in column B starts the row.
        header_b = dlx.active_headers()[1]
        node = next(n for n in dlx.links.column(header_b) if dlx.row_index(n) == 1)

        partial = dlx.remove_row(node, [])
        self.assertEqual(partial, [node])
        self.assertNotIn(header_b, dlx.active_headers())

        completions = {tuple(dlx.rows(a + partial)) for a in dlx.search_all()}
        expected = {rows for rows in brute_force_covers(SMALL_MATRIX) if 1 in rows}
        self.assertEqual(completions, expected)

        self.assertEqual(dlx.undo(partial), [])
        np.testing.assert_array_equal(initial, dlx.links.snapshot())


if __name__ == "__main__":
    unittest.main()
