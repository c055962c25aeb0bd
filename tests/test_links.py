"""Tests for the dancing-links arena: splices, cover and uncover."""

from pathlib import Path
import sys
import unittest
from unittest import mock

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dancelinks.links import Links
from dancelinks.matrix import KNUTH_MATRIX, ExactCoverDLX


class NodeSpliceTests(unittest.TestCase):
    """Row insertion and column appends on a hand-built arena."""

    def test_new_node_is_a_one_cycle(self):
        links = Links()
        node = links.new_node()
        record = links.nodes[node]
        self.assertEqual((record.left, record.right, record.up, record.down), (node, node, node, node))
        self.assertEqual(record.column, -1)
        self.assertFalse(links.is_header(node))

    def test_insert_places_node_to_the_right(self):
        links = Links()
        a, b, c = links.new_node(), links.new_node(), links.new_node()
        self.assertEqual(links.insert(a, c), c)
        links.insert(a, b)
        self.assertEqual(links.row(a), [a, b, c])
        self.assertEqual(links.row(c), [c, a, b])
        self.assertEqual(links.nodes[a].left, c)

    def test_append_node_goes_to_the_bottom_and_counts(self):
        links = Links()
        header = links.new_header("X")
        first = links.append_node(header, links.new_node())
        second = links.append_node(header, links.new_node())
        self.assertEqual(list(links.column(header)), [first, second])
        self.assertEqual(links.size(header), 2)
        self.assertEqual(links.column_of(second), header)
        self.assertEqual(links.nodes[header].up, second)
        self.assertEqual(links.name(header), "X")

    def test_hide_and_show_are_vertical_only(self):
        links = Links()
        header = links.new_header("X")
        top = links.append_node(header, links.new_node())
        middle = links.append_node(header, links.new_node())
        partner = links.insert(middle, links.new_node())
        links.append_node(header, links.new_node())

        links.hide(middle)
        self.assertNotIn(middle, list(links.column(header)))
        self.assertEqual(links.row(middle), [middle, partner])
        self.assertEqual(links.nodes[top].down, links.nodes[middle].down)

        links.show(middle)
        self.assertEqual(list(links.column(header))[1], middle)


class CoverTests(unittest.TestCase):
    """Cover/uncover on Knuth's example matrix."""

    def setUp(self):
        self.dlx = ExactCoverDLX(KNUTH_MATRIX)
        self.links = self.dlx.links

    def test_cover_then_uncover_restores_every_link_and_size(self):
        for header in self.dlx.active_headers():
            before = self.links.snapshot()
            self.links.cover(header)
            self.assertFalse(np.array_equal(before, self.links.snapshot()))
            self.links.uncover(header)
            np.testing.assert_array_equal(before, self.links.snapshot())

    def test_nested_covers_unwind_in_reverse(self):
        before = self.links.snapshot()
        headers = self.dlx.active_headers()
        for header in headers[:3]:
            self.links.cover(header)
        for header in reversed(headers[:3]):
            self.links.uncover(header)
        np.testing.assert_array_equal(before, self.links.snapshot())

    def test_cover_removes_conflicting_rows_and_updates_sizes(self):
        headers = dict(zip("ABCDEFG", self.dlx.active_headers()))
        # Column A holds rows 1 {A,D,G} and 3 {A,D}.
        self.links.cover(headers["A"])
        self.assertNotIn(headers["A"], self.dlx.active_headers())
        self.assertEqual(self.links.size(headers["D"]), 1)
        self.assertEqual(self.links.size(headers["G"]), 2)
        self.assertEqual(self.links.size(headers["C"]), 2)
        self.assertEqual(self.links.updates, 3)

    def test_cover_splices_rows_through_hide_and_show(self):
        header_a = self.dlx.active_headers()[0]
        with mock.patch.object(self.links, "hide", wraps=self.links.hide) as hide, \
                mock.patch.object(self.links, "show", wraps=self.links.show) as show:
            self.links.cover(header_a)
            self.assertEqual(hide.call_count, 3)
            self.links.uncover(header_a)
            self.assertEqual(show.call_count, 3)

    def test_size_matches_column_walk(self):
        headers = self.dlx.active_headers()
        self.links.cover(headers[3])
        for header in self.dlx.active_headers():
            self.assertEqual(self.links.size(header), len(list(self.links.column(header))))


if __name__ == "__main__":
    unittest.main()
