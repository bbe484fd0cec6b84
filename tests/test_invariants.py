"""Tests for the shared invariant checks"""
# pylint: skip-file

import unittest

from sample_bench.invariants import (
    InvariantError,
    check_ascending_records,
    check_index,
    check_key_order,
)
from sample_bench.ordered_index import OrderedIndex
from tests.test_base import rec


class TestCheckKeyOrder(unittest.TestCase):

    def test_empty_and_single(self):
        check_key_order([])
        check_key_order([(1.0, 1)])

    def test_ascending_with_ties_on_p(self):
        check_key_order([(1.0, 3), (2.0, 1), (2.0, 2), (2.0, 7), (3.0, 4)])

    def test_descending_p_raises(self):
        with self.assertRaises(InvariantError) as ctx:
            check_key_order([(1.0, 1), (3.0, 2), (2.0, 3)])
        self.assertIn("key #1", str(ctx.exception))

    def test_equal_keys_raise(self):
        with self.assertRaises(InvariantError):
            check_key_order([(2.0, 5), (2.0, 5)])

    def test_descending_seq_on_equal_p_raises(self):
        with self.assertRaises(InvariantError):
            check_key_order([(2.0, 5), (2.0, 4)])


class TestCheckAscendingRecords(unittest.TestCase):

    def test_empty(self):
        self.assertTrue(check_ascending_records([]))

    def test_non_decreasing(self):
        self.assertTrue(check_ascending_records([rec(1.0), rec(1.0), rec(2.5)]))

    def test_out_of_order(self):
        self.assertFalse(check_ascending_records([rec(1.0), rec(0.5)]))

    def test_custom_field(self):
        records = [{"t": 3}, {"t": 1}]
        self.assertFalse(check_ascending_records(records, field="t"))
        self.assertTrue(check_ascending_records(records[::-1], field="t"))


class TestCheckIndex(unittest.TestCase):

    def test_valid_index(self):
        index = OrderedIndex(initial=[rec(p) for p in (3.0, 1.0, 2.0, 1.0)])
        check_index(index)

    def test_empty_index(self):
        check_index(OrderedIndex())

    def test_mutated_record_is_detected(self):
        record = rec(2.0)
        index = OrderedIndex(initial=[rec(1.0), record])
        record["p"] = 0.0
        with self.assertRaises(InvariantError) as ctx:
            check_index(index)
        self.assertIn("entry #1", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
