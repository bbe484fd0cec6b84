"""Tests for the centralized logging setup"""
# pylint: skip-file

import logging
import unittest

from sample_bench.logging_config import get_logger, get_test_logger, setup_logging


class TestLoggingConfig(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger("sample_bench")
        self.old_level = self.root.level

    def tearDown(self):
        self.root.setLevel(self.old_level)

    def test_get_logger_namespaces_components(self):
        self.assertEqual(get_logger("Runner").name, "sample_bench.Runner")
        self.assertEqual(get_logger("sample_bench.invariants").name, "sample_bench.invariants")

    def test_project_logger_does_not_propagate(self):
        get_logger("Runner")
        self.assertTrue(self.root.hasHandlers())
        self.assertFalse(self.root.propagate)

    def test_setup_is_idempotent_but_adjusts_level(self):
        setup_logging()
        handlers = list(self.root.handlers)
        setup_logging("warning")
        self.assertEqual(self.root.level, logging.WARNING)
        setup_logging(logging.DEBUG)
        self.assertEqual(self.root.level, logging.DEBUG)
        self.assertEqual(self.root.handlers, handlers)

    def test_unknown_level_name(self):
        with self.assertRaises(ValueError) as ctx:
            setup_logging("LOUD")
        self.assertEqual(str(ctx.exception), "Unknown log level: 'LOUD'")

    def test_test_logger(self):
        logger = get_test_logger("unit")
        self.assertEqual(logger.name, "Tests.unit")
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertIs(get_test_logger("unit"), logger)
        self.assertEqual(len(logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()
