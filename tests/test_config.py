"""Tests for benchmark configuration and the command-line interface"""
# pylint: skip-file

import contextlib
import io
import os
import tempfile
import unittest
from unittest.mock import patch

from sample_bench.backends import available_backends
from sample_bench.cli import build_parser, config_from_args, main
from sample_bench.config import DEFAULT_TIMES, BenchmarkConfig

ENV_KEYS = (
    "SAMPLE_BENCH_SEED",
    "SAMPLE_BENCH_TIMES",
    "SAMPLE_BENCH_BACKENDS",
    "SAMPLE_BENCH_VERIFY",
    "SAMPLE_BENCH_LOG_LEVEL",
)


def clean_env(**overrides):
    """Environment without any SAMPLE_BENCH_* variable except ``overrides``."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_KEYS}
    env.update(overrides)
    return patch.dict(os.environ, env, clear=True)


class TestBenchmarkConfig(unittest.TestCase):

    def test_defaults(self):
        config = BenchmarkConfig()
        self.assertEqual(config.seed, 42)
        self.assertEqual(config.times, DEFAULT_TIMES)
        self.assertEqual(config.times, [1, 5, 10, 50, 100, 300, 500, 700, 1000])
        self.assertEqual(config.backends, available_backends())
        self.assertEqual((config.range_low, config.range_high), (4.0, 6.0))
        self.assertEqual(config.point_count, 1000)
        self.assertFalse(config.verify)
        self.assertTrue(config.collect_garbage)
        config.validate()

    def test_default_lists_are_not_shared(self):
        a, b = BenchmarkConfig(), BenchmarkConfig()
        a.times.append(2000)
        a.backends.pop()
        self.assertEqual(b.times, DEFAULT_TIMES)
        self.assertEqual(b.backends, available_backends())

    def test_validate_rejects(self):
        cases = {
            "no sizes": dict(times=[]),
            "zero size": dict(times=[1, 0]),
            "negative size": dict(times=[-5]),
            "no backends": dict(backends=[]),
            "unknown backend": dict(backends=["list", "nedb"]),
            "no points": dict(point_count=0),
            "inverted range": dict(range_low=6.0, range_high=4.0),
            "inverted bounds": dict(min_value=10.0, max_value=0.0),
            "unknown log level": dict(log_level="LOUD"),
        }
        for label, overrides in cases.items():
            with self.subTest(case=label):
                with self.assertRaises(ValueError):
                    BenchmarkConfig(**overrides).validate()

    def test_degenerate_range_is_valid(self):
        BenchmarkConfig(range_low=5.0, range_high=5.0).validate()

    def test_str(self):
        text = str(BenchmarkConfig(times=[1, 5], backends=["list"]))
        self.assertIn("Sizes (times): 1, 5", text)
        self.assertIn("Backends: list", text)
        self.assertIn("Range query: [4.0, 6.0]", text)


class TestConfigFromEnv(unittest.TestCase):

    def test_empty_env_gives_defaults(self):
        with clean_env():
            config = BenchmarkConfig.from_env()
        self.assertEqual(config, BenchmarkConfig())

    def test_env_overrides(self):
        with clean_env(
            SAMPLE_BENCH_SEED="7",
            SAMPLE_BENCH_TIMES="1, 5,10",
            SAMPLE_BENCH_BACKENDS="ordered-index,list",
            SAMPLE_BENCH_VERIFY="TRUE",
            SAMPLE_BENCH_LOG_LEVEL="WARNING",
        ):
            config = BenchmarkConfig.from_env()
        self.assertEqual(config.seed, 7)
        self.assertEqual(config.times, [1, 5, 10])
        self.assertEqual(config.backends, ["ordered-index", "list"])
        self.assertTrue(config.verify)
        self.assertEqual(config.log_level, "WARNING")

    def test_bad_env_number(self):
        with clean_env(SAMPLE_BENCH_TIMES="1,x"):
            with self.assertRaises(ValueError):
                BenchmarkConfig.from_env()


class TestCommandLine(unittest.TestCase):

    def parse(self, argv):
        return config_from_args(build_parser().parse_args(argv))

    def test_no_flags_keeps_defaults(self):
        with clean_env():
            config = self.parse([])
        self.assertEqual(config, BenchmarkConfig())

    def test_flags(self):
        with clean_env():
            config = self.parse([
                "--times", "1", "5",
                "--backends", "sqlite", "list",
                "--seed", "3",
                "--points", "200",
                "--range", "3.5", "7",
                "--verify",
                "--no-gc",
                "--csv", "out.csv",
                "--log-level", "WARNING",
            ])
        self.assertEqual(config.times, [1, 5])
        self.assertEqual(config.backends, ["sqlite", "list"])
        self.assertEqual(config.seed, 3)
        self.assertEqual(config.point_count, 200)
        self.assertEqual((config.range_low, config.range_high), (3.5, 7.0))
        self.assertTrue(config.verify)
        self.assertFalse(config.collect_garbage)
        self.assertEqual(config.csv_path, "out.csv")
        self.assertEqual(config.log_level, "WARNING")

    def test_flags_override_env(self):
        with clean_env(SAMPLE_BENCH_SEED="7", SAMPLE_BENCH_TIMES="100"):
            config = self.parse(["--seed", "8"])
        self.assertEqual(config.seed, 8)
        self.assertEqual(config.times, [100])

    def test_unknown_backend_choice(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                build_parser().parse_args(["--backends", "loki"])

    def test_list_backends(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            self.assertEqual(main(["--list-backends"]), 0)
        self.assertEqual(out.getvalue().split(), available_backends())

    def test_invalid_config_is_a_usage_error(self):
        err = io.StringIO()
        with clean_env(), contextlib.redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                main(["--range", "6", "4"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("inverted", err.getvalue())

    def test_unknown_env_log_level_is_a_usage_error(self):
        err = io.StringIO()
        with clean_env(SAMPLE_BENCH_LOG_LEVEL="LOUD"), contextlib.redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                main(["--times", "1", "--backends", "list", "--no-progress"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("'LOUD'", err.getvalue())

    def test_lowercase_log_level_is_accepted(self):
        BenchmarkConfig(log_level="warning").validate()

    def test_main_writes_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "results.csv")
            with clean_env():
                code = main([
                    "--times", "1",
                    "--backends", "ordered-index", "list",
                    "--points", "20",
                    "--no-progress",
                    "--csv", path,
                    "--log-level", "WARNING",
                ])
            self.assertEqual(code, 0)
            with open(path) as f:
                content = f.read()
        self.assertIn("==== remove() ====", content)
        self.assertIn("ordered-index,", content)
        self.assertIn("list,", content)


if __name__ == "__main__":
    unittest.main()
