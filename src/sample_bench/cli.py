"""Command-line interface for the storage backend benchmark."""

import argparse
import asyncio
import sys
from typing import List, Optional

from sample_bench.backends.factory import available_backends
from sample_bench.config import LOG_LEVELS, BenchmarkConfig
from sample_bench.logging_config import get_logger, setup_logging
from sample_bench.runner import BenchmarkRunner

logger = get_logger("CLI")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sample-bench",
        description="Benchmark data-access latency of storage backends on numeric samples",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sample-bench                                  # All backends, default sizes
  sample-bench --times 1 5 10                   # Quick run on small sizes
  sample-bench --backends ordered-index list    # Compare two backends
  sample-bench --csv results.csv                # Also write the stage tables
        """
    )
    parser.add_argument('--times', type=int, nargs='+', metavar='N',
                        help='Dataset size multipliers (default: env or 1 5 10 50 100 300 500 700 1000)')
    parser.add_argument('--backends', nargs='+', choices=available_backends(), metavar='NAME',
                        help=f"Backends to run, in order (choices: {', '.join(available_backends())})")
    parser.add_argument('--seed', type=int,
                        help='Random seed for data generation')
    parser.add_argument('--points', type=int, dest='point_count',
                        help='Size of the query point set (default: 1000)')
    parser.add_argument('--range', type=float, nargs=2, metavar=('LO', 'HI'), dest='query_range',
                        help='Inclusive range query bounds (default: 4 6)')
    parser.add_argument('--verify', action='store_true',
                        help='Check container invariants after every stage (not timed)')
    parser.add_argument('--no-gc', action='store_true',
                        help='Skip the garbage collection before each backend pass')
    parser.add_argument('--csv', dest='csv_path', metavar='PATH',
                        help="Write stage tables as CSV ('-' for stdout)")
    parser.add_argument('--log-level', choices=LOG_LEVELS,
                        help='Logging level (default: INFO)')
    parser.add_argument('--no-progress', action='store_true',
                        help='Hide the progress bar')
    parser.add_argument('--list-backends', action='store_true',
                        help='List available backends and exit')
    return parser


def config_from_args(args: argparse.Namespace) -> BenchmarkConfig:
    """Environment defaults overridden by explicit command-line flags."""
    config = BenchmarkConfig.from_env()
    if args.times is not None:
        config.times = args.times
    if args.backends is not None:
        config.backends = args.backends
    if args.seed is not None:
        config.seed = args.seed
    if args.point_count is not None:
        config.point_count = args.point_count
    if args.query_range is not None:
        config.range_low, config.range_high = args.query_range
    if args.verify:
        config.verify = True
    if args.no_gc:
        config.collect_garbage = False
    if args.csv_path is not None:
        config.csv_path = args.csv_path
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


def write_csv(aggregator, path: str) -> None:
    if path == "-":
        aggregator.write_csv(sys.stdout)
        return
    with open(path, "w", newline="") as f:
        aggregator.write_csv(f)
    logger.info("Wrote %s", path)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_backends:
        for name in available_backends():
            print(name)
        return 0

    try:
        config = config_from_args(args)
        config.validate()
    except ValueError as e:
        parser.error(str(e))

    setup_logging(config.log_level)

    logger.info("=== CONFIG ===")
    for line in str(config).split('\n'):
        logger.info(line)

    runner = BenchmarkRunner(config)
    aggregator = asyncio.run(runner.run(progress=not args.no_progress))

    logger.info("")
    logger.info("=== STAGE TABLES (ms) ===")
    aggregator.log_tables()

    if config.csv_path:
        write_csv(aggregator, config.csv_path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
