#!/usr/bin/env python3
"""
ASV wrapper for the OrderedIndex micro-benchmarks.

The full backend comparison is ``sample-bench`` (or ``python -m sample_bench``);
this script only drives the asv suite under ``benchmarks/``.
"""

import argparse
import subprocess
import sys
from pathlib import Path


def run_command(cmd, description=""):
    """Run a command, echo its output and report success."""
    print(f"\n{description}")
    print(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        print(f"Error: {e}")
        if e.stderr:
            print(f"stderr: {e.stderr}")
        return False
    if result.stdout:
        print(result.stdout)
    return True


def build_asv_command(args):
    """Translate the selection flags into an ``asv run`` invocation."""
    cmd = ['poetry', 'run', 'asv', 'run']
    if args.machine:
        cmd.extend(['--machine', args.machine])
    if args.verbose:
        cmd.append('--verbose')
    if args.quick:
        cmd.append('--quick')

    for flag, pattern in (('insert', 'OrderedIndexInsert'),
                          ('query', 'OrderedIndexQuery'),
                          ('delete', 'OrderedIndexDelete')):
        if getattr(args, flag):
            cmd.extend(['-b', pattern])
    return cmd


def main():
    parser = argparse.ArgumentParser(
        description="Run the OrderedIndex asv micro-benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_benchmarks.py --setup           # Initial setup
  python run_benchmarks.py --quick           # One sample per benchmark
  python run_benchmarks.py --insert --query  # Selected benchmark classes
  python run_benchmarks.py --report          # Generate HTML report
        """
    )
    parser.add_argument('--setup', action='store_true',
                        help='Record asv machine info (run once)')
    parser.add_argument('--quick', action='store_true',
                        help='Run every benchmark only once')
    parser.add_argument('--insert', action='store_true',
                        help='Construction benchmarks only')
    parser.add_argument('--query', action='store_true',
                        help='get()/get_range() benchmarks only')
    parser.add_argument('--delete', action='store_true',
                        help='delete() benchmarks only')
    parser.add_argument('--report', action='store_true',
                        help='Generate HTML report from existing results')
    parser.add_argument('--show', action='store_true',
                        help='Show latest results in terminal')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose asv output')
    parser.add_argument('--machine', type=str,
                        help='Machine name for results')
    args = parser.parse_args()

    if not Path('asv.conf.json').exists():
        print("Error: asv.conf.json not found. Please run from project root.")
        return 1

    if args.setup:
        return 0 if run_command(['poetry', 'run', 'asv', 'machine', '--yes'],
                                "Configuring asv machine info") else 1

    if args.report:
        if not run_command(['poetry', 'run', 'asv', 'publish'], "Publishing results"):
            return 1
        run_command(['poetry', 'run', 'asv', 'preview'], "Serving report")
        return 0

    if args.show:
        return 0 if run_command(['poetry', 'run', 'asv', 'show'], "Latest results") else 1

    if not run_command(build_asv_command(args), "Running micro-benchmarks"):
        print("\nBenchmarks failed!")
        return 1

    print("\nBenchmarks completed.")
    print("  View results: python run_benchmarks.py --show")
    print("  Compare with previous: poetry run asv compare HEAD HEAD~1")
    return 0


if __name__ == '__main__':
    sys.exit(main())
