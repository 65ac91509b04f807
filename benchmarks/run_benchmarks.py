#!/usr/bin/env python3
"""vecfold Benchmark Runner — Run all benchmarks and report results.

Usage:
    python benchmarks/run_benchmarks.py
    python benchmarks/run_benchmarks.py --elementwise
    python benchmarks/run_benchmarks.py --folds
    python benchmarks/run_benchmarks.py --sammon
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from dataclasses import asdict
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from benchmarks import BenchmarkResult
from benchmarks.kernel_benchmark import run_elementwise_benchmark, run_fold_benchmark
from benchmarks.sammon_benchmark import run_sammon_benchmark


SUITES = {
    "elementwise": lambda args: run_elementwise_benchmark(args.dim, args.iterations),
    "folds": lambda args: run_fold_benchmark(args.dim, args.iterations),
    "sammon": lambda args: run_sammon_benchmark(args.dim),
}


def print_result(result: BenchmarkResult, verbose: bool = False) -> None:
    """Print one line per benchmark, timings and errors when verbose."""
    print(result.summary())
    if not verbose:
        return
    for key, value in result.details.items():
        print(f"    {key:28s} {value:.4f}")
    for err in result.errors:
        print(f"    error: {err}")


def main():
    parser = argparse.ArgumentParser(description="vecfold kernel benchmarks")
    for name in SUITES:
        parser.add_argument(f"--{name}", action="store_true", help=f"Run the {name} benchmark")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show timings and error details")
    parser.add_argument("--dim", type=int, default=300, help="Vector dimension")
    parser.add_argument("--iterations", type=int, default=10_000, help="Calls per kernel")
    parser.add_argument("--output", "-o", type=str, help="Save results to JSON file")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    selected = [name for name in SUITES if getattr(args, name)] or list(SUITES)
    results = [SUITES[name](args) for name in selected]
    for result in results:
        print_result(result, args.verbose)

    passed = sum(r.correct for r in results)
    checks = sum(r.total for r in results)
    print(f"{passed}/{checks} checks passed")

    if args.output:
        output = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S"),
            "config": {"dimension": args.dim, "iterations": args.iterations},
            "results": [
                {**asdict(r), "ops_per_second": r.ops_per_second} for r in results
            ],
        }
        Path(args.output).write_text(json.dumps(output, indent=2))
        print(f"Results saved to {args.output}")

    return 0 if passed == checks else 1


if __name__ == "__main__":
    sys.exit(main())
