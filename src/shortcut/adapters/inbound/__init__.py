"""Inbound adapters for the row store.

Inbound adapters drive the store from the outside.

Exports:
    Benchmark:
        - run_benchmark: Put/get throughput benchmark
        - BenchResult: Timings of one benchmark run
        - main: ``shortcut-bench`` command-line entry point
"""

from shortcut.adapters.inbound.bench import BenchResult, main, run_benchmark

__all__ = [
    "BenchResult",
    "main",
    "run_benchmark",
]
