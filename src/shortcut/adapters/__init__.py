"""Adapters layer - concrete drivers of the store's ports.

- Inbound adapters: Drive the store from outside (benchmark CLI)
"""

from shortcut.adapters.inbound import BenchResult, run_benchmark

__all__ = [
    "BenchResult",
    "run_benchmark",
]
