"""Put/get microbenchmark for the row store.

Builds a two-column store, optionally attaches an index on column 0,
inserts ``(str(i), str(i))`` for every round, then looks every row up again
by its first column and reports throughput.

Usage:
    $ shortcut-bench --rounds 100000 --use-index
    put time: 95.12ms (1051303.20 puts/sec)
    get time: 120.40ms (830564.78 gets/sec)
"""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from typing import Sequence

from shortcut.application import Store
from shortcut.domain.services import BTreeIndex, HashIndex
from shortcut.domain.value_objects import Condition
from shortcut.infrastructure.config import Config, get_config
from shortcut.infrastructure.logging import setup_logging
from shortcut.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from shortcut.infrastructure.tracing import setup_tracing, trace_span


@dataclass(frozen=True)
class BenchResult:
    """Timings of one benchmark run."""

    rounds: int
    put_seconds: float
    get_seconds: float
    rows_found: int

    @property
    def puts_per_sec(self) -> float:
        return ops_per_sec(self.rounds, self.put_seconds)

    @property
    def gets_per_sec(self) -> float:
        return ops_per_sec(self.rounds, self.get_seconds)

    def report(self) -> str:
        return (
            f"put time: {self.put_seconds * 1000:.2f}ms ({self.puts_per_sec:.2f} puts/sec)\n"
            f"get time: {self.get_seconds * 1000:.2f}ms ({self.gets_per_sec:.2f} gets/sec)"
        )


def ops_per_sec(rounds: int, seconds: float) -> float:
    if seconds <= 0:
        return float("inf")
    return rounds / seconds


def run_benchmark(
    rounds: int,
    use_index: bool = False,
    index_kind: str = "hash",
    btree_max_keys: int = 64,
    metrics: MetricsRegistry | None = None,
) -> BenchResult:
    """Run the put/get benchmark and return its timings.

    Args:
        rounds: Number of rows inserted and looked up.
        use_index: Attach an index on column 0 before inserting.
        index_kind: ``"hash"`` or ``"btree"``.
        btree_max_keys: Node size for the B+Tree index.
        metrics: Optional metrics the store updates.
    """
    store = Store(columns=2, metrics=metrics)
    if use_index:
        if index_kind == "btree":
            store.index(0, BTreeIndex(max_keys=btree_max_keys))
        else:
            store.index(0, HashIndex())

    with trace_span("bench.put", {"rounds": rounds, "use_index": use_index}):
        t0 = time.perf_counter()
        for i in range(rounds):
            istr = str(i)
            store.insert((istr, istr))
        t1 = time.perf_counter()

    found = 0
    with trace_span("bench.get", {"rounds": rounds, "use_index": use_index}):
        for i in range(rounds):
            for _ in store.find([Condition.equal(0, str(i))]):
                found += 1
        t2 = time.perf_counter()

    return BenchResult(
        rounds=rounds,
        put_seconds=t1 - t0,
        get_seconds=t2 - t1,
        rows_found=found,
    )


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shortcut-bench", description="Benchmark shortcut.")
    parser.add_argument(
        "--rounds",
        type=int,
        default=config.bench.rounds,
        help="Number of rounds to run. [default: %(default)s]",
    )
    parser.add_argument(
        "--use-index",
        action="store_true",
        default=config.bench.use_index,
        help="Install an index on column 0 for fast lookups.",
    )
    parser.add_argument(
        "--index-kind",
        choices=["hash", "btree"],
        default=config.index.default_kind,
        help="Index implementation used with --use-index. [default: %(default)s]",
    )
    parser.add_argument(
        "--metrics-port",
        type=int,
        default=config.observability.metrics_port,
        help="Expose Prometheus metrics on this port.",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default=config.observability.log_format,
    )
    parser.add_argument(
        "--bench",
        action="store_true",
        help="Accepted for compatibility with benchmark runners. No effect.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    config = get_config()
    args = build_parser(config).parse_args(argv)
    if args.rounds < 1:
        print("--rounds must be at least 1", file=sys.stderr)
        return 2

    log = setup_logging(config.observability.log_level, args.log_format)
    setup_tracing(
        service_name=config.observability.otel_service_name,
        otlp_endpoint=config.observability.otel_endpoint,
    )
    if args.metrics_port is not None:
        metrics = setup_metrics(args.metrics_port)
    else:
        metrics = get_metrics()

    log.info(
        "bench_started",
        rounds=args.rounds,
        use_index=args.use_index,
        index_kind=args.index_kind,
    )
    result = run_benchmark(
        rounds=args.rounds,
        use_index=args.use_index,
        index_kind=args.index_kind,
        btree_max_keys=config.index.btree_max_keys,
        metrics=metrics,
    )
    print(result.report())
    log.info("bench_finished", rows_found=result.rows_found)
    return 0


if __name__ == "__main__":
    sys.exit(main())
