"""Prometheus metrics for the row store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all row store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Row metrics
        self.rows_inserted_total = Counter(
            "shortcut_rows_inserted_total",
            "Total number of rows inserted",
            registry=self._registry,
        )

        self.rows_deleted_total = Counter(
            "shortcut_rows_deleted_total",
            "Total number of rows deleted",
            registry=self._registry,
        )

        self.rows_stored = Gauge(
            "shortcut_rows_stored",
            "Number of rows currently stored",
            registry=self._registry,
        )

        # Query metrics
        self.queries_total = Counter(
            "shortcut_queries_total",
            "Total number of planned queries",
            ["strategy"],  # index_lookup, full_scan
            registry=self._registry,
        )

        self.candidate_rows_total = Counter(
            "shortcut_candidate_rows_total",
            "Total candidate rows fetched and verified against conditions",
            registry=self._registry,
        )

        # Index metrics
        self.indexes_attached_total = Counter(
            "shortcut_indexes_attached_total",
            "Total number of indexes attached",
            ["kind"],  # equality, range
            registry=self._registry,
        )

        self.index_backfill_entries_total = Counter(
            "shortcut_index_backfill_entries_total",
            "Total entries written while backfilling newly attached indexes",
            registry=self._registry,
        )

        self.info = Info(
            "shortcut",
            "Row store information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def sample(self, name: str, **labels: str) -> float:
        """Return the current value of one sample, or 0.0 if never recorded."""
        value = self._registry.get_sample_value(name, labels or None)
        return value if value is not None else 0.0


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from shortcut import __version__
    _metrics.info.info({
        "version": __version__,
    })

    # Start HTTP server for Prometheus scraping
    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
