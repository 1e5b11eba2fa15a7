"""Pytest configuration and fixtures for shortcut tests."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from shortcut.application import Store
from shortcut.infrastructure.metrics import MetricsRegistry


SAMPLE_ROWS = [
    ["a", "x1"],
    ["a", "x2"],
    ["b", "x3"],
]


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def store() -> Store:
    """Provide an empty two-column store."""
    return Store(columns=2)


@pytest.fixture
def sample_store(store: Store) -> Store:
    """Provide a two-column store holding SAMPLE_ROWS, without indices."""
    for row in SAMPLE_ROWS:
        store.insert(row)
    return store


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
