"""OpenTelemetry tracing for the bundled tools.

The store itself never opens spans; tools such as ``shortcut-bench`` wrap
their phases in ``trace_span``. Attribute keys are namespaced under
``shortcut.`` so they do not collide with semantic-convention keys.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, Mapping

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)


ATTRIBUTE_PREFIX = "shortcut."

_tracer: trace.Tracer | None = None
_provider: TracerProvider | None = None


def setup_tracing(
    service_name: str = "shortcut",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Set up OpenTelemetry tracing.

    The global tracer provider can only be installed once per process, so
    later calls reuse the provider from the first one.

    Args:
        service_name: Name reported in the ``service.name`` resource attribute
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Also print finished spans to stdout

    Returns:
        Configured tracer instance
    """
    global _tracer, _provider

    if _provider is None:
        from shortcut import __version__

        _provider = TracerProvider(
            resource=Resource.create(
                {"service.name": service_name, "service.version": __version__}
            )
        )
        for exporter in _exporters(otlp_endpoint, console_export):
            _provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(_provider)

    _tracer = _provider.get_tracer(service_name)
    return _tracer


def _exporters(otlp_endpoint: str | None, console_export: bool) -> list[SpanExporter]:
    exporters: list[SpanExporter] = []
    if otlp_endpoint:
        exporters.append(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    if console_export:
        exporters.append(ConsoleSpanExporter())
    return exporters


def get_tracer() -> trace.Tracer:
    """Get the tracer, falling back to the global (possibly no-op) provider."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("shortcut")
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: Mapping[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Context manager for creating a trace span.

    Args:
        name: Name of the span
        attributes: Attributes to set, keyed without the ``shortcut.`` prefix

    Yields:
        The created span
    """
    with get_tracer().start_as_current_span(name) as span:
        if attributes:
            span.set_attributes(
                {f"{ATTRIBUTE_PREFIX}{key}": value for key, value in attributes.items()}
            )
        yield span
