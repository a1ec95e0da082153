"""Prometheus metrics instrumentation."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

REGISTRY = CollectorRegistry()

BACKEND_CALLS = Counter(
    "usec_backend_calls_total",
    "Secret backend calls by operation and outcome",
    labelnames=("operation", "outcome"),
    registry=REGISTRY,
)

BACKEND_LATENCY = Histogram(
    "usec_backend_latency_seconds",
    "Latency of secret backend calls",
    labelnames=("operation",),
    registry=REGISTRY,
)


def metrics_text() -> str:
    """Return the registry in the Prometheus text exposition format.

    Counters live in this process only; an application embedding the store
    serves this from its own metrics endpoint.
    """
    return generate_latest(REGISTRY).decode("utf-8")


__all__ = [
    "REGISTRY",
    "BACKEND_CALLS",
    "BACKEND_LATENCY",
    "metrics_text",
]
