"""Metrics definitions for the App Relay Service."""

from __future__ import annotations

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram


class RelayMetrics:
    """A container for all Prometheus metrics for the App Relay Service."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics with optional registry for test isolation."""
        if registry is None:
            registry = REGISTRY
        self.upstream_calls_total = Counter(
            "app_relay_upstream_calls_total",
            "Total number of relayed calls to upstream endpoints.",
            ["target", "status_code", "outcome"],
            registry=registry,
        )
        self.upstream_call_duration_seconds = Histogram(
            "app_relay_upstream_call_duration_seconds",
            "Duration of relayed upstream calls in seconds.",
            ["target"],
            registry=registry,
        )
