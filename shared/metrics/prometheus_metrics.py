"""Prometheus metrics definitions and helpers.

Provides the HTTP and domain metrics exported by the API.
"""

from functools import lru_cache
from typing import Callable

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    REGISTRY,
    CollectorRegistry,
)


class ApiMetrics:
    """API request and domain metrics."""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize API metrics.

        Args:
            registry: Prometheus registry to use
        """
        self.registry = registry

        # Requests handled
        self.http_requests = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["method", "endpoint", "status"],
            registry=registry,
        )

        # Request duration
        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
            registry=registry,
        )

        # Requests in flight
        self.http_requests_in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests currently in progress",
            ["method"],
            registry=registry,
        )

        self.jokes_served = Counter(
            "dad_jokes_served_total",
            "Number of dad jokes returned to clients",
            registry=registry,
        )

        self.name_registrations = Counter(
            "name_registrations_total",
            "Name registration attempts by outcome",
            ["outcome"],
            registry=registry,
        )

        self.moods_computed = Counter(
            "outfit_moods_computed_total",
            "Outfit moods computed, labelled by mood",
            ["mood"],
            registry=registry,
        )

        self.database_pool_size = Gauge(
            "database_pool_connections",
            "Connections held by the database pool",
            ["state"],
            registry=registry,
        )


@lru_cache()
def get_metrics() -> ApiMetrics:
    """Get the process-wide metrics instance.

    Metrics register against the default registry, so they are created once.

    Returns:
        Shared ApiMetrics instance
    """
    return ApiMetrics()


def get_metrics_handler(registry: CollectorRegistry = REGISTRY) -> Callable[[], bytes]:
    """Get metrics handler for HTTP endpoint.

    Returns:
        Function that generates Prometheus metrics output
    """

    def metrics_handler() -> bytes:
        return generate_latest(registry)

    return metrics_handler
