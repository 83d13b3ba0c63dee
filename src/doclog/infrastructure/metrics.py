"""Prometheus metrics for the document store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all document store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Operation metrics
        self.operations_total = Counter(
            "doclog_operations_total",
            "Total number of store operations",
            ["operation", "status"],  # operation: find, insert, delete; status: success, error
            registry=self._registry,
        )

        self.operation_latency_seconds = Histogram(
            "doclog_operation_latency_seconds",
            "Store operation latency in seconds",
            ["operation"],
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
            registry=self._registry,
        )

        self.records_returned_total = Counter(
            "doclog_records_returned_total",
            "Total records returned by find",
            registry=self._registry,
        )

        # Log file metrics
        self.log_lines_read_total = Counter(
            "doclog_log_lines_read_total",
            "Total non-blank log lines parsed",
            registry=self._registry,
        )

        self.log_bytes_written_total = Counter(
            "doclog_log_bytes_written_total",
            "Total bytes written to the log",
            ["mode"],  # append, rewrite
            registry=self._registry,
        )

        self.records_tombstoned_total = Counter(
            "doclog_records_tombstoned_total",
            "Total records marked deleted",
            registry=self._registry,
        )

        # Mutation gate metrics
        self.gate_wait_seconds = Histogram(
            "doclog_gate_wait_seconds",
            "Time spent waiting for the mutation gate",
            buckets=(0.0001, 0.001, 0.01, 0.1, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        self.gate_waiters = Gauge(
            "doclog_gate_waiters",
            "Mutations queued for or holding the mutation gate",
            registry=self._registry,
        )

        # Query metrics
        self.invalid_query_nodes_total = Counter(
            "doclog_invalid_query_nodes_total",
            "Filter nodes of unrecognized shape that failed closed",
            registry=self._registry,
        )

        self.info = Info(
            "doclog",
            "Document store information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The collector registry the metrics are registered with."""
        return self._registry


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up the global metrics registry.

    Exposition is left to the caller; the store never opens a socket.

    Args:
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from doclog import __version__
    _metrics.info.info({
        "version": __version__,
    })

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
