"""
Metrics Collection
Prometheus metrics for engine cycles and history movement
"""

from prometheus_client import Counter, Gauge, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the schema engine.
    """

    def __init__(self) -> None:
        # Cycle metrics
        self.cycles_total = Counter(
            "schema_engine_cycles_total",
            "Total number of successful submissions",
            ["source"],
        )
        self.failures_total = Counter(
            "schema_engine_failures_total",
            "Total number of rejected submissions",
            ["source", "code"],
        )
        self.cycle_duration = Histogram(
            "schema_engine_cycle_duration_seconds",
            "Validate/apply/commit cycle duration in seconds",
            ["source"],
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
        )

        # Queue metrics
        self.waiting = Gauge(
            "schema_engine_waiting_submissions",
            "Submissions waiting behind the active cycle",
        )

        # History metrics
        self.history_moves_total = Counter(
            "schema_engine_history_moves_total",
            "Rewind/advance requests",
            ["direction", "outcome"],
        )

        # Subscriber metrics
        self.listener_errors_total = Counter(
            "schema_engine_listener_errors_total",
            "Total number of listener exceptions",
        )

        # Sanitization metrics
        self.sanitized_values_total = Counter(
            "schema_engine_sanitized_values_total",
            "Prop values narrowed by sanitization",
        )

    def record_success(self, source: str, duration: float) -> None:
        """Record a successful cycle."""
        self.cycles_total.labels(source=source).inc()
        self.cycle_duration.labels(source=source).observe(duration)

    def record_failure(self, source: str, code: str, duration: float | None = None) -> None:
        """Record a rejected submission."""
        self.failures_total.labels(source=source, code=code).inc()
        if duration is not None:
            self.cycle_duration.labels(source=source).observe(duration)

    def set_waiting(self, count: int) -> None:
        self.waiting.set(count)

    def record_history_move(self, direction: str, moved: bool) -> None:
        self.history_moves_total.labels(
            direction=direction, outcome="moved" if moved else "boundary"
        ).inc()

    def record_listener_error(self) -> None:
        self.listener_errors_total.inc()

    def record_sanitized(self, count: int) -> None:
        if count:
            self.sanitized_values_total.inc(count)

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest()


# Global metrics collector instance
metrics_collector = MetricsCollector()
