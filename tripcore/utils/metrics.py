"""Prometheus metrics for persistence and booking."""

from prometheus_client import Counter, Histogram

# Persistence metrics
itinerary_writes_total = Counter(
    "itinerary_writes_total",
    "Total full-collection itinerary writes",
    ["outcome"],
)

# Booking metrics
booking_attempts_total = Counter(
    "booking_attempts_total",
    "Total booking attempts by terminal outcome",
    ["outcome"],
)

reminder_failures_total = Counter(
    "reminder_failures_total",
    "Total trip reminders that failed to schedule",
)

payment_latency_ms = Histogram(
    "payment_latency_ms",
    "Payment collaborator latency in milliseconds",
    ["outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)


class PrometheusBookingMetrics:
    """Prometheus-based booking metrics implementation."""

    def inc_attempt(self, outcome: str) -> None:
        """Increment booking attempt counter."""
        booking_attempts_total.labels(outcome=outcome).inc()

    def inc_reminder_failure(self) -> None:
        """Increment reminder failure counter."""
        reminder_failures_total.inc()

    def record_payment_latency(self, outcome: str, latency_ms: float) -> None:
        """Record payment collaborator latency."""
        payment_latency_ms.labels(outcome=outcome).observe(latency_ms)


def record_itinerary_write(outcome: str) -> None:
    """Increment itinerary write counter."""
    itinerary_writes_total.labels(outcome=outcome).inc()
