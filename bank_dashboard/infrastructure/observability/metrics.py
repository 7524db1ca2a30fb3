"""Prometheus metrics for monitored fetches, movement risks and derived system status"""

from prometheus_client import Counter, Histogram, Gauge

from bank_dashboard.domain.models import SystemStatus

# Monitored fetch metrics
monitored_fetch_counter = Counter(
    "monitored_fetch_total",
    "Monitored upstream calls by recorded outcome",
    ["type"],  # SUCCESS | ERROR | RISK
)

monitored_fetch_latency_histogram = Histogram(
    "monitored_fetch_latency_seconds",
    "Monitored upstream call latency",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Analytics metrics
movement_risk_counter = Counter(
    "movement_risks_total",
    "Movements flagged as risks",
    ["rule"],  # high_value | duplicate
)

movements_rejected_counter = Counter(
    "movements_rejected_total",
    "Upstream movement records dropped during normalization",
)

# Service health
system_status_gauge = Gauge(
    "system_status",
    "Current derived system status (1 for the active state)",
    ["status"],
)

request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_fetch(event_type: str, latency_ms: int) -> None:
    """Record one monitored call outcome"""
    monitored_fetch_counter.labels(type=event_type).inc()
    monitored_fetch_latency_histogram.observe(latency_ms / 1000)


def record_system_status(status: SystemStatus) -> None:
    """Set the active status to 1 and all others to 0"""
    for candidate in SystemStatus:
        system_status_gauge.labels(status=candidate.value).set(1 if candidate is status else 0)


def record_analytics(high_value_count: int, duplicate_count: int, rejected_count: int) -> None:
    movement_risk_counter.labels(rule="high_value").inc(high_value_count)
    movement_risk_counter.labels(rule="duplicate").inc(duplicate_count)
    movements_rejected_counter.inc(rejected_count)
