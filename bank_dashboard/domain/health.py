"""System health derivation from the rolling log window"""

from typing import Sequence

from bank_dashboard.domain.models import HealthSnapshot, LogEvent, LogEventType, SystemStatus

SLOW_CALL_MS = 2000
SERVER_ERROR_STATUS = 500

ERROR_WINDOW = 10
LATENCY_WINDOW = 5
CRITICAL_ERROR_COUNT = 2  # strictly more than this many errors is CRITICAL


def classify_log_event(status: int, latency: int) -> LogEventType:
    """ERROR for HTTP status >= 400, RISK for slow calls, SUCCESS otherwise"""
    if status >= 400:
        return LogEventType.ERROR
    if latency > SLOW_CALL_MS:
        return LogEventType.RISK
    return LogEventType.SUCCESS


def count_recent_errors(logs: Sequence[LogEvent]) -> int:
    return sum(1 for log in logs[:ERROR_WINDOW] if log.status >= SERVER_ERROR_STATUS)


def mean_recent_latency(logs: Sequence[LogEvent]) -> float:
    """
    Mean latency of the newest entries.

    The denominator is always LATENCY_WINDOW, even with fewer logs, so a short
    history reads as faster than it is.
    """
    return sum(log.latency for log in logs[:LATENCY_WINDOW]) / LATENCY_WINDOW


def summarize_health(logs: Sequence[LogEvent]) -> HealthSnapshot:
    """
    Derive system status from logs ordered newest first.

    Status bands:
    - CRITICAL: more than 2 server errors (status >= 500) among the last 10 calls
    - DEGRADED: mean latency of the last 5 calls above 2000ms
    - OK:       everything else
    CRITICAL always wins over DEGRADED.
    """
    recent_errors = count_recent_errors(logs)
    recent_latency = mean_recent_latency(logs)

    if recent_errors > CRITICAL_ERROR_COUNT:
        status = SystemStatus.CRITICAL
    elif recent_latency > SLOW_CALL_MS:
        status = SystemStatus.DEGRADED
    else:
        status = SystemStatus.OK

    return HealthSnapshot(status=status, recent_errors=recent_errors, recent_latency=recent_latency)


def derive_system_status(logs: Sequence[LogEvent]) -> SystemStatus:
    return summarize_health(logs).status
