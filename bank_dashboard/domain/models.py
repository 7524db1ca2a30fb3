"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List

from bank_dashboard.domain.exceptions import MovementParseError


class MovementType(str, Enum):
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class LogEventType(str, Enum):
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"
    RISK = "RISK"


class SystemStatus(str, Enum):
    OK = "OK"
    DEGRADED = "DEGRADED"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class Movement:
    """Normalized account movement"""

    id: str
    date: datetime
    amount: float
    description: str
    type: MovementType
    dynamic_balance: float = 0.0
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass
class FinancialStats:
    """Aggregates derived once per load"""

    total_in: float = 0.0
    total_out: float = 0.0
    risks: List[Movement] = field(default_factory=list)
    top5: List[Movement] = field(default_factory=list)
    rejected: List[MovementParseError] = field(default_factory=list)
    high_value_count: int = 0
    duplicate_count: int = 0


@dataclass
class AnalyticsResult:
    """Output of the analytics facade: ordered ledger plus stats"""

    ledger: List[Movement]
    stats: FinancialStats


@dataclass(frozen=True)
class LogEvent:
    """One recorded outcome of a monitored network call"""

    id: str
    timestamp: str  # ISO-8601 UTC
    endpoint: str
    status: int
    latency: int  # milliseconds
    type: LogEventType
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "endpoint": self.endpoint,
            "status": self.status,
            "latency": self.latency,
            "type": self.type.value,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogEvent":
        return cls(
            id=str(data["id"]),
            timestamp=str(data["timestamp"]),
            endpoint=str(data["endpoint"]),
            status=int(data["status"]),
            latency=int(data["latency"]),
            type=LogEventType(data["type"]),
            message=str(data.get("message", "")),
        )


@dataclass
class HealthSnapshot:
    """Derived health of recent monitored calls"""

    status: SystemStatus
    recent_errors: int
    recent_latency: float
