"""Pydantic schemas for API responses"""

import math
from pydantic import BaseModel
from datetime import datetime
from typing import Any, List, Optional

from bank_dashboard.domain.exceptions import MovementParseError
from bank_dashboard.domain.models import FinancialStats, HealthSnapshot, LogEvent, Movement


class MovementSchema(BaseModel):
    """Single ledger entry with running balance"""

    id: str
    date: datetime
    amount: float
    description: str
    type: str
    dynamic_balance: float

    @classmethod
    def from_domain(cls, movement: Movement) -> "MovementSchema":
        return cls(
            id=movement.id,
            date=movement.date,
            amount=movement.amount,
            description=movement.description,
            type=movement.type.value,
            dynamic_balance=movement.dynamic_balance,
        )


class RejectedRecordSchema(BaseModel):
    """Upstream record dropped during normalization"""

    index: int
    field: str
    value: Any = None

    @classmethod
    def from_domain(cls, error: MovementParseError) -> "RejectedRecordSchema":
        value = error.value
        if not isinstance(value, (str, int, float, bool, type(None))) or (isinstance(value, float) and not math.isfinite(value)):
            value = repr(value)
        return cls(index=error.index, field=error.field, value=value)


class StatsSchema(BaseModel):
    """Aggregates for the full ledger"""

    total_in: float
    total_out: float
    risks: List[MovementSchema]
    top5: List[MovementSchema]
    rejected: List[RejectedRecordSchema]

    @classmethod
    def from_domain(cls, stats: FinancialStats) -> "StatsSchema":
        return cls(
            total_in=stats.total_in,
            total_out=stats.total_out,
            risks=[MovementSchema.from_domain(m) for m in stats.risks],
            top5=[MovementSchema.from_domain(m) for m in stats.top5],
            rejected=[RejectedRecordSchema.from_domain(e) for e in stats.rejected],
        )


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    account_id: str
    balance: float
    movements: List[MovementSchema]
    total_count: int
    stats: Optional[StatsSchema] = None
    system_status: str
    error: Optional[str] = None


class LogEventSchema(BaseModel):
    """Single monitored call outcome"""

    id: str
    timestamp: str
    endpoint: str
    status: int
    latency: int
    type: str
    message: str

    @classmethod
    def from_domain(cls, event: LogEvent) -> "LogEventSchema":
        return cls(**event.to_dict())


class MonitoringResponse(BaseModel):
    """Response for the /v1/monitoring endpoints"""

    status: str
    recent_errors: int
    recent_latency: float
    logs: List[LogEventSchema]

    @classmethod
    def build(cls, health: HealthSnapshot, logs: List[LogEvent]) -> "MonitoringResponse":
        return cls(
            status=health.status.value,
            recent_errors=health.recent_errors,
            recent_latency=health.recent_latency,
            logs=[LogEventSchema.from_domain(log) for log in logs],
        )
