"""GET /v1/dashboard - Load account data and return the analyzed ledger"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from bank_dashboard.api.v1.schemas import DashboardResponse, MovementSchema, StatsSchema
from bank_dashboard.api.dependencies import get_dashboard_view, get_log_store
from bank_dashboard.domain.filters import MovementFilter, TypeFilter, apply_filters
from bank_dashboard.infrastructure.storage.log_store import LogStore
from bank_dashboard.services.dashboard import DashboardView
from bank_dashboard.utils.date_utils import parse_timestamp

router = APIRouter()


def _parse_date_param(name: str, value: Optional[str]):
    if not value:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid {name}: {value}")


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    search: Optional[str] = Query(None, description="Case-insensitive description search"),
    type: TypeFilter = Query(TypeFilter.ALL, description="ALL, CREDIT or DEBIT"),
    date_start: Optional[str] = Query(None, description="Earliest movement date (inclusive)"),
    date_end: Optional[str] = Query(None, description="Latest movement date (inclusive)"),
    min_amount: Optional[float] = Query(None, ge=0, description="Minimum absolute amount"),
    max_amount: Optional[float] = Query(None, ge=0, description="Maximum absolute amount"),
    view: DashboardView = Depends(get_dashboard_view),
    log_store: LogStore = Depends(get_log_store),
):
    """
    Load balance and movements for the configured account.

    Flow:
    1. Fetch balance, then movements, through the monitored relay
    2. Normalize, sort, annotate balances and detect risks
    3. Apply the requested filters to the ledger

    Returns:
        Filtered ledger, stats over the full ledger, and current system status.
        Upstream failures are reported in `error` while the last loaded data is kept.
    """
    flt = MovementFilter(
        search=search,
        type=type,
        date_start=_parse_date_param("date_start", date_start),
        date_end=_parse_date_param("date_end", date_end),
        min_amount=min_amount,
        max_amount=max_amount,
    )

    await view.load()

    return DashboardResponse(
        account_id=view.account_id,
        balance=view.balance,
        movements=[MovementSchema.from_domain(m) for m in apply_filters(view.movements, flt)],
        total_count=len(view.movements),
        stats=StatsSchema.from_domain(view.stats) if view.stats else None,
        system_status=log_store.status.value,
        error=view.last_error,
    )
