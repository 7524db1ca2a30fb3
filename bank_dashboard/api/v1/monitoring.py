"""Monitoring panel - recent call log and derived system status"""

from fastapi import APIRouter, Depends

from bank_dashboard.api.v1.schemas import MonitoringResponse
from bank_dashboard.api.dependencies import get_dashboard_view, get_log_store
from bank_dashboard.infrastructure.storage.log_store import LogStore
from bank_dashboard.services.dashboard import DashboardView

router = APIRouter()


def _panel(log_store: LogStore) -> MonitoringResponse:
    return MonitoringResponse.build(log_store.health, list(log_store.logs))


@router.get("/monitoring", response_model=MonitoringResponse)
def get_monitoring(log_store: LogStore = Depends(get_log_store)):
    """
    Retrieve the rolling call log (newest first) and system status.
    """
    return _panel(log_store)


@router.post("/monitoring/simulate-error", response_model=MonitoringResponse)
async def simulate_error(
    view: DashboardView = Depends(get_dashboard_view),
    log_store: LogStore = Depends(get_log_store),
):
    """Inject a synthetic 500 / 4500ms failure to exercise the status indicator"""
    view.simulate_error()
    return _panel(log_store)


@router.delete("/monitoring/logs", response_model=MonitoringResponse)
async def clear_logs(log_store: LogStore = Depends(get_log_store)):
    log_store.clear()
    return _panel(log_store)
