"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from bank_dashboard.infrastructure.clients.bank import BankClient
from bank_dashboard.infrastructure.storage.log_store import LogStore
from bank_dashboard.services.dashboard import DashboardView


def get_bank_client(request: Request) -> BankClient:
    """Provide the application's Bank API client"""
    return request.app.state.bank_client


def get_log_store(request: Request) -> LogStore:
    """Provide the process-wide monitoring log store"""
    return request.app.state.log_store


def get_dashboard_view(request: Request) -> DashboardView:
    """Provide the dashboard state for the configured account"""
    return request.app.state.dashboard_view
