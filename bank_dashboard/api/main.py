"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.orm import sessionmaker
from starlette.responses import Response

from bank_dashboard.api import proxy
from bank_dashboard.api.middleware import RequestIDMiddleware, MetricsMiddleware
from bank_dashboard.api.v1 import dashboard, monitoring
from bank_dashboard.infrastructure.clients.bank import BankClient
from bank_dashboard.infrastructure.clients.monitored import MonitoredFetcher
from bank_dashboard.infrastructure.database.session import build_engine, build_session_factory
from bank_dashboard.infrastructure.observability.logging import setup_logging
from bank_dashboard.infrastructure.storage.log_store import LogStore
from bank_dashboard.services.dashboard import DashboardView
from bank_dashboard.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app(
    session_factory: sessionmaker | None = None,
    bank_client: BankClient | None = None,
) -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Bank Dashboard Gateway",
        description="Account analytics and self-monitoring over a third-party bank API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Process-wide monitoring state, seeded from durable storage
    if session_factory is None:
        session_factory = build_session_factory(build_engine(settings.database_url))
    log_store = LogStore(
        session_factory,
        key=settings.log_store_key,
        capacity=settings.log_store_capacity,
    )
    log_store.load_initial()

    bank_client = bank_client or BankClient()
    app.state.log_store = log_store
    app.state.bank_client = bank_client
    app.state.dashboard_view = DashboardView(
        MonitoredFetcher(bank_client.relay, log_store),
        account_id=settings.account_id,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(proxy.router, prefix="/api", tags=["proxy"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(monitoring.router, prefix="/v1", tags=["monitoring"])

    return app


app = create_app()
