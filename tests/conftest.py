"""Pytest fixtures for testing"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("ACCOUNT_ID", "999")

import httpx
import pytest
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from bank_dashboard.api.main import create_app
from bank_dashboard.domain.models import Movement, MovementType
from bank_dashboard.infrastructure.clients.bank import BankClient
from bank_dashboard.infrastructure.database.models import Base
from bank_dashboard.infrastructure.database.session import build_engine, build_session_factory
from bank_dashboard.infrastructure.storage.log_store import LogStore
from mock_upstream.bank_server.main import app as mock_bank_app

MOCK_BANK_URL = "http://mock-bank"
MOCK_BANK_KEY = "test-key"


@pytest.fixture
def session_factory(tmp_path: Path) -> Generator[sessionmaker, None, None]:
    """Fresh SQLite state database per test"""
    engine = build_engine(f"sqlite:///{tmp_path / 'state.db'}")
    factory = build_session_factory(engine)
    try:
        yield factory
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def log_store(session_factory: sessionmaker) -> LogStore:
    store = LogStore(session_factory)
    store.load_initial()
    return store


@pytest.fixture
def mock_bank_client() -> BankClient:
    """Bank client wired to the in-process mock bank server"""
    return BankClient(
        base_url=MOCK_BANK_URL,
        api_key=MOCK_BANK_KEY,
        transport=httpx.ASGITransport(app=mock_bank_app),
    )


@pytest.fixture
def client(session_factory: sessionmaker, mock_bank_client: BankClient) -> TestClient:
    """Create FastAPI test client with test database and mock upstream"""
    app = create_app(session_factory=session_factory, bank_client=mock_bank_client)
    return TestClient(app)


@pytest.fixture
def make_movement():
    """Factory for normalized movements dated 2024-01-<day>"""

    def _make(amount: float, day: int = 1, description: str = "Test") -> Movement:
        return Movement(
            id=f"m-{day}-{description}",
            date=datetime(2024, 1, day, tzinfo=timezone.utc),
            amount=amount,
            description=description,
            type=MovementType.CREDIT if amount >= 0 else MovementType.DEBIT,
        )

    return _make
