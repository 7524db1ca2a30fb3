"""Database engine and session factory for the local state store"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from bank_dashboard.infrastructure.database.models import Base


def build_engine(database_url: str) -> Engine:
    """Create the engine; SQLite connections are shared between the event loop and the threadpool"""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create tables if needed and return a session factory bound to the engine"""
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
