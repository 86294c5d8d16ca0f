"""Database engine and session management."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from article_store.models import Base

load_dotenv()

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


def database_url(url: str) -> str:
    """Route bare postgres URLs through the psycopg 3 driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def get_engine() -> Engine:
    """Create (once) an engine from DATABASE_URL."""
    global _engine
    if _engine is None:
        _engine = create_engine(database_url(os.environ["DATABASE_URL"]), pool_pre_ping=True)
    return _engine


def set_engine(engine: Engine | None) -> None:
    """Replace the global engine (useful for testing)."""
    global _engine, _session_factory
    _engine = engine
    _session_factory = None


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield a session; callers commit, the session is always closed."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    session = _session_factory()
    try:
        yield session
    finally:
        session.close()


def create_tables(engine: Engine | None = None) -> None:
    Base.metadata.create_all(engine or get_engine())
