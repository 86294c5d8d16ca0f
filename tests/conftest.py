"""Shared fixtures: an in-memory article store and a test pipeline config."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from article_store.models import Base
from common.config import PipelineConfig, PublishConfig, reset_config, set_config
from fetch_news.models import RawNewsItem


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def session(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def pipeline_config(monkeypatch: pytest.MonkeyPatch) -> PipelineConfig:
    monkeypatch.setenv("SERVICE_ROLE_KEY", "service-key")
    monkeypatch.setenv("AI_GATEWAY_API_KEY", "gateway-key")
    config = PipelineConfig(publish=PublishConfig(item_delay_seconds=0))
    set_config(config)
    yield config
    reset_config()


@pytest.fixture
def make_item() -> Callable[..., RawNewsItem]:
    def _make(
        title: str = "Monsoon rains lash Mumbai",
        description: str = "Heavy rain flooded streets across the city on Monday.",
        link: str = "https://example.com/monsoon",
        published_at: datetime = datetime(2026, 7, 1, 8, 0, tzinfo=timezone.utc),
        source: str = "Times of India",
        category: str = "world",
        is_preferred: bool = True,
    ) -> RawNewsItem:
        return RawNewsItem(
            title=title,
            description=description,
            link=link,
            published_at=published_at,
            source=source,
            category=category,
            is_preferred=is_preferred,
        )

    return _make
