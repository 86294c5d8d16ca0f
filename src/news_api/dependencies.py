"""Shared FastAPI dependencies."""

from typing import Annotated, Iterator, Optional

from fastapi import Header
from sqlalchemy.orm import Session

from article_store.connection import get_session
from common.config import PipelineConfig, get_config
from publish_articles.models import Credentials

BEARER_PREFIX = "bearer "


def get_db_session() -> Iterator[Session]:
    """Dependency yielding one store session per request."""
    with get_session() as session:
        yield session


def get_pipeline_config() -> PipelineConfig:
    return get_config()


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    value = authorization.strip()
    if value.lower().startswith(BEARER_PREFIX):
        value = value[len(BEARER_PREFIX):].strip()
    return value or None


def get_credentials(
    authorization: Annotated[Optional[str], Header()] = None,
    x_cron_secret: Annotated[Optional[str], Header()] = None,
) -> Credentials:
    """Read the bearer token and cron secret headers, whichever are present."""
    return Credentials(
        bearer_token=parse_bearer(authorization),
        cron_secret=(x_cron_secret or "").strip() or None,
    )
