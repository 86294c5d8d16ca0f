"""Data models for the publish_articles stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class RunMode(str, Enum):
    AI = "ai"
    PASSTHROUGH = "rss-only"


class AuthTier(str, Enum):
    CRON = "cron"
    SERVICE = "service"
    USER = "user"


@dataclass(frozen=True)
class Credentials:
    """What the caller presented: a bearer token and/or a cron secret."""
    bearer_token: Optional[str] = None
    cron_secret: Optional[str] = None


@dataclass(frozen=True)
class AuthContext:
    tier: AuthTier
    user_id: Optional[str] = None
    role: Optional[str] = None


@dataclass
class PublishRequest:
    category_ids: list[str]
    category_names: list[str]
    count: int = 1
    language: str = "en"
    rss_only: bool = False

    @property
    def primary_category_id(self) -> Optional[str]:
        return self.category_ids[0] if self.category_ids else None

    @property
    def primary_category_name(self) -> str:
        return self.category_names[0] if self.category_names else ""


@dataclass
class PublishResult:
    success: bool
    message: str
    mode: RunMode
    articles: list[dict[str, Any]] = field(default_factory=list)
    demoted: int = 0

    @property
    def created(self) -> int:
        return len(self.articles)

    def to_response(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "articles": self.articles,
            "mode": self.mode.value,
        }
