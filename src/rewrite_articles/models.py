"""Data models for the rewrite_articles stage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DraftOrigin(str, Enum):
    AI = "ai"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ArticleDraft:
    """Publishable article content, produced by the AI or the fallback path."""
    title: str
    content: str
    excerpt: str
    image_prompt: Optional[str] = None
    keywords: tuple[str, ...] = ()
    origin: DraftOrigin = DraftOrigin.AI


class RewriteStatus(str, Enum):
    OK = "ok"
    QUOTA_EXHAUSTED = "quota_exhausted"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"


@dataclass(frozen=True)
class RewriteOutcome:
    """Result of an AI rewrite: a draft, or the reason there is none."""
    status: RewriteStatus
    draft: Optional[ArticleDraft] = None
    error: Optional[str] = None
    upstream_status: Optional[int] = None

    @property
    def is_quota_signal(self) -> bool:
        return self.status in (RewriteStatus.QUOTA_EXHAUSTED, RewriteStatus.RATE_LIMITED)

    @classmethod
    def ok(cls, draft: ArticleDraft) -> "RewriteOutcome":
        return cls(status=RewriteStatus.OK, draft=draft)

    @classmethod
    def failed(cls, error: str, upstream_status: int | None = None) -> "RewriteOutcome":
        return cls(status=RewriteStatus.FAILED, error=error, upstream_status=upstream_status)


@dataclass(frozen=True)
class TranslationOutcome:
    status: RewriteStatus
    title: Optional[str] = None
    content: Optional[str] = None
    language: Optional[str] = None
    error: Optional[str] = None
    upstream_status: Optional[int] = None
