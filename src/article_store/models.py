"""SQLAlchemy models for the article store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _uuid() -> str:
    return uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(100), unique=True, nullable=False)


class Article(Base):
    __tablename__ = "articles"
    __table_args__ = (
        Index("ix_articles_breaking_published", "is_breaking", "published_at"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(Text, nullable=False)
    slug = Column(String(160), unique=True, nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    featured_image = Column(Text, nullable=True)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True)
    author_id = Column(String(36), nullable=True)
    status = Column(String(20), nullable=False, default="draft")
    is_breaking = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    read_time = Column(Integer, nullable=False, default=1)
    tags = Column(JSON, nullable=False, default=list)
    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "content": self.content,
            "excerpt": self.excerpt,
            "featured_image": self.featured_image,
            "category_id": self.category_id,
            "author_id": self.author_id,
            "status": self.status,
            "is_breaking": self.is_breaking,
            "is_featured": self.is_featured,
            "read_time": self.read_time,
            "tags": list(self.tags or []),
            "published_at": self.published_at.isoformat() if self.published_at else None,
        }


class UserToken(Base):
    """Bearer token hashes issued by the auth service, mapped to users."""
    __tablename__ = "user_tokens"

    token_hash = Column(String(64), primary_key=True)
    user_id = Column(String(36), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id = Column(String(36), primary_key=True)
    role = Column(String(20), primary_key=True)


class AppSecret(Base):
    """Operational secrets, e.g. the scheduler's cron secret."""
    __tablename__ = "app_secrets"

    name = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
