"""Queries the pipeline runs against the article store."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from article_store.models import AppSecret, Article, Category, UserRole, UserToken
from common.datetime import as_utc, utc_now
from common.hashing import hash_token

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """An article could not be written."""


def get_app_secret(session: Session, name: str) -> str | None:
    return session.execute(
        select(AppSecret.value).where(AppSecret.name == name)
    ).scalar_one_or_none()


def resolve_token_user(session: Session, token: str) -> str | None:
    """Return the user id a bearer token belongs to, if it exists and has not expired."""
    row = session.execute(
        select(UserToken.user_id, UserToken.expires_at).where(
            UserToken.token_hash == hash_token(token)
        )
    ).first()
    if row is None:
        return None
    if row.expires_at is not None and as_utc(row.expires_at) <= utc_now():
        return None
    return row.user_id


def get_user_roles(session: Session, user_id: str) -> set[str]:
    return set(
        session.execute(
            select(UserRole.role).where(UserRole.user_id == user_id)
        ).scalars()
    )


def demote_breaking_before(session: Session, cutoff: datetime) -> int:
    """Clear ``is_breaking`` on articles published before ``cutoff``."""
    result = session.execute(
        update(Article)
        .where(Article.is_breaking.is_(True), Article.published_at < cutoff)
        .values(is_breaking=False)
        .execution_options(synchronize_session=False)
    )
    session.commit()
    # Stored datetimes may come back naive; reload instead of evaluating in Python
    session.expire_all()
    return result.rowcount or 0


def insert_article(session: Session, **fields: Any) -> Article:
    """Insert and commit one article.

    Raises:
        PersistenceError: If the insert fails; the session is rolled back.
    """
    article = Article(**fields)
    try:
        session.add(article)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(f"Failed to insert article {fields.get('slug')}: {e}") from e
    return article


def _category_slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def get_or_create_category(session: Session, name: str) -> str:
    """Return the id of the category with this name, creating it if needed."""
    final_name = (name or "General").strip() or "General"
    final_name = final_name[0].upper() + final_name[1:]

    existing = session.execute(
        select(Category.id).where(Category.name == final_name)
    ).scalar_one_or_none()
    if existing:
        return existing

    category = Category(name=final_name, slug=_category_slug(final_name))
    session.add(category)
    session.commit()
    logger.info("Created category %s", final_name)
    return category.id
