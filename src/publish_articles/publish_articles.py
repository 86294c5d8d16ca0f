"""Fetch, rewrite, illustrate and publish breaking articles."""

from __future__ import annotations

import logging
import math
import time
from typing import Any

from sqlalchemy.orm import Session

from article_store.repository import PersistenceError, insert_article
from common.config import PipelineConfig, get_config
from common.datetime import utc_now
from common.text import word_count
from fetch_news.fetch_news import fetch_news
from fetch_news.models import RawNewsItem
from publish_articles.aging import demote_stale_breaking
from publish_articles.authorize import authorize
from publish_articles.models import (
    AuthContext,
    Credentials,
    PublishRequest,
    PublishResult,
    RunMode,
)
from publish_articles.slugs import SlugGenerator
from resolve_images.placeholders import placeholder_image
from resolve_images.resolve_image import is_usable_image_url, resolve_image
from rewrite_articles.fallback import build_fallback_draft
from rewrite_articles.models import ArticleDraft
from rewrite_articles.rewrite_article import rewrite_article

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
NO_NEWS_MESSAGE = "No news found for this category"


def publish_articles(
    request: PublishRequest,
    credentials: Credentials,
    session: Session,
    config: PipelineConfig | None = None,
    slugs: SlugGenerator | None = None,
) -> PublishResult:
    """Run one publication pass.

    Authorization failures raise before anything is touched. After that,
    every per-item failure is logged and skipped; only the aggregate is
    returned.

    Raises:
        AuthorizationError: If the credentials match no tier.
    """
    config = config or get_config()
    auth = authorize(credentials, session, config.auth)

    demoted = demote_stale_breaking(session, config.publish.breaking_window_minutes)

    mode = RunMode.PASSTHROUGH if request.rss_only else RunMode.AI
    count = max(1, min(request.count, config.publish.max_count))
    topic = request.primary_category_name

    logger.info("Publishing up to %d article(s) for %s (mode=%s)", count, topic, mode.value)

    items = fetch_news(topic, focus_regional=True, limit=count, config=config.feeds)
    if not items:
        logger.warning("No news found for %s", topic)
        return PublishResult(success=False, message=NO_NEWS_MESSAGE, mode=mode, demoted=demoted)

    slugs = slugs or SlugGenerator()
    created: list[dict[str, Any]] = []

    for index, item in enumerate(items):
        if index and config.publish.item_delay_seconds > 0:
            time.sleep(config.publish.item_delay_seconds)

        try:
            draft, mode = build_draft(item, request, mode, config)
            if draft is None:
                continue

            slug = slugs.make(draft.title)
            image_url = resolve_featured_image(draft, item, slug, mode, config)
            article = insert_article(session, **article_fields(draft, slug, image_url, request, auth))
        except PersistenceError as e:
            logger.error("Skipping %s: %s", item.title, e)
            continue
        except Exception as e:
            logger.error("Error processing news item %s: %s", item.title, e)
            continue

        logger.info("Article created: %s (%s)", article.id, article.slug)
        created.append(article.to_dict())

    logger.info("Generated %d article(s) from %d item(s), final mode %s", len(created), len(items), mode.value)
    return PublishResult(
        success=True,
        message=f"Generated {len(created)} article(s)",
        mode=mode,
        articles=created,
        demoted=demoted,
    )


def build_draft(
    item: RawNewsItem,
    request: PublishRequest,
    mode: RunMode,
    config: PipelineConfig,
) -> tuple[ArticleDraft | None, RunMode]:
    """Produce a draft for one item and return the (possibly latched) mode.

    In passthrough mode no AI call is made. A quota or rate-limit signal
    switches the run to passthrough for good and rebuilds this item via the
    fallback; any other rewrite failure skips the item.
    """
    if mode is RunMode.PASSTHROUGH:
        return _fallback(item, request, config), mode

    outcome = rewrite_article(item, language=request.language, optimize_seo=True, config=config.ai)
    if outcome.draft is not None:
        return outcome.draft, mode

    if outcome.is_quota_signal:
        logger.warning(
            "AI rewrite unavailable (%s); switching to %s mode for the rest of the run",
            outcome.status.value,
            RunMode.PASSTHROUGH.value,
        )
        return _fallback(item, request, config), RunMode.PASSTHROUGH

    logger.error("Rewrite failed for %s: %s", item.title, outcome.error)
    return None, mode


def _fallback(item: RawNewsItem, request: PublishRequest, config: PipelineConfig) -> ArticleDraft:
    return build_fallback_draft(
        item,
        category_names=request.category_names,
        excerpt_max_chars=config.publish.excerpt_max_chars,
    )


def resolve_featured_image(
    draft: ArticleDraft,
    item: RawNewsItem,
    slug: str,
    mode: RunMode,
    config: PipelineConfig,
) -> str:
    """AI image in AI mode, placeholder in passthrough; never a data URI."""
    if mode is RunMode.PASSTHROUGH:
        return placeholder_image(draft.title, item.category)

    result = resolve_image(
        draft.image_prompt or draft.title,
        slug,
        title=draft.title,
        category=item.category,
        ai_config=config.ai,
        images_config=config.images,
    )
    if not is_usable_image_url(result.image_url):
        return placeholder_image(draft.title, item.category)
    return result.image_url


def merge_tags(category_names: list[str], keywords: tuple[str, ...]) -> list[str]:
    """Ordered, case-insensitive union of category names and keywords."""
    tags: list[str] = []
    seen: set[str] = set()
    for tag in [*category_names, *keywords]:
        tag = (tag or "").strip()
        if tag and tag.lower() not in seen:
            tags.append(tag)
            seen.add(tag.lower())
    return tags


def read_time_minutes(content: str) -> int:
    return max(1, math.ceil(word_count(content) / WORDS_PER_MINUTE))


def article_fields(
    draft: ArticleDraft,
    slug: str,
    image_url: str,
    request: PublishRequest,
    auth: AuthContext,
) -> dict[str, Any]:
    return {
        "title": draft.title,
        "slug": slug,
        "content": draft.content,
        "excerpt": draft.excerpt,
        "featured_image": image_url,
        "category_id": request.primary_category_id,
        "author_id": auth.user_id,
        "status": "published",
        "is_breaking": True,
        "is_featured": False,
        "read_time": read_time_minutes(draft.content),
        "tags": merge_tags(request.category_names, draft.keywords),
        "published_at": utc_now(),
    }
