"""Fetch and rank news items for a topic from RSS feeds."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

import requests

from common.config import FeedsConfig, get_config
from common.datetime import as_utc, parse_feed_date, utc_now
from common.text import clean_text, unwrap_cdata
from fetch_news.models import FeedEntry, RawNewsItem
from fetch_news.parsers import FeedParser, get_parser
from fetch_news.sources import (
    feeds_for_topic,
    is_preferred_feed,
    resolve_topic,
    source_name_for,
)

logger = logging.getLogger(__name__)


def fetch_news(
    topic: str,
    focus_regional: bool = True,
    limit: int = 5,
    config: FeedsConfig | None = None,
) -> list[RawNewsItem]:
    """Fetch news for a topic, ranked preferred-first then newest-first.

    A failing feed contributes nothing; if every feed fails the result is empty.
    """
    config = config or get_config().feeds
    parser = get_parser(config.parser)
    category = resolve_topic(topic)
    feeds = feeds_for_topic(topic, focus_regional)
    fetched_at = utc_now()

    logger.info("Fetching news for topic %s from %d feeds", category, len(feeds))

    items: list[RawNewsItem] = []
    for feed_url in feeds:
        items.extend(fetch_feed(feed_url, category, parser, config, fetched_at))

    ranked = rank_items(items)[: max(limit, 0)]
    logger.info("Found %d news items (%d before ranking cut)", len(ranked), len(items))
    return ranked


def fetch_feed(
    feed_url: str,
    category: str,
    parser: FeedParser,
    config: FeedsConfig,
    fetched_at: datetime,
) -> list[RawNewsItem]:
    """Fetch a single feed and return its capped, cleaned items."""
    try:
        response = requests.get(
            feed_url,
            timeout=config.request_timeout,
            headers={"User-Agent": config.user_agent},
        )
    except requests.RequestException as e:
        logger.error("Failed to fetch %s: %s", feed_url, e)
        return []

    if not response.ok:
        logger.error("Failed to fetch %s: %s", feed_url, response.status_code)
        return []

    try:
        entries = parser.parse(response.content)
    except Exception as e:
        logger.error("Failed to parse %s: %s", feed_url, e)
        return []

    preferred = is_preferred_feed(feed_url)
    cap = config.preferred_item_cap if preferred else config.item_cap
    source = source_name_for(feed_url)

    items = []
    for entry in entries:
        if len(items) >= cap:
            break
        item = build_item(entry, source, category, preferred, config, fetched_at)
        if item is not None:
            items.append(item)

    logger.info("Took %d items from %s (%s)", len(items), source, feed_url)
    return items


def build_item(
    entry: FeedEntry,
    source: str,
    category: str,
    preferred: bool,
    config: FeedsConfig,
    fetched_at: datetime,
) -> RawNewsItem | None:
    """Clean a parsed entry; entries without title or description are dropped."""
    title = clean_text(entry.title)
    description = clean_text(entry.description, max_chars=config.description_max_chars)
    if not title or not description:
        return None

    link = unwrap_cdata(entry.link or "").strip()
    published_at = parse_feed_date(entry.published) or fetched_at

    return RawNewsItem(
        title=title,
        description=description,
        link=link,
        published_at=as_utc(published_at),
        source=source,
        category=category,
        is_preferred=preferred,
    )


def rank_items(items: Iterable[RawNewsItem]) -> list[RawNewsItem]:
    """Preferred sources first; within a tier, newest first."""
    return sorted(
        items,
        key=lambda item: (not item.is_preferred, -item.published_at.timestamp()),
    )
