"""Feed parsers.

Both parsers return ``FeedEntry`` objects with raw (uncleaned) fields so the
fetcher applies the same cleaning rules regardless of which one is used.
"""

from __future__ import annotations

import logging
import re
from typing import Protocol

import feedparser

from fetch_news.models import FeedEntry

logger = logging.getLogger(__name__)


class FeedParser(Protocol):
    def parse(self, content: bytes | str) -> list[FeedEntry]:
        ...


class FeedparserFeedParser:
    """Standards-compliant RSS/Atom parsing via feedparser."""

    def parse(self, content: bytes | str) -> list[FeedEntry]:
        feed = feedparser.parse(content)
        if feed.get("bozo") and not feed.entries:
            logger.warning("Feed could not be parsed: %s", feed.get("bozo_exception"))
            return []

        entries = []
        for entry in feed.entries:
            entries.append(
                FeedEntry(
                    title=entry.get("title"),
                    description=entry.get("summary") or entry.get("description"),
                    link=entry.get("link"),
                    published=entry.get("published") or entry.get("updated"),
                )
            )
        return entries


_ITEM_RE = re.compile(r"<item[^>]*>[\s\S]*?</item>", re.IGNORECASE)


def _field_re(name: str) -> re.Pattern:
    return re.compile(
        rf"<{name}(?:\s[^>]*)?>(?:\s*<!\[CDATA\[)?(.*?)(?:\]\]>\s*)?</{name}>",
        re.DOTALL | re.IGNORECASE,
    )


_TITLE_RE = _field_re("title")
_DESCRIPTION_RE = _field_re("description")
_LINK_RE = _field_re("link")
_PUBDATE_RE = _field_re("pubDate")


class RegexFeedParser:
    """Tolerant field-level extraction from RSS ``<item>`` blocks.

    Each field is matched independently, so a malformed field only loses that
    field rather than the whole item.
    """

    def parse(self, content: bytes | str) -> list[FeedEntry]:
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")

        entries = []
        for block in _ITEM_RE.findall(content):
            entries.append(
                FeedEntry(
                    title=_match(_TITLE_RE, block),
                    description=_match(_DESCRIPTION_RE, block),
                    link=_match(_LINK_RE, block),
                    published=_match(_PUBDATE_RE, block),
                )
            )
        return entries


def _match(pattern: re.Pattern, block: str) -> str | None:
    match = pattern.search(block)
    if not match:
        return None
    return match.group(1).strip()


PARSERS = {
    "feedparser": FeedparserFeedParser,
    "regex": RegexFeedParser,
}


def get_parser(name: str) -> FeedParser:
    try:
        return PARSERS[name]()
    except KeyError:
        raise ValueError(f"Unknown feed parser: {name}. Valid parsers: {', '.join(sorted(PARSERS))}") from None
