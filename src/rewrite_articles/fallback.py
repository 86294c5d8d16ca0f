"""Deterministic draft construction straight from feed text (no network)."""

from __future__ import annotations

import html
import re
from typing import Iterable

from common.text import clean_text, truncate_words
from fetch_news.models import RawNewsItem
from rewrite_articles.models import ArticleDraft, DraftOrigin

EXCERPT_MAX_CHARS = 200
MAX_TITLE_KEYWORDS = 5
MIN_KEYWORD_LENGTH = 5

STOP_WORDS = frozenset({
    "about", "after", "again", "against", "among", "before", "being", "below",
    "between", "could", "during", "their", "there", "these", "thing", "those",
    "through", "under", "until", "where", "which", "while", "would", "years",
    "today", "people", "report", "reports", "update", "latest",
})

_WORD_RE = re.compile(r"[^\W_]+(?:['’-][^\W_]+)*", re.UNICODE)


def build_fallback_draft(
    item: RawNewsItem,
    category_names: Iterable[str] = (),
    excerpt_max_chars: int = EXCERPT_MAX_CHARS,
) -> ArticleDraft:
    """Build a draft from the feed item alone.

    Pure: the same item and categories always give the same draft.
    """
    title = clean_text(item.title) or item.title.strip()
    description = clean_text(item.description) or ""

    excerpt = truncate_words(description, excerpt_max_chars) if description else title

    return ArticleDraft(
        title=title,
        content=_build_body(description, item.source, item.link),
        excerpt=excerpt,
        image_prompt=None,
        keywords=derive_keywords(title, category_names),
        origin=DraftOrigin.FALLBACK,
    )


def _build_body(description: str, source: str, link: str | None) -> str:
    source_name = html.escape(source or "News")
    parts = []
    if description:
        parts.append(f"<p>{html.escape(description, quote=False)}</p>")
    parts.append("<hr>")
    if link:
        href = html.escape(link, quote=True)
        parts.append(
            f'<p>Source: {source_name}. '
            f'<a href="{href}" rel="noopener nofollow" target="_blank">Read the original article</a></p>'
        )
    else:
        parts.append(f"<p>Source: {source_name}</p>")
    return "".join(parts)


def derive_keywords(title: str, category_names: Iterable[str] = ()) -> tuple[str, ...]:
    """Title words longer than four characters minus stop words, then categories."""
    keywords: list[str] = []
    seen: set[str] = set()

    for word in _WORD_RE.findall(title):
        lowered = word.lower()
        if len(lowered) < MIN_KEYWORD_LENGTH or lowered in STOP_WORDS or lowered in seen:
            continue
        keywords.append(lowered)
        seen.add(lowered)
        if len(keywords) >= MAX_TITLE_KEYWORDS:
            break

    for name in category_names:
        name = (name or "").strip()
        if name and name.lower() not in seen:
            keywords.append(name)
            seen.add(name.lower())

    return tuple(keywords)
