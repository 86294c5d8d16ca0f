"""Rewrite a raw news item into a publishable draft with the AI gateway."""

from __future__ import annotations

import logging
from typing import Any

import openai
from openai import OpenAI

from common.config import AIConfig, get_config
from common.text import clean_text, truncate_words
from fetch_news.models import RawNewsItem
from rewrite_articles.client import MissingAPIKeyError, create_gateway_client
from rewrite_articles.instructions import build_rewrite_instructions
from rewrite_articles.json_extract import extract_json_object
from rewrite_articles.models import ArticleDraft, DraftOrigin, RewriteOutcome, RewriteStatus
from rewrite_articles.sanitize import sanitize_html

logger = logging.getLogger(__name__)

EXCERPT_MAX_CHARS = 160
MAX_KEYWORDS = 8


def status_for_upstream(status_code: int | None) -> RewriteStatus:
    """Map an upstream HTTP status to an outcome status."""
    if status_code == 402:
        return RewriteStatus.QUOTA_EXHAUSTED
    if status_code == 429:
        return RewriteStatus.RATE_LIMITED
    return RewriteStatus.FAILED


def rewrite_article(
    item: RawNewsItem,
    language: str = "en",
    optimize_seo: bool = True,
    config: AIConfig | None = None,
    client: OpenAI | None = None,
) -> RewriteOutcome:
    """Rewrite a RawNewsItem. See ``rewrite_text``."""
    return rewrite_text(
        title=item.title,
        description=item.description,
        source=item.source,
        language=language,
        optimize_seo=optimize_seo,
        config=config,
        client=client,
    )


def rewrite_text(
    title: str,
    description: str,
    source: str,
    language: str = "en",
    optimize_seo: bool = True,
    config: AIConfig | None = None,
    client: OpenAI | None = None,
) -> RewriteOutcome:
    """Ask the text model for a full rewrite and parse its JSON answer.

    Never raises for upstream problems: 402 and 429 come back as
    ``QUOTA_EXHAUSTED`` / ``RATE_LIMITED`` so callers can switch to the
    fallback path; everything else, including unparsable output, is ``FAILED``.
    """
    config = config or get_config().ai

    if client is None:
        try:
            client = create_gateway_client(config)
        except MissingAPIKeyError as e:
            logger.error("Cannot rewrite article: %s", e)
            return RewriteOutcome.failed(str(e))

    logger.info("Rewriting article: %s (language=%s, seo=%s)", title, language, optimize_seo)

    try:
        response = client.chat.completions.create(
            model=config.text_model,
            messages=[
                {"role": "system", "content": build_rewrite_instructions(language, optimize_seo)},
                {"role": "user", "content": _format_item_for_prompt(title, description, source)},
            ],
        )
    except openai.APIStatusError as e:
        status = status_for_upstream(e.status_code)
        logger.error("AI gateway error %s while rewriting %s: %s", e.status_code, title, e)
        return RewriteOutcome(status=status, error=str(e), upstream_status=e.status_code)
    except openai.APIError as e:
        logger.error("AI gateway request failed while rewriting %s: %s", title, e)
        return RewriteOutcome.failed(str(e))

    content = response.choices[0].message.content if response.choices else None

    try:
        payload = extract_json_object(content)
        draft = draft_from_payload(payload)
    except ValueError as e:
        logger.error("Failed to parse AI response for %s: %s", title, e)
        return RewriteOutcome.failed(f"Failed to parse AI response: {e}")

    logger.info("Article rewritten: %s", draft.title)
    return RewriteOutcome.ok(draft)


def _format_item_for_prompt(title: str, description: str, source: str) -> str:
    return "\n".join([
        "Rewrite this news item as an original article:",
        "",
        f"Original Title: {title}",
        f"Original Summary: {description}",
        f"Source: {source}",
    ])


def draft_from_payload(payload: dict[str, Any]) -> ArticleDraft:
    """Build an ArticleDraft from the model's JSON object.

    Raises:
        ValueError: If title or content is missing.
    """
    title = payload.get("title")
    content = payload.get("content")
    if not isinstance(title, str) or not title.strip():
        raise ValueError("Response is missing a title")
    if not isinstance(content, str) or not content.strip():
        raise ValueError("Response is missing content")

    body = sanitize_html(content)
    if not body:
        raise ValueError("Response content is empty after sanitization")

    excerpt = payload.get("excerpt")
    if not isinstance(excerpt, str) or not excerpt.strip():
        excerpt = truncate_words(clean_text(body) or "", EXCERPT_MAX_CHARS)

    image_prompt = payload.get("imagePrompt")
    if not isinstance(image_prompt, str) or not image_prompt.strip():
        image_prompt = None

    return ArticleDraft(
        title=clean_text(title) or title.strip(),
        content=body,
        excerpt=clean_text(excerpt) or "",
        image_prompt=image_prompt.strip() if image_prompt else None,
        keywords=_parse_keywords(payload.get("seoKeywords")),
        origin=DraftOrigin.AI,
    )


def _parse_keywords(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, str):
        raw = raw.split(",")
    if not isinstance(raw, list):
        return ()
    keywords = [k.strip() for k in raw if isinstance(k, str) and k.strip()]
    return tuple(keywords[:MAX_KEYWORDS])
