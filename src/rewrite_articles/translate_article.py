"""Translate a published article with the AI gateway."""

from __future__ import annotations

import logging

import openai
from openai import OpenAI

from common.config import AIConfig, get_config
from rewrite_articles.client import MissingAPIKeyError, create_gateway_client
from rewrite_articles.instructions import LANGUAGE_NAMES, TRANSLATE_INSTRUCTIONS
from rewrite_articles.json_extract import extract_json_object
from rewrite_articles.models import RewriteStatus, TranslationOutcome
from rewrite_articles.rewrite_article import status_for_upstream
from rewrite_articles.sanitize import sanitize_html

logger = logging.getLogger(__name__)


def translate_article(
    title: str,
    content: str,
    target_language: str,
    config: AIConfig | None = None,
    client: OpenAI | None = None,
) -> TranslationOutcome:
    """Translate title and HTML content, keeping tags intact.

    A field the model leaves out falls back to the original text.
    """
    config = config or get_config().ai
    language_name = LANGUAGE_NAMES.get(target_language, target_language)

    if client is None:
        try:
            client = create_gateway_client(config)
        except MissingAPIKeyError as e:
            logger.error("Cannot translate article: %s", e)
            return TranslationOutcome(status=RewriteStatus.FAILED, error=str(e))

    logger.info("Translating article to %s", language_name)

    try:
        response = client.chat.completions.create(
            model=config.text_model,
            messages=[
                {"role": "system", "content": TRANSLATE_INSTRUCTIONS.format(language_name=language_name)},
                {"role": "user", "content": f"Title: {title}\n\nContent:\n{content}"},
            ],
        )
    except openai.APIStatusError as e:
        logger.error("AI gateway error %s while translating: %s", e.status_code, e)
        return TranslationOutcome(
            status=status_for_upstream(e.status_code),
            error=str(e),
            upstream_status=e.status_code,
        )
    except openai.APIError as e:
        logger.error("AI gateway request failed while translating: %s", e)
        return TranslationOutcome(status=RewriteStatus.FAILED, error=str(e))

    raw = response.choices[0].message.content if response.choices else None
    try:
        payload = extract_json_object(raw)
    except ValueError as e:
        logger.error("Failed to parse translation response: %s", e)
        return TranslationOutcome(status=RewriteStatus.FAILED, error="Failed to parse translation response")

    translated_title = payload.get("translatedTitle")
    translated_content = payload.get("translatedContent")

    logger.info("Translation to %s completed", language_name)
    return TranslationOutcome(
        status=RewriteStatus.OK,
        title=translated_title if isinstance(translated_title, str) and translated_title else title,
        content=sanitize_html(translated_content) if isinstance(translated_content, str) and translated_content else content,
        language=target_language,
    )
