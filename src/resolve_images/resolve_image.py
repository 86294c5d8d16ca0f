"""Resolve a header image URL for an article.

The resolver never raises. Any upstream problem ends in a curated placeholder;
402/429 are additionally reported in ``ImageResult.upstream_status`` so a
direct caller can surface them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

import openai
from openai import OpenAI

from common.config import AIConfig, ImagesConfig, get_config
from rewrite_articles.client import MissingAPIKeyError, create_gateway_client
from rewrite_articles.instructions import IMAGE_INSTRUCTIONS
from resolve_images.placeholders import placeholder_image

logger = logging.getLogger(__name__)

QUOTA_STATUSES = (402, 429)

_IMAGE_URL_RE = re.compile(r"https?://[^\s\"'<>)]+\.(?:png|jpe?g|webp|gif)(?:\?[^\s\"'<>)]*)?", re.IGNORECASE)


@dataclass(frozen=True)
class ImageResult:
    image_url: str
    placeholder: bool = False
    upstream_status: Optional[int] = None

    @property
    def is_quota_signal(self) -> bool:
        return self.upstream_status in QUOTA_STATUSES


def is_usable_image_url(url: Any) -> bool:
    """Only externally hosted http(s) URLs; data/base64 URIs are never usable."""
    if not isinstance(url, str):
        return False
    candidate = url.strip().lower()
    if candidate.startswith("data:") or ";base64," in candidate:
        return False
    return candidate.startswith(("https://", "http://"))


def resolve_image(
    prompt: str,
    slug: str,
    title: str | None = None,
    category: str | None = None,
    ai_config: AIConfig | None = None,
    images_config: ImagesConfig | None = None,
    client: OpenAI | None = None,
) -> ImageResult:
    """Generate an image via the gateway, falling back to a placeholder."""
    if ai_config is None or images_config is None:
        config = get_config()
        ai_config = ai_config or config.ai
        images_config = images_config or config.images
    fallback_title = title or prompt

    if client is None:
        try:
            client = create_gateway_client(ai_config, timeout=images_config.timeout_seconds)
        except MissingAPIKeyError as e:
            logger.warning("Image generation unavailable for %s: %s", slug, e)
            return _placeholder(fallback_title, category)

    logger.info("Generating image for %s", slug)

    try:
        response = client.chat.completions.create(
            model=ai_config.image_model,
            messages=[{"role": "user", "content": IMAGE_INSTRUCTIONS.format(prompt=prompt)}],
            extra_body={"modalities": ["image", "text"]},
            timeout=images_config.timeout_seconds,
        )
    except openai.APITimeoutError:
        logger.warning("Image generation timed out for %s after %ss", slug, images_config.timeout_seconds)
        return _placeholder(fallback_title, category)
    except openai.APIStatusError as e:
        logger.warning("Image API error %s for %s: %s", e.status_code, slug, e)
        status = e.status_code if e.status_code in QUOTA_STATUSES else None
        return _placeholder(fallback_title, category, upstream_status=status)
    except openai.APIError as e:
        logger.warning("Image request failed for %s: %s", slug, e)
        return _placeholder(fallback_title, category)

    image_url = extract_image_url(_response_payload(response))
    if image_url is None:
        logger.info("No usable image in response for %s, using placeholder", slug)
        return _placeholder(fallback_title, category)

    logger.info("Image generated for %s", slug)
    return ImageResult(image_url=image_url)


def _placeholder(title: str, category: str | None, upstream_status: int | None = None) -> ImageResult:
    return ImageResult(
        image_url=placeholder_image(title, category),
        placeholder=True,
        upstream_status=upstream_status,
    )


def _response_payload(response: Any) -> dict:
    if isinstance(response, dict):
        return response
    # Gateway extras such as message.images are kept by model_dump
    return response.model_dump()


def extract_image_url(payload: dict) -> str | None:
    """Find the first usable image URL in a chat completion payload."""
    choices = payload.get("choices") or []
    if not choices:
        return None
    message = choices[0].get("message") or {}

    for image in message.get("images") or []:
        url = (image.get("image_url") or {}).get("url") if isinstance(image, dict) else None
        if is_usable_image_url(url):
            return url.strip()
        if url:
            logger.warning("Discarding inline image payload from image API")

    content = message.get("content")
    if isinstance(content, str):
        for match in _IMAGE_URL_RE.finditer(content):
            if is_usable_image_url(match.group(0)):
                return match.group(0)
    return None
