"""OpenAI-compatible client for the AI gateway.

The gateway speaks the OpenAI chat completions protocol, so the OpenAI SDK is
pointed at its base URL. Automatic retries are disabled: a 402 or 429 has to
reach the caller on the first response so the pipeline can switch to its
fallback path instead of waiting out retries.
"""

from __future__ import annotations

from openai import OpenAI

from common.config import AIConfig


class MissingAPIKeyError(RuntimeError):
    pass


def create_gateway_client(config: AIConfig, timeout: float | None = None) -> OpenAI:
    """Create an OpenAI client for the gateway.

    Raises:
        MissingAPIKeyError: If the API key env var is not set.
    """
    api_key = config.api_key
    if not api_key:
        raise MissingAPIKeyError(f"{config.api_key_env} is not configured")

    kwargs = {"api_key": api_key, "base_url": config.base_url, "max_retries": 0}
    if timeout is not None:
        kwargs["timeout"] = timeout
    return OpenAI(**kwargs)
