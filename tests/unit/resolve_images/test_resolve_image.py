"""Tests for resolve_images.resolve_image module."""

from unittest.mock import Mock

import httpx
import openai
import pytest

from common.config import AIConfig, ImagesConfig
from resolve_images.placeholders import placeholder_image
from resolve_images.resolve_image import extract_image_url, is_usable_image_url, resolve_image

REQUEST = httpx.Request("POST", "https://gateway.test/v1/chat/completions")


def _payload(images=None, content: str = "") -> dict:
    return {"choices": [{"message": {"content": content, "images": images or []}}]}


def _client(payload: dict | None = None, error: Exception | None = None) -> Mock:
    client = Mock()
    if error is not None:
        client.chat.completions.create.side_effect = error
    else:
        client.chat.completions.create.return_value = payload
    return client


def _resolve(client: Mock):
    return resolve_image(
        "Flooded street",
        "monsoon-1",
        title="Monsoon rains",
        category="world",
        ai_config=AIConfig(),
        images_config=ImagesConfig(timeout_seconds=5),
        client=client,
    )


class TestIsUsableImageUrl:
    def test_accepts_https(self) -> None:
        assert is_usable_image_url("https://cdn.example.com/a.png")

    def test_rejects_data_uri(self) -> None:
        assert not is_usable_image_url("data:image/png;base64,iVBORw0KGgo=")
        assert not is_usable_image_url("DATA:image/png;base64,abc")

    def test_rejects_non_http(self) -> None:
        assert not is_usable_image_url("ftp://example.com/a.png")
        assert not is_usable_image_url(None)


class TestExtractImageUrl:
    def test_images_field(self) -> None:
        payload = _payload(images=[{"type": "image_url", "image_url": {"url": "https://cdn.example.com/x.png"}}])
        assert extract_image_url(payload) == "https://cdn.example.com/x.png"

    def test_skips_inline_data(self) -> None:
        payload = _payload(images=[{"image_url": {"url": "data:image/png;base64,AAAA"}}])
        assert extract_image_url(payload) is None

    def test_url_in_content(self) -> None:
        payload = _payload(content="Here it is: https://cdn.example.com/img.jpg?size=large")
        assert extract_image_url(payload) == "https://cdn.example.com/img.jpg?size=large"

    def test_empty_payload(self) -> None:
        assert extract_image_url({}) is None


class TestResolveImage:
    def test_generated_url(self) -> None:
        client = _client(_payload(images=[{"image_url": {"url": "https://cdn.example.com/x.png"}}]))
        result = _resolve(client)
        assert result.image_url == "https://cdn.example.com/x.png"
        assert not result.placeholder

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["extra_body"] == {"modalities": ["image", "text"]}
        assert kwargs["timeout"] == 5

    def test_data_uri_never_returned(self) -> None:
        client = _client(_payload(images=[{"image_url": {"url": "data:image/png;base64,AAAA"}}]))
        result = _resolve(client)
        assert result.placeholder
        assert result.image_url == placeholder_image("Monsoon rains", "world")

    def test_timeout_gives_placeholder(self) -> None:
        result = _resolve(_client(error=openai.APITimeoutError(request=REQUEST)))
        assert result.placeholder
        assert result.upstream_status is None
        assert result.image_url.startswith("https://")

    @pytest.mark.parametrize("status_code", [402, 429])
    def test_quota_signal_recorded(self, status_code: int) -> None:
        error = openai.APIStatusError("no", response=httpx.Response(status_code, request=REQUEST), body=None)
        result = _resolve(_client(error=error))
        assert result.placeholder
        assert result.upstream_status == status_code
        assert result.is_quota_signal

    def test_server_error_not_a_quota_signal(self) -> None:
        error = openai.APIStatusError("no", response=httpx.Response(500, request=REQUEST), body=None)
        result = _resolve(_client(error=error))
        assert result.placeholder
        assert not result.is_quota_signal

    def test_missing_api_key_gives_placeholder(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AI_GATEWAY_API_KEY", raising=False)
        result = resolve_image("p", "s", title="T", ai_config=AIConfig(), images_config=ImagesConfig())
        assert result.placeholder
        assert result.image_url == placeholder_image("T", None)
