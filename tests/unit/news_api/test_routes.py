"""Tests for the news_api routes."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from article_store.models import UserRole, UserToken
from common.hashing import hash_token
from news_api.dependencies import get_db_session, parse_bearer
from news_api.main import app
from publish_articles.models import PublishResult, RunMode
from resolve_images.resolve_image import ImageResult
from rewrite_articles.models import ArticleDraft, RewriteOutcome, RewriteStatus, TranslationOutcome

SERVICE_HEADERS = {"Authorization": "Bearer service-key"}
GENERATE_BODY = {"categoryIds": ["cat-1"], "categoryNames": ["World"], "count": 2, "language": "en"}


@pytest.fixture
def client(session, pipeline_config):
    def override_session():
        yield session

    app.dependency_overrides[get_db_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestParseBearer:
    def test_strips_scheme(self) -> None:
        assert parse_bearer("Bearer abc") == "abc"
        assert parse_bearer("bearer  abc ") == "abc"

    def test_empty(self) -> None:
        assert parse_bearer(None) is None
        assert parse_bearer("Bearer ") is None


class TestHealth:
    def test_health(self, client) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestAutoGenerateNews:
    def test_missing_credentials_401(self, client) -> None:
        response = client.post("/auto-generate-news", json=GENERATE_BODY)
        assert response.status_code == 401
        assert "error" in response.json()

    def test_user_without_role_403(self, client, session) -> None:
        session.add(UserToken(token_hash=hash_token("reader"), user_id="reader-1"))
        session.add(UserRole(user_id="reader-1", role="viewer"))
        session.commit()

        response = client.post(
            "/auto-generate-news", json=GENERATE_BODY, headers={"Authorization": "Bearer reader"}
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden: Editor or Admin role required"}

    def test_success_response_shape(self, client) -> None:
        result = PublishResult(
            success=True,
            message="Generated 1 article(s)",
            mode=RunMode.PASSTHROUGH,
            articles=[{"id": "a1", "slug": "story-1"}],
        )
        with patch("news_api.routers.generate.publish_articles", return_value=result) as mock_publish:
            response = client.post("/auto-generate-news", json={**GENERATE_BODY, "rssOnly": True}, headers=SERVICE_HEADERS)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Generated 1 article(s)",
            "articles": [{"id": "a1", "slug": "story-1"}],
            "mode": "rss-only",
        }
        request = mock_publish.call_args.args[0]
        assert request.rss_only is True
        assert request.category_names == ["World"]

    def test_cron_secret_header_passed(self, client) -> None:
        result = PublishResult(success=False, message="No news found for this category", mode=RunMode.AI)
        with patch("news_api.routers.generate.publish_articles", return_value=result) as mock_publish:
            response = client.post("/auto-generate-news", json=GENERATE_BODY, headers={"x-cron-secret": "cron-123"})

        assert response.status_code == 200
        assert response.json()["success"] is False
        credentials = mock_publish.call_args.args[1]
        assert credentials.cron_secret == "cron-123"
        assert credentials.bearer_token is None

    def test_end_to_end_passthrough(self, client, make_item) -> None:
        with patch("publish_articles.publish_articles.fetch_news", return_value=[make_item()]):
            response = client.post(
                "/auto-generate-news", json={**GENERATE_BODY, "rssOnly": True}, headers=SERVICE_HEADERS
            )

        body = response.json()
        assert response.status_code == 200
        assert body["message"] == "Generated 1 article(s)"
        article = body["articles"][0]
        assert article["is_breaking"] is True
        assert article["featured_image"].startswith("https://")
        assert article["category_id"] == "cat-1"

    def test_invalid_count_400(self, client) -> None:
        response = client.post("/auto-generate-news", json={**GENERATE_BODY, "count": 0}, headers=SERVICE_HEADERS)
        assert response.status_code == 400
        assert "count" in response.json()["error"]

    def test_unexpected_failure_500(self, client) -> None:
        with patch("news_api.routers.generate.publish_articles", side_effect=RuntimeError("db down")):
            response = client.post("/auto-generate-news", json=GENERATE_BODY, headers=SERVICE_HEADERS)
        assert response.status_code == 500
        assert response.json() == {"error": "db down"}


class TestFetchNews:
    def test_returns_items(self, client, make_item) -> None:
        item = make_item(published_at=datetime(2026, 7, 1, 8, 0, tzinfo=timezone.utc))
        with patch("news_api.routers.feeds.fetch_news", return_value=[item]) as mock_fetch:
            response = client.post("/fetch-news", json={"category": "world", "limit": 3, "focusRegional": False})

        assert response.status_code == 200
        news = response.json()["news"]
        assert news[0]["title"] == item.title
        assert news[0]["pubDate"].startswith("2026-07-01T08:00:00")
        assert mock_fetch.call_args.kwargs["focus_regional"] is False
        assert mock_fetch.call_args.kwargs["limit"] == 3


class TestRewriteArticle:
    BODY = {"title": "T", "description": "D", "source": "BBC", "language": "en", "optimizeSEO": True}

    def test_requires_editor_or_service(self, client) -> None:
        response = client.post("/rewrite-article", json=self.BODY, headers={"x-cron-secret": "cron-123"})
        assert response.status_code == 401

    def test_success(self, client) -> None:
        draft = ArticleDraft(
            title="New",
            content="<p>Body</p>",
            excerpt="Ex",
            image_prompt="Prompt",
            keywords=("a", "b"),
        )
        with patch("news_api.routers.rewrite.rewrite_text", return_value=RewriteOutcome.ok(draft)):
            response = client.post("/rewrite-article", json=self.BODY, headers=SERVICE_HEADERS)

        assert response.status_code == 200
        assert response.json() == {
            "title": "New",
            "content": "<p>Body</p>",
            "excerpt": "Ex",
            "imagePrompt": "Prompt",
            "seoKeywords": ["a", "b"],
        }

    @pytest.mark.parametrize(
        "status, expected",
        [
            (RewriteStatus.QUOTA_EXHAUSTED, 402),
            (RewriteStatus.RATE_LIMITED, 429),
            (RewriteStatus.FAILED, 500),
        ],
    )
    def test_error_statuses(self, client, status: RewriteStatus, expected: int) -> None:
        outcome = RewriteOutcome(status=status, error="upstream said no")
        with patch("news_api.routers.rewrite.rewrite_text", return_value=outcome):
            response = client.post("/rewrite-article", json=self.BODY, headers=SERVICE_HEADERS)
        assert response.status_code == expected
        assert "error" in response.json()


class TestGenerateNewsImage:
    def test_image_url(self, client) -> None:
        with patch(
            "news_api.routers.images.resolve_image",
            return_value=ImageResult("https://cdn.example.com/x.png"),
        ):
            response = client.post("/generate-news-image", json={"prompt": "p", "articleSlug": "s"})
        assert response.status_code == 200
        assert response.json() == {"imageUrl": "https://cdn.example.com/x.png", "placeholder": False}

    @pytest.mark.parametrize("status_code", [402, 429])
    def test_quota_surfaced(self, client, status_code: int) -> None:
        result = ImageResult("https://images.unsplash.com/x", placeholder=True, upstream_status=status_code)
        with patch("news_api.routers.images.resolve_image", return_value=result):
            response = client.post("/generate-news-image", json={"prompt": "p", "articleSlug": "s"})
        assert response.status_code == status_code
        assert "error" in response.json()

    def test_placeholder_on_other_failure(self, client) -> None:
        result = ImageResult("https://images.unsplash.com/x", placeholder=True)
        with patch("news_api.routers.images.resolve_image", return_value=result):
            response = client.post("/generate-news-image", json={"prompt": "p", "articleSlug": "s"})
        assert response.status_code == 200
        assert response.json()["placeholder"] is True


class TestTranslateArticle:
    def test_missing_fields_400(self, client) -> None:
        response = client.post("/translate-article", json={"title": "T"})
        assert response.status_code == 400
        assert "targetLanguage" in response.json()["error"]

    def test_success(self, client) -> None:
        outcome = TranslationOutcome(status=RewriteStatus.OK, title="Titre", content="<p>Corps</p>", language="fr")
        with patch("news_api.routers.translate.translate_article", return_value=outcome):
            response = client.post(
                "/translate-article", json={"title": "Title", "content": "<p>Body</p>", "targetLanguage": "fr"}
            )
        assert response.status_code == 200
        assert response.json() == {"translatedTitle": "Titre", "translatedContent": "<p>Corps</p>", "language": "fr"}

    def test_rate_limited(self, client) -> None:
        outcome = TranslationOutcome(status=RewriteStatus.RATE_LIMITED, error="slow down", upstream_status=429)
        with patch("news_api.routers.translate.translate_article", return_value=outcome):
            response = client.post(
                "/translate-article", json={"title": "Title", "content": "<p>Body</p>", "targetLanguage": "fr"}
            )
        assert response.status_code == 429
