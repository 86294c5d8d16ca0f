"""Tests for publish_articles.authorize module."""

from datetime import datetime, timedelta, timezone

import pytest

from article_store.models import AppSecret, UserRole, UserToken
from common.config import AuthConfig
from common.hashing import hash_token
from publish_articles.authorize import EDITOR_CHAIN, authorize
from publish_articles.errors import AuthorizationError
from publish_articles.models import AuthTier, Credentials


@pytest.fixture
def auth_config(monkeypatch: pytest.MonkeyPatch) -> AuthConfig:
    monkeypatch.setenv("SERVICE_ROLE_KEY", "service-key")
    return AuthConfig()


@pytest.fixture
def seeded(session):
    session.add(AppSecret(name="cron_secret", value="cron-123"))
    session.add(UserToken(token_hash=hash_token("admin-token"), user_id="admin-1"))
    session.add(UserToken(token_hash=hash_token("editor-token"), user_id="editor-1"))
    session.add(UserToken(token_hash=hash_token("reader-token"), user_id="reader-1"))
    session.add(UserToken(
        token_hash=hash_token("expired-token"),
        user_id="editor-2",
        expires_at=datetime.now(timezone.utc) - timedelta(hours=1),
    ))
    session.add_all([
        UserRole(user_id="admin-1", role="admin"),
        UserRole(user_id="admin-1", role="editor"),
        UserRole(user_id="editor-1", role="editor"),
        UserRole(user_id="editor-2", role="editor"),
        UserRole(user_id="reader-1", role="viewer"),
    ])
    session.commit()
    return session


class TestAuthorize:
    def test_cron_secret(self, seeded, auth_config) -> None:
        context = authorize(Credentials(cron_secret="cron-123"), seeded, auth_config)
        assert context.tier is AuthTier.CRON
        assert context.user_id is None

    def test_service_credential(self, seeded, auth_config) -> None:
        context = authorize(Credentials(bearer_token="service-key"), seeded, auth_config)
        assert context.tier is AuthTier.SERVICE
        assert context.user_id is None

    def test_editor_user(self, seeded, auth_config) -> None:
        context = authorize(Credentials(bearer_token="editor-token"), seeded, auth_config)
        assert context.tier is AuthTier.USER
        assert context.user_id == "editor-1"
        assert context.role == "editor"

    def test_admin_role_preferred(self, seeded, auth_config) -> None:
        context = authorize(Credentials(bearer_token="admin-token"), seeded, auth_config)
        assert context.role == "admin"

    def test_cron_checked_before_bearer(self, seeded, auth_config) -> None:
        context = authorize(Credentials(bearer_token="editor-token", cron_secret="cron-123"), seeded, auth_config)
        assert context.tier is AuthTier.CRON

    def test_wrong_cron_secret_falls_through_to_bearer(self, seeded, auth_config) -> None:
        context = authorize(Credentials(bearer_token="editor-token", cron_secret="nope"), seeded, auth_config)
        assert context.tier is AuthTier.USER

    def test_no_credentials_is_401(self, seeded, auth_config) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            authorize(Credentials(), seeded, auth_config)
        assert exc_info.value.status_code == 401

    def test_unknown_token_is_401(self, seeded, auth_config) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            authorize(Credentials(bearer_token="made-up"), seeded, auth_config)
        assert exc_info.value.status_code == 401

    def test_expired_token_is_401(self, seeded, auth_config) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            authorize(Credentials(bearer_token="expired-token"), seeded, auth_config)
        assert exc_info.value.status_code == 401

    def test_user_without_role_is_403(self, seeded, auth_config) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            authorize(Credentials(bearer_token="reader-token"), seeded, auth_config)
        assert exc_info.value.status_code == 403

    def test_cron_secret_not_configured(self, session, auth_config) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            authorize(Credentials(cron_secret="anything"), session, auth_config)
        assert exc_info.value.status_code == 401

    def test_service_key_unset_rejects(self, seeded, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SERVICE_ROLE_KEY", raising=False)
        with pytest.raises(AuthorizationError):
            authorize(Credentials(bearer_token="service-key"), seeded, AuthConfig())

    def test_editor_chain_ignores_cron_secret(self, seeded, auth_config) -> None:
        with pytest.raises(AuthorizationError):
            authorize(Credentials(cron_secret="cron-123"), seeded, auth_config, checks=EDITOR_CHAIN)
