"""Caller authorization as an ordered chain of checks.

Each check answers yes (an ``AuthContext``) or no (``None``); the first yes
wins. Order matters: the cron secret is checked before the service
credential, which is checked before any user lookup.
"""

from __future__ import annotations

import hmac
import logging
from typing import Callable, Optional, Sequence

from sqlalchemy.orm import Session

from article_store.repository import get_app_secret, get_user_roles, resolve_token_user
from common.config import AuthConfig
from publish_articles.errors import AuthorizationError
from publish_articles.models import AuthContext, AuthTier, Credentials

logger = logging.getLogger(__name__)

ALLOWED_ROLES = ("admin", "editor")

AuthCheck = Callable[[Credentials, Session, AuthConfig], Optional[AuthContext]]


def _matches(presented: str | None, expected: str | None) -> bool:
    if not presented or not expected:
        return False
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


def check_cron_secret(credentials: Credentials, session: Session, config: AuthConfig) -> Optional[AuthContext]:
    """Scheduled, unattended invocation."""
    if not credentials.cron_secret:
        return None
    stored = get_app_secret(session, config.cron_secret_name)
    if _matches(credentials.cron_secret, stored):
        return AuthContext(tier=AuthTier.CRON)
    return None


def check_service_credential(credentials: Credentials, session: Session, config: AuthConfig) -> Optional[AuthContext]:
    """Internal call made with the system's own elevated credential."""
    if _matches(credentials.bearer_token, config.service_key):
        return AuthContext(tier=AuthTier.SERVICE)
    return None


def check_user_role(credentials: Credentials, session: Session, config: AuthConfig) -> Optional[AuthContext]:
    """Interactive call by a user holding an admin or editor role."""
    if not credentials.bearer_token:
        return None
    user_id = resolve_token_user(session, credentials.bearer_token)
    if user_id is None:
        return None
    roles = get_user_roles(session, user_id)
    for role in ALLOWED_ROLES:
        if role in roles:
            return AuthContext(tier=AuthTier.USER, user_id=user_id, role=role)
    return None


AUTH_CHAIN: tuple[AuthCheck, ...] = (check_cron_secret, check_service_credential, check_user_role)
EDITOR_CHAIN: tuple[AuthCheck, ...] = (check_service_credential, check_user_role)


def authorize(
    credentials: Credentials,
    session: Session,
    config: AuthConfig,
    checks: Sequence[AuthCheck] = AUTH_CHAIN,
) -> AuthContext:
    """Run the checks in order and return the first match.

    Raises:
        AuthorizationError: 401 when nothing valid was presented, 403 when the
            token belongs to a user without an allowed role.
    """
    for check in checks:
        context = check(credentials, session, config)
        if context is not None:
            logger.info("Authorized via %s%s", context.tier.value,
                        f" (user {context.user_id}, role {context.role})" if context.user_id else "")
            return context

    if not credentials.bearer_token and not credentials.cron_secret:
        logger.warning("Rejected request without credentials")
        raise AuthorizationError("Missing authorization", status_code=401)

    if credentials.bearer_token and resolve_token_user(session, credentials.bearer_token):
        logger.warning("Rejected user without editor or admin role")
        raise AuthorizationError("Forbidden: Editor or Admin role required", status_code=403)

    logger.warning("Rejected request with invalid credentials")
    raise AuthorizationError("Unauthorized", status_code=401)
