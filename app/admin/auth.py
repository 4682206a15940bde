"""
Admin Gate

A single shared secret (ADMIN_ACCESS_TOKEN). The admin logs in once via
POST /api/admin/verify-token, which stores the secret in an httpOnly
cookie; admin-only endpoints compare that cookie against the secret.
"""

import hmac
import logging
from typing import Optional

from fastapi import Cookie, Depends, HTTPException

from app.config import Settings
from app.dependencies import get_settings

logger = logging.getLogger(__name__)

ADMIN_COOKIE_NAME = "admin_token"
ADMIN_COOKIE_MAX_AGE = 60 * 60 * 24  # 24 hours


def token_matches(candidate: Optional[str], expected: str) -> bool:
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode(), expected.encode())


def require_admin(
    admin_token: Optional[str] = Cookie(None, alias=ADMIN_COOKIE_NAME),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Verify the admin cookie.

    Raises 500 if the secret is not configured, 401 if the cookie is
    missing or wrong.
    """
    expected = settings.admin_access_token
    if not expected:
        logger.error("ADMIN_ACCESS_TOKEN not configured - admin endpoints disabled")
        raise HTTPException(status_code=500, detail="Admin access not configured")

    if not token_matches(admin_token, expected):
        raise HTTPException(status_code=401, detail="Unauthorized")

    return admin_token
