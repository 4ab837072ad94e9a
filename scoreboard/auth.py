"""Write-access checks for the HTTP API.

Sign-in happens upstream: the identity proxy in front of the app forwards
the signed-in user's e-mail in the ``X-User-Email`` header. Only e-mails on
the allowed list may submit times or edit the roster.
"""

from __future__ import annotations

import logging
import secrets

from fastapi import Header, HTTPException

from scoreboard import store
from scoreboard.config import get_settings

logger = logging.getLogger(__name__)


async def require_writer(x_user_email: str | None = Header(default=None)) -> str:
    """FastAPI dependency: return the caller's e-mail if they may write."""
    if not x_user_email or not x_user_email.strip():
        raise HTTPException(status_code=401, detail="Sign in required")
    if not store.is_allowed(x_user_email):
        logger.warning("Auth: write denied for %s", x_user_email)
        raise HTTPException(
            status_code=403, detail="Access denied. Your account is not allowed."
        )
    return x_user_email.strip().lower()


async def require_admin(x_admin_token: str | None = Header(default=None)) -> None:
    """FastAPI dependency: accept only callers holding the admin token."""
    expected = get_settings().admin_token
    if expected is None:
        raise HTTPException(status_code=403, detail="Granting access is disabled")
    if not x_admin_token or not secrets.compare_digest(x_admin_token, expected):
        raise HTTPException(status_code=403, detail="Invalid admin token")
