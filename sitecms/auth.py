"""
Admin authorization: the shared-secret mutation guard and admin UI sessions.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional

import jwt
from fastapi import Depends, HTTPException, Request

from sitecms.config import Settings
from sitecms.dependencies import get_app_settings

logger = logging.getLogger(__name__)

SESSION_COOKIE = "admin_session"
SESSION_ALGORITHM = "HS256"


@dataclass(frozen=True)
class GuardRejection:
    status_code: int
    message: str


def _presented_token(headers: Mapping[str, str]) -> str:
    header = headers.get("authorization") or ""
    bearer = header[len("Bearer "):].strip() if header.startswith("Bearer ") else ""
    return headers.get("x-admin-token") or bearer


def check_admin_request(
    headers: Mapping[str, str], expected_token: Optional[str]
) -> Optional[GuardRejection]:
    """
    Return None when the request may mutate content, else the rejection.

    With no token configured every request passes (effectively unprotected).
    The origin check is a loose substring match of Host within Origin.
    """
    if not expected_token:
        return None

    origin = headers.get("origin")
    host = headers.get("host")
    if origin and host and host not in origin:
        return GuardRejection(400, "Invalid origin")

    presented = _presented_token(headers)
    if not hmac.compare_digest(presented.encode(), expected_token.encode()):
        return GuardRejection(401, "Unauthorized")
    return None


def require_admin(
    request: Request, settings: Settings = Depends(get_app_settings)
) -> None:
    rejection = check_admin_request(request.headers, settings.admin_api_token)
    if rejection:
        logger.info(
            "Rejected %s %s: %s",
            request.method,
            request.url.path,
            rejection.message,
        )
        raise HTTPException(
            status_code=rejection.status_code, detail=rejection.message
        )


# Admin UI sessions


def credentials_match(settings: Settings, email: str, password: str) -> bool:
    if not settings.admin_email or not settings.admin_password:
        logger.warning("ADMIN_EMAIL / ADMIN_PASSWORD not configured; login disabled")
        return False
    email_ok = hmac.compare_digest(email.encode(), settings.admin_email.encode())
    password_ok = hmac.compare_digest(
        password.encode(), settings.admin_password.encode()
    )
    return email_ok and password_ok


def issue_session_token(
    secret: str, max_age_seconds: int, now: Optional[datetime] = None
) -> str:
    issued = now or datetime.now(timezone.utc)
    claims = {
        "role": "admin",
        "iat": issued,
        "exp": issued + timedelta(seconds=max_age_seconds),
    }
    return jwt.encode(claims, secret, algorithm=SESSION_ALGORITHM)


def verify_session_token(token: Optional[str], secret: str) -> bool:
    if not token:
        return False
    try:
        claims = jwt.decode(token, secret, algorithms=[SESSION_ALGORITHM])
    except jwt.InvalidTokenError:
        return False
    return claims.get("role") == "admin"
