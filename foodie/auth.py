"""
Admin Authentication

A single shared admin password unlocks the menu panel. A successful
login sets an HS256-signed JWT in the `foodie_admin_session` cookie;
the token is checked on every admin page and every admin mutation.

Page guard (admin_redirect_middleware):
    - /admin/* without a valid session → /admin?redirect=<path>
    - /admin with a valid session      → /admin/dashboard
"""

import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import quote

from fastapi import HTTPException, Request, Response
from fastapi.responses import RedirectResponse
from jose import JWTError, jwt

from foodie.core.config import get_settings

logger = logging.getLogger(__name__)

ADMIN_COOKIE_NAME = "foodie_admin_session"
LOGIN_PATH = "/admin"
DASHBOARD_PATH = "/admin/dashboard"
NOT_AUTHENTICATED = "Not authenticated"


def check_password(password: str) -> bool:
    expected = get_settings().admin_password
    return hmac.compare_digest(password.encode(), expected.encode())


def create_session_token(now: Optional[datetime] = None) -> str:
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    claims = {
        "sub": "admin",
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.session_expire_minutes),
    }
    return jwt.encode(claims, settings.session_secret_key, algorithm=settings.session_algorithm)


def verify_session_token(token: Optional[str]) -> bool:
    if not token:
        return False

    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.session_secret_key, algorithms=[settings.session_algorithm])
    except JWTError as e:
        logger.debug(f"Auth: Rejected session token ({e})")
        return False

    return claims.get("sub") == "admin"


def is_authenticated(request: Request) -> bool:
    return verify_session_token(request.cookies.get(ADMIN_COOKIE_NAME))


def set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        ADMIN_COOKIE_NAME,
        token,
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(ADMIN_COOKIE_NAME)


async def require_admin(request: Request) -> None:
    """Dependency for admin API mutations."""
    if not is_authenticated(request):
        raise HTTPException(status_code=401, detail=NOT_AUTHENTICATED)


def _is_admin_page(path: str) -> bool:
    return path == LOGIN_PATH or path.startswith(f"{LOGIN_PATH}/")


async def admin_redirect_middleware(request: Request, call_next):
    path = request.url.path
    if not _is_admin_page(path):
        return await call_next(request)

    authenticated = is_authenticated(request)

    if path == LOGIN_PATH:
        if authenticated:
            return RedirectResponse(DASHBOARD_PATH, status_code=307)
        return await call_next(request)

    if not authenticated:
        logger.info(f"Auth: Redirecting unauthenticated request for {path} to login")
        return RedirectResponse(f"{LOGIN_PATH}?redirect={quote(path)}", status_code=307)

    return await call_next(request)
