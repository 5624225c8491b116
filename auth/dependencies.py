"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_token_payload`` and ``get_current_user_id``
dependencies that are used across all protected routes. The bearer token
is verified once per request and its payload kept on ``request.state``.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import InvalidToken, ServerError, Unauthorized
from auth.jwt import TokenError, verify_token
from config.settings import Settings
from database.session import get_db_session

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def app_settings(request: Request) -> Settings:
    """Settings handed to ``create_app`` at startup."""
    return request.app.state.settings


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_token_payload(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    settings: Settings = Depends(app_settings),
) -> Dict[str, Any]:
    """
    Verify the Bearer token and attach its payload to ``request.state``.

    No token → ``Unauthorized`` (401); bad token → ``InvalidToken`` (400).
    """
    cached = getattr(request.state, "token_payload", None)
    if cached is not None:
        return cached

    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    try:
        payload = verify_token(credentials.credentials, settings.jwt_secret)
    except TokenError:
        raise InvalidToken()
    except ValueError:
        logger.exception("Token verification is misconfigured")
        raise ServerError()

    request.state.token_payload = payload
    return payload


async def get_current_user_id(
    payload: Dict[str, Any] = Depends(get_token_payload),
) -> str:
    """Return the authenticated ``user_id`` (UUID string) from the verified payload."""
    try:
        return str(uuid.UUID(str(payload["id"])))
    except (KeyError, ValueError):
        # Signed by us but unusable; still a client-facing 400.
        logger.warning("Verified token carries no usable user id")
        raise InvalidToken()
