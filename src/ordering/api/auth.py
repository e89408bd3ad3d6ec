"""Caller identity for the Ordering API.

Requests authenticate with ``Authorization: Bearer <jwt>``. The token is
issued elsewhere; this module only verifies it and yields the user id carried
in its ``id`` claim (``sub`` is accepted as a fallback).
"""

import os

import jwt
import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError

from ordering.exceptions import Unauthenticated

logger = structlog.get_logger(__name__)

JWT_SECRET = os.getenv("JWT_SECRET", "dev-only-secret-change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

bearer_scheme = HTTPBearer(auto_error=False)


def verify_token(token: str) -> str:
    """Decode ``token`` and return the user id it was issued for."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except PyJWTError as exc:
        logger.warning("Token rejected", reason=type(exc).__name__)
        raise Unauthenticated("Token is not valid") from None

    user_id = payload.get("id") or payload.get("sub")
    if not user_id:
        raise Unauthenticated("Token is not valid")
    return str(user_id)


async def current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("No token, authorization denied")
    return verify_token(credentials.credentials)
