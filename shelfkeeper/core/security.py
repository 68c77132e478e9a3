from __future__ import annotations

from typing import Optional

import jwt

from shelfkeeper.config import get_settings
from shelfkeeper.core.errors import ConfigurationError, NotAuthenticatedError


def _get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def _decode_jwt(token: str) -> dict:
    settings = get_settings()
    if not settings.JWT_SECRET:
        raise ConfigurationError("JWT_SECRET is not configured")

    options = {"verify_aud": bool(settings.JWT_AUDIENCE)}
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options=options,
        )
    except jwt.PyJWTError as exc:
        raise NotAuthenticatedError("Invalid JWT") from exc


def authenticate_request(authorization: Optional[str]) -> str:
    """Resolve the calling user's id from a bearer token issued by the auth provider.

    A local environment may set ``AUTH_DEV_USER_ID`` to run without tokens;
    a presented token is still verified in that case.
    """
    settings = get_settings()

    token = _get_bearer_token(authorization)
    if token:
        payload = _decode_jwt(token)
        user_id = str(payload.get("sub") or "").strip()
        if not user_id:
            raise NotAuthenticatedError("Token has no subject")
        return user_id

    if settings.AUTH_DEV_USER_ID and settings.AUTH_DEV_USER_ID.strip():
        return settings.AUTH_DEV_USER_ID.strip()

    raise NotAuthenticatedError()
