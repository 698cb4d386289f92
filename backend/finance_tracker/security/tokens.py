"""
Bearer token issuance and validation (signed JWTs).
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import PyJWTError

from finance_tracker.config import Settings, get_settings


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be trusted."""


def create_access_token(
    user_id: int,
    username: str,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> str:
    settings = settings or get_settings()
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expires_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Optional[Settings] = None) -> int:
    """
    Validate a token and return the user id it was issued for.

    Raises:
        InvalidTokenError: bad signature, malformed token, expired token,
            or a subject that is not a user id
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token expired.") from exc
    except PyJWTError as exc:
        raise InvalidTokenError("Invalid token.") from exc

    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as exc:
        raise InvalidTokenError("Invalid token.") from exc


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header value.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
