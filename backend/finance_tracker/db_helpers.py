"""
Helper utilities for resolving the authenticated user of a request.
"""
from typing import Mapping

from fastapi import HTTPException, Request, status

from finance_tracker.security.tokens import (
    InvalidTokenError,
    decode_access_token,
    extract_bearer_token,
)

AUTHORIZATION_HEADER = "authorization"


def authenticate_request_from_headers(headers: Mapping[str, str]) -> int:
    """
    Resolve the user id from the bearer token in the request headers.

    Raises:
        HTTPException: 401 when the token is missing, invalid or expired
    """
    token = extract_bearer_token(headers.get(AUTHORIZATION_HEADER))
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token required.",
        )

    try:
        return decode_access_token(token)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc


def get_user_id(request: Request) -> int:
    """
    Dependency returning the user id the auth middleware attached to the request.
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required.",
        )
    return user_id
