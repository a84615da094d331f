"""
FastAPI dependency injection functions.

This module provides reusable dependencies for:
- Supabase client access
- Bearer token authentication against Supabase Auth
- Google OAuth access token extraction
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, Query
from supabase import Client

from clipqueue.errors import ApiError
from clipqueue.services.supabase_service import get_supabase_client, get_user_for_token
from clipqueue.utils.logging_utils import get_system_logger


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: Optional[str] = None


def get_db() -> Client:
    """Supabase client for the request."""
    return get_supabase_client()


def required_query_id(error: str):
    """
    Dependency factory for the `?id=` parameter of delete routes.

    Declared ahead of get_current_user so a missing id is a 400 even for
    anonymous callers.
    """
    def dependency(item_id: Optional[str] = Query(None, alias="id", description="Item id")) -> str:
        if not item_id:
            raise ApiError(400, error)
        return item_id

    return dependency


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        return None
    return parts[1].strip()


def get_current_user(
    authorization: Optional[str] = Header(None),
    supabase: Client = Depends(get_db),
) -> AuthenticatedUser:
    """
    Dependency to authenticate the caller from the Authorization header.

    Expected format: "Bearer <supabase access token>"

    Raises:
        ApiError 401 "Authentication required" if the header is missing
        ApiError 401 "Authentication failed" if Supabase rejects the token
    """
    if not authorization:
        raise ApiError(401, "Authentication required")

    token = _bearer_token(authorization)
    if token is None:
        raise ApiError(401, "Authentication failed", "Expected: Bearer <token>")

    try:
        user = get_user_for_token(supabase, token)
    except Exception as e:
        get_system_logger().warning(f"Token verification failed: {str(e)}")
        raise ApiError(401, "Authentication failed")

    if user is None:
        raise ApiError(401, "Authentication failed")

    return AuthenticatedUser(id=str(user.id), email=getattr(user, "email", None))


def get_google_access_token(authorization: Optional[str] = Header(None)) -> str:
    """Google OAuth access token passed straight through as a bearer token."""
    token = _bearer_token(authorization)
    if token is None:
        raise ApiError(401, "Authorization token required")
    return token
