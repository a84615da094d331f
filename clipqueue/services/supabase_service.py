"""
Supabase service module for database and auth access.

This module provides utilities for:
- Supabase client initialization and access (service role, server side)
- Verifying user bearer tokens through Supabase Auth
- A separate anon-key client for the OAuth code exchange
"""

from typing import Optional
from supabase import create_client, Client

from clipqueue.config import get_settings
from clipqueue.errors import ApiError
from clipqueue.utils.logging_utils import get_system_logger


_supabase_client: Optional[Client] = None
_auth_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get the service-role Supabase client or raise if not configured.

    The client is created on first use and reused afterwards.

    Returns:
        Initialized Supabase client instance

    Raises:
        ApiError: 503 Service Unavailable if Supabase is not configured
    """
    global _supabase_client
    if _supabase_client is None:
        settings = get_settings()
        if not (settings.supabase_url and settings.supabase_service_key):
            raise ApiError(
                503,
                "Supabase not configured",
                "Set SUPABASE_URL and SUPABASE_SERVICE_KEY environment variables."
            )
        _supabase_client = create_client(settings.supabase_url, settings.supabase_service_key)
        get_system_logger().info("Supabase client initialized successfully")
    return _supabase_client


def get_auth_client() -> Client:
    """
    Get the anon-key client used for the PKCE code exchange.

    Falls back to the service key when no anon key is configured.
    """
    global _auth_client
    if _auth_client is None:
        settings = get_settings()
        key = settings.supabase_anon_key or settings.supabase_service_key
        if not (settings.supabase_url and key):
            raise ApiError(503, "Supabase not configured")
        _auth_client = create_client(settings.supabase_url, key)
    return _auth_client


def get_user_for_token(supabase: Client, token: str):
    """
    Resolve a Supabase access token to its user.

    Returns:
        The Supabase user object, or None if the token was rejected.

    Raises:
        Whatever the Supabase client raises for an invalid or expired token
        (callers treat any exception as an authentication failure).
    """
    response = supabase.auth.get_user(token)
    if response is None:
        return None
    return response.user


def reset_clients() -> None:
    """Forget cached clients so the next call re-reads settings."""
    global _supabase_client, _auth_client
    _supabase_client = None
    _auth_client = None
