"""
Google OAuth 2.0 web-server flow.

Builds the consent-screen URL, exchanges the returned code for tokens and
fetches the account's profile. The callback route stores the result in a
single session cookie; there is no refresh or session store.
"""

import json
import time
from typing import Any, Dict
from urllib.parse import urlencode

import requests

from clipqueue.config import Settings

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

SCOPES = [
    "openid",
    "email",
    "profile",
    "https://www.googleapis.com/auth/youtube.readonly",
]

SESSION_COOKIE = "auth-session"
SESSION_MAX_AGE = 60 * 60 * 24 * 7


class OAuthError(Exception):
    pass


def redirect_uri(settings: Settings) -> str:
    return f"{settings.app_base_url.rstrip('/')}/api/auth/callback/google"


def build_authorization_url(settings: Settings) -> str:
    """Consent screen URL requesting offline access to the scopes above."""
    params = {
        "client_id": settings.google_client_id,
        "redirect_uri": redirect_uri(settings),
        "response_type": "code",
        "scope": " ".join(SCOPES),
        "access_type": "offline",
        "prompt": "consent",
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


def exchange_code(settings: Settings, code: str) -> Dict[str, Any]:
    response = requests.post(
        TOKEN_URL,
        data={
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": redirect_uri(settings),
        },
        timeout=settings.http_timeout_seconds,
    )
    if not response.ok:
        raise OAuthError(f"Failed to exchange code for token: {response.status_code}")
    return response.json()


def fetch_userinfo(settings: Settings, access_token: str) -> Dict[str, Any]:
    response = requests.get(
        USERINFO_URL,
        headers={"Authorization": f"Bearer {access_token}"},
        timeout=settings.http_timeout_seconds,
    )
    if not response.ok:
        raise OAuthError(f"Failed to fetch user info: {response.status_code}")
    return response.json()


def session_cookie_value(user: Dict[str, Any], tokens: Dict[str, Any]) -> str:
    return json.dumps({"user": user, "tokens": tokens, "timestamp": int(time.time() * 1000)})
