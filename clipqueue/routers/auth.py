"""
Auth router for the Google OAuth flow and the Supabase code exchange.

The Google callback writes one httpOnly `auth-session` cookie and redirects;
every failure redirects to /auth/error with a short error code instead of
returning JSON.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from clipqueue.config import Settings, get_settings
from clipqueue.errors import ApiError
from clipqueue.services import oauth_service
from clipqueue.services.supabase_service import get_auth_client
from clipqueue.utils.logging_utils import get_request_logger

router = APIRouter(tags=["Auth"])


def _error_redirect(settings: Settings, error: str) -> RedirectResponse:
    return RedirectResponse(f"{settings.app_base_url.rstrip('/')}/auth/error?error={quote(error)}", status_code=307)


@router.get("/api/auth/google")
def google_login(settings: Settings = Depends(get_settings)):
    """Redirect to Google's consent screen."""
    if not settings.google_client_id:
        raise ApiError(500, "Google Client ID not configured")
    return RedirectResponse(oauth_service.build_authorization_url(settings), status_code=307)


@router.get("/api/auth/callback/google")
def google_callback(
    code: str = Query(None),
    error: str = Query(None),
    settings: Settings = Depends(get_settings),
):
    """Exchange the authorization code, fetch the profile and store the session cookie."""
    if error:
        return _error_redirect(settings, error)
    if not code:
        return _error_redirect(settings, "missing_code")

    logger = get_request_logger()
    try:
        tokens = oauth_service.exchange_code(settings, code)
        user = oauth_service.fetch_userinfo(settings, tokens.get("access_token", ""))
    except Exception as e:
        logger.error(f"OAuth callback error: {str(e)}")
        return _error_redirect(settings, "callback_failed")

    logger.info(f"Google sign-in completed for {user.get('email')}")
    response = RedirectResponse(f"{settings.app_base_url.rstrip('/')}/", status_code=307)
    response.set_cookie(
        oauth_service.SESSION_COOKIE,
        oauth_service.session_cookie_value(user, tokens),
        max_age=oauth_service.SESSION_MAX_AGE,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response


@router.get("/auth/callback")
def supabase_callback(request: Request, code: str = Query(None)):
    """Complete a Supabase PKCE sign-in and return to the site root."""
    origin = str(request.base_url).rstrip("/")
    if code:
        try:
            get_auth_client().auth.exchange_code_for_session({"auth_code": code})
        except Exception as e:
            get_request_logger().error(f"Auth callback error: {str(e)}")
            return RedirectResponse(f"{origin}?error=auth_error", status_code=307)
    return RedirectResponse(origin, status_code=307)
