"""
YouTube router proxying the YouTube Data API.

This module provides endpoints for:
- Video search, video info and playlist contents (mock data without an API key)
- Search suggestions (default suggestions when the suggest endpoint fails)
- The signed-in user's playlists via their Google OAuth token
- Parsing a pasted video URL into platform/id/embed info
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query

from clipqueue.config import Settings, get_settings
from clipqueue.dependencies import get_google_access_token
from clipqueue.errors import ApiError
from clipqueue.services import youtube_service
from clipqueue.services.youtube_service import YouTubeApiError, YouTubeResult
from clipqueue.utils.logging_utils import get_request_logger
from clipqueue.utils.platform_utils import UnsupportedVideoUrlError, extract_youtube_id, parse_video_url

router = APIRouter(prefix="/api/youtube", tags=["YouTube"])


def _degraded_fields(result: YouTubeResult) -> Dict[str, Any]:
    if result.degraded:
        return {"mockData": True, "apiKeyStatus": "missing"}
    return {"apiKeyStatus": "configured"}


@router.get("/search")
def search(
    q: str = Query("", description="Search keywords"),
    settings: Settings = Depends(get_settings),
):
    """Keyword search returning up to 20 videos."""
    logger = get_request_logger()
    query = q.strip() or "test"
    try:
        result = youtube_service.search_videos(query, settings.youtube_api_key)
        if result.degraded:
            logger.warning(f"YouTube API key not configured, returning mock results for '{query}'")
        else:
            logger.info(f"Search '{query}': {len(result.data['items'])} results")
        return {"success": True, "data": result.data, **_degraded_fields(result)}
    except Exception as e:
        logger.error(f"YouTube search failed: {str(e)}")
        raise ApiError(500, "YouTube search failed", str(e))


@router.get("/playlist")
def playlist(
    playlist_id: str = Query(None, alias="id", description="Playlist id"),
    max_results: int = Query(50, alias="maxResults", ge=1, le=50),
    settings: Settings = Depends(get_settings),
):
    if not playlist_id:
        raise ApiError(400, "Playlist ID is required")

    logger = get_request_logger()
    try:
        result = youtube_service.get_playlist(playlist_id, settings.youtube_api_key, max_results)
        return {"success": True, **result.data, **_degraded_fields(result)}
    except YouTubeApiError as e:
        if e.status_code == 404:
            raise ApiError(404, str(e))
        logger.error(f"Playlist fetch failed: {str(e)}")
        raise ApiError(500, "Failed to fetch playlist data", str(e))
    except Exception as e:
        logger.error(f"Playlist fetch failed: {str(e)}")
        raise ApiError(500, "Failed to fetch playlist data", str(e))


@router.get("/suggestions")
def suggestions(q: str = Query("", description="Partial query")):
    result = youtube_service.get_suggestions(q.strip())
    body = {"success": True, "suggestions": result.data}
    if result.degraded:
        get_request_logger().warning(f"Suggestion lookup failed for '{q}', using defaults")
        body["fallback"] = True
    return body


@router.get("/video-info")
def video_info(
    video_id: str = Query(None, alias="videoId"),
    url: str = Query(None, description="Any YouTube URL; used when videoId is absent"),
    settings: Settings = Depends(get_settings),
):
    """Snippet and content details of a video, addressed by id or URL."""
    if not video_id and url:
        video_id = extract_youtube_id(url)
    if not video_id:
        raise ApiError(400, "Video ID is required")

    logger = get_request_logger()
    try:
        result = youtube_service.get_video_info(video_id, settings.youtube_api_key)
        return {"success": True, "info": result.data, **_degraded_fields(result)}
    except YouTubeApiError as e:
        if e.status_code == 404:
            raise ApiError(404, str(e))
        logger.error(f"Video info fetch failed: {str(e)}")
        raise ApiError(500, str(e))
    except Exception as e:
        logger.error(f"Video info fetch failed: {str(e)}")
        raise ApiError(500, "Unknown error occurred", str(e))


@router.get("/my-playlists")
def my_playlists(
    max_results: int = Query(25, alias="maxResults", ge=1, le=50),
    access_token: str = Depends(get_google_access_token),
):
    """Playlists of the Google account behind the bearer token."""
    logger = get_request_logger()
    try:
        playlists = youtube_service.get_my_playlists(access_token, max_results)
        return {"success": True, "playlists": playlists}
    except YouTubeApiError as e:
        logger.error(f"User playlists fetch failed: {str(e)}")
        raise ApiError(e.status_code, "Failed to fetch user playlists")
    except Exception as e:
        logger.error(f"User playlists fetch failed: {str(e)}")
        raise ApiError(500, "Failed to fetch user playlists", str(e))


@router.get("/parse-url")
def parse_url(url: str = Query(None, description="Video page, short or embed URL")):
    try:
        info = parse_video_url(url)
    except UnsupportedVideoUrlError as e:
        raise ApiError(400, str(e))
    return {"success": True, "video": info.to_dict()}
