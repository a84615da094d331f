"""
YouTube Data API v3 client.

This module provides:
- Keyword search, video details, playlist contents and the signed-in user's
  playlists, reshaped into the API's camelCase payloads
- Search suggestions from Google's suggest endpoint
- Degraded mode: without an API key, search/video/playlist return fixed mock
  payloads flagged as degraded instead of failing

Calls are plain blocking `requests` calls with the configured timeout and
no retries.
"""

import json
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import requests

from clipqueue.config import get_settings
from clipqueue.utils.logging_utils import get_system_logger

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
SUGGEST_URL = "https://suggestqueries.google.com/complete/search"

MISSING_API_KEY = "missing_api_key"
UPSTREAM_UNAVAILABLE = "upstream_unavailable"

DEFAULT_SUGGESTIONS = ["music", "tutorial", "review", "gameplay", "news", "comedy", "education", "technology"]

JSONP_RE = re.compile(r'^[^(]*\((.*)\)\s*;?\s*$', re.DOTALL)


class YouTubeApiError(Exception):
    """Non-2xx answer from a YouTube/Google endpoint, or a missing resource."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class YouTubeResult:
    """Payload plus whether it is real (degraded=False) or substitute data."""
    data: Any
    degraded: bool = False
    reason: Optional[str] = None

    @classmethod
    def live(cls, data: Any) -> "YouTubeResult":
        return cls(data=data)

    @classmethod
    def fallback(cls, data: Any, reason: str) -> "YouTubeResult":
        return cls(data=data, degraded=True, reason=reason)


def _thumbnail(snippet: Dict[str, Any]) -> Optional[str]:
    thumbnails = snippet.get("thumbnails") or {}
    for size in ("medium", "default", "high"):
        if thumbnails.get(size, {}).get("url"):
            return thumbnails[size]["url"]
    return None


def _get(url: str, params: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    response = requests.get(url, params=params, headers=headers, timeout=get_settings().http_timeout_seconds)
    if not response.ok:
        raise YouTubeApiError(f"YouTube API error: {response.status_code}", status_code=response.status_code)
    return response.json()


# =============================================================================
# Mock payloads (degraded mode)
# =============================================================================

def mock_search_results(query: str) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "items": [
            {
                "id": "dQw4w9WgXcQ",
                "title": f"Test video - {query}",
                "description": "Development placeholder. Configure YOUTUBE_API_KEY for real search results.",
                "thumbnail": "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
                "channelId": "UCuAXFkgsw1L7xaCfnd5JJOw",
                "channelTitle": "Test channel",
                "publishedAt": now.isoformat(),
                "duration": "PT3M33S",
                "viewCount": "1000000",
                "likeCount": "10000",
                "tags": ["test", "demo"],
            },
            {
                "id": "ScMzIvxBSi4",
                "title": f"Sample video - {query}",
                "description": "Sample video for YouTube API integration.",
                "thumbnail": "https://img.youtube.com/vi/ScMzIvxBSi4/maxresdefault.jpg",
                "channelId": "UCuAXFkgsw1L7xaCfnd5JJOw",
                "channelTitle": "Sample channel",
                "publishedAt": (now - timedelta(days=1)).isoformat(),
                "duration": "PT5M20S",
                "viewCount": "500000",
                "likeCount": "5000",
                "tags": ["sample", "youtube"],
            },
        ],
        "pagination": {
            "page": 1,
            "pageSize": 2,
            "totalItems": 2,
            "totalPages": 1,
            "hasNext": False,
            "hasPrevious": False,
        },
    }


def mock_video_info(video_id: str) -> Dict[str, Any]:
    return {
        "title": f"Test video {video_id}",
        "description": "Development placeholder. Configure YOUTUBE_API_KEY for real video details.",
        "channelTitle": "Test channel",
        "publishedAt": datetime.now(timezone.utc).isoformat(),
        "duration": "PT3M33S",
        "thumbnails": {"medium": {"url": f"https://img.youtube.com/vi/{video_id}/mqdefault.jpg"}},
    }


def mock_playlist(playlist_id: str) -> Dict[str, Any]:
    return {
        "playlist": {
            "id": playlist_id,
            "title": "Test playlist",
            "description": "Development placeholder. Configure YOUTUBE_API_KEY for real playlists.",
            "thumbnail": "https://img.youtube.com/vi/dQw4w9WgXcQ/mqdefault.jpg",
            "itemCount": 1,
            "publishedAt": datetime.now(timezone.utc).isoformat(),
        },
        "videos": [
            {
                "id": "dQw4w9WgXcQ",
                "title": "Test video",
                "description": "",
                "thumbnail": "https://img.youtube.com/vi/dQw4w9WgXcQ/mqdefault.jpg",
                "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
                "publishedAt": None,
                "position": 0,
            }
        ],
    }


# =============================================================================
# API calls
# =============================================================================

def search_videos(query: str, api_key: Optional[str], max_results: int = 20) -> YouTubeResult:
    """Keyword search; duration/view counts are not part of search results and are zeroed."""
    if not api_key:
        return YouTubeResult.fallback(mock_search_results(query), MISSING_API_KEY)

    data = _get(f"{YOUTUBE_API_BASE}/search", {
        "part": "snippet",
        "q": query,
        "type": "video",
        "maxResults": max_results,
        "key": api_key,
    })

    items = data.get("items") or []
    results = [
        {
            "id": item.get("id", {}).get("videoId"),
            "title": item["snippet"].get("title"),
            "description": item["snippet"].get("description"),
            "thumbnail": _thumbnail(item["snippet"]),
            "channelId": item["snippet"].get("channelId"),
            "channelTitle": item["snippet"].get("channelTitle"),
            "publishedAt": item["snippet"].get("publishedAt"),
            "duration": "PT0S",
            "viewCount": "0",
            "likeCount": "0",
            "tags": [],
        }
        for item in items
    ]

    return YouTubeResult.live({
        "items": results,
        "pagination": {
            "page": 1,
            "pageSize": len(results),
            "totalItems": (data.get("pageInfo") or {}).get("totalResults", len(results)),
            "totalPages": 1,
            "hasNext": bool(data.get("nextPageToken")),
            "hasPrevious": False,
        },
    })


def get_video_info(video_id: str, api_key: Optional[str]) -> YouTubeResult:
    """
    Snippet and content details of one video.

    Raises:
        YouTubeApiError(404) if the video does not exist
        YouTubeApiError for any non-2xx answer
    """
    if not api_key:
        return YouTubeResult.fallback(mock_video_info(video_id), MISSING_API_KEY)

    data = _get(f"{YOUTUBE_API_BASE}/videos", {
        "id": video_id,
        "part": "snippet,contentDetails",
        "key": api_key,
    })

    items = data.get("items") or []
    if not items:
        raise YouTubeApiError("Video not found", status_code=404)

    video = items[0]
    return YouTubeResult.live({
        "title": video["snippet"].get("title"),
        "description": video["snippet"].get("description") or "",
        "channelTitle": video["snippet"].get("channelTitle"),
        "publishedAt": video["snippet"].get("publishedAt"),
        "duration": video.get("contentDetails", {}).get("duration"),
        "thumbnails": video["snippet"].get("thumbnails"),
    })


def _format_playlist(item: Dict[str, Any]) -> Dict[str, Any]:
    snippet = item.get("snippet", {})
    return {
        "id": item.get("id"),
        "title": snippet.get("title"),
        "description": snippet.get("description"),
        "thumbnail": _thumbnail(snippet),
        "itemCount": item.get("contentDetails", {}).get("itemCount"),
        "publishedAt": snippet.get("publishedAt"),
    }


def get_playlist(playlist_id: str, api_key: Optional[str], max_results: int = 50) -> YouTubeResult:
    """
    Playlist metadata plus its first max_results videos.

    Raises:
        YouTubeApiError(404) if the playlist does not exist or is private
    """
    if not api_key:
        return YouTubeResult.fallback(mock_playlist(playlist_id), MISSING_API_KEY)

    playlist_data = _get(f"{YOUTUBE_API_BASE}/playlists", {
        "part": "snippet,contentDetails",
        "id": playlist_id,
        "key": api_key,
    })
    if not playlist_data.get("items"):
        raise YouTubeApiError("Playlist not found or is private", status_code=404)

    videos_data = _get(f"{YOUTUBE_API_BASE}/playlistItems", {
        "part": "snippet,contentDetails",
        "playlistId": playlist_id,
        "maxResults": max_results,
        "key": api_key,
    })

    videos = []
    for item in videos_data.get("items") or []:
        video_id = item.get("contentDetails", {}).get("videoId")
        snippet = item.get("snippet", {})
        videos.append({
            "id": video_id,
            "title": snippet.get("title"),
            "description": snippet.get("description"),
            "thumbnail": _thumbnail(snippet),
            "url": f"https://www.youtube.com/watch?v={video_id}",
            "publishedAt": snippet.get("publishedAt"),
            "position": snippet.get("position"),
        })

    return YouTubeResult.live({
        "playlist": _format_playlist(playlist_data["items"][0]),
        "videos": videos,
    })


def get_my_playlists(access_token: str, max_results: int = 25) -> List[Dict[str, Any]]:
    """Playlists of the Google account that owns access_token."""
    data = _get(
        f"{YOUTUBE_API_BASE}/playlists",
        {"part": "snippet,contentDetails", "mine": "true", "maxResults": max_results},
        headers={"Authorization": f"Bearer {access_token}", "Accept": "application/json"},
    )

    playlists = []
    for item in data.get("items") or []:
        playlist = _format_playlist(item)
        playlist["privacy"] = item.get("status", {}).get("privacyStatus", "private")
        playlists.append(playlist)
    return playlists


def default_suggestions(query: str) -> List[str]:
    query = (query or "").lower()
    return [s for s in DEFAULT_SUGGESTIONS if query in s][:5]


def get_suggestions(query: str) -> YouTubeResult:
    """
    Autocomplete suggestions (up to 8).

    Queries shorter than 2 characters get an empty list. Any failure of the
    suggest endpoint degrades to the matching default suggestions.
    """
    if not query or len(query) < 2:
        return YouTubeResult.live([])

    try:
        response = requests.get(
            SUGGEST_URL,
            params={"client": "youtube", "ds": "yt", "q": query},
            timeout=get_settings().http_timeout_seconds,
        )
        if not response.ok:
            raise YouTubeApiError(f"Suggestion API error: {response.status_code}", response.status_code)

        match = JSONP_RE.match(response.text.strip())
        payload = json.loads(match.group(1) if match else response.text)
        if not isinstance(payload, list):
            raise ValueError("Unexpected suggestion payload")
        entries = payload[1] if len(payload) > 1 else []
        suggestions = [entry[0] if isinstance(entry, list) else entry for entry in entries[:8]]
    except Exception as e:
        get_system_logger().warning(f"Suggestions unavailable, using defaults: {str(e)}")
        return YouTubeResult.fallback(default_suggestions(query), UPSTREAM_UNAVAILABLE)

    return YouTubeResult.live(suggestions)
