"""
Platform utility functions for detecting and parsing video URLs.

This module provides utilities for:
- Detecting the platform of a video URL
- Extracting video IDs from URLs
- Deriving canonical embed and thumbnail URLs
"""

import re
from dataclasses import dataclass
from typing import Optional

YOUTUBE = "youtube"
VIMEO = "vimeo"
UNKNOWN = "unknown"

# Tried in order; the first pattern that matches wins.
YOUTUBE_PATTERNS = [
    re.compile(r'(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]+)'),
    re.compile(r'youtube\.com/embed/([a-zA-Z0-9_-]+)'),
    re.compile(r'youtu\.be/([a-zA-Z0-9_-]+)'),
    re.compile(r'm\.youtube\.com/watch\?v=([a-zA-Z0-9_-]+)'),
    re.compile(r'studio\.youtube\.com/video/([a-zA-Z0-9_-]+)'),
]

VIMEO_PATTERNS = [
    re.compile(r'vimeo\.com/(\d+)'),
    re.compile(r'player\.vimeo\.com/video/(\d+)'),
]


class UnsupportedVideoUrlError(ValueError):
    """Raised when a URL matches none of the supported platforms."""


@dataclass(frozen=True)
class VideoInfo:
    platform: str
    video_id: str
    original_url: str
    embed_url: str
    thumbnail_url: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "platform": self.platform,
            "videoId": self.video_id,
            "originalUrl": self.original_url,
            "embedUrl": self.embed_url,
            "thumbnailUrl": self.thumbnail_url,
        }


def is_youtube_url(url: str) -> bool:
    """Check if URL is a YouTube URL."""
    youtube_patterns = [
        r'youtube\.com',
        r'youtu\.be',
        r'youtube-nocookie\.com',
    ]
    return any(re.search(pattern, url, re.IGNORECASE) for pattern in youtube_patterns)


def _match_first(url: str, patterns) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(url)
        if match and match.group(1):
            return match.group(1)
    return None


def _parse_youtube(url: str) -> Optional[VideoInfo]:
    video_id = _match_first(url, YOUTUBE_PATTERNS)
    if video_id is None:
        return None
    return VideoInfo(
        platform=YOUTUBE,
        video_id=video_id,
        original_url=url,
        embed_url=f"https://www.youtube.com/embed/{video_id}",
        thumbnail_url=f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg",
    )


def _parse_vimeo(url: str) -> Optional[VideoInfo]:
    video_id = _match_first(url, VIMEO_PATTERNS)
    if video_id is None:
        return None
    return VideoInfo(
        platform=VIMEO,
        video_id=video_id,
        original_url=url,
        embed_url=f"https://player.vimeo.com/video/{video_id}",
    )


def parse_video_url(url: str) -> VideoInfo:
    """
    Classify a video URL and derive its canonical embed/thumbnail URLs.

    Platforms are tried in a fixed order (YouTube, then Vimeo).

    Raises:
        UnsupportedVideoUrlError: if url is empty or no platform matches.
    """
    if not url or not isinstance(url, str):
        raise UnsupportedVideoUrlError("URL is required")

    for parser in (_parse_youtube, _parse_vimeo):
        info = parser(url)
        if info is not None:
            return info

    raise UnsupportedVideoUrlError(f"Unsupported video platform: {url}")


def extract_youtube_id(url: str) -> Optional[str]:
    """Return the YouTube video id in url, or None."""
    if not url:
        return None
    info = _parse_youtube(url)
    return info.video_id if info else None


def is_supported(url: str) -> bool:
    try:
        parse_video_url(url)
    except UnsupportedVideoUrlError:
        return False
    return True


def detect_platform(url: str) -> str:
    """Return "youtube", "vimeo" or "unknown"."""
    try:
        return parse_video_url(url).platform
    except UnsupportedVideoUrlError:
        return UNKNOWN
