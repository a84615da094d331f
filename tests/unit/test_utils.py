"""
Unit tests for utility modules.

This module tests:
- clipqueue/utils/time_utils.py
- clipqueue/utils/platform_utils.py
"""

import math

import pytest
from clipqueue.utils.time_utils import (
    parse_iso8601_duration,
    format_iso8601_duration,
    seconds_to_time,
    format_duration,
    time_to_seconds,
    parse_duration,
    validate_time_range,
    format_view_count,
)
from clipqueue.utils.platform_utils import (
    is_youtube_url,
    parse_video_url,
    extract_youtube_id,
    is_supported,
    detect_platform,
    UnsupportedVideoUrlError,
)


class TestTimeUtils:
    """Test time parsing and formatting."""

    def test_parse_iso8601_duration(self):
        """Test ISO-8601 durations as returned by the YouTube API."""
        assert parse_iso8601_duration("PT3M33S") == 213
        assert parse_iso8601_duration("PT1H2M3S") == 3723
        assert parse_iso8601_duration("PT45S") == 45
        assert parse_iso8601_duration("PT2H") == 7200

    def test_parse_iso8601_duration_invalid(self):
        assert parse_iso8601_duration("") == 0
        assert parse_iso8601_duration(None) == 0
        assert parse_iso8601_duration("3 minutes") == 0

    def test_format_iso8601_duration(self):
        assert format_iso8601_duration("PT3M33S") == "3:33"
        assert format_iso8601_duration("PT1H2M3S") == "1:02:03"

    def test_seconds_to_time(self):
        """Test M:SS and H:MM:SS rendering."""
        assert seconds_to_time(0) == "0:00"
        assert seconds_to_time(5) == "0:05"
        assert seconds_to_time(90) == "1:30"
        assert seconds_to_time(3600) == "1:00:00"
        assert seconds_to_time(3723) == "1:02:03"
        assert seconds_to_time(90.9) == "1:30"

    def test_format_duration_edge_cases(self):
        assert format_duration(None) == "0:00"
        assert format_duration(0) == "0:00"
        assert format_duration(-5) == "0:00"
        assert format_duration(math.inf) == "0:00"
        assert format_duration(125) == "2:05"

    def test_time_to_seconds(self):
        assert time_to_seconds("1:30") == 90
        assert time_to_seconds("0:05:30") == 330
        assert time_to_seconds(" 2:00 ") == 120

    def test_time_to_seconds_invalid(self):
        for value in ["", "90", "1:2:3:4", "a:b"]:
            with pytest.raises(ValueError):
                time_to_seconds(value)

    def test_parse_duration_lenient(self):
        assert parse_duration("1:30") == 90
        assert parse_duration("nope") == 0
        assert parse_duration(None) == 0

    def test_validate_time_range(self):
        assert validate_time_range("0:10", "0:20") is None
        assert validate_time_range("0:20", "0:10") == "Start time must be before end time."
        assert validate_time_range("0:10", "0:10") == "Start time must be before end time."
        assert validate_time_range("0:10", "5:00", video_duration=120) == "Times cannot exceed the video length (2:00)."
        assert validate_time_range("x", "0:10") is not None

    def test_format_view_count(self):
        assert format_view_count("1500000") == "1.5M"
        assert format_view_count(12345) == "12.3K"
        assert format_view_count("999") == "999"


class TestPlatformUtils:
    """Test video URL parsing."""

    @pytest.mark.parametrize("url", [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://m.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://studio.youtube.com/video/dQw4w9WgXcQ/edit",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
    ])
    def test_parse_youtube_forms(self, url):
        info = parse_video_url(url)
        assert info.platform == "youtube"
        assert info.video_id == "dQw4w9WgXcQ"
        assert info.original_url == url
        assert info.embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ"
        assert info.thumbnail_url == "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"

    def test_parse_vimeo(self):
        for url in ["https://vimeo.com/123456789", "https://player.vimeo.com/video/123456789"]:
            info = parse_video_url(url)
            assert info.platform == "vimeo"
            assert info.video_id == "123456789"
            assert info.embed_url == "https://player.vimeo.com/video/123456789"
            assert info.thumbnail_url is None

    def test_parse_unsupported(self):
        with pytest.raises(UnsupportedVideoUrlError, match="Unsupported video platform"):
            parse_video_url("https://www.tiktok.com/@user/video/1234567890")

    def test_parse_empty(self):
        with pytest.raises(UnsupportedVideoUrlError, match="URL is required"):
            parse_video_url("")

    def test_to_dict_is_camel_case(self, youtube_url):
        data = parse_video_url(youtube_url).to_dict()
        assert data["videoId"] == "dQw4w9WgXcQ"
        assert data["embedUrl"].endswith("/embed/dQw4w9WgXcQ")

    def test_helpers(self, youtube_url, vimeo_url):
        assert extract_youtube_id(youtube_url) == "dQw4w9WgXcQ"
        assert extract_youtube_id(vimeo_url) is None
        assert extract_youtube_id("") is None
        assert is_supported(vimeo_url)
        assert not is_supported("https://example.com")
        assert detect_platform(youtube_url) == "youtube"
        assert detect_platform(vimeo_url) == "vimeo"
        assert detect_platform("https://example.com") == "unknown"

    def test_is_youtube_url(self):
        assert is_youtube_url("https://youtube.com/watch?v=abc")
        assert is_youtube_url("https://youtu.be/abc")
        assert is_youtube_url("https://www.youtube-nocookie.com/embed/abc")
        assert not is_youtube_url("https://vimeo.com/123")
