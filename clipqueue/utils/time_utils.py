"""
Time utility functions for parsing and formatting segment times.

This module provides utilities for:
- Parsing ISO-8601 durations returned by the YouTube Data API
- Converting seconds to "M:SS" / "H:MM:SS" display strings and back
- Validating segment time ranges against a video's length
- Formatting view counts for search results
"""

import math
import re
from typing import Optional, Union

ISO8601_DURATION_RE = re.compile(r'PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?')

Number = Union[int, float]


def parse_iso8601_duration(duration: str) -> int:
    """
    Convert an ISO-8601 video duration to whole seconds.

    Examples:
        "PT3M33S" -> 213
        "PT1H2M3S" -> 3723
        "P1D" -> 0 (day components are not used by YouTube video durations)
    """
    if not duration:
        return 0
    match = ISO8601_DURATION_RE.search(duration)
    if not match:
        return 0

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def format_iso8601_duration(duration: str) -> str:
    """Convert an ISO-8601 duration straight to "M:SS" / "H:MM:SS"."""
    return seconds_to_time(parse_iso8601_duration(duration))


def seconds_to_time(seconds: Number) -> str:
    """Convert seconds to MM:SS or H:MM:SS format (fractions are truncated)."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_duration(seconds: Optional[Number]) -> str:
    """Like seconds_to_time but renders missing, negative or non-finite input as "0:00"."""
    if not seconds or seconds < 0 or not math.isfinite(seconds):
        return "0:00"
    return seconds_to_time(seconds)


def time_to_seconds(time_string: str) -> int:
    """
    Convert "MM:SS" or "HH:MM:SS" to seconds.

    Raises:
        ValueError: if the string is not in one of the two formats.
    """
    parts = time_string.strip().split(':')
    try:
        numbers = [int(part) for part in parts]
    except ValueError:
        raise ValueError(f"Invalid time format: {time_string!r}. Use MM:SS or HH:MM:SS")

    if len(numbers) == 2:
        minutes, seconds = numbers
        return minutes * 60 + seconds
    if len(numbers) == 3:
        hours, minutes, seconds = numbers
        return hours * 3600 + minutes * 60 + seconds

    raise ValueError(f"Invalid time format: {time_string!r}. Use MM:SS or HH:MM:SS")


def parse_duration(time_string: Optional[str]) -> int:
    """Lenient variant of time_to_seconds: anything unparseable is 0."""
    if not time_string or not isinstance(time_string, str):
        return 0
    try:
        return time_to_seconds(time_string)
    except ValueError:
        return 0


def validate_time_range(start_time: str, end_time: str, video_duration: Optional[Number] = None) -> Optional[str]:
    """
    Check a segment's start/end against each other and the video's length.

    Returns:
        None when the range is usable, otherwise a human-readable message.
    """
    try:
        start_seconds = time_to_seconds(start_time)
        end_seconds = time_to_seconds(end_time)
    except ValueError as e:
        return str(e)

    if start_seconds < 0 or end_seconds < 0:
        return "Times must not be negative."

    if video_duration and (start_seconds > video_duration or end_seconds > video_duration):
        return f"Times cannot exceed the video length ({seconds_to_time(video_duration)})."

    if start_seconds >= end_seconds:
        return "Start time must be before end time."

    return None


def format_view_count(view_count: Union[str, int]) -> str:
    """Render a view count as 1.5M / 12.3K / 999."""
    count = int(view_count)
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)
