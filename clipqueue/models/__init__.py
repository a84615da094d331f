"""
Models package for API request validation.

This package contains Pydantic models used throughout the application
for validating API requests.
"""

from .schemas import (
    SegmentPayload,
    SegmentRef,
    QueueItemPayload,
    ProjectCreateRequest,
    ProjectUpdateRequest,
    VisibilityUpdateRequest,
    SegmentCreateRequest,
    SegmentUpdateRequest,
    QueueItemCreateRequest,
)

__all__ = [
    "SegmentPayload",
    "SegmentRef",
    "QueueItemPayload",
    "ProjectCreateRequest",
    "ProjectUpdateRequest",
    "VisibilityUpdateRequest",
    "SegmentCreateRequest",
    "SegmentUpdateRequest",
    "QueueItemCreateRequest",
]
