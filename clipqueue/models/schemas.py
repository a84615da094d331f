"""
Pydantic models for request validation.

Clients speak camelCase (videoId, startTime, orderIndex); attributes are
snake_case and map onto the database columns in the service layer.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Literal, Optional


Visibility = Literal["public", "private", "link_only"]
QueueItemType = Literal["segment", "description"]


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def _check_range(start_time: Optional[float], end_time: Optional[float]) -> None:
    if start_time is not None and end_time is not None and start_time >= end_time:
        raise ValueError("startTime must be before endTime")


class SegmentPayload(CamelModel):
    """Segment embedded in a project save."""
    id: Optional[str] = None
    title: str = Field(..., description="Segment title")
    description: Optional[str] = None
    video_id: str = Field(..., alias="videoId", description="YouTube video id")
    video_title: Optional[str] = Field(None, alias="videoTitle")
    start_time: float = Field(..., alias="startTime", ge=0, description="Start offset in seconds")
    end_time: float = Field(..., alias="endTime", ge=0, description="End offset in seconds")
    order_index: Optional[int] = Field(None, alias="orderIndex")


class SegmentRef(CamelModel):
    id: str


class QueueItemPayload(CamelModel):
    """Queue entry embedded in a project save: a segment reference or a description card."""
    type: QueueItemType
    segment: Optional[SegmentRef] = None
    description: Optional[str] = None
    order_index: int = Field(0, alias="orderIndex")


class ProjectCreateRequest(CamelModel):
    title: Optional[str] = Field(None, description="Defaults to the next 'Untitled Project(N)'")
    description: Optional[str] = None
    segments: List[SegmentPayload] = Field(default_factory=list)
    queue: List[QueueItemPayload] = Field(default_factory=list)


class ProjectUpdateRequest(CamelModel):
    project_id: Optional[str] = Field(None, alias="projectId")
    title: Optional[str] = None
    description: Optional[str] = None
    segments: List[SegmentPayload] = Field(default_factory=list)
    queue: List[QueueItemPayload] = Field(default_factory=list)


class VisibilityUpdateRequest(CamelModel):
    visibility: Visibility


class SegmentCreateRequest(CamelModel):
    id: Optional[str] = None
    project_id: Optional[str] = Field(None, alias="projectId")
    title: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    video_id: str = Field(..., alias="videoId")
    video_title: Optional[str] = Field(None, alias="videoTitle")
    start_time: float = Field(..., alias="startTime", ge=0)
    end_time: float = Field(..., alias="endTime", ge=0)
    order_index: Optional[int] = Field(None, alias="orderIndex")

    @model_validator(mode="after")
    def check_time_range(self):
        _check_range(self.start_time, self.end_time)
        return self


class SegmentUpdateRequest(CamelModel):
    id: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    start_time: Optional[float] = Field(None, alias="startTime", ge=0)
    end_time: Optional[float] = Field(None, alias="endTime", ge=0)

    @model_validator(mode="after")
    def check_time_range(self):
        _check_range(self.start_time, self.end_time)
        return self


class QueueItemCreateRequest(CamelModel):
    project_id: Optional[str] = Field(None, alias="projectId")
    type: QueueItemType
    segment_id: Optional[str] = Field(None, alias="segmentId")
    description: Optional[str] = None
    order_index: int = Field(0, alias="orderIndex")
