"""
Segment and queue item persistence.

Segments carry an owner_id and every write filters on it, so a caller can
only touch their own rows. Queue items have no owner column; ownership is
checked through the project they belong to.
"""

from typing import Any, Dict

from supabase import Client

from clipqueue.errors import ApiError
from clipqueue.models.schemas import (
    QueueItemCreateRequest,
    SegmentCreateRequest,
    SegmentUpdateRequest,
)
from clipqueue.services.project_service import (
    QUEUE_TABLE,
    SEGMENTS_TABLE,
    find_owned_project,
    generate_id,
)


def create_segment(supabase: Client, owner_id: str, request: SegmentCreateRequest) -> Dict[str, Any]:
    row = {
        "id": request.id or generate_id(),
        "title": request.title,
        "description": request.description or None,
        "video_id": request.video_id,
        "video_title": request.video_title or None,
        "start_time": request.start_time,
        "end_time": request.end_time,
        "owner_id": owner_id,
    }
    if request.project_id:
        row["project_id"] = request.project_id
    if request.order_index is not None:
        row["order_index"] = request.order_index

    try:
        result = supabase.table(SEGMENTS_TABLE).insert(row).execute()
    except Exception as e:
        raise ApiError(500, "Failed to create segment", str(e))

    if not result.data:
        raise ApiError(500, "Failed to create segment", "Insert returned no rows")
    return result.data[0]


def update_segment(supabase: Client, owner_id: str, request: SegmentUpdateRequest) -> Dict[str, Any]:
    """
    Update the editable fields of an owned segment.

    Raises:
        ApiError 400 if the segment id is missing
        ApiError 404 if no segment with that id belongs to owner_id
    """
    if not request.id:
        raise ApiError(400, "Segment ID is required")

    changes: Dict[str, Any] = {"description": request.description or None}
    if request.title is not None:
        changes["title"] = request.title
    if request.start_time is not None:
        changes["start_time"] = request.start_time
    if request.end_time is not None:
        changes["end_time"] = request.end_time

    try:
        result = (
            supabase.table(SEGMENTS_TABLE)
            .update(changes)
            .eq("id", request.id)
            .eq("owner_id", owner_id)
            .execute()
        )
    except Exception as e:
        raise ApiError(500, "Failed to update segment", str(e))

    if not result.data:
        raise ApiError(404, "Segment not found or access denied")
    return result.data[0]


def delete_segment(supabase: Client, owner_id: str, segment_id: str) -> None:
    try:
        supabase.table(SEGMENTS_TABLE).delete().eq("id", segment_id).eq("owner_id", owner_id).execute()
    except Exception as e:
        raise ApiError(500, "Failed to delete segment", str(e))


def create_queue_item(supabase: Client, owner_id: str, request: QueueItemCreateRequest) -> Dict[str, Any]:
    """
    Append an item to a project's queue.

    Raises:
        ApiError 400 if projectId is missing
        ApiError 404 if the project is not owned by owner_id
    """
    if not request.project_id:
        raise ApiError(400, "Project ID is required")

    if find_owned_project(supabase, owner_id, request.project_id) is None:
        raise ApiError(404, "Project not found or access denied")

    row = {
        "project_id": request.project_id,
        "item_type": request.type,
        "segment_id": request.segment_id or None,
        "description_text": request.description or None,
        "order_index": request.order_index,
    }
    try:
        result = supabase.table(QUEUE_TABLE).insert(row).execute()
    except Exception as e:
        raise ApiError(500, "Failed to create queue item", str(e))

    if not result.data:
        raise ApiError(500, "Failed to create queue item", "Insert returned no rows")
    return result.data[0]


def delete_queue_item(supabase: Client, owner_id: str, queue_item_id: str) -> None:
    """
    Delete a queue item whose project belongs to owner_id.

    Raises:
        ApiError 404 if the item does not exist or its project is not owned
    """
    lookup = supabase.table(QUEUE_TABLE).select("project_id").eq("id", queue_item_id).execute()
    if not lookup.data or find_owned_project(supabase, owner_id, lookup.data[0]["project_id"]) is None:
        raise ApiError(404, "Queue item not found or access denied")

    try:
        supabase.table(QUEUE_TABLE).delete().eq("id", queue_item_id).execute()
    except Exception as e:
        raise ApiError(500, "Failed to delete queue item", str(e))
