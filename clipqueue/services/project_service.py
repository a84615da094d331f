"""
Project service for Supabase-backed project storage.

This module handles:
- Default project naming ("Untitled Project(N)")
- Creating and updating projects together with their segments and queue
- Loading a project with its ordered segments and queue items
- Converting database rows (snake_case) to client payloads (camelCase)

Every function takes the Supabase client explicitly so routes can inject it
and tests can replace it.
"""

import re
import uuid
from typing import Any, Dict, List, Optional

from supabase import Client

from clipqueue.errors import ApiError
from clipqueue.models.schemas import (
    ProjectCreateRequest,
    ProjectUpdateRequest,
    QueueItemPayload,
    SegmentPayload,
)

PROJECTS_TABLE = "projects"
SEGMENTS_TABLE = "segments"
QUEUE_TABLE = "queue_items"

DEFAULT_TITLE_PREFIX = "Untitled Project"
DEFAULT_TITLE_RE = re.compile(r"^Untitled Project\((\d+)\)$")


def generate_id() -> str:
    return uuid.uuid4().hex


# =============================================================================
# Row <-> payload conversion
# =============================================================================

def segment_rows(segments: List[SegmentPayload], project_id: str, owner_id: str) -> List[Dict[str, Any]]:
    """Build segment rows for insert; order falls back to list position."""
    return [
        {
            "id": segment.id or generate_id(),
            "project_id": project_id,
            "title": segment.title,
            "description": segment.description or None,
            "video_id": segment.video_id,
            "video_title": segment.video_title or None,
            "start_time": segment.start_time,
            "end_time": segment.end_time,
            "order_index": segment.order_index or index,
            "owner_id": owner_id,
        }
        for index, segment in enumerate(segments)
    ]


def queue_rows(queue: List[QueueItemPayload], project_id: str) -> List[Dict[str, Any]]:
    return [
        {
            "project_id": project_id,
            "item_type": item.type,
            "segment_id": item.segment.id if item.segment else None,
            "description_text": item.description or None,
            "order_index": item.order_index,
        }
        for item in queue
    ]


def format_segment(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "title": row.get("title"),
        "description": row.get("description") or "",
        "videoId": row.get("video_id"),
        "videoTitle": row.get("video_title"),
        "startTime": row.get("start_time"),
        "endTime": row.get("end_time"),
        "orderIndex": row.get("order_index"),
    }


def format_queue_item(row: Dict[str, Any], segments_by_id: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    segment = segments_by_id.get(row.get("segment_id")) if row.get("segment_id") else None
    item = {
        "id": str(row["id"]),
        "type": row.get("item_type"),
        "description": row.get("description_text") or "",
        "orderIndex": row.get("order_index"),
    }
    if segment is not None:
        item["segment"] = format_segment(segment)
    return item


def format_project(project: Dict[str, Any], segments: List[Dict[str, Any]], queue: List[Dict[str, Any]]) -> Dict[str, Any]:
    segments_by_id = {row["id"]: row for row in segments}
    return {
        "id": project["id"],
        "title": project.get("title"),
        "description": project.get("description"),
        "visibility": project.get("visibility"),
        "owner_id": project.get("owner_id"),
        "segments": [format_segment(row) for row in segments],
        "queue": [format_queue_item(row, segments_by_id) for row in queue],
        "createdAt": project.get("created_at"),
        "updatedAt": project.get("updated_at"),
    }


# =============================================================================
# Queries
# =============================================================================

def generate_default_project_name(supabase: Client, owner_id: str, logger) -> str:
    """
    Next free "Untitled Project(N)" title for owner_id.

    A failed lookup is logged and falls back to "Untitled Project(1)".
    """
    try:
        result = (
            supabase.table(PROJECTS_TABLE)
            .select("title")
            .eq("owner_id", owner_id)
            .ilike("title", f"{DEFAULT_TITLE_PREFIX}%")
            .order("created_at", desc=True)
            .execute()
        )
    except Exception as e:
        logger.error(f"Project count lookup failed: {str(e)}")
        return f"{DEFAULT_TITLE_PREFIX}(1)"

    numbers = []
    for project in result.data or []:
        match = DEFAULT_TITLE_RE.match(project.get("title") or "")
        if match:
            numbers.append(int(match.group(1)))

    next_number = max(numbers) + 1 if numbers else 1
    return f"{DEFAULT_TITLE_PREFIX}({next_number})"


def _insert_children(supabase: Client, project_id: str, owner_id: str,
                     segments: List[SegmentPayload], queue: List[QueueItemPayload], logger) -> None:
    # Child rows are best effort: failures are logged, the project save still succeeds.
    if segments:
        rows = segment_rows(segments, project_id, owner_id)
        try:
            supabase.table(SEGMENTS_TABLE).insert(rows).execute()
            logger.info(f"Saved {len(rows)} segments")
        except Exception as e:
            logger.error(f"Segment save failed: {str(e)}")

    if queue:
        rows = queue_rows(queue, project_id)
        try:
            supabase.table(QUEUE_TABLE).insert(rows).execute()
            logger.info(f"Saved {len(rows)} queue items")
        except Exception as e:
            logger.error(f"Queue save failed: {str(e)}")


def create_project(supabase: Client, owner_id: str, request: ProjectCreateRequest, logger) -> Dict[str, Any]:
    """Insert a public project owned by owner_id, then its segments and queue."""
    project_id = generate_id()
    title = request.title or generate_default_project_name(supabase, owner_id, logger)

    try:
        result = supabase.table(PROJECTS_TABLE).insert({
            "id": project_id,
            "title": title,
            "description": request.description or None,
            "visibility": "public",
            "owner_id": owner_id,
        }).execute()
    except Exception as e:
        raise ApiError(500, "Failed to create project", str(e))

    if not result.data:
        raise ApiError(500, "Failed to create project", "Insert returned no rows")

    project = result.data[0]
    logger.info(f"Project created: {project['id']}")

    _insert_children(supabase, project_id, owner_id, request.segments, request.queue, logger)
    return project


def update_project(supabase: Client, owner_id: str, request: ProjectUpdateRequest, logger) -> Dict[str, Any]:
    """
    Update an owned project's metadata and replace its segments and queue.

    Raises:
        ApiError 400 if projectId is missing
        ApiError 404 if the project does not exist or is not owned by owner_id
    """
    project_id = request.project_id
    if not project_id:
        raise ApiError(400, "Project ID is required")

    changes: Dict[str, Any] = {"description": request.description or None}
    if request.title is not None:
        changes["title"] = request.title

    try:
        result = (
            supabase.table(PROJECTS_TABLE)
            .update(changes)
            .eq("id", project_id)
            .eq("owner_id", owner_id)
            .execute()
        )
    except Exception as e:
        raise ApiError(500, "Failed to update project", str(e))

    if not result.data:
        raise ApiError(404, "Project not found or access denied")

    supabase.table(SEGMENTS_TABLE).delete().eq("project_id", project_id).eq("owner_id", owner_id).execute()
    supabase.table(QUEUE_TABLE).delete().eq("project_id", project_id).execute()

    _insert_children(supabase, project_id, owner_id, request.segments, request.queue, logger)
    return result.data[0]


def get_project(supabase: Client, project_id: str, logger) -> Dict[str, Any]:
    """
    Load a project with its segments and queue, both ordered by order_index.

    Raises:
        ApiError 404 if the project does not exist
    """
    result = supabase.table(PROJECTS_TABLE).select("*").eq("id", project_id).execute()
    if not result.data:
        raise ApiError(404, "Project not found")
    project = result.data[0]

    segments: List[Dict[str, Any]] = []
    try:
        segments = (
            supabase.table(SEGMENTS_TABLE).select("*").eq("project_id", project_id)
            .order("order_index").execute().data or []
        )
    except Exception as e:
        logger.error(f"Segment lookup failed: {str(e)}")

    queue: List[Dict[str, Any]] = []
    try:
        queue = (
            supabase.table(QUEUE_TABLE).select("*").eq("project_id", project_id)
            .order("order_index").execute().data or []
        )
    except Exception as e:
        logger.error(f"Queue lookup failed: {str(e)}")

    formatted = format_project(project, segments, queue)
    logger.info(f"Loaded project {project_id}: {len(formatted['segments'])} segments, {len(formatted['queue'])} queue items")
    return formatted


def list_user_projects(supabase: Client, owner_id: str) -> List[Dict[str, Any]]:
    """Projects owned by owner_id, most recently updated first."""
    result = (
        supabase.table(PROJECTS_TABLE)
        .select("*")
        .eq("owner_id", owner_id)
        .order("updated_at", desc=True)
        .execute()
    )
    return result.data or []


def update_visibility(supabase: Client, owner_id: str, project_id: str, visibility: str) -> Dict[str, Any]:
    result = (
        supabase.table(PROJECTS_TABLE)
        .update({"visibility": visibility})
        .eq("id", project_id)
        .eq("owner_id", owner_id)
        .execute()
    )
    if not result.data:
        raise ApiError(404, "Project not found or access denied")
    return result.data[0]


def find_owned_project(supabase: Client, owner_id: str, project_id: str) -> Optional[Dict[str, Any]]:
    result = (
        supabase.table(PROJECTS_TABLE)
        .select("id")
        .eq("id", project_id)
        .eq("owner_id", owner_id)
        .execute()
    )
    return result.data[0] if result.data else None
