"""
Segments router: create, update and delete the caller's segments.
"""

from fastapi import APIRouter, Body, Depends, HTTPException
from supabase import Client

from clipqueue.dependencies import AuthenticatedUser, get_current_user, get_db, required_query_id
from clipqueue.errors import ApiError
from clipqueue.models import SegmentCreateRequest, SegmentUpdateRequest
from clipqueue.services import segment_service
from clipqueue.utils.logging_utils import get_request_logger

router = APIRouter(prefix="/api", tags=["Segments"])


@router.post("/segments")
def create_segment(
    request: SegmentCreateRequest = Body(...),
    user: AuthenticatedUser = Depends(get_current_user),
    supabase: Client = Depends(get_db),
):
    logger = get_request_logger()
    logger.info(f"Creating segment for user {user.email or user.id}")
    try:
        segment = segment_service.create_segment(supabase, user.id, request)
        logger.info(f"Segment created: {segment.get('id')}")
        return {"success": True, "segment": segment}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Segment create failed: {str(e)}")
        raise ApiError(500, "Failed to create segment", str(e))


@router.put("/segments")
def update_segment(
    request: SegmentUpdateRequest = Body(...),
    user: AuthenticatedUser = Depends(get_current_user),
    supabase: Client = Depends(get_db),
):
    logger = get_request_logger()
    try:
        segment = segment_service.update_segment(supabase, user.id, request)
        logger.info(f"Segment updated: {request.id}")
        return {"success": True, "segment": segment}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Segment update failed: {str(e)}")
        raise ApiError(500, "Failed to update segment", str(e))


@router.delete("/segments")
def delete_segment(
    segment_id: str = Depends(required_query_id("Segment ID is required")),
    user: AuthenticatedUser = Depends(get_current_user),
    supabase: Client = Depends(get_db),
):
    logger = get_request_logger()
    try:
        segment_service.delete_segment(supabase, user.id, segment_id)
        logger.info(f"Segment deleted: {segment_id}")
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Segment delete failed: {str(e)}")
        raise ApiError(500, "Failed to delete segment", str(e))
