"""
Queue router: add items to and remove items from a project's queue.
"""

from fastapi import APIRouter, Body, Depends, HTTPException
from supabase import Client

from clipqueue.dependencies import AuthenticatedUser, get_current_user, get_db, required_query_id
from clipqueue.errors import ApiError
from clipqueue.models import QueueItemCreateRequest
from clipqueue.services import segment_service
from clipqueue.utils.logging_utils import get_request_logger

router = APIRouter(prefix="/api", tags=["Queue"])


@router.post("/queue")
def create_queue_item(
    request: QueueItemCreateRequest = Body(...),
    user: AuthenticatedUser = Depends(get_current_user),
    supabase: Client = Depends(get_db),
):
    logger = get_request_logger()
    logger.info(f"Adding {request.type} item to project {request.project_id}")
    try:
        queue_item = segment_service.create_queue_item(supabase, user.id, request)
        return {"success": True, "queueItem": queue_item}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Queue item create failed: {str(e)}")
        raise ApiError(500, "Failed to create queue item", str(e))


@router.delete("/queue")
def delete_queue_item(
    queue_item_id: str = Depends(required_query_id("Queue item ID is required")),
    user: AuthenticatedUser = Depends(get_current_user),
    supabase: Client = Depends(get_db),
):
    logger = get_request_logger()
    try:
        segment_service.delete_queue_item(supabase, user.id, queue_item_id)
        logger.info(f"Queue item deleted: {queue_item_id}")
        return {"success": True}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Queue item delete failed: {str(e)}")
        raise ApiError(500, "Failed to delete queue item", str(e))
