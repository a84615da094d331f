"""
Projects router for saving and loading segment projects.

This module provides endpoints for:
- Creating a project together with its segments and queue
- Replacing an owned project's contents
- Loading a project by id (segments and queue ordered, camelCase)
- Changing visibility and listing the caller's projects
"""

from fastapi import APIRouter, Body, Depends, HTTPException, Path
from supabase import Client

from clipqueue.dependencies import AuthenticatedUser, get_current_user, get_db
from clipqueue.errors import ApiError
from clipqueue.models import ProjectCreateRequest, ProjectUpdateRequest, VisibilityUpdateRequest
from clipqueue.services import project_service
from clipqueue.utils.logging_utils import get_request_logger

router = APIRouter(prefix="/api", tags=["Projects"])


@router.post("/projects")
def create_project(
    request: ProjectCreateRequest = Body(...),
    user: AuthenticatedUser = Depends(get_current_user),
    supabase: Client = Depends(get_db),
):
    """
    Create a project owned by the caller.

    The title defaults to the caller's next "Untitled Project(N)". Segments
    and queue items in the body are inserted after the project; a failure
    there is logged but does not fail the request.
    """
    logger = get_request_logger()
    logger.info(f"Creating project for user {user.id} ({len(request.segments)} segments, {len(request.queue)} queue items)")
    try:
        project = project_service.create_project(supabase, user.id, request, logger)
        return {"success": True, "projectId": project["id"], "project": project}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Project save failed: {str(e)}")
        raise ApiError(500, "Failed to save project", str(e))


@router.put("/projects")
def update_project(
    request: ProjectUpdateRequest = Body(...),
    user: AuthenticatedUser = Depends(get_current_user),
    supabase: Client = Depends(get_db),
):
    """Update an owned project and replace its segments and queue."""
    logger = get_request_logger()
    logger.info(f"Updating project {request.project_id} for user {user.id}")
    try:
        project = project_service.update_project(supabase, user.id, request, logger)
        return {"success": True, "project": project}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Project update failed: {str(e)}")
        raise ApiError(500, "Failed to update project", str(e))


@router.get("/projects/{project_id}")
def get_project(
    project_id: str = Path(..., description="Project id"),
    supabase: Client = Depends(get_db),
):
    """Load a project with its segments and queue. No authentication required."""
    logger = get_request_logger()
    try:
        return {"success": True, "project": project_service.get_project(supabase, project_id, logger)}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Project load failed: {str(e)}")
        raise ApiError(500, "Failed to load project", str(e))


@router.put("/projects/{project_id}/visibility")
def update_visibility(
    project_id: str = Path(...),
    request: VisibilityUpdateRequest = Body(...),
    user: AuthenticatedUser = Depends(get_current_user),
    supabase: Client = Depends(get_db),
):
    logger = get_request_logger()
    logger.info(f"Setting visibility of {project_id} to {request.visibility}")
    try:
        project = project_service.update_visibility(supabase, user.id, project_id, request.visibility)
        return {"success": True, "project": project}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Visibility update failed: {str(e)}")
        raise ApiError(500, "Failed to update visibility", str(e))


@router.get("/user/projects")
def list_user_projects(
    user: AuthenticatedUser = Depends(get_current_user),
    supabase: Client = Depends(get_db),
):
    """The caller's projects, most recently updated first."""
    logger = get_request_logger()
    try:
        projects = project_service.list_user_projects(supabase, user.id)
        logger.info(f"Found {len(projects)} projects for user {user.id}")
        return {"success": True, "projects": projects}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Project list failed: {str(e)}")
        raise ApiError(500, "Failed to fetch projects", str(e))
