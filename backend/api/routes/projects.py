"""
Project API routes.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from api.dependencies import CurrentUser, get_project_service
from api.schemas.project import ProjectCreate, ProjectMemberResponse, ProjectResponse
from api.schemas.task import TaskCreate, TaskResponse
from services.projects import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    current_user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
):
    """Create a project. The creator becomes its owner."""
    return await service.create_project(current_user.id, body.name, body.description)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    current_user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
):
    """Projects the current user owns or belongs to."""
    return await service.list_projects(current_user.id)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    current_user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
):
    return await service.get_project(project_id, current_user.id)


@router.get("/{project_id}/members", response_model=List[ProjectMemberResponse])
async def list_project_members(
    project_id: str,
    current_user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
):
    return await service.list_members(project_id, current_user.id)


# =============================================================================
# Project Tasks
# =============================================================================


@router.post(
    "/{project_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    project_id: str,
    body: TaskCreate,
    current_user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
):
    """Add a task to a project. Viewers cannot create tasks."""
    return await service.create_task(project_id, current_user.id, body.title, body.description)


@router.get("/{project_id}/tasks", response_model=List[TaskResponse])
async def list_project_tasks(
    project_id: str,
    current_user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
):
    return await service.list_tasks(project_id, current_user.id)
