"""
Task API routes.
"""

from fastapi import APIRouter, Depends

from api.dependencies import CurrentUser, get_project_service
from api.schemas.task import TaskResponse
from services.projects import ProjectService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    current_user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
):
    """Get a task. Only members of its project can see it."""
    return await service.get_task(task_id, current_user.id)
