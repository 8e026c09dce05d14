"""
Task comment API routes.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, status

from api.dependencies import CurrentUser, get_comment_service
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.comment import (
    CommentCreate,
    CommentDeleteResponse,
    CommentResponse,
    CommentUpdate,
)
from services.comments import CommentService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(get_rate_limit("comment_create"))
async def create_comment(
    request: Request,
    body: CommentCreate,
    current_user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
):
    """
    Post a comment on a task, or reply to an existing comment.

    A reply's parent must belong to the same task.
    """
    return await service.create_comment(
        task_id=body.task_id,
        user_id=current_user.id,
        content=body.content,
        parent_id=body.parent_id,
    )


@router.get("/task/{task_id}", response_model=List[CommentResponse])
async def list_task_comments(
    task_id: str,
    current_user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
):
    """
    Threaded comments of a task, oldest first at every level.

    Returns an empty list when the task does not exist.
    """
    return await service.list_comments(task_id)


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: str,
    current_user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
):
    """Get a single comment (without replies)."""
    return await service.get_comment(comment_id)


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    body: CommentUpdate,
    current_user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
):
    """Edit a comment. Only its author can edit it."""
    return await service.update_comment(comment_id, current_user.id, body.content)


@router.delete("/{comment_id}", response_model=CommentDeleteResponse)
async def delete_comment(
    comment_id: str,
    current_user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
):
    """
    Delete a comment. Only its author can delete it.

    A comment that has replies is kept with its text hidden so the thread
    stays intact.
    """
    soft_deleted = await service.delete_comment(comment_id, current_user.id)
    return CommentDeleteResponse(
        message="Comment deleted successfully",
        soft_deleted=soft_deleted,
    )
