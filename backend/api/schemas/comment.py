"""
Task comment API schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for posting a comment or a reply."""

    task_id: str = Field(..., description="Task the comment belongs to")
    content: str = Field(..., min_length=1, description="Comment text")
    parent_id: Optional[str] = Field(
        None, description="Comment being replied to (must be on the same task)"
    )


class CommentUpdate(BaseModel):
    """Schema for editing a comment."""

    content: str = Field(..., min_length=1, description="New comment text")


class CommentResponse(BaseModel):
    """A comment with its nested replies."""

    id: str
    task_id: str
    user_id: str
    parent_id: Optional[str] = None
    content: str
    is_deleted: bool
    author_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    replies: List["CommentResponse"] = []

    model_config = ConfigDict(from_attributes=True)


class CommentDeleteResponse(BaseModel):
    message: str
    soft_deleted: bool
