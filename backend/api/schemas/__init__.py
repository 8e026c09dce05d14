"""
API request and response schemas.
"""

from .comment import (
    CommentCreate,
    CommentDeleteResponse,
    CommentResponse,
    CommentUpdate,
)
from .project import (
    ProjectCreate,
    ProjectInvitationCreate,
    ProjectInvitationCreateResponse,
    ProjectInvitationListResponse,
    ProjectInvitationPublicResponse,
    ProjectInvitationResponse,
    ProjectMemberResponse,
    ProjectResponse,
)
from .task import TaskCreate, TaskResponse
from .user import UserResponse

__all__ = [
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "CommentDeleteResponse",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectMemberResponse",
    "ProjectInvitationCreate",
    "ProjectInvitationResponse",
    "ProjectInvitationCreateResponse",
    "ProjectInvitationPublicResponse",
    "ProjectInvitationListResponse",
    "TaskCreate",
    "TaskResponse",
    "UserResponse",
]
