"""
Service layer for business logic.
"""

from services.comments import CommentService, build_comment_tree
from services.project_invitations import CreatedInvitation, InvitationService
from services.projects import ProjectService

__all__ = [
    "CommentService",
    "build_comment_tree",
    "InvitationService",
    "CreatedInvitation",
    "ProjectService",
]
