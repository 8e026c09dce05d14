# Domain Entities
# Pure business objects with no external dependencies
from .comment import Comment, normalize_content
from .invitation import InvitationStatus, ProjectInvitation, generate_invitation_token
from .project import Project, ProjectMember, ProjectMemberRole
from .task import Task, TaskStatus
from .user import User

__all__ = [
    "User",
    "Project",
    "ProjectMember",
    "ProjectMemberRole",
    "Task",
    "TaskStatus",
    "Comment",
    "normalize_content",
    "ProjectInvitation",
    "InvitationStatus",
    "generate_invitation_token",
]
