"""
SQLAlchemy database models.
"""

from .base import Base, TimestampMixin
from .project import Project, ProjectInvitation, ProjectMember
from .task import Comment, Task
from .user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Project",
    "ProjectMember",
    "ProjectInvitation",
    "Task",
    "Comment",
]
