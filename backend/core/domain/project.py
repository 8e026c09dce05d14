"""Project domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from ..timeutil import utcnow


class ProjectMemberRole(StrEnum):
    """Roles a user can hold inside a project."""

    OWNER = "owner"  # Full control
    ADMIN = "admin"  # Manage members and invitations
    MEMBER = "member"  # Create/edit tasks and comments
    VIEWER = "viewer"  # Read-only access


@dataclass
class Project:
    """Project domain entity."""

    name: str
    owner_id: str
    id: str = field(default_factory=lambda: str(uuid4()))
    description: str | None = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class ProjectMember:
    """Membership of a user in a project."""

    project_id: str
    user_id: str
    role: ProjectMemberRole = ProjectMemberRole.MEMBER
    invited_by: str | None = None
    joined_at: datetime = field(default_factory=utcnow)

    # Read-side profile fields, filled when listing members
    user_name: str | None = None
    user_email: str | None = None

    def __post_init__(self):
        if isinstance(self.role, str):
            self.role = ProjectMemberRole(self.role)

    @property
    def is_admin(self) -> bool:
        """Owners and admins may manage invitations."""
        return self.role in (ProjectMemberRole.OWNER, ProjectMemberRole.ADMIN)
