"""Repository interfaces for data access."""

from abc import ABC, abstractmethod
from datetime import datetime

from ..domain.comment import Comment
from ..domain.invitation import InvitationStatus, ProjectInvitation
from ..domain.project import Project, ProjectMember, ProjectMemberRole
from ..domain.task import Task
from ..domain.user import User


class UnitOfWork(ABC):
    """Commit boundary shared by the repositories of one request."""

    @abstractmethod
    async def commit(self) -> None:
        """Persist all pending changes."""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Discard all pending changes."""
        ...


class UserRepository(ABC):
    """Abstract repository for User entities."""

    @abstractmethod
    async def add(self, user: User) -> User:
        """Persist a new user."""
        ...

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:
        """Get user by ID."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        ...


class TaskRepository(ABC):
    """Abstract repository for Task entities."""

    @abstractmethod
    async def add(self, task: Task) -> Task:
        """Persist a new task."""
        ...

    @abstractmethod
    async def get_by_id(self, task_id: str) -> Task | None:
        """Get task by ID."""
        ...

    @abstractmethod
    async def list_by_project(self, project_id: str) -> list[Task]:
        """Tasks of a project, oldest first."""
        ...


class ProjectRepository(ABC):
    """Abstract repository for projects and their memberships."""

    @abstractmethod
    async def add(self, project: Project) -> Project:
        """Persist a new project."""
        ...

    @abstractmethod
    async def get_by_id(self, project_id: str) -> Project | None:
        """Get project by ID."""
        ...

    @abstractmethod
    async def list_for_user(self, user_id: str) -> list[Project]:
        """Projects the user owns or is a member of, newest first."""
        ...

    @abstractmethod
    async def list_members(self, project_id: str) -> list[ProjectMember]:
        """Memberships of a project, in join order."""
        ...

    @abstractmethod
    async def get_member(self, project_id: str, user_id: str) -> ProjectMember | None:
        """Get the membership of a user in a project, if any."""
        ...

    @abstractmethod
    async def add_member(
        self,
        project_id: str,
        user_id: str,
        role: ProjectMemberRole,
        invited_by: str | None = None,
    ) -> ProjectMember:
        """Enroll a user in a project."""
        ...


class CommentRepository(ABC):
    """Abstract repository for Comment entities."""

    @abstractmethod
    async def add(self, comment: Comment) -> Comment:
        """Persist a new comment."""
        ...

    @abstractmethod
    async def get_by_id(self, comment_id: str) -> Comment | None:
        """Get comment by ID."""
        ...

    @abstractmethod
    async def get_in_task(self, comment_id: str, task_id: str) -> Comment | None:
        """Get a comment only if it belongs to the given task."""
        ...

    @abstractmethod
    async def list_by_task(self, task_id: str) -> list[Comment]:
        """All comments of a task (any depth), oldest first."""
        ...

    @abstractmethod
    async def count_replies(self, comment_id: str) -> int:
        """Number of direct replies to a comment."""
        ...

    @abstractmethod
    async def update(self, comment: Comment) -> Comment:
        """Write back content / deletion flag of an existing comment."""
        ...

    @abstractmethod
    async def delete(self, comment_id: str) -> None:
        """Remove a comment row."""
        ...


class InvitationRepository(ABC):
    """Abstract repository for ProjectInvitation entities."""

    @abstractmethod
    async def add(self, invitation: ProjectInvitation) -> ProjectInvitation:
        """Persist a new invitation."""
        ...

    @abstractmethod
    async def get_by_id(self, invitation_id: str) -> ProjectInvitation | None:
        """Get invitation by ID."""
        ...

    @abstractmethod
    async def get_by_token(self, token: str) -> ProjectInvitation | None:
        """Get invitation by its token."""
        ...

    @abstractmethod
    async def find_pending(
        self,
        project_id: str,
        invitee_email: str | None = None,
        invitee_id: str | None = None,
    ) -> list[ProjectInvitation]:
        """PENDING invitations of a project for an email or a user id, expired or not."""
        ...

    @abstractmethod
    async def list_by_project(
        self, project_id: str, status: InvitationStatus | None = None
    ) -> list[ProjectInvitation]:
        """Invitations of a project, newest first."""
        ...

    @abstractmethod
    async def list_for_invitee(
        self, user_id: str, email: str, status: InvitationStatus | None = None
    ) -> list[ProjectInvitation]:
        """Invitations addressed to a user id or email, newest first."""
        ...

    @abstractmethod
    async def update(self, invitation: ProjectInvitation) -> ProjectInvitation:
        """Write back status / response time of an existing invitation."""
        ...

    @abstractmethod
    async def delete(self, invitation_id: str) -> None:
        """Remove an invitation row."""
        ...

    @abstractmethod
    async def expire_pending_before(self, now: datetime) -> int:
        """Mark PENDING invitations with expires_at < now as EXPIRED."""
        ...

    @abstractmethod
    async def delete_resolved_before(self, cutoff: datetime) -> int:
        """Delete non-pending invitations last updated before cutoff."""
        ...
