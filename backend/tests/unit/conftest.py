"""
In-memory repository fakes for service unit tests.
"""

from copy import deepcopy
from datetime import datetime

import pytest

from core.domain import (
    Comment,
    InvitationStatus,
    Project,
    ProjectInvitation,
    ProjectMember,
    ProjectMemberRole,
    Task,
    User,
)
from core.interfaces import (
    CommentRepository,
    EmailService,
    InvitationRepository,
    ProjectRepository,
    TaskRepository,
    UnitOfWork,
    UserRepository,
)
from services.comments import CommentService
from services.project_invitations import InvitationService
from services.projects import ProjectService


class FakeUnitOfWork(UnitOfWork):
    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


class FakeUserRepository(UserRepository):
    def __init__(self):
        self.items: dict[str, User] = {}

    async def add(self, user: User) -> User:
        self.items[user.id] = user
        return user

    async def get_by_id(self, user_id: str) -> User | None:
        return self.items.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        for user in self.items.values():
            if user.email == email.lower():
                return user
        return None


class FakeTaskRepository(TaskRepository):
    def __init__(self):
        self.items: dict[str, Task] = {}

    async def add(self, task: Task) -> Task:
        self.items[task.id] = task
        return task

    async def get_by_id(self, task_id: str) -> Task | None:
        return self.items.get(task_id)

    async def list_by_project(self, project_id: str) -> list[Task]:
        return [t for t in self.items.values() if t.project_id == project_id]


class FakeProjectRepository(ProjectRepository):
    def __init__(self):
        self.items: dict[str, Project] = {}
        self.members: list[ProjectMember] = []

    async def add(self, project: Project) -> Project:
        self.items[project.id] = project
        return project

    async def get_by_id(self, project_id: str) -> Project | None:
        return self.items.get(project_id)

    async def list_for_user(self, user_id: str) -> list[Project]:
        member_of = {m.project_id for m in self.members if m.user_id == user_id}
        return [
            p for p in self.items.values() if p.owner_id == user_id or p.id in member_of
        ]

    async def list_members(self, project_id: str) -> list[ProjectMember]:
        return [m for m in self.members if m.project_id == project_id]

    async def get_member(self, project_id: str, user_id: str) -> ProjectMember | None:
        for member in self.members:
            if member.project_id == project_id and member.user_id == user_id:
                return member
        return None

    async def add_member(self, project_id, user_id, role, invited_by=None) -> ProjectMember:
        member = ProjectMember(
            project_id=project_id, user_id=user_id, role=role, invited_by=invited_by
        )
        self.members.append(member)
        return member


class FakeCommentRepository(CommentRepository):
    """Stores copies so services only see changes they write back."""

    def __init__(self):
        self.items: dict[str, Comment] = {}

    async def add(self, comment: Comment) -> Comment:
        self.items[comment.id] = deepcopy(comment)
        return deepcopy(comment)

    async def get_by_id(self, comment_id: str) -> Comment | None:
        comment = self.items.get(comment_id)
        return deepcopy(comment) if comment else None

    async def get_in_task(self, comment_id: str, task_id: str) -> Comment | None:
        comment = self.items.get(comment_id)
        if comment is None or comment.task_id != task_id:
            return None
        return deepcopy(comment)

    async def list_by_task(self, task_id: str) -> list[Comment]:
        found = [deepcopy(c) for c in self.items.values() if c.task_id == task_id]
        return sorted(found, key=lambda c: c.created_at)

    async def count_replies(self, comment_id: str) -> int:
        return sum(1 for c in self.items.values() if c.parent_id == comment_id)

    async def update(self, comment: Comment) -> Comment:
        self.items[comment.id] = deepcopy(comment)
        return deepcopy(comment)

    async def delete(self, comment_id: str) -> None:
        self.items.pop(comment_id, None)


class FakeInvitationRepository(InvitationRepository):
    def __init__(self):
        self.items: dict[str, ProjectInvitation] = {}

    def _newest_first(self, invitations):
        return sorted(invitations, key=lambda i: i.created_at, reverse=True)

    async def add(self, invitation: ProjectInvitation) -> ProjectInvitation:
        self.items[invitation.id] = deepcopy(invitation)
        return deepcopy(invitation)

    async def get_by_id(self, invitation_id: str) -> ProjectInvitation | None:
        invitation = self.items.get(invitation_id)
        return deepcopy(invitation) if invitation else None

    async def get_by_token(self, token: str) -> ProjectInvitation | None:
        for invitation in self.items.values():
            if invitation.token == token:
                return deepcopy(invitation)
        return None

    async def find_pending(self, project_id, invitee_email=None, invitee_id=None):
        found = []
        for inv in self.items.values():
            if inv.project_id != project_id or inv.status != InvitationStatus.PENDING:
                continue
            email_match = invitee_email and (inv.invitee_email or "") == invitee_email.lower()
            id_match = invitee_id and inv.invitee_id == invitee_id
            if email_match or id_match:
                found.append(deepcopy(inv))
        return found

    async def list_by_project(self, project_id, status=None):
        return self._newest_first(
            deepcopy(inv)
            for inv in self.items.values()
            if inv.project_id == project_id and (status is None or inv.status == status)
        )

    async def list_for_invitee(self, user_id, email, status=None):
        return self._newest_first(
            deepcopy(inv)
            for inv in self.items.values()
            if (inv.invitee_id == user_id or inv.invitee_email == email.lower())
            and (status is None or inv.status == status)
        )

    async def update(self, invitation: ProjectInvitation) -> ProjectInvitation:
        self.items[invitation.id] = deepcopy(invitation)
        return deepcopy(invitation)

    async def delete(self, invitation_id: str) -> None:
        self.items.pop(invitation_id, None)

    async def expire_pending_before(self, now: datetime) -> int:
        count = 0
        for inv in self.items.values():
            if inv.status == InvitationStatus.PENDING and inv.expires_at < now:
                inv.expire(now)
                count += 1
        return count

    async def delete_resolved_before(self, cutoff: datetime) -> int:
        old = [
            inv.id
            for inv in self.items.values()
            if inv.status != InvitationStatus.PENDING and inv.updated_at < cutoff
        ]
        for invitation_id in old:
            del self.items[invitation_id]
        return len(old)


class RecordingEmailService(EmailService):
    def __init__(self, succeed: bool = True):
        self.sent: list[dict] = []
        self.succeed = succeed

    async def send_project_invitation_email(self, **kwargs) -> bool:
        self.sent.append(kwargs)
        return self.succeed


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def users() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def tasks() -> FakeTaskRepository:
    return FakeTaskRepository()


@pytest.fixture
def projects() -> FakeProjectRepository:
    return FakeProjectRepository()


@pytest.fixture
def comments() -> FakeCommentRepository:
    return FakeCommentRepository()


@pytest.fixture
def invitations() -> FakeInvitationRepository:
    return FakeInvitationRepository()


@pytest.fixture
def email() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
async def alice(users) -> User:
    return await users.add(User(email="alice@example.com", name="Alice"))


@pytest.fixture
async def bob(users) -> User:
    return await users.add(User(email="bob@example.com", name="Bob"))


@pytest.fixture
async def project(projects, alice) -> Project:
    created = await projects.add(Project(name="Launch", owner_id=alice.id))
    await projects.add_member(created.id, alice.id, ProjectMemberRole.OWNER)
    return created


@pytest.fixture
async def task(tasks, project, alice) -> Task:
    return await tasks.add(Task(project_id=project.id, title="Ship it", created_by=alice.id))


@pytest.fixture
def comment_service(comments, tasks, users, uow) -> CommentService:
    return CommentService(comments=comments, tasks=tasks, users=users, uow=uow)


@pytest.fixture
def invitation_service(invitations, projects, users, uow, email) -> InvitationService:
    return InvitationService(
        invitations=invitations,
        projects=projects,
        users=users,
        uow=uow,
        email_service=email,
        frontend_url="https://app.taskflow.test/",
    )


@pytest.fixture
def project_service(projects, tasks, uow) -> ProjectService:
    return ProjectService(projects=projects, tasks=tasks, uow=uow)


@pytest.fixture
def failing_email() -> RecordingEmailService:
    return RecordingEmailService(succeed=False)
