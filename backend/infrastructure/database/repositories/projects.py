"""
SQLAlchemy project and membership repository.
"""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.project import Project, ProjectMember, ProjectMemberRole
from core.interfaces.repositories import ProjectRepository
from core.timeutil import ensure_utc, utcnow
from infrastructure.database.models import Project as ProjectModel
from infrastructure.database.models import ProjectMember as ProjectMemberModel
from infrastructure.database.models import User as UserModel


def to_domain(row: ProjectModel) -> Project:
    return Project(
        id=row.id,
        name=row.name,
        description=row.description,
        owner_id=row.owner_id,
        created_at=ensure_utc(row.created_at),
    )


def member_to_domain(
    row: ProjectMemberModel,
    user_name: str | None = None,
    user_email: str | None = None,
) -> ProjectMember:
    return ProjectMember(
        project_id=row.project_id,
        user_id=row.user_id,
        role=row.role,
        invited_by=row.invited_by,
        joined_at=ensure_utc(row.joined_at),
        user_name=user_name,
        user_email=user_email,
    )


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, project: Project) -> Project:
        row = ProjectModel(
            id=project.id,
            name=project.name,
            description=project.description,
            owner_id=project.owner_id,
            created_at=project.created_at,
            updated_at=project.created_at,
        )
        self._session.add(row)
        await self._session.flush()
        return to_domain(row)

    async def get_by_id(self, project_id: str) -> Project | None:
        result = await self._session.execute(
            select(ProjectModel).where(ProjectModel.id == project_id)
        )
        row = result.scalar_one_or_none()
        return to_domain(row) if row else None

    async def list_for_user(self, user_id: str) -> list[Project]:
        member_of = select(ProjectMemberModel.project_id).where(
            ProjectMemberModel.user_id == user_id
        )
        result = await self._session.execute(
            select(ProjectModel)
            .where(or_(ProjectModel.owner_id == user_id, ProjectModel.id.in_(member_of)))
            .order_by(ProjectModel.created_at.desc())
        )
        return [to_domain(row) for row in result.scalars().all()]

    # =========================================================================
    # Membership
    # =========================================================================

    async def get_member(self, project_id: str, user_id: str) -> ProjectMember | None:
        result = await self._session.execute(
            select(ProjectMemberModel).where(
                ProjectMemberModel.project_id == project_id,
                ProjectMemberModel.user_id == user_id,
            )
        )
        row = result.scalar_one_or_none()
        return member_to_domain(row) if row else None

    async def list_members(self, project_id: str) -> list[ProjectMember]:
        result = await self._session.execute(
            select(ProjectMemberModel, UserModel.name, UserModel.email)
            .join(UserModel, UserModel.id == ProjectMemberModel.user_id)
            .where(ProjectMemberModel.project_id == project_id)
            .order_by(ProjectMemberModel.joined_at.asc())
        )
        return [
            member_to_domain(row, user_name=name, user_email=email)
            for row, name, email in result.all()
        ]

    async def add_member(
        self,
        project_id: str,
        user_id: str,
        role: ProjectMemberRole,
        invited_by: str | None = None,
    ) -> ProjectMember:
        now = utcnow()
        row = ProjectMemberModel(
            project_id=project_id,
            user_id=user_id,
            role=ProjectMemberRole(role).value,
            invited_by=invited_by,
            joined_at=now,
            created_at=now,
            updated_at=now,
        )
        self._session.add(row)
        await self._session.flush()
        return member_to_domain(row)
