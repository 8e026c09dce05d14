"""
SQLAlchemy project invitation repository.
"""

from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.invitation import InvitationStatus, ProjectInvitation
from core.interfaces.repositories import InvitationRepository
from core.timeutil import ensure_utc
from infrastructure.database.models import ProjectInvitation as InvitationModel

RESOLVED_STATUSES = (
    InvitationStatus.ACCEPTED.value,
    InvitationStatus.DECLINED.value,
    InvitationStatus.EXPIRED.value,
)


def to_domain(row: InvitationModel) -> ProjectInvitation:
    return ProjectInvitation(
        id=row.id,
        project_id=row.project_id,
        inviter_id=row.inviter_id,
        invitee_id=row.invitee_id,
        invitee_email=row.invitee_email,
        role=row.role,
        message=row.message,
        token=row.token,
        status=row.status,
        expires_at=ensure_utc(row.expires_at),
        responded_at=ensure_utc(row.responded_at),
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


class SqlAlchemyInvitationRepository(InvitationRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, invitation: ProjectInvitation) -> ProjectInvitation:
        row = InvitationModel(
            id=invitation.id,
            project_id=invitation.project_id,
            inviter_id=invitation.inviter_id,
            invitee_id=invitation.invitee_id,
            invitee_email=invitation.invitee_email,
            role=invitation.role.value,
            message=invitation.message,
            token=invitation.token,
            status=invitation.status.value,
            expires_at=invitation.expires_at,
            responded_at=invitation.responded_at,
            created_at=invitation.created_at,
            updated_at=invitation.updated_at,
        )
        self._session.add(row)
        await self._session.flush()
        return to_domain(row)

    async def get_by_id(self, invitation_id: str) -> ProjectInvitation | None:
        result = await self._session.execute(
            select(InvitationModel).where(InvitationModel.id == invitation_id)
        )
        row = result.scalar_one_or_none()
        return to_domain(row) if row else None

    async def get_by_token(self, token: str) -> ProjectInvitation | None:
        result = await self._session.execute(
            select(InvitationModel).where(InvitationModel.token == token)
        )
        row = result.scalar_one_or_none()
        return to_domain(row) if row else None

    async def find_pending(
        self,
        project_id: str,
        invitee_email: str | None = None,
        invitee_id: str | None = None,
    ) -> list[ProjectInvitation]:
        matches = []
        if invitee_email:
            matches.append(func.lower(InvitationModel.invitee_email) == invitee_email.lower())
        if invitee_id:
            matches.append(InvitationModel.invitee_id == invitee_id)
        if not matches:
            return []

        result = await self._session.execute(
            select(InvitationModel).where(
                InvitationModel.project_id == project_id,
                InvitationModel.status == InvitationStatus.PENDING.value,
                or_(*matches),
            )
        )
        return [to_domain(row) for row in result.scalars().all()]

    async def list_by_project(
        self, project_id: str, status: InvitationStatus | None = None
    ) -> list[ProjectInvitation]:
        query = select(InvitationModel).where(InvitationModel.project_id == project_id)
        if status is not None:
            query = query.where(InvitationModel.status == InvitationStatus(status).value)
        query = query.order_by(InvitationModel.created_at.desc())

        result = await self._session.execute(query)
        return [to_domain(row) for row in result.scalars().all()]

    async def list_for_invitee(
        self, user_id: str, email: str, status: InvitationStatus | None = None
    ) -> list[ProjectInvitation]:
        query = select(InvitationModel).where(
            or_(
                InvitationModel.invitee_id == user_id,
                func.lower(InvitationModel.invitee_email) == email.lower(),
            )
        )
        if status is not None:
            query = query.where(InvitationModel.status == InvitationStatus(status).value)
        query = query.order_by(InvitationModel.created_at.desc())

        result = await self._session.execute(query)
        return [to_domain(row) for row in result.scalars().all()]

    async def update(self, invitation: ProjectInvitation) -> ProjectInvitation:
        row = await self._session.get(InvitationModel, invitation.id)
        row.status = invitation.status.value
        row.responded_at = invitation.responded_at
        row.updated_at = invitation.updated_at
        await self._session.flush()
        return to_domain(row)

    async def delete(self, invitation_id: str) -> None:
        row = await self._session.get(InvitationModel, invitation_id)
        if row is not None:
            await self._session.delete(row)
            await self._session.flush()

    # =========================================================================
    # Maintenance
    # =========================================================================

    async def expire_pending_before(self, now: datetime) -> int:
        result = await self._session.execute(
            select(InvitationModel).where(
                InvitationModel.status == InvitationStatus.PENDING.value,
                InvitationModel.expires_at < now,
            )
        )
        expired = result.scalars().all()
        for row in expired:
            row.status = InvitationStatus.EXPIRED.value
            row.updated_at = now
        await self._session.flush()
        return len(expired)

    async def delete_resolved_before(self, cutoff: datetime) -> int:
        result = await self._session.execute(
            select(InvitationModel).where(
                InvitationModel.status.in_(RESOLVED_STATUSES),
                InvitationModel.updated_at < cutoff,
            )
        )
        old = result.scalars().all()
        for row in old:
            await self._session.delete(row)
        await self._session.flush()
        return len(old)
