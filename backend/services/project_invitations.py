"""
Project invitation workflow.

Invitations are addressed either to an existing user (by id) or to an email
address, and carry an unguessable token that authorises the invitee to
accept or decline. Expiry is time-driven: a PENDING invitation past its
``expires_at`` is flipped to EXPIRED lazily whenever it is looked up, and in
bulk by the periodic sweep started from the application lifespan.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from core.domain.invitation import InvitationStatus, ProjectInvitation
from core.domain.project import Project, ProjectMemberRole
from core.domain.user import User
from core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from core.interfaces.repositories import (
    InvitationRepository,
    ProjectRepository,
    UnitOfWork,
    UserRepository,
)
from core.interfaces.services import EmailService
from core.timeutil import utcnow

logger = logging.getLogger(__name__)

MAX_INVITATION_MESSAGE_LENGTH = 500


@dataclass
class CreatedInvitation:
    """Result of create_invitation: the stored invitation and its link."""

    invitation: ProjectInvitation
    invite_url: str


class InvitationService:
    """Create, answer, revoke and list project invitations."""

    def __init__(
        self,
        invitations: InvitationRepository,
        projects: ProjectRepository,
        users: UserRepository,
        uow: UnitOfWork,
        email_service: EmailService | None = None,
        frontend_url: str = "http://localhost:3000",
        default_expiry_days: int = 7,
        min_expiry_days: int = 1,
        max_expiry_days: int = 30,
    ):
        self._invitations = invitations
        self._projects = projects
        self._users = users
        self._uow = uow
        self._email_service = email_service
        self._frontend_url = frontend_url.rstrip("/")
        self._default_expiry_days = default_expiry_days
        self._min_expiry_days = min_expiry_days
        self._max_expiry_days = max_expiry_days

    def build_invite_url(self, token: str) -> str:
        return f"{self._frontend_url}/invite/{token}"

    # =========================================================================
    # Creation
    # =========================================================================

    async def create_invitation(
        self,
        project_id: str,
        inviter_id: str,
        invitee_email: str | None = None,
        invitee_id: str | None = None,
        role: ProjectMemberRole = ProjectMemberRole.MEMBER,
        message: str | None = None,
        expiry_days: int | None = None,
    ) -> CreatedInvitation:
        """
        Invite a user (by id) or an email address to a project.

        - Exactly one of invitee_email / invitee_id must be given
        - Inviter must be the project's owner or an admin member
        - Invitee must not already be a member
        - No other non-expired PENDING invitation may exist for the same
          project and invitee
        - Sends the invitation email; delivery problems are logged only

        Raises:
            BadRequestError: identification, role, message, expiry or duplicate problems
            NotFoundError: project, inviter or invitee user missing
            PermissionDeniedError: inviter may not manage invitations
        """
        if invitee_email is not None:
            invitee_email = invitee_email.strip().lower() or None
        if (invitee_email is None) == (invitee_id is None):
            raise BadRequestError("Exactly one of invitee_email or invitee_id must be provided")

        try:
            role = ProjectMemberRole(role)
        except ValueError:
            raise BadRequestError("Role must be one of: admin, member, viewer") from None
        if role == ProjectMemberRole.OWNER:
            raise BadRequestError("Invitations cannot grant the owner role")

        message = message.strip() if message else None
        if message and len(message) > MAX_INVITATION_MESSAGE_LENGTH:
            raise BadRequestError(
                f"Message must be at most {MAX_INVITATION_MESSAGE_LENGTH} characters"
            )

        days = self._default_expiry_days if expiry_days is None else expiry_days
        if not self._min_expiry_days <= days <= self._max_expiry_days:
            raise BadRequestError(
                f"Expiry must be between {self._min_expiry_days} and "
                f"{self._max_expiry_days} days"
            )

        project = await self._projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")

        inviter = await self._users.get_by_id(inviter_id)
        if inviter is None:
            raise NotFoundError("Inviter not found")

        await self._require_project_admin(project, inviter_id)

        if invitee_id is not None:
            invitee = await self._users.get_by_id(invitee_id)
            if invitee is None:
                raise NotFoundError("Invitee user not found")
        else:
            invitee = await self._users.get_by_email(invitee_email)

        if invitee is not None and await self._projects.get_member(project_id, invitee.id):
            raise BadRequestError("User is already a member of this project")

        await self._ensure_no_active_invitation(
            project_id,
            invitee_email=invitee_email or (invitee.email if invitee else None),
            invitee_id=invitee.id if invitee else None,
        )

        invitation = ProjectInvitation.create(
            project_id=project_id,
            inviter_id=inviter_id,
            expiry_days=days,
            invitee_id=invitee_id,
            invitee_email=invitee_email,
            role=role,
            message=message or None,
        )
        saved = await self._invitations.add(invitation)
        await self._uow.commit()

        invite_url = self.build_invite_url(saved.token)
        logger.info(
            "Invitation %s created for project %s by %s (expires %s)",
            saved.id,
            project_id,
            inviter_id,
            saved.expires_at.isoformat(),
            extra={"project_id": project_id, "user_id": inviter_id},
        )

        recipient = invitee_email or (invitee.email if invitee else None)
        if recipient:
            await self._send_invitation_email(saved, recipient, inviter, project, invite_url)

        return CreatedInvitation(invitation=saved, invite_url=invite_url)

    # =========================================================================
    # Lookup
    # =========================================================================

    async def get_invitation(self, token: str) -> ProjectInvitation:
        """Invitation by token. A stale PENDING invitation comes back EXPIRED."""
        invitation = await self._invitations.get_by_token(token)
        if invitation is None:
            raise NotFoundError("Invitation not found")
        if invitation.is_stale():
            await self._expire(invitation)
        return invitation

    async def list_project_invitations(
        self,
        project_id: str,
        user_id: str,
        status: InvitationStatus | None = None,
    ) -> list[ProjectInvitation]:
        """Invitations of a project, newest first. Owner/admin only."""
        project = await self._projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        await self._require_project_admin(project, user_id)
        return await self._invitations.list_by_project(project_id, status)

    async def list_received_invitations(
        self, user_id: str, pending_only: bool = False
    ) -> list[ProjectInvitation]:
        """Invitations addressed to the user's id or email, newest first."""
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        status = InvitationStatus.PENDING if pending_only else None
        invitations = await self._invitations.list_for_invitee(user.id, user.email, status)
        if pending_only:
            return [inv for inv in invitations if inv.is_pending()]
        return invitations

    # =========================================================================
    # Invitee responses
    # =========================================================================

    async def accept_invitation(self, token: str, user_id: str) -> ProjectInvitation:
        """
        Accept an invitation and enroll the invitee in the project.

        Raises:
            NotFoundError: token or user unknown
            BadRequestError: invitation expired or already resolved
            PermissionDeniedError: caller is not the invitee
        """
        invitation, user = await self._load_for_response(token, user_id)

        invitation.accept()
        await self._invitations.update(invitation)

        if await self._projects.get_member(invitation.project_id, user.id) is None:
            await self._projects.add_member(
                invitation.project_id,
                user.id,
                invitation.role,
                invited_by=invitation.inviter_id,
            )
        await self._uow.commit()

        logger.info(
            "Invitation %s accepted by %s",
            invitation.id,
            user.id,
            extra={"project_id": invitation.project_id, "user_id": user.id},
        )
        return invitation

    async def decline_invitation(self, token: str, user_id: str) -> ProjectInvitation:
        """
        Decline an invitation.

        Raises:
            NotFoundError: token or user unknown
            BadRequestError: invitation expired or already resolved
            PermissionDeniedError: caller is not the invitee
        """
        invitation, user = await self._load_for_response(token, user_id)

        invitation.decline()
        await self._invitations.update(invitation)
        await self._uow.commit()

        logger.info(
            "Invitation %s declined by %s",
            invitation.id,
            user.id,
            extra={"project_id": invitation.project_id, "user_id": user.id},
        )
        return invitation

    # =========================================================================
    # Inviter actions
    # =========================================================================

    async def revoke_invitation(self, invitation_id: str, user_id: str) -> None:
        """Delete an invitation. Only the user who sent it may do so."""
        invitation = await self._invitations.get_by_id(invitation_id)
        if invitation is None:
            raise NotFoundError("Invitation not found")
        if invitation.inviter_id != user_id:
            raise PermissionDeniedError("You can only delete invitations you sent")

        await self._invitations.delete(invitation_id)
        await self._uow.commit()
        logger.info(
            "Invitation %s revoked by %s",
            invitation_id,
            user_id,
            extra={"project_id": invitation.project_id, "user_id": user_id},
        )

    # =========================================================================
    # Maintenance
    # =========================================================================

    async def expire_stale_invitations(self) -> int:
        """
        Mark PENDING invitations past their expiry as EXPIRED.

        Returns:
            Number of invitations marked as expired
        """
        expired_count = await self._invitations.expire_pending_before(utcnow())
        if expired_count > 0:
            await self._uow.commit()
            logger.info("Marked %d project invitations as expired", expired_count)
        return expired_count

    async def cleanup_resolved_invitations(self, days_old: int = 30) -> int:
        """
        Delete accepted/declined/expired invitations last touched more than
        ``days_old`` days ago.

        Returns:
            Number of invitations deleted
        """
        cutoff = utcnow() - timedelta(days=days_old)
        deleted_count = await self._invitations.delete_resolved_before(cutoff)
        if deleted_count > 0:
            await self._uow.commit()
            logger.info("Deleted %d old project invitations", deleted_count)
        return deleted_count

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _require_project_admin(self, project: Project, user_id: str) -> None:
        if project.owner_id == user_id:
            return
        member = await self._projects.get_member(project.id, user_id)
        if member is None or not member.is_admin:
            raise PermissionDeniedError(
                "Only project owners and admins can manage invitations"
            )

    async def _ensure_no_active_invitation(
        self,
        project_id: str,
        invitee_email: str | None,
        invitee_id: str | None,
    ) -> None:
        pending = await self._invitations.find_pending(
            project_id, invitee_email=invitee_email, invitee_id=invitee_id
        )
        now = utcnow()
        for existing in pending:
            if existing.is_stale(now):
                existing.expire(now)
                await self._invitations.update(existing)
                continue
            raise BadRequestError("An invitation for this invitee is already pending")

    async def _expire(self, invitation: ProjectInvitation) -> None:
        invitation.expire()
        await self._invitations.update(invitation)
        await self._uow.commit()
        logger.info("Invitation %s expired on lookup", invitation.id)

    async def _load_for_response(
        self, token: str, user_id: str
    ) -> tuple[ProjectInvitation, User]:
        invitation = await self._invitations.get_by_token(token)
        if invitation is None:
            raise NotFoundError("Invitation not found")

        if invitation.is_stale():
            await self._expire(invitation)
        if invitation.status == InvitationStatus.EXPIRED:
            raise BadRequestError("Invitation has expired")
        if invitation.status != InvitationStatus.PENDING:
            raise BadRequestError(
                f"Invitation has already been {invitation.status.value.lower()}"
            )

        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        if not invitation.is_addressed_to(user):
            logger.warning(
                "User %s tried to respond to invitation %s addressed to someone else",
                user_id,
                invitation.id,
            )
            raise PermissionDeniedError("This invitation was sent to a different user")

        return invitation, user

    async def _send_invitation_email(
        self,
        invitation: ProjectInvitation,
        recipient: str,
        inviter: User,
        project: Project,
        invite_url: str,
    ) -> None:
        if self._email_service is None:
            return
        sent = await self._email_service.send_project_invitation_email(
            to_email=recipient,
            inviter_name=inviter.name,
            project_name=project.name,
            role=invitation.role.value,
            invitation_url=invite_url,
            message=invitation.message,
        )
        if not sent:
            logger.warning("Invitation email for %s could not be delivered", invitation.id)
