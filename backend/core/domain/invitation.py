"""Project invitation domain entity."""

import secrets
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from ..exceptions import BadRequestError
from ..timeutil import days_from_now, ensure_utc, utcnow
from .project import ProjectMemberRole
from .user import User


class InvitationStatus(StrEnum):
    """Invitation lifecycle states.

    PENDING moves to ACCEPTED or DECLINED on the invitee's response, or to
    EXPIRED once expires_at has passed. All three are terminal.
    """

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    EXPIRED = "EXPIRED"


def generate_invitation_token() -> str:
    """Unguessable URL-safe token (256 bits of entropy)."""
    return secrets.token_urlsafe(32)


@dataclass
class ProjectInvitation:
    """Invitation for a user id or an email address to join a project."""

    project_id: str
    inviter_id: str
    expires_at: datetime
    id: str = field(default_factory=lambda: str(uuid4()))
    invitee_id: str | None = None
    invitee_email: str | None = None
    role: ProjectMemberRole = ProjectMemberRole.MEMBER
    message: str | None = None
    token: str = field(default_factory=generate_invitation_token)
    status: InvitationStatus = InvitationStatus.PENDING
    responded_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if isinstance(self.status, str):
            self.status = InvitationStatus(self.status)
        if isinstance(self.role, str):
            self.role = ProjectMemberRole(self.role)
        self.expires_at = ensure_utc(self.expires_at)
        self.responded_at = ensure_utc(self.responded_at)
        self.created_at = ensure_utc(self.created_at)
        self.updated_at = ensure_utc(self.updated_at)

    @classmethod
    def create(
        cls,
        project_id: str,
        inviter_id: str,
        expiry_days: int,
        invitee_id: str | None = None,
        invitee_email: str | None = None,
        role: ProjectMemberRole = ProjectMemberRole.MEMBER,
        message: str | None = None,
    ) -> "ProjectInvitation":
        if (invitee_id is None) == (invitee_email is None):
            raise BadRequestError("Exactly one of invitee_email or invitee_id must be provided")
        now = utcnow()
        return cls(
            project_id=project_id,
            inviter_id=inviter_id,
            invitee_id=invitee_id,
            invitee_email=invitee_email.strip().lower() if invitee_email else None,
            role=role,
            message=message,
            expires_at=days_from_now(expiry_days, now),
            created_at=now,
            updated_at=now,
        )

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.status == InvitationStatus.EXPIRED:
            return True
        return (now or utcnow()) > self.expires_at

    def is_pending(self, now: datetime | None = None) -> bool:
        """PENDING and still within its validity window."""
        return self.status == InvitationStatus.PENDING and not self.is_expired(now)

    def is_stale(self, now: datetime | None = None) -> bool:
        """Still marked PENDING although the expiry has passed."""
        return self.status == InvitationStatus.PENDING and self.is_expired(now)

    def is_addressed_to(self, user: User) -> bool:
        if self.invitee_id is not None:
            return self.invitee_id == user.id
        return (self.invitee_email or "").lower() == user.email.lower()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _respond(self, status: InvitationStatus, now: datetime | None) -> None:
        now = now or utcnow()
        if self.status != InvitationStatus.PENDING:
            raise BadRequestError(f"Invitation has already been {self.status.value.lower()}")
        if self.is_expired(now):
            raise BadRequestError("Invitation has expired")
        self.status = status
        self.responded_at = now
        self.updated_at = now

    def accept(self, now: datetime | None = None) -> None:
        self._respond(InvitationStatus.ACCEPTED, now)

    def decline(self, now: datetime | None = None) -> None:
        self._respond(InvitationStatus.DECLINED, now)

    def expire(self, now: datetime | None = None) -> None:
        """PENDING → EXPIRED; no-op for any other state."""
        if self.status == InvitationStatus.PENDING:
            self.status = InvitationStatus.EXPIRED
            self.updated_at = now or utcnow()
