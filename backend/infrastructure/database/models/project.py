"""
Project, membership and invitation database models.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4
import secrets

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from core.domain.invitation import InvitationStatus
from core.domain.project import ProjectMemberRole

from .base import Base, TimestampMixin, _utcnow


class Project(Base, TimestampMixin):
    """Project model; every task and invitation belongs to one."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Owner (creator of the project)
    owner_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"


class ProjectMember(Base, TimestampMixin):
    """Project member model (junction table between users and projects)."""

    __tablename__ = "project_members"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    project_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    role: Mapped[str] = mapped_column(
        String(50), default=ProjectMemberRole.MEMBER.value, nullable=False
    )

    # SET NULL so deleting the inviter preserves the membership
    invited_by: Mapped[Optional[str]] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_project_members_project_user", "project_id", "user_id", unique=True),
    )

    def __repr__(self) -> str:
        return f"<ProjectMember(id={self.id}, project_id={self.project_id}, user_id={self.user_id}, role={self.role})>"


class ProjectInvitation(Base, TimestampMixin):
    """Invitation for a user (by id) or an address (by email) to join a project."""

    __tablename__ = "project_invitations"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    project_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    inviter_id: Mapped[Optional[str]] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Invitee: exactly one of these is set
    invitee_id: Mapped[Optional[str]] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    invitee_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)

    role: Mapped[str] = mapped_column(
        String(50), default=ProjectMemberRole.MEMBER.value, nullable=False
    )
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    token: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        default=lambda: secrets.token_urlsafe(32),
    )

    status: Mapped[str] = mapped_column(
        String(50), default=InvitationStatus.PENDING.value, nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    responded_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_project_invitations_status", "status"),
        Index("ix_project_invitations_expires_at", "expires_at"),
        Index("ix_project_invitations_project_email", "project_id", "invitee_email"),
    )

    def __repr__(self) -> str:
        invitee = self.invitee_email or self.invitee_id
        return f"<ProjectInvitation(id={self.id}, invitee={invitee}, project_id={self.project_id}, status={self.status})>"
