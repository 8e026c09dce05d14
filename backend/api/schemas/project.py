"""
Project, membership and invitation API schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


# =============================================================================
# Project Schemas
# =============================================================================


class ProjectCreate(BaseModel):
    """Schema for creating a new project."""

    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field(None, max_length=2000, description="Project description")


class ProjectResponse(BaseModel):
    """Schema for project response."""

    id: str
    name: str
    description: Optional[str] = None
    owner_id: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProjectMemberResponse(BaseModel):
    """Schema for project member response."""

    project_id: str
    user_id: str
    role: str
    invited_by: Optional[str] = None
    joined_at: datetime

    # User info (joined)
    user_name: Optional[str] = None
    user_email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# Invitation Schemas
# =============================================================================


class ProjectInvitationCreate(BaseModel):
    """Schema for creating a project invitation.

    Exactly one of ``invitee_email`` or ``invitee_id`` identifies the invitee.
    """

    project_id: str = Field(..., description="Project to invite into")
    invitee_email: Optional[EmailStr] = Field(None, description="Email address to invite")
    invitee_id: Optional[str] = Field(None, description="Existing user to invite")
    role: str = Field(default="member", description="Role to assign (admin, member, viewer)")
    message: Optional[str] = Field(None, max_length=500, description="Personal note")
    expiry_days: Optional[int] = Field(
        None, ge=1, le=30, description="Days until the invitation expires (default 7)"
    )

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        """Validate role is one that can be granted by invitation."""
        valid_roles = ["admin", "member", "viewer"]
        if v not in valid_roles:
            raise ValueError(f"Role must be one of: {', '.join(valid_roles)}")
        return v


class ProjectInvitationResponse(BaseModel):
    """Schema for project invitation response."""

    id: str
    project_id: str
    inviter_id: Optional[str] = None
    invitee_id: Optional[str] = None
    invitee_email: Optional[str] = None
    role: str
    message: Optional[str] = None
    token: str
    status: str
    expires_at: datetime
    responded_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProjectInvitationCreateResponse(ProjectInvitationResponse):
    """Created invitation plus the link to send to the invitee."""

    invite_url: str


class ProjectInvitationPublicResponse(BaseModel):
    """Public invitation details (no authentication required, no token echoed)."""

    id: str
    project_id: str
    role: str
    message: Optional[str] = None
    status: str
    expires_at: datetime
    is_expired: bool


class ProjectInvitationListResponse(BaseModel):
    """List of project invitations."""

    invitations: List[ProjectInvitationResponse]
    total: int
