"""
Project invitation API routes.
"""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies import CurrentUser, get_invitation_service
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.project import (
    ProjectInvitationCreate,
    ProjectInvitationCreateResponse,
    ProjectInvitationListResponse,
    ProjectInvitationPublicResponse,
    ProjectInvitationResponse,
)
from core.domain.invitation import InvitationStatus
from services.project_invitations import InvitationService

router = APIRouter(prefix="/invitations", tags=["project-invitations"])


# =============================================================================
# Inviter Endpoints
# =============================================================================


@router.post(
    "",
    response_model=ProjectInvitationCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(get_rate_limit("invitation_create"))
async def create_invitation(
    request: Request,
    body: ProjectInvitationCreate,
    current_user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
):
    """
    Invite a user (by id) or an email address to a project.

    Requires owner or admin role on the project. Returns the invitation and
    the link the invitee uses to respond.
    """
    result = await service.create_invitation(
        project_id=body.project_id,
        inviter_id=current_user.id,
        invitee_email=body.invitee_email,
        invitee_id=body.invitee_id,
        role=body.role,
        message=body.message,
        expiry_days=body.expiry_days,
    )
    return ProjectInvitationCreateResponse(
        **asdict(result.invitation),
        invite_url=result.invite_url,
    )


@router.get("/project/{project_id}", response_model=ProjectInvitationListResponse)
async def list_project_invitations(
    project_id: str,
    current_user: CurrentUser,
    status_filter: Optional[InvitationStatus] = Query(None, alias="status"),
    service: InvitationService = Depends(get_invitation_service),
):
    """
    List invitations of a project, newest first.

    Requires owner or admin role on the project.
    """
    invitations = await service.list_project_invitations(
        project_id, current_user.id, status_filter
    )
    return ProjectInvitationListResponse(
        invitations=[ProjectInvitationResponse(**asdict(inv)) for inv in invitations],
        total=len(invitations),
    )


@router.delete("/{invitation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_invitation(
    invitation_id: str,
    current_user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
):
    """Delete an invitation. Only the user who sent it can revoke it."""
    await service.revoke_invitation(invitation_id, current_user.id)


# =============================================================================
# Invitee Endpoints
# =============================================================================


@router.get("/user/received", response_model=List[ProjectInvitationResponse])
async def list_received_invitations(
    current_user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
):
    """All invitations addressed to the current user, newest first."""
    return await service.list_received_invitations(current_user.id)


@router.get("/user/pending", response_model=List[ProjectInvitationResponse])
async def list_pending_invitations(
    current_user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
):
    """Invitations addressed to the current user that can still be answered."""
    return await service.list_received_invitations(current_user.id, pending_only=True)


@router.get("/{token}", response_model=ProjectInvitationPublicResponse)
async def get_invitation(
    token: str,
    service: InvitationService = Depends(get_invitation_service),
):
    """
    Public invitation details for the invite landing page.

    No authentication required; the token is the credential.
    """
    invitation = await service.get_invitation(token)
    return ProjectInvitationPublicResponse(
        id=invitation.id,
        project_id=invitation.project_id,
        role=invitation.role.value,
        message=invitation.message,
        status=invitation.status.value,
        expires_at=invitation.expires_at,
        is_expired=invitation.is_expired(),
    )


@router.post("/{token}/accept", response_model=ProjectInvitationResponse)
async def accept_invitation(
    token: str,
    current_user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
):
    """Accept an invitation and join the project."""
    return await service.accept_invitation(token, current_user.id)


@router.post("/{token}/decline", response_model=ProjectInvitationResponse)
async def decline_invitation(
    token: str,
    current_user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
):
    """Decline an invitation."""
    return await service.decline_invitation(token, current_user.id)
