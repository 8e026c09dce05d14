"""
API dependencies for authentication and service wiring.
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.email.resend_adapter import email_service
from core.domain.user import User
from core.security import TokenService
from infrastructure.config.settings import settings
from infrastructure.database.connection import get_db
from infrastructure.database.repositories import (
    SqlAlchemyCommentRepository,
    SqlAlchemyInvitationRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyTaskRepository,
    SqlAlchemyUnitOfWork,
    SqlAlchemyUserRepository,
)
from services.comments import CommentService
from services.project_invitations import InvitationService
from services.projects import ProjectService

logger = logging.getLogger(__name__)

token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
)


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user from a Bearer token.
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        token = authorization.split(" ", 1)[1].strip() or None

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = token_service.verify_access_token(token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await SqlAlchemyUserRepository(db).get_by_id(payload.sub)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_comment_service(db: AsyncSession = Depends(get_db)) -> CommentService:
    return CommentService(
        comments=SqlAlchemyCommentRepository(db),
        tasks=SqlAlchemyTaskRepository(db),
        users=SqlAlchemyUserRepository(db),
        uow=SqlAlchemyUnitOfWork(db),
        max_content_length=settings.comment_max_length,
        deleted_placeholder=settings.deleted_comment_placeholder,
    )


def get_invitation_service(db: AsyncSession = Depends(get_db)) -> InvitationService:
    return InvitationService(
        invitations=SqlAlchemyInvitationRepository(db),
        projects=SqlAlchemyProjectRepository(db),
        users=SqlAlchemyUserRepository(db),
        uow=SqlAlchemyUnitOfWork(db),
        email_service=email_service,
        frontend_url=settings.frontend_url,
        default_expiry_days=settings.invitation_expiry_days,
        min_expiry_days=settings.invitation_min_expiry_days,
        max_expiry_days=settings.invitation_max_expiry_days,
    )


def get_project_service(db: AsyncSession = Depends(get_db)) -> ProjectService:
    return ProjectService(
        projects=SqlAlchemyProjectRepository(db),
        tasks=SqlAlchemyTaskRepository(db),
        uow=SqlAlchemyUnitOfWork(db),
    )
