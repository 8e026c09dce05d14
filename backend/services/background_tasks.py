"""
Periodic maintenance run from the application lifespan.
"""

import asyncio
import logging

from infrastructure.config.settings import settings
from infrastructure.database.connection import async_session_maker
from infrastructure.database.repositories import (
    SqlAlchemyInvitationRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyUnitOfWork,
    SqlAlchemyUserRepository,
)
from services.project_invitations import InvitationService

logger = logging.getLogger(__name__)


async def run_invitation_maintenance(session_maker=async_session_maker) -> tuple[int, int]:
    """
    Expire stale PENDING invitations, then delete long-resolved ones.

    Returns:
        (expired_count, deleted_count)
    """
    async with session_maker() as db:
        service = InvitationService(
            invitations=SqlAlchemyInvitationRepository(db),
            projects=SqlAlchemyProjectRepository(db),
            users=SqlAlchemyUserRepository(db),
            uow=SqlAlchemyUnitOfWork(db),
        )
        expired = await service.expire_stale_invitations()
        deleted = await service.cleanup_resolved_invitations(
            days_old=settings.invitation_cleanup_days
        )
    return expired, deleted


async def invitation_sweep_loop(interval_seconds: int | None = None) -> None:
    """Run invitation maintenance once at startup, then every interval."""
    interval = interval_seconds or settings.invitation_sweep_interval_seconds
    while True:
        try:
            await run_invitation_maintenance()
        except Exception as e:
            # Retried on the next tick
            logger.warning("Invitation maintenance failed: %s", e, exc_info=True)
        await asyncio.sleep(interval)
