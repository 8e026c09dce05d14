"""
Unit of work over an AsyncSession.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from core.interfaces.repositories import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Commits or rolls back the session shared by a request's repositories."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()
