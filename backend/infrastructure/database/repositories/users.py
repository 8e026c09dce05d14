"""
SQLAlchemy user repository.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.user import User
from core.interfaces.repositories import UserRepository
from core.timeutil import ensure_utc
from infrastructure.database.models import User as UserModel


def to_domain(row: UserModel) -> User:
    return User(
        id=row.id,
        email=row.email,
        name=row.name,
        avatar_url=row.avatar_url,
        created_at=ensure_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, user: User) -> User:
        row = UserModel(
            id=user.id,
            email=user.email,
            name=user.name,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
        )
        self._session.add(row)
        await self._session.flush()
        return to_domain(row)

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self._session.execute(select(UserModel).where(UserModel.id == user_id))
        row = result.scalar_one_or_none()
        return to_domain(row) if row else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.strip().lower())
        )
        row = result.scalar_one_or_none()
        return to_domain(row) if row else None
