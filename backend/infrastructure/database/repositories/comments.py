"""
SQLAlchemy comment repository.

Reads join the author's name in the same query; there are no ORM
relationships to lazy-load.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.comment import Comment
from core.interfaces.repositories import CommentRepository
from core.timeutil import ensure_utc
from infrastructure.database.models import Comment as CommentModel
from infrastructure.database.models import User as UserModel


def to_domain(row: CommentModel, author_name: str | None = None) -> Comment:
    return Comment(
        id=row.id,
        task_id=row.task_id,
        user_id=row.user_id,
        parent_id=row.parent_id,
        content=row.content,
        is_deleted=row.is_deleted,
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
        author_name=author_name,
    )


class SqlAlchemyCommentRepository(CommentRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _with_author(self):
        return select(CommentModel, UserModel.name).outerjoin(
            UserModel, UserModel.id == CommentModel.user_id
        )

    async def add(self, comment: Comment) -> Comment:
        row = CommentModel(
            id=comment.id,
            task_id=comment.task_id,
            user_id=comment.user_id,
            parent_id=comment.parent_id,
            content=comment.content,
            is_deleted=comment.is_deleted,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        self._session.add(row)
        await self._session.flush()
        return to_domain(row, comment.author_name)

    async def get_by_id(self, comment_id: str) -> Comment | None:
        result = await self._session.execute(
            self._with_author().where(CommentModel.id == comment_id)
        )
        found = result.one_or_none()
        return to_domain(*found) if found else None

    async def get_in_task(self, comment_id: str, task_id: str) -> Comment | None:
        result = await self._session.execute(
            self._with_author().where(
                CommentModel.id == comment_id,
                CommentModel.task_id == task_id,
            )
        )
        found = result.one_or_none()
        return to_domain(*found) if found else None

    async def list_by_task(self, task_id: str) -> list[Comment]:
        result = await self._session.execute(
            self._with_author()
            .where(CommentModel.task_id == task_id)
            .order_by(CommentModel.created_at.asc(), CommentModel.id.asc())
        )
        return [to_domain(row, name) for row, name in result.all()]

    async def count_replies(self, comment_id: str) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(CommentModel)
            .where(CommentModel.parent_id == comment_id)
        )
        return result.scalar_one()

    async def update(self, comment: Comment) -> Comment:
        row = await self._session.get(CommentModel, comment.id)
        row.content = comment.content
        row.is_deleted = comment.is_deleted
        row.updated_at = comment.updated_at
        await self._session.flush()
        return to_domain(row, comment.author_name)

    async def delete(self, comment_id: str) -> None:
        row = await self._session.get(CommentModel, comment_id)
        if row is not None:
            await self._session.delete(row)
            await self._session.flush()
