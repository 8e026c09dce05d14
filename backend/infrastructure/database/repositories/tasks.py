"""
SQLAlchemy task repository.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.task import Task
from core.interfaces.repositories import TaskRepository
from core.timeutil import ensure_utc
from infrastructure.database.models import Task as TaskModel


def to_domain(row: TaskModel) -> Task:
    return Task(
        id=row.id,
        project_id=row.project_id,
        title=row.title,
        description=row.description,
        status=row.status,
        created_by=row.created_by,
        created_at=ensure_utc(row.created_at),
    )


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, task: Task) -> Task:
        row = TaskModel(
            id=task.id,
            project_id=task.project_id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            created_by=task.created_by,
            created_at=task.created_at,
            updated_at=task.created_at,
        )
        self._session.add(row)
        await self._session.flush()
        return to_domain(row)

    async def get_by_id(self, task_id: str) -> Task | None:
        result = await self._session.execute(select(TaskModel).where(TaskModel.id == task_id))
        row = result.scalar_one_or_none()
        return to_domain(row) if row else None

    async def list_by_project(self, project_id: str) -> list[Task]:
        result = await self._session.execute(
            select(TaskModel)
            .where(TaskModel.project_id == project_id)
            .order_by(TaskModel.created_at.asc())
        )
        return [to_domain(row) for row in result.scalars().all()]
