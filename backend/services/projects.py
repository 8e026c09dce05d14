"""
Project and task plumbing used by the comment and invitation workflows.
"""

import logging

from core.domain.project import Project, ProjectMember, ProjectMemberRole
from core.domain.task import Task
from core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError
from core.interfaces.repositories import ProjectRepository, TaskRepository, UnitOfWork

logger = logging.getLogger(__name__)


class ProjectService:
    """Create projects and tasks, and gate reads on project membership."""

    def __init__(
        self,
        projects: ProjectRepository,
        tasks: TaskRepository,
        uow: UnitOfWork,
    ):
        self._projects = projects
        self._tasks = tasks
        self._uow = uow

    async def create_project(
        self, owner_id: str, name: str, description: str | None = None
    ) -> Project:
        """Create a project and enroll its creator as owner."""
        name = (name or "").strip()
        if not name:
            raise BadRequestError("Project name cannot be empty")

        project = await self._projects.add(
            Project(name=name, owner_id=owner_id, description=description)
        )
        await self._projects.add_member(project.id, owner_id, ProjectMemberRole.OWNER)
        await self._uow.commit()

        logger.info("Project %s created", project.id, extra={"user_id": owner_id})
        return project

    async def list_projects(self, user_id: str) -> list[Project]:
        return await self._projects.list_for_user(user_id)

    async def get_project(self, project_id: str, user_id: str) -> Project:
        """Project by id, visible to its owner and members only."""
        project = await self._projects.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        await self._require_member(project, user_id)
        return project

    async def list_members(self, project_id: str, user_id: str) -> list[ProjectMember]:
        await self.get_project(project_id, user_id)
        return await self._projects.list_members(project_id)

    # =========================================================================
    # Tasks
    # =========================================================================

    async def create_task(
        self,
        project_id: str,
        user_id: str,
        title: str,
        description: str | None = None,
    ) -> Task:
        """Add a task to a project. Viewers cannot create tasks."""
        project = await self.get_project(project_id, user_id)
        if project.owner_id != user_id:
            member = await self._projects.get_member(project_id, user_id)
            if member.role == ProjectMemberRole.VIEWER:
                raise PermissionDeniedError("Viewers cannot create tasks")

        title = (title or "").strip()
        if not title:
            raise BadRequestError("Task title cannot be empty")

        task = await self._tasks.add(
            Task(
                project_id=project_id,
                title=title,
                description=description,
                created_by=user_id,
            )
        )
        await self._uow.commit()

        logger.info(
            "Task %s created in project %s",
            task.id,
            project_id,
            extra={"project_id": project_id, "user_id": user_id},
        )
        return task

    async def list_tasks(self, project_id: str, user_id: str) -> list[Task]:
        await self.get_project(project_id, user_id)
        return await self._tasks.list_by_project(project_id)

    async def get_task(self, task_id: str, user_id: str) -> Task:
        task = await self._tasks.get_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        await self.get_project(task.project_id, user_id)
        return task

    async def _require_member(self, project: Project, user_id: str) -> None:
        if project.owner_id == user_id:
            return
        if await self._projects.get_member(project.id, user_id) is None:
            raise PermissionDeniedError("You are not a member of this project")
