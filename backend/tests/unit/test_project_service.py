"""
Unit tests for ProjectService membership gating.
"""

import pytest

from core.domain import ProjectMemberRole
from core.exceptions import BadRequestError, NotFoundError, PermissionDeniedError


class TestProjectService:

    @pytest.mark.asyncio
    async def test_create_project_enrolls_owner(self, project_service, projects, uow, alice):
        project = await project_service.create_project(alice.id, "  Roadmap ")

        assert project.name == "Roadmap"
        member = await projects.get_member(project.id, alice.id)
        assert member.role == ProjectMemberRole.OWNER
        assert uow.commits == 1

    @pytest.mark.asyncio
    async def test_blank_project_name(self, project_service, alice):
        with pytest.raises(BadRequestError):
            await project_service.create_project(alice.id, "  ")

    @pytest.mark.asyncio
    async def test_non_member_cannot_read_project(self, project_service, project, bob):
        with pytest.raises(PermissionDeniedError):
            await project_service.get_project(project.id, bob.id)
        with pytest.raises(PermissionDeniedError):
            await project_service.list_tasks(project.id, bob.id)

    @pytest.mark.asyncio
    async def test_unknown_project(self, project_service, alice):
        with pytest.raises(NotFoundError):
            await project_service.get_project("missing", alice.id)

    @pytest.mark.asyncio
    async def test_list_projects_includes_memberships(
        self, project_service, projects, project, bob
    ):
        assert await project_service.list_projects(bob.id) == []

        await projects.add_member(project.id, bob.id, ProjectMemberRole.MEMBER)

        assert [p.id for p in await project_service.list_projects(bob.id)] == [project.id]

    @pytest.mark.asyncio
    async def test_member_creates_task(self, project_service, projects, project, bob):
        await projects.add_member(project.id, bob.id, ProjectMemberRole.MEMBER)

        task = await project_service.create_task(project.id, bob.id, "Draft copy")

        assert task.created_by == bob.id
        assert [t.id for t in await project_service.list_tasks(project.id, bob.id)] == [task.id]

    @pytest.mark.asyncio
    async def test_viewer_cannot_create_task(self, project_service, projects, project, bob):
        await projects.add_member(project.id, bob.id, ProjectMemberRole.VIEWER)

        with pytest.raises(PermissionDeniedError):
            await project_service.create_task(project.id, bob.id, "Nope")

    @pytest.mark.asyncio
    async def test_get_task_checks_membership(self, project_service, task, alice, bob):
        assert (await project_service.get_task(task.id, alice.id)).id == task.id
        with pytest.raises(PermissionDeniedError):
            await project_service.get_task(task.id, bob.id)
        with pytest.raises(NotFoundError):
            await project_service.get_task("missing", alice.id)
