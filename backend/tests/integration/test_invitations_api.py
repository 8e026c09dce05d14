"""
Integration tests for the project invitation endpoints.
"""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.timeutil import utcnow
from infrastructure.database.models import ProjectInvitation as InvitationModel
from infrastructure.database.models import ProjectMember as ProjectMemberModel


@pytest.fixture(autouse=True)
def mock_email():
    """Keep invitation emails off the network."""
    with patch(
        "adapters.email.resend_adapter.email_service.send_project_invitation_email",
        new_callable=AsyncMock,
        return_value=True,
    ) as mock_send:
        yield mock_send


async def _invite(client: AsyncClient, headers: dict, project_id: str, **body):
    payload = {"project_id": project_id, **body}
    return await client.post("/api/v1/invitations", json=payload, headers=headers)


async def _expire(db_session: AsyncSession, invitation_id: str) -> None:
    row = await db_session.get(InvitationModel, invitation_id)
    row.expires_at = utcnow() - timedelta(minutes=1)
    await db_session.commit()


class TestCreateInvitation:

    @pytest.mark.asyncio
    async def test_create_by_email(
        self, async_client: AsyncClient, auth_headers, test_project, mock_email
    ):
        response = await _invite(
            async_client, auth_headers, test_project.id, invitee_email="New@Example.com"
        )

        assert response.status_code == 201
        data = response.json()
        assert data["invitee_email"] == "new@example.com"
        assert data["status"] == "PENDING"
        assert data["role"] == "member"
        assert data["invite_url"].endswith(f"/invite/{data['token']}")
        mock_email.assert_awaited_once()
        assert mock_email.await_args.kwargs["invitation_url"] == data["invite_url"]

    @pytest.mark.asyncio
    async def test_create_by_user_id(
        self, async_client: AsyncClient, auth_headers, test_project, other_user
    ):
        response = await _invite(
            async_client, auth_headers, test_project.id, invitee_id=other_user.id, role="viewer"
        )

        assert response.status_code == 201
        assert response.json()["invitee_id"] == other_user.id
        assert response.json()["role"] == "viewer"

    @pytest.mark.asyncio
    async def test_requires_one_invitee(self, async_client: AsyncClient, auth_headers, test_project):
        response = await _invite(async_client, auth_headers, test_project.id)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_rejects_invalid_email(self, async_client: AsyncClient, auth_headers, test_project):
        response = await _invite(
            async_client, auth_headers, test_project.id, invitee_email="not-an-email"
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_rejects_out_of_range_expiry(
        self, async_client: AsyncClient, auth_headers, test_project
    ):
        response = await _invite(
            async_client,
            auth_headers,
            test_project.id,
            invitee_email="new@example.com",
            expiry_days=45,
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_message_length_limit(self, async_client: AsyncClient, auth_headers, test_project):
        too_long = await _invite(
            async_client, auth_headers, test_project.id, invitee_email="x@example.com", message="m" * 501
        )
        at_limit = await _invite(
            async_client, auth_headers, test_project.id, invitee_email="x@example.com", message="m" * 500
        )

        assert too_long.status_code == 422
        assert at_limit.status_code == 201
        assert at_limit.json()["message"] == "m" * 500

    @pytest.mark.asyncio
    async def test_unknown_role(self, async_client: AsyncClient, auth_headers, test_project):
        response = await _invite(
            async_client, auth_headers, test_project.id, invitee_email="x@example.com", role="superuser"
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_duplicate_pending(self, async_client: AsyncClient, auth_headers, test_project):
        first = await _invite(async_client, auth_headers, test_project.id, invitee_email="dup@example.com")
        second = await _invite(async_client, auth_headers, test_project.id, invitee_email="dup@example.com")

        assert first.status_code == 201
        assert second.status_code == 400
        assert "already pending" in second.json()["detail"]

    @pytest.mark.asyncio
    async def test_expired_invitation_allows_new_one(
        self, async_client: AsyncClient, auth_headers, test_project, db_session: AsyncSession
    ):
        first = await _invite(async_client, auth_headers, test_project.id, invitee_email="dup@example.com")
        await _expire(db_session, first.json()["id"])

        second = await _invite(async_client, auth_headers, test_project.id, invitee_email="dup@example.com")

        assert second.status_code == 201

    @pytest.mark.asyncio
    async def test_non_admin_forbidden(
        self, async_client: AsyncClient, other_auth_headers, test_project
    ):
        response = await _invite(
            async_client, other_auth_headers, test_project.id, invitee_email="x@example.com"
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_project(self, async_client: AsyncClient, auth_headers):
        response = await _invite(
            async_client, auth_headers, "missing-project", invitee_email="x@example.com"
        )
        assert response.status_code == 404


class TestRespond:

    @pytest.mark.asyncio
    async def test_public_lookup(self, async_client: AsyncClient, auth_headers, test_project):
        created = (
            await _invite(async_client, auth_headers, test_project.id, invitee_email="x@example.com")
        ).json()

        response = await async_client.get(f"/api/v1/invitations/{created['token']}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["status"] == "PENDING"
        assert data["is_expired"] is False
        assert "token" not in data

    @pytest.mark.asyncio
    async def test_public_lookup_unknown(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/invitations/does-not-exist")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_accept_joins_project(
        self,
        async_client: AsyncClient,
        auth_headers,
        other_auth_headers,
        test_project,
        other_user,
        db_session: AsyncSession,
    ):
        created = (
            await _invite(
                async_client,
                auth_headers,
                test_project.id,
                invitee_email="other@example.com",
                role="admin",
            )
        ).json()

        response = await async_client.post(
            f"/api/v1/invitations/{created['token']}/accept", headers=other_auth_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "ACCEPTED"
        assert response.json()["responded_at"] is not None

        member = (
            await db_session.execute(
                select(ProjectMemberModel).where(
                    ProjectMemberModel.project_id == test_project.id,
                    ProjectMemberModel.user_id == other_user.id,
                )
            )
        ).scalar_one()
        assert member.role == "admin"

        members = await async_client.get(
            f"/api/v1/projects/{test_project.id}/members", headers=other_auth_headers
        )
        assert {m["user_email"] for m in members.json()} == {"test@example.com", "other@example.com"}

        again = await async_client.post(
            f"/api/v1/invitations/{created['token']}/decline", headers=other_auth_headers
        )
        assert again.status_code == 400

    @pytest.mark.asyncio
    async def test_decline(
        self, async_client: AsyncClient, auth_headers, other_auth_headers, test_project
    ):
        created = (
            await _invite(
                async_client, auth_headers, test_project.id, invitee_email="other@example.com"
            )
        ).json()

        response = await async_client.post(
            f"/api/v1/invitations/{created['token']}/decline", headers=other_auth_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "DECLINED"

    @pytest.mark.asyncio
    async def test_wrong_user_forbidden(
        self, async_client: AsyncClient, auth_headers, test_project
    ):
        created = (
            await _invite(async_client, auth_headers, test_project.id, invitee_email="someone@example.com")
        ).json()

        response = await async_client.post(
            f"/api/v1/invitations/{created['token']}/accept", headers=auth_headers
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_expired_cannot_be_accepted(
        self,
        async_client: AsyncClient,
        auth_headers,
        other_auth_headers,
        test_project,
        db_session: AsyncSession,
    ):
        created = (
            await _invite(
                async_client, auth_headers, test_project.id, invitee_email="other@example.com"
            )
        ).json()
        await _expire(db_session, created["id"])

        response = await async_client.post(
            f"/api/v1/invitations/{created['token']}/accept", headers=other_auth_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invitation has expired"
        row = await db_session.get(InvitationModel, created["id"])
        await db_session.refresh(row)
        assert row.status == "EXPIRED"


class TestListAndRevoke:

    @pytest.mark.asyncio
    async def test_project_listing_and_filter(
        self, async_client: AsyncClient, auth_headers, other_auth_headers, test_project
    ):
        a = (await _invite(async_client, auth_headers, test_project.id, invitee_email="other@example.com")).json()
        b = (await _invite(async_client, auth_headers, test_project.id, invitee_email="b@example.com")).json()
        await async_client.post(f"/api/v1/invitations/{a['token']}/decline", headers=other_auth_headers)

        everything = await async_client.get(
            f"/api/v1/invitations/project/{test_project.id}", headers=auth_headers
        )
        pending = await async_client.get(
            f"/api/v1/invitations/project/{test_project.id}",
            params={"status": "PENDING"},
            headers=auth_headers,
        )

        assert everything.status_code == 200
        assert everything.json()["total"] == 2
        assert [i["id"] for i in pending.json()["invitations"]] == [b["id"]]

    @pytest.mark.asyncio
    async def test_project_listing_requires_admin(
        self, async_client: AsyncClient, other_auth_headers, test_project
    ):
        response = await async_client.get(
            f"/api/v1/invitations/project/{test_project.id}", headers=other_auth_headers
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_received_and_pending(
        self,
        async_client: AsyncClient,
        auth_headers,
        other_auth_headers,
        test_project,
        other_user,
    ):
        created = (
            await _invite(async_client, auth_headers, test_project.id, invitee_id=other_user.id)
        ).json()

        received = await async_client.get("/api/v1/invitations/user/received", headers=other_auth_headers)
        pending = await async_client.get("/api/v1/invitations/user/pending", headers=other_auth_headers)
        assert [i["id"] for i in received.json()] == [created["id"]]
        assert [i["id"] for i in pending.json()] == [created["id"]]

        await async_client.post(f"/api/v1/invitations/{created['token']}/decline", headers=other_auth_headers)

        pending = await async_client.get("/api/v1/invitations/user/pending", headers=other_auth_headers)
        assert pending.json() == []

    @pytest.mark.asyncio
    async def test_revoke(
        self, async_client: AsyncClient, auth_headers, other_auth_headers, test_project
    ):
        created = (
            await _invite(async_client, auth_headers, test_project.id, invitee_email="x@example.com")
        ).json()

        forbidden = await async_client.delete(
            f"/api/v1/invitations/{created['id']}", headers=other_auth_headers
        )
        assert forbidden.status_code == 403

        response = await async_client.delete(f"/api/v1/invitations/{created['id']}", headers=auth_headers)
        assert response.status_code == 204

        lookup = await async_client.get(f"/api/v1/invitations/{created['token']}")
        assert lookup.status_code == 404
