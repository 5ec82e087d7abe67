import pytest
from sqlalchemy import update
from sqlmodel import col

from madarik_identity.adapter.repositories.invitation_repository import InvitationRepository
from madarik_identity.domain.entities import Invitation, InvitationStatus
from tests.fixtures.api_client import MANAGER_PASSWORD, accept, invite, login


@pytest.mark.asyncio
async def test_invite_creates_pending_invitation(client, admin_headers, outbox):
    response = await client.post(
        "/invitations",
        json={"email": " New.Agent@Madarik.com ", "role": "MANAGER", "message": "Welcome"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["email_sent"] is True
    invitation = data["invitation"]
    assert invitation["email"] == "new.agent@madarik.com"
    assert invitation["invited_role"] == "MANAGER"
    assert invitation["status"] == "PENDING"
    assert "token" not in invitation
    assert "token_hash" not in invitation

    email = outbox.last_to("new.agent@madarik.com")
    assert "/auth/accept-invite?token=" in email.text
    assert "Welcome" in email.text


@pytest.mark.asyncio
async def test_duplicate_pending_invite_conflicts(client, admin_headers):
    await invite(client, admin_headers, "a@x.com")

    response = await client.post(
        "/invitations", json={"email": "A@X.com", "role": "ADMIN"}, headers=admin_headers
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVITE_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_invite_existing_user_conflicts(client, admin_headers):
    response = await client.post(
        "/invitations",
        json={"email": "admin@madarik.com", "role": "MANAGER"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "USER_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_invite_validation_errors(client, admin_headers):
    bad_email = await client.post(
        "/invitations", json={"email": "not-an-email", "role": "MANAGER"}, headers=admin_headers
    )
    bad_role = await client.post(
        "/invitations", json={"email": "b@x.com", "role": "OWNER"}, headers=admin_headers
    )

    assert bad_email.status_code == 400
    assert bad_email.json()["error"]["code"] == "INVALID_EMAIL"
    assert bad_role.status_code == 400
    assert bad_role.json()["error"]["code"] == "INVALID_ROLE"


@pytest.mark.asyncio
async def test_invite_requires_admin(client):
    response = await client.post("/invitations", json={"email": "a@x.com", "role": "MANAGER"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_resend_replaces_token_then_accept(client, admin_headers, outbox):
    """Test the old link dies on resend and the new one creates the account"""
    invitation = await invite(client, admin_headers, "a@x.com")
    old_token = outbox.last_to("a@x.com").token

    resend = await client.post(
        f"/invitations/{invitation['id']}/resend", headers=admin_headers
    )
    assert resend.status_code == 200
    assert resend.json()["status"] == "resent"
    new_token = outbox.last_to("a@x.com").token
    assert new_token != old_token

    stale = await accept(client, old_token)
    assert stale.status_code == 400
    assert stale.json()["error"]["code"] == "INVALID_TOKEN"

    accepted = await accept(client, new_token)
    assert accepted.status_code == 201
    data = accepted.json()
    assert data["user"]["email"] == "a@x.com"
    assert data["user"]["role"] == "MANAGER"
    assert data["user"]["email_verified_at"] is None
    assert data["email_verification_required"] is True
    assert data["session"]["access_token"]

    headers = await login(client, "a@x.com", MANAGER_PASSWORD)
    me = await client.get("/me", headers=headers)
    assert me.json()["role"] == "MANAGER"


@pytest.mark.asyncio
async def test_accept_twice_conflicts(client, admin_headers, outbox):
    await invite(client, admin_headers, "a@x.com")
    token = outbox.last_to("a@x.com").token

    first = await accept(client, token)
    second = await accept(client, token)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "INVITATION_ALREADY_ACCEPTED"


@pytest.mark.asyncio
async def test_accept_sends_verification_email(client, admin_headers, outbox):
    await invite(client, admin_headers, "a@x.com")
    await accept(client, outbox.last_to("a@x.com").token)

    assert len(outbox.to("a@x.com")) == 2
    assert "/auth/verify-email?token=" in outbox.last_to("a@x.com").text


@pytest.mark.asyncio
async def test_accept_rejects_weak_password(client, admin_headers, outbox):
    await invite(client, admin_headers, "a@x.com")

    response = await accept(client, outbox.last_to("a@x.com").token, password="short")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PASSWORD"


@pytest.mark.asyncio
async def test_expired_invitation_is_gone(client, admin_headers, outbox, clock):
    invitation = await invite(client, admin_headers, "a@x.com")
    token = outbox.last_to("a@x.com").token

    clock.advance(days=7, seconds=1)
    response = await accept(client, token)

    assert response.status_code == 410
    assert response.json()["error"]["code"] == "INVITATION_EXPIRED"

    headers = await login(client, "admin@madarik.com", "Adm1nP@ssword")
    listing = await client.get("/invitations", params={"status": "EXPIRED"}, headers=headers)
    ids = [item["id"] for item in listing.json()["invitations"]]
    assert invitation["id"] in ids

    resend = await client.post(f"/invitations/{invitation['id']}/resend", headers=headers)
    assert resend.status_code == 409


@pytest.mark.asyncio
async def test_resend_extends_invitation_expiry(client, admin_headers, outbox, clock):
    invitation = await invite(client, admin_headers, "a@x.com")

    clock.advance(days=6, hours=23)
    resend = await client.post(
        f"/invitations/{invitation['id']}/resend", headers=admin_headers
    )
    clock.advance(days=3)

    assert resend.status_code == 200
    response = await accept(client, outbox.last_to("a@x.com").token)
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_revoked_invitation_cannot_be_used(client, admin_headers, outbox):
    invitation = await invite(client, admin_headers, "a@x.com")
    token = outbox.last_to("a@x.com").token

    revoke = await client.post(f"/invitations/{invitation['id']}/revoke", headers=admin_headers)
    assert revoke.status_code == 200
    assert revoke.json()["status"] == "revoked"

    response = await accept(client, token)
    assert response.status_code == 410
    assert response.json()["error"]["code"] == "INVITATION_REVOKED"

    resend = await client.post(f"/invitations/{invitation['id']}/resend", headers=admin_headers)
    assert resend.status_code == 409
    assert resend.json()["error"]["code"] == "INVITATION_NOT_PENDING"

    again = await client.post(f"/invitations/{invitation['id']}/revoke", headers=admin_headers)
    assert again.status_code == 409


@pytest.mark.asyncio
async def test_resend_racing_revoke_sends_nothing(client, admin_headers, outbox, monkeypatch):
    """A revoke landing between resend's read and write keeps the invitation revoked"""
    invitation = await invite(client, admin_headers, "a@x.com")
    original_token = outbox.last_to("a@x.com").token
    original_get_by_id = InvitationRepository.get_by_id

    async def get_then_revoke(self, invitation_id):
        found = await original_get_by_id(self, invitation_id)
        await self.session.execute(
            update(Invitation)
            .where(col(Invitation.id) == invitation_id)
            .values(status=InvitationStatus.REVOKED)
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        return found

    monkeypatch.setattr(InvitationRepository, "get_by_id", get_then_revoke)
    sent_before = len(outbox.sent)

    resend = await client.post(f"/invitations/{invitation['id']}/resend", headers=admin_headers)

    assert resend.status_code == 409
    assert resend.json()["error"]["code"] == "INVITATION_NOT_PENDING"
    assert len(outbox.sent) == sent_before

    monkeypatch.undo()
    response = await accept(client, original_token)
    assert response.status_code == 410
    assert response.json()["error"]["code"] == "INVITATION_REVOKED"


@pytest.mark.asyncio
async def test_revoked_email_can_be_invited_again(client, admin_headers):
    invitation = await invite(client, admin_headers, "a@x.com")
    await client.post(f"/invitations/{invitation['id']}/revoke", headers=admin_headers)

    response = await client.post(
        "/invitations", json={"email": "a@x.com", "role": "ADMIN"}, headers=admin_headers
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_delete_invitation(client, admin_headers):
    invitation = await invite(client, admin_headers, "a@x.com")

    response = await client.delete(f"/invitations/{invitation['id']}", headers=admin_headers)
    missing = await client.delete(f"/invitations/{invitation['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "deleted"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_invalid_invitation_id(client, admin_headers):
    response = await client.post("/invitations/not-a-uuid/revoke", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INVITATION_ID"


@pytest.mark.asyncio
async def test_list_invitations_paginates(client, admin_headers):
    for i in range(3):
        await invite(client, admin_headers, f"agent{i}@x.com")

    response = await client.get(
        "/invitations", params={"page": 1, "limit": 2}, headers=admin_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data["invitations"]) == 2
    assert data["pagination"]["total"] == 3
    assert data["pagination"]["total_pages"] == 2


@pytest.mark.asyncio
async def test_list_invitations_rejects_unknown_status(client, admin_headers):
    response = await client.get("/invitations", params={"status": "LOST"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_STATUS"


@pytest.mark.asyncio
async def test_lookup_by_token_shows_pending_invitation(client, admin_headers, outbox):
    invitation = await invite(client, admin_headers, "a@x.com")
    token = outbox.last_to("a@x.com").token

    response = await client.get(f"/invitations/by-token/{token}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == invitation["id"]
    assert data["email"] == "a@x.com"
    assert data["invited_role"] == "MANAGER"
    assert data["status"] == "PENDING"
    assert "token_hash" not in data


@pytest.mark.asyncio
async def test_lookup_by_token_reports_unusable_invitations(client, admin_headers, outbox, clock):
    unknown = await client.get("/invitations/by-token/not-a-real-token")
    assert unknown.status_code == 404
    assert unknown.json()["error"]["code"] == "INVITATION_NOT_FOUND"

    revoked = await invite(client, admin_headers, "revoked@x.com")
    revoked_token = outbox.last_to("revoked@x.com").token
    await client.post(f"/invitations/{revoked['id']}/revoke", headers=admin_headers)
    response = await client.get(f"/invitations/by-token/{revoked_token}")
    assert response.status_code == 410
    assert response.json()["error"]["code"] == "INVITATION_REVOKED"

    await invite(client, admin_headers, "accepted@x.com")
    accepted_token = outbox.last_to("accepted@x.com").token
    assert (await accept(client, accepted_token)).status_code == 201
    response = await client.get(f"/invitations/by-token/{accepted_token}")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVITATION_ALREADY_ACCEPTED"

    await invite(client, admin_headers, "late@x.com")
    late_token = outbox.last_to("late@x.com").token
    clock.advance(days=7, seconds=1)
    response = await client.get(f"/invitations/by-token/{late_token}")
    assert response.status_code == 410
    assert response.json()["error"]["code"] == "INVITATION_EXPIRED"


@pytest.mark.asyncio
async def test_lookup_by_replaced_token_is_not_found(client, admin_headers, outbox):
    invitation = await invite(client, admin_headers, "a@x.com")
    old_token = outbox.last_to("a@x.com").token
    await client.post(f"/invitations/{invitation['id']}/resend", headers=admin_headers)

    response = await client.get(f"/invitations/by-token/{old_token}")

    assert response.status_code == 404
