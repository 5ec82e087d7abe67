from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.app.use_cases.invitations import InviteUserUseCase
from madarik_identity.domain.entities import (
    Invitation,
    InvitationStatus,
    User,
    UserRole,
)


@pytest.fixture
def use_case(mock_uow, token_issuer, notifier):
    return InviteUserUseCase(mock_uow, token_issuer, notifier)


@pytest.mark.asyncio
async def test_successful_invite(use_case, mock_uow, notifier, clock):
    """Admin invites a new manager; one pending invitation, one email"""
    # Arrange
    inviter_id = uuid4()

    # Act
    result = await use_case.execute(inviter_id, "New.Agent@Madarik.com", "MANAGER", "Welcome!")

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.email_sent is True
    assert response.invitation.email == "new.agent@madarik.com"
    assert response.invitation.invited_role == UserRole.MANAGER
    assert response.invitation.status == InvitationStatus.PENDING
    assert response.invitation.expires_at == clock.now() + timedelta(days=7)

    created = mock_uow.invitations.create.call_args[0][0]
    assert created.inviter_user_id == inviter_id
    assert created.message == "Welcome!"
    mock_uow.commit.assert_called_once()

    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "invite_sent"

    notifier.send_invitation.assert_called_once()
    kwargs = notifier.send_invitation.call_args.kwargs
    assert kwargs["to"] == "new.agent@madarik.com"
    assert TokenIssuer.hash_token(kwargs["token"]) == created.token_hash


@pytest.mark.asyncio
async def test_invalid_email_rejected_before_any_write(use_case, mock_uow):
    result = await use_case.execute(uuid4(), "not-an-email", "MANAGER")

    assert result.is_err()
    assert result.error.code == "INVALID_EMAIL"
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_role_rejected(use_case, mock_uow):
    result = await use_case.execute(uuid4(), "a@x.com", "OWNER")

    assert result.is_err()
    assert result.error.code == "INVALID_ROLE"
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_existing_user_conflict(use_case, mock_uow, notifier):
    mock_uow.users.get_by_email.return_value = User(
        email="a@x.com", password_hash="x", role=UserRole.MANAGER
    )

    result = await use_case.execute(uuid4(), "a@x.com", "MANAGER")

    assert result.error.code == "USER_ALREADY_EXISTS"
    notifier.send_invitation.assert_not_called()


@pytest.mark.asyncio
async def test_pending_invite_conflict(use_case, mock_uow, clock):
    mock_uow.invitations.get_pending_by_email.return_value = Invitation(
        email="a@x.com",
        invited_role=UserRole.MANAGER,
        token_hash="h" * 64,
        expires_at=clock.now() + timedelta(days=3),
    )

    result = await use_case.execute(uuid4(), "a@x.com", "ADMIN")

    assert result.error.code == "INVITE_ALREADY_EXISTS"
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_duplicate_caught_by_unique_index(use_case, mock_uow, notifier):
    """The read check passed but a parallel invite committed first"""
    mock_uow.invitations.create.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

    result = await use_case.execute(uuid4(), "a@x.com", "MANAGER")

    assert result.error.code == "INVITE_ALREADY_EXISTS"
    mock_uow.rollback.assert_called_once()
    mock_uow.commit.assert_not_called()
    notifier.send_invitation.assert_not_called()


@pytest.mark.asyncio
async def test_mail_failure_does_not_undo_invite(use_case, mock_uow, notifier):
    notifier.send_invitation.return_value = False

    result = await use_case.execute(uuid4(), "a@x.com", "MANAGER")

    assert result.is_ok()
    assert result.value.email_sent is False
    mock_uow.commit.assert_called_once()
