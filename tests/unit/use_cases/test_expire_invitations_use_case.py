import pytest

from madarik_identity.app.use_cases.invitations import ExpireInvitationsUseCase


@pytest.mark.asyncio
async def test_sweep_expires_overdue_invitations(mock_uow, clock):
    mock_uow.invitations.expire_overdue.return_value = 3

    result = await ExpireInvitationsUseCase(mock_uow, clock).execute()

    assert result.is_ok()
    assert result.value.expired_count == 3
    mock_uow.invitations.expire_overdue.assert_called_once_with(clock.now())
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "invitations_expired"
    assert audit.event_metadata == {"expired_count": 3}
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_sweep_with_nothing_overdue(mock_uow, clock):
    result = await ExpireInvitationsUseCase(mock_uow, clock).execute()

    assert result.value.expired_count == 0
    mock_uow.audit_events.create.assert_not_called()
