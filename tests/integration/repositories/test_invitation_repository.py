from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from madarik_identity.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from madarik_identity.app.services.token_issuer import TokenIssuer
from madarik_identity.domain.base import utcnow
from madarik_identity.domain.entities import Invitation, InvitationStatus, UserRole


def make_invitation(email="a@x.com", status=InvitationStatus.PENDING, token="token-1"):
    return Invitation(
        email=email,
        invited_role=UserRole.MANAGER,
        status=status,
        token_hash=TokenIssuer.hash_token(token),
        expires_at=utcnow() + timedelta(days=7),
    )


@pytest.mark.asyncio
async def test_second_pending_invitation_for_email_is_rejected(db_session):
    db_session.add(make_invitation(token="token-1"))
    await db_session.commit()

    db_session.add(make_invitation(token="token-2"))
    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()

    rows = (await db_session.exec(select(Invitation))).all()
    assert len(rows) == 1


@pytest.mark.asyncio
async def test_pending_and_revoked_rows_for_one_email_coexist(db_session):
    db_session.add(make_invitation(status=InvitationStatus.REVOKED, token="token-1"))
    db_session.add(make_invitation(status=InvitationStatus.REVOKED, token="token-2"))
    db_session.add(make_invitation(token="token-3"))
    await db_session.commit()

    rows = (await db_session.exec(select(Invitation).where(Invitation.email == "a@x.com"))).all()
    assert sorted(row.status for row in rows) == sorted(
        [InvitationStatus.PENDING, InvitationStatus.REVOKED, InvitationStatus.REVOKED]
    )


@pytest.mark.asyncio
async def test_reissue_token_replaces_pending_token(db_session):
    invitation = make_invitation()
    db_session.add(invitation)
    await db_session.commit()
    new_expiry = utcnow() + timedelta(days=14)

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        reissued = await uow.invitations.reissue_token(
            invitation.id, TokenIssuer.hash_token("token-2"), new_expiry
        )
        await uow.commit()

    assert reissued is True
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        stored = await uow.invitations.get_by_token_hash(TokenIssuer.hash_token("token-2"))
        assert stored.id == invitation.id
        assert stored.expires_at == new_expiry
        assert await uow.invitations.get_by_token_hash(TokenIssuer.hash_token("token-1")) is None


@pytest.mark.parametrize(
    "status",
    [InvitationStatus.REVOKED, InvitationStatus.ACCEPTED, InvitationStatus.EXPIRED],
)
@pytest.mark.asyncio
async def test_reissue_token_leaves_settled_invitation_alone(db_session, status):
    invitation = make_invitation(status=status)
    db_session.add(invitation)
    await db_session.commit()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        reissued = await uow.invitations.reissue_token(
            invitation.id, TokenIssuer.hash_token("token-2"), utcnow() + timedelta(days=7)
        )
        await uow.commit()

    assert reissued is False
    async with SqlAlchemyUnitOfWork(db_session) as uow:
        stored = await uow.invitations.get_by_id(invitation.id)
        assert stored.status == status
        assert stored.token_hash == TokenIssuer.hash_token("token-1")


@pytest.mark.asyncio
async def test_transition_requires_current_token_hash(db_session):
    invitation = make_invitation()
    db_session.add(invitation)
    await db_session.commit()

    async with SqlAlchemyUnitOfWork(db_session) as uow:
        stale = await uow.invitations.transition_from_pending(
            invitation.id,
            InvitationStatus.ACCEPTED,
            expected_token_hash=TokenIssuer.hash_token("replaced-token"),
        )
        current = await uow.invitations.transition_from_pending(
            invitation.id,
            InvitationStatus.ACCEPTED,
            expected_token_hash=TokenIssuer.hash_token("token-1"),
        )
        await uow.commit()

    assert stale is False
    assert current is True
