from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from madarik_identity.app.services.notifier import IdentityNotifier
from madarik_identity.app.services.settings import IdentitySettings
from madarik_identity.app.services.token_issuer import TokenIssuer
from tests.fixtures.fakes import FakeClock


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.count = AsyncMock(return_value=0)
    uow.users.list_paginated = AsyncMock(return_value=([], 0))
    uow.users.list_assignable = AsyncMock(return_value=[])

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.get_by_token_hash = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_email = AsyncMock(return_value=None)
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.delete = AsyncMock()
    uow.invitations.transition_from_pending = AsyncMock(return_value=True)
    uow.invitations.reissue_token = AsyncMock(return_value=True)
    uow.invitations.expire_overdue = AsyncMock(return_value=0)
    uow.invitations.list_paginated = AsyncMock(return_value=([], 0))

    uow.recovery_tokens = MagicMock()
    uow.recovery_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.recovery_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.recovery_tokens.mark_used = AsyncMock(return_value=True)
    uow.recovery_tokens.invalidate_outstanding = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()
    uow.audit_events.get_paginated = AsyncMock(return_value=([], None))

    return uow


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 15, 9, 0, 0))


@pytest.fixture
def settings():
    return IdentitySettings(client_url="https://app.madarik.com")


@pytest.fixture
def token_issuer(mock_uow, clock, settings):
    return TokenIssuer(mock_uow, clock, settings)


@pytest.fixture
def notifier():
    """Notifier stub; every send reports success"""
    notifier = MagicMock(spec=IdentityNotifier)
    notifier.send_invitation = AsyncMock(return_value=True)
    notifier.send_password_reset = AsyncMock(return_value=True)
    notifier.send_email_verification = AsyncMock(return_value=True)
    return notifier


@pytest.fixture
def password_hasher():
    hasher = MagicMock()
    hasher.hash = MagicMock(side_effect=lambda password: f"hashed::{password}")
    hasher.verify = MagicMock(
        side_effect=lambda password, password_hash: password_hash == f"hashed::{password}"
    )
    hasher.dummy_verify = MagicMock()
    return hasher
