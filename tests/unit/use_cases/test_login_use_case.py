from datetime import timedelta
from uuid import uuid4

import pytest

from madarik_identity.app.services.session_issuer import SessionIssuer
from madarik_identity.app.use_cases.auth import LoginUseCase
from madarik_identity.domain.entities import User, UserRole


@pytest.fixture
def session_issuer(clock):
    return SessionIssuer("unit-secret", timedelta(days=7), clock)


@pytest.fixture
def use_case(mock_uow, clock, password_hasher, session_issuer):
    return LoginUseCase(mock_uow, clock, password_hasher, session_issuer)


def make_user(is_active=True):
    return User(
        id=uuid4(),
        email="agent@madarik.com",
        password_hash="hashed::P@ssw0rd1",
        role=UserRole.MANAGER,
        is_active=is_active,
    )


@pytest.mark.asyncio
async def test_successful_login(use_case, mock_uow, clock, session_issuer):
    user = make_user()
    mock_uow.users.get_by_email.return_value = user

    result = await use_case.execute("Agent@Madarik.com", "P@ssw0rd1")

    assert result.is_ok()
    mock_uow.users.get_by_email.assert_called_once_with("agent@madarik.com")
    assert user.last_login_at == clock.now()
    assert mock_uow.audit_events.create.call_args[0][0].action == "login"
    mock_uow.commit.assert_called_once()

    claims = session_issuer.verify(result.value.session.access_token).value
    assert claims.user_id == user.id
    assert claims.role == UserRole.MANAGER
    assert result.value.user.last_login_at == clock.now()


@pytest.mark.asyncio
async def test_unknown_email_runs_dummy_check(use_case, mock_uow, password_hasher):
    result = await use_case.execute("ghost@madarik.com", "P@ssw0rd1")

    assert result.error.code == "INVALID_CREDENTIALS"
    password_hasher.dummy_verify.assert_called_once()


@pytest.mark.asyncio
async def test_wrong_password(use_case, mock_uow):
    mock_uow.users.get_by_email.return_value = make_user()

    result = await use_case.execute("agent@madarik.com", "wrong-password")

    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_inactive_account_gets_generic_error(use_case, mock_uow):
    mock_uow.users.get_by_email.return_value = make_user(is_active=False)

    result = await use_case.execute("agent@madarik.com", "P@ssw0rd1")

    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid email or password"
    mock_uow.commit.assert_not_called()
