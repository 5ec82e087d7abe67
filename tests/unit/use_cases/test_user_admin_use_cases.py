from uuid import uuid4

import pytest

from madarik_identity.app.use_cases.users import (
    ChangeRoleUseCase,
    ChangeStatusUseCase,
    GetUserStatsUseCase,
    ListAssignableUsersUseCase,
    ListUsersUseCase,
    UpdateProfileUseCase,
)
from madarik_identity.domain.entities import Locale, User, UserRole


def make_user(role=UserRole.MANAGER, is_active=True):
    return User(
        id=uuid4(),
        email=f"{uuid4().hex[:8]}@madarik.com",
        password_hash="x",
        role=role,
        is_active=is_active,
    )


@pytest.mark.asyncio
async def test_promote_manager_to_admin(mock_uow):
    actor = make_user(UserRole.ADMIN)
    target = make_user(UserRole.MANAGER)
    mock_uow.users.get_by_id.return_value = target

    result = await ChangeRoleUseCase(mock_uow).execute(actor.id, target.id, "ADMIN")

    assert result.is_ok()
    assert result.value.role == UserRole.ADMIN
    audit = mock_uow.audit_events.create.call_args[0][0]
    assert audit.action == "role_changed"
    assert audit.user_id == actor.id
    assert audit.event_metadata["old_role"] == "MANAGER"
    assert audit.event_metadata["new_role"] == "ADMIN"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_change_role_rejects_unknown_role(mock_uow):
    result = await ChangeRoleUseCase(mock_uow).execute(uuid4(), uuid4(), "OWNER")

    assert result.error.code == "INVALID_ROLE"


@pytest.mark.asyncio
async def test_admin_cannot_demote_self(mock_uow):
    actor_id = uuid4()

    result = await ChangeRoleUseCase(mock_uow).execute(actor_id, actor_id, "MANAGER")

    assert result.error.code == "CANNOT_MODIFY_SELF"
    mock_uow.users.update.assert_not_called()


@pytest.mark.asyncio
async def test_change_role_of_missing_user(mock_uow):
    result = await ChangeRoleUseCase(mock_uow).execute(uuid4(), uuid4(), "ADMIN")

    assert result.error.code == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_deactivate_user(mock_uow):
    target = make_user()
    mock_uow.users.get_by_id.return_value = target

    result = await ChangeStatusUseCase(mock_uow).execute(uuid4(), target.id, False)

    assert result.is_ok()
    assert target.is_active is False
    assert mock_uow.audit_events.create.call_args[0][0].action == "status_changed"


@pytest.mark.asyncio
async def test_admin_cannot_deactivate_self(mock_uow):
    actor_id = uuid4()

    result = await ChangeStatusUseCase(mock_uow).execute(actor_id, actor_id, False)

    assert result.error.code == "CANNOT_MODIFY_SELF"


@pytest.mark.asyncio
async def test_update_profile_locale(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await UpdateProfileUseCase(mock_uow).execute(user.id, "ar")

    assert result.is_ok()
    assert result.value.preferred_locale == Locale.AR


@pytest.mark.asyncio
async def test_update_profile_rejects_unknown_locale(mock_uow):
    result = await UpdateProfileUseCase(mock_uow).execute(uuid4(), "fr")

    assert result.error.code == "INVALID_LOCALE"


@pytest.mark.asyncio
async def test_list_users_paginates(mock_uow):
    users = [make_user(), make_user()]
    mock_uow.users.list_paginated.return_value = (users, 45)

    result = await ListUsersUseCase(mock_uow).execute(page=2, limit=20)

    assert result.is_ok()
    assert len(result.value.users) == 2
    assert result.value.pagination.total == 45
    assert result.value.pagination.total_pages == 3


@pytest.mark.asyncio
async def test_list_assignable_users_exposes_minimal_fields(mock_uow):
    manager = make_user()
    mock_uow.users.list_assignable.return_value = [manager]

    result = await ListAssignableUsersUseCase(mock_uow).execute()

    assert result.is_ok()
    assert [u.model_dump() for u in result.value.users] == [
        {"id": str(manager.id), "email": manager.email, "role": UserRole.MANAGER}
    ]
