"""User Service — business rules against the SQLite-backed repository.

Invariants:
    - Create assigns id and both timestamps, keeps all other fields
    - Update preserves created_at, refreshes updated_at
    - Duplicate login names rejected on create and on rename
    - Missing users raise NotFoundError on lookup, update and delete
    - clear() removes everything; get_all() on empty store returns []
"""

import pytest

from campuscoffee.core.domain_types import LoginName, UserId
from campuscoffee.core.errors import DuplicationError, NotFoundError
from campuscoffee.core.users import UserDraft

from user_fixtures import create_users, users_for_insertion


async def test_get_all_empty_returns_empty_list(user_service):
    assert await user_service.get_all() == []


async def test_create_assigns_id_and_timestamps(user_service):
    draft = users_for_insertion()[0]

    created = await user_service.upsert(draft)

    assert created.id is not None
    assert created.created_at is not None
    assert created.updated_at is not None
    assert created.login_name == draft.login_name
    assert created.email_address == draft.email_address
    assert created.first_name == draft.first_name
    assert created.last_name == draft.last_name


async def test_create_sets_equal_timestamps(user_service):
    created = await user_service.upsert(users_for_insertion()[0])
    assert created.created_at == created.updated_at


async def test_create_assigns_distinct_ids(user_service):
    users = await create_users(user_service)
    assert len({u.id for u in users}) == len(users)


async def test_create_duplicate_login_name_fails(user_service):
    draft = users_for_insertion()[0]
    await user_service.upsert(draft)

    with pytest.raises(DuplicationError) as exc_info:
        await user_service.upsert(draft)

    assert exc_info.value.value == draft.login_name
    assert len(await user_service.get_all()) == 1


async def test_update_preserves_created_at_and_refreshes_updated_at(user_service):
    created = await user_service.upsert(users_for_insertion()[0])

    updated = await user_service.upsert(
        created.with_changes(first_name=created.first_name + "updated"),
    )

    assert updated.id == created.id
    assert updated.first_name == "Janeupdated"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


async def test_update_keeping_own_login_name_is_allowed(user_service):
    created = await user_service.upsert(users_for_insertion()[0])

    updated = await user_service.upsert(created.with_changes(last_name="Smith"))

    assert updated.login_name == created.login_name
    assert updated.last_name == "Smith"


async def test_update_rename_to_taken_login_name_fails(user_service):
    jane, max_, _ = await create_users(user_service)

    with pytest.raises(DuplicationError):
        await user_service.upsert(max_.with_changes(login_name=jane.login_name))

    assert (await user_service.get_by_id(max_.id)).login_name == max_.login_name


async def test_update_rename_to_free_login_name(user_service):
    created = await user_service.upsert(users_for_insertion()[0])

    updated = await user_service.upsert(
        created.with_changes(login_name=LoginName("jane_d")),
    )

    assert (await user_service.get_by_name("jane_d")).id == created.id
    with pytest.raises(NotFoundError):
        await user_service.get_by_name(created.login_name)
    assert updated.login_name == "jane_d"


async def test_update_nonexistent_user_fails(user_service):
    draft = UserDraft(
        id=UserId(999), login_name=LoginName("phantom"),
        email_address="phantom@uni.de", first_name="P", last_name="Hantom",
    )
    with pytest.raises(NotFoundError):
        await user_service.upsert(draft)
    assert await user_service.get_all() == []


async def test_get_by_id(user_service):
    users = await create_users(user_service)
    assert await user_service.get_by_id(users[1].id) == users[1]


async def test_get_by_id_missing_fails(user_service):
    with pytest.raises(NotFoundError) as exc_info:
        await user_service.get_by_id(UserId(12345))
    assert exc_info.value.lookup_field == "id"


async def test_get_by_name(user_service):
    users = await create_users(user_service)
    assert await user_service.get_by_name("maxmustermann") == users[1]


async def test_get_by_name_missing_fails(user_service):
    with pytest.raises(NotFoundError) as exc_info:
        await user_service.get_by_name("nobody")
    assert exc_info.value.lookup_field == "loginName"


async def test_delete_then_delete_again_fails(user_service):
    users = await create_users(user_service)

    await user_service.delete_user(users[0].id)
    with pytest.raises(NotFoundError):
        await user_service.delete_user(users[0].id)

    remaining = [u.id for u in await user_service.get_all()]
    assert users[0].id not in remaining
    assert len(remaining) == 2


async def test_deleted_login_name_can_be_reused(user_service):
    created = await user_service.upsert(users_for_insertion()[0])
    await user_service.delete_user(created.id)

    recreated = await user_service.upsert(users_for_insertion()[0])

    assert recreated.login_name == created.login_name


async def test_clear_removes_all_users(user_service):
    await create_users(user_service)

    await user_service.clear()

    assert await user_service.get_all() == []
