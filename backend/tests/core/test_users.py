"""User Domain Model — drafts vs persisted users.

Tests:
    - UserDraft without id is new; with id is an update
    - User and UserDraft are immutable
    - to_draft / with_changes keep id and drop timestamps
"""

from dataclasses import FrozenInstanceError, fields
from datetime import datetime, timezone

import pytest

from campuscoffee.core.domain_types import LoginName, UserId
from campuscoffee.core.users import User, UserDraft


def _user() -> User:
    ts = datetime(2026, 10, 1, 8, 30, tzinfo=timezone.utc)
    return User(
        id=UserId(7),
        created_at=ts,
        updated_at=ts,
        login_name=LoginName("jane_doe"),
        email_address="jane.doe@uni-heidelberg.de",
        first_name="Jane",
        last_name="Doe",
    )


def test_draft_without_id_is_new():
    draft = UserDraft(
        login_name=LoginName("jane_doe"), email_address="j@x.de",
        first_name="Jane", last_name="Doe",
    )
    assert draft.is_new


def test_draft_with_id_is_not_new():
    assert not _user().to_draft().is_new


def test_draft_has_no_timestamp_fields():
    names = {f.name for f in fields(UserDraft)}
    assert "created_at" not in names
    assert "updated_at" not in names


def test_user_is_frozen():
    with pytest.raises(FrozenInstanceError):
        _user().id = UserId(8)


def test_to_draft_keeps_id_and_fields():
    draft = _user().to_draft()
    assert draft.id == 7
    assert draft.login_name == "jane_doe"
    assert draft.email_address == "jane.doe@uni-heidelberg.de"


def test_with_changes_replaces_only_given_fields():
    draft = _user().with_changes(first_name="Janet")
    assert draft.first_name == "Janet"
    assert draft.last_name == "Doe"
    assert draft.id == 7
