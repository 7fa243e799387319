"""User Domain Model — persisted users and caller-built drafts.

Invariants:
    - User is produced only by the store: id, created_at, updated_at always set
    - UserDraft never carries timestamps — callers cannot overwrite store-owned fields
    - UserDraft.id is None for creation, the target id for update
    - Both are frozen: an update yields a new User instead of mutating one

Design Decisions:
    - Two types over one with optional fields: the type checker rejects passing a
      half-built user where a persisted one is expected
"""

from dataclasses import dataclass, replace
from datetime import datetime

from campuscoffee.core.domain_types import LoginName, UserId


@dataclass(frozen=True)
class UserDraft:
    """User data as supplied by a caller, before persistence."""
    login_name: LoginName
    email_address: str
    first_name: str
    last_name: str
    id: UserId | None = None

    @property
    def is_new(self) -> bool:
        return self.id is None


@dataclass(frozen=True)
class User:
    """Persisted user with store-assigned identity and timestamps."""
    id: UserId
    created_at: datetime
    updated_at: datetime
    login_name: LoginName
    email_address: str
    first_name: str
    last_name: str

    def to_draft(self) -> UserDraft:
        """Mutable fields of this user, addressed by its id."""
        return UserDraft(
            id=self.id,
            login_name=self.login_name,
            email_address=self.email_address,
            first_name=self.first_name,
            last_name=self.last_name,
        )

    def with_changes(self, **changes: str) -> UserDraft:
        """Draft of this user with some descriptive fields replaced."""
        return replace(self.to_draft(), **changes)
