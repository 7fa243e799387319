"""User Schemas — Pydantic DTO with field-level validation for the users API.

Invariants:
    - JSON uses camelCase (loginName, createdAt, ...); snake_case accepted on input
    - loginName: 1-255 word characters
    - emailAddress: 1-255 chars, local@domain.tld shape
    - firstName / lastName: 1-255 chars, stripped, non-empty
    - createdAt / updatedAt are read-only: accepted on input, never forwarded to the store

Design Decisions:
    - Single DTO for request and response: clients PUT back what they GET
    - alias_generator over per-field aliases: one rule for every field
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from campuscoffee.core.domain_types import LoginName, UserId
from campuscoffee.core.users import User, UserDraft

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserDto(BaseModel):
    """User as exchanged over HTTP."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int | None = Field(None, gt=0)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    login_name: str = Field(min_length=1, max_length=255, pattern=r"^\w+$")
    email_address: str = Field(min_length=1, max_length=255, pattern=EMAIL_PATTERN)
    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    def to_draft(self) -> UserDraft:
        """Caller-owned fields only; timestamps are dropped."""
        return UserDraft(
            id=UserId(self.id) if self.id is not None else None,
            login_name=LoginName(self.login_name),
            email_address=self.email_address,
            first_name=self.first_name,
            last_name=self.last_name,
        )

    @classmethod
    def from_domain(cls, user: User) -> "UserDto":
        return cls(
            id=user.id,
            created_at=user.created_at,
            updated_at=user.updated_at,
            login_name=user.login_name,
            email_address=user.email_address,
            first_name=user.first_name,
            last_name=user.last_name,
        )
