"""User Repository — SQLAlchemy implementation of the UserRepository protocol.

Invariants:
    - Store owns id, created_at and updated_at: drafts never set them
    - insert/update commit their own transaction and return the reloaded row
    - Unique login_name violations surface as DuplicationError after rollback
    - Lookups report absence as None / False
    - Ids outside the signed 64-bit range are absent without a query
    - Timestamps leave this module timezone-aware (UTC) on every backend

Design Decisions:
    - ORM rows converted to frozen domain Users at the boundary: nothing outside
      this module holds a live ORM object (ADR: no lazy loads across layers)
    - refresh() after commit: returned timestamps are what the database stored
    - SQLite drops tzinfo on DateTime(timezone=True); stored values are UTC, so it is reattached
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campuscoffee.core.domain_types import USER_RESOURCE, LoginName, UserId
from campuscoffee.core.errors import DuplicationError
from campuscoffee.core.users import User, UserDraft
from campuscoffee.models.user import User as UserModel

logger = logging.getLogger(__name__)

MAX_USER_ID = 2**63 - 1


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_domain(row: UserModel) -> User:
    """Convert ORM row to immutable domain user."""
    return User(
        id=UserId(row.id),
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
        login_name=LoginName(row.login_name),
        email_address=row.email_address,
        first_name=row.first_name,
        last_name=row.last_name,
    )


class SqlAlchemyUserRepository:
    """User persistence backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, draft: UserDraft) -> User:
        now = datetime.now(timezone.utc)
        row = UserModel(
            login_name=draft.login_name,
            email_address=draft.email_address,
            first_name=draft.first_name,
            last_name=draft.last_name,
            created_at=now,
            updated_at=now,
        )
        self.db.add(row)
        await self._commit(draft)
        await self.db.refresh(row)
        return to_domain(row)

    async def update(self, draft: UserDraft) -> User | None:
        row = await self._get_row(draft.id)
        if row is None:
            return None
        row.login_name = draft.login_name
        row.email_address = draft.email_address
        row.first_name = draft.first_name
        row.last_name = draft.last_name
        row.updated_at = datetime.now(timezone.utc)
        await self._commit(draft)
        await self.db.refresh(row)
        return to_domain(row)

    async def find_by_id(self, user_id: UserId) -> User | None:
        row = await self._get_row(user_id)
        return to_domain(row) if row else None

    async def find_by_login_name(self, login_name: str) -> User | None:
        result = await self.db.execute(
            select(UserModel).where(UserModel.login_name == login_name),
        )
        row = result.scalar_one_or_none()
        return to_domain(row) if row else None

    async def find_all(self) -> list[User]:
        result = await self.db.execute(
            select(UserModel).order_by(UserModel.id),
        )
        return [to_domain(row) for row in result.scalars().all()]

    async def delete(self, user_id: UserId) -> bool:
        row = await self._get_row(user_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.commit()
        return True

    async def delete_all(self) -> int:
        result = await self.db.execute(delete(UserModel))
        await self.db.commit()
        return result.rowcount or 0

    async def _get_row(self, user_id: UserId | None) -> UserModel | None:
        if user_id is None or not 0 < user_id <= MAX_USER_ID:
            return None
        result = await self.db.execute(
            select(UserModel).where(UserModel.id == user_id),
        )
        return result.scalar_one_or_none()

    async def _commit(self, draft: UserDraft) -> None:
        """Commit pending write; a unique violation means the login name is taken."""
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Unique constraint rejected login name: {e.orig}",
                extra={"login_name": draft.login_name},
            )
            raise DuplicationError(
                USER_RESOURCE, "loginName", draft.login_name,
            ) from e
