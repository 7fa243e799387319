"""User ORM — persists campus coffee users.

Invariants:
    - id is an autoincrement 64-bit integer primary key, never reassigned
    - login_name is unique (uq_users_login_name) and non-nullable
    - created_at set once on insert; updated_at refreshed by the repository on every update

Design Decisions:
    - Timestamps set in Python with timezone-aware UTC: identical behavior on PostgreSQL and SQLite
    - Named unique constraint: migrations and error messages refer to it by name
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, String, Integer, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from campuscoffee.db.base import Base


# BIGINT on PostgreSQL; SQLite only autoincrements an INTEGER primary key
USER_ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User row — one registered user of the coffee app."""
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("login_name", name="uq_users_login_name"),
    )

    id: Mapped[int] = mapped_column(
        USER_ID_TYPE, primary_key=True, autoincrement=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    login_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email_address: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
