"""User Service — business rules for user management atop a UserRepository.

Invariants:
    - Login names are unique: pre-checked here, enforced again by the store constraint
    - Update and delete require the target user to exist (NotFoundError otherwise)
    - upsert never touches id or timestamps: the repository owns them
    - get_all never fails for zero results

Design Decisions:
    - Depends on the UserRepository protocol, not on SQLAlchemy: service tests
      can run against any implementation
    - Pre-check before write: a clean typed DuplicationError instead of relying
      solely on a low-level constraint violation
    - clear() is administrative (tests, fixtures) and has no HTTP route
"""

import logging

from campuscoffee.core.domain_types import USER_RESOURCE, UserId
from campuscoffee.core.errors import DuplicationError, NotFoundError
from campuscoffee.core.repository_protocols import UserRepository
from campuscoffee.core.users import User, UserDraft

logger = logging.getLogger(__name__)


class UserService:
    """User management operations."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def clear(self) -> None:
        """Remove all users."""
        removed = await self.repository.delete_all()
        logger.warning(f"Cleared all users ({removed} removed)")

    async def get_all(self) -> list[User]:
        return await self.repository.find_all()

    async def get_by_id(self, user_id: UserId) -> User:
        user = await self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_RESOURCE, "id", user_id)
        return user

    async def get_by_name(self, name: str) -> User:
        user = await self.repository.find_by_login_name(name)
        if user is None:
            raise NotFoundError(USER_RESOURCE, "loginName", name)
        return user

    async def delete_user(self, user_id: UserId) -> None:
        if not await self.repository.delete(user_id):
            raise NotFoundError(USER_RESOURCE, "id", user_id)
        logger.info(f"Deleted user {user_id}", extra={"user_id": user_id})

    async def upsert(self, draft: UserDraft) -> User:
        """Create a user (draft without id) or update an existing one (draft with id).

        Raises:
            NotFoundError: draft has an id that does not exist.
            DuplicationError: login name belongs to a different user.
        """
        if draft.is_new:
            return await self._create(draft)
        return await self._update(draft)

    async def _create(self, draft: UserDraft) -> User:
        await self._ensure_login_name_free(draft)
        user = await self.repository.insert(draft)
        logger.info(
            f"Created user {user.id}",
            extra={"user_id": user.id, "login_name": user.login_name},
        )
        return user

    async def _update(self, draft: UserDraft) -> User:
        if await self.repository.find_by_id(draft.id) is None:
            raise NotFoundError(USER_RESOURCE, "id", draft.id)
        await self._ensure_login_name_free(draft)
        user = await self.repository.update(draft)
        if user is None:
            # Deleted between the existence check and the write.
            raise NotFoundError(USER_RESOURCE, "id", draft.id)
        logger.info(
            f"Updated user {user.id}",
            extra={"user_id": user.id, "login_name": user.login_name},
        )
        return user

    async def _ensure_login_name_free(self, draft: UserDraft) -> None:
        holder = await self.repository.find_by_login_name(draft.login_name)
        if holder is not None and holder.id != draft.id:
            logger.warning(
                "Rejected duplicate login name",
                extra={"login_name": draft.login_name, "user_id": draft.id},
            )
            raise DuplicationError(USER_RESOURCE, "loginName", draft.login_name)
