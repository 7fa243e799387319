"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Absence is reported as None / False, never as an exception
    - Implementations assign ids and timestamps; callers never do

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, the service awaits them
"""

from typing import Protocol

from campuscoffee.core.domain_types import UserId
from campuscoffee.core.users import User, UserDraft


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def insert(self, draft: UserDraft) -> User: ...
    async def update(self, draft: UserDraft) -> User | None: ...
    async def find_by_id(self, user_id: UserId) -> User | None: ...
    async def find_by_login_name(self, login_name: str) -> User | None: ...
    async def find_all(self) -> list[User]: ...
    async def delete(self, user_id: UserId) -> bool: ...
    async def delete_all(self) -> int: ...
