"""Users — CRUD and lookup-by-name for campus coffee users.

Invariants:
    - Routes contain no business rules: existence and uniqueness live in UserService
    - PUT rejects path/body id mismatch before the store is touched
    - POST answers 201 with a Location header for the created user
    - Domain errors propagate to the global handlers (404 / 400)

Design Decisions:
    - /filter declared before /{user_id}: the literal path must win the match
    - UserService built per request from the request's DB session (ADR: no global state)
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campuscoffee.core.domain_types import UserId
from campuscoffee.core.errors import InputValidationError
from campuscoffee.infrastructure.database import get_db
from campuscoffee.infrastructure.user_repository import SqlAlchemyUserRepository
from campuscoffee.schemas.user import UserDto
from campuscoffee.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """FastAPI dependency — service bound to the request's DB session."""
    return UserService(SqlAlchemyUserRepository(db))


@router.get("", response_model=list[UserDto])
async def list_users(service: UserService = Depends(get_user_service)):
    """All users as a JSON array (possibly empty)."""
    return [UserDto.from_domain(u) for u in await service.get_all()]


@router.get("/filter", response_model=UserDto)
async def filter_by_name(
    name: str = Query(..., min_length=1),
    service: UserService = Depends(get_user_service),
):
    """User with the given login name."""
    return UserDto.from_domain(await service.get_by_name(name))


@router.get("/{user_id}", response_model=UserDto)
async def get_user(
    user_id: int, service: UserService = Depends(get_user_service),
):
    """User with the given id."""
    return UserDto.from_domain(await service.get_by_id(UserId(user_id)))


@router.post(
    "", response_model=UserDto, status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserDto,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """Create a user. Any id in the body is ignored; the store assigns one."""
    draft = body.model_copy(update={"id": None}).to_draft()
    created = UserDto.from_domain(await service.upsert(draft))
    response.headers["Location"] = str(
        request.url_for("get_user", user_id=str(created.id)),
    )
    return created


@router.put("/{user_id}", response_model=UserDto)
async def update_user(
    user_id: int,
    body: UserDto,
    service: UserService = Depends(get_user_service),
):
    """Update an existing user. Path and body ids must match."""
    if body.id != user_id:
        raise InputValidationError(
            "ID mismatch: user id in path and body do not match.", field="id",
        )
    return UserDto.from_domain(await service.upsert(body.to_draft()))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int, service: UserService = Depends(get_user_service),
):
    """Delete a user; 404 if it does not exist."""
    await service.delete_user(UserId(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
