"""Users — list, create, update and delete rows of the users table.

Invariants:
    - Every handler issues at most one write statement; reads follow writes only to
      return the stored row
    - The id for update/delete resolves path → ?id= → body.id; no id → 400 before any query
    - Update validates id first, then name
    - Zero affected rows → 404; any SQLAlchemy failure → StorageError (500)
    - Ids outside the Integer key range → 404 without a query

Design Decisions:
    - PUT and PATCH share update_user: the semantics are full replacement of name
      under either verb, so both bind to one function
    - Routes accept /users and /users/{user_id} so clients may send the id in any of
      the three supported places
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.api.routes.request_helpers import (
    read_json_object, require_identifier, validate_payload,
)
from library_api.core.errors import NotFoundError
from library_api.core.identifiers import is_storable_identifier
from library_api.infrastructure.database import get_db, storage_errors
from library_api.models.user import User
from library_api.schemas.user import UserCreate, UserResponse, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

_ID_PARAM = "user_id"


@router.get("", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    """List all users, newest first."""
    async with storage_errors("fetch users"):
        result = await db.execute(select(User).order_by(User.id.desc()))
        users = result.scalars().all()
    return [UserResponse.model_validate(u) for u in users]


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
)
async def create_user(request: Request, db: AsyncSession = Depends(get_db)):
    """Create a user and return the stored row."""
    payload = validate_payload(UserCreate, await read_json_object(request))
    async with storage_errors("create user"):
        user = User(name=payload.name)
        db.add(user)
        await db.commit()
        await db.refresh(user)
    logger.info(f"User {user.id} created", extra={"entity_id": user.id})
    return UserResponse.model_validate(user)


@router.put("", response_model=UserResponse)
@router.put("/{user_id}", response_model=UserResponse)
@router.patch("", response_model=UserResponse)
@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(request: Request, db: AsyncSession = Depends(get_db)):
    """Replace a user's name."""
    body = await read_json_object(request)
    user_id = require_identifier(request, body, _ID_PARAM)
    payload = validate_payload(UserUpdate, body)
    if not is_storable_identifier(user_id):
        raise NotFoundError("User", user_id)

    async with storage_errors("update user"):
        result = await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(name=payload.name)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await db.rollback()
            raise NotFoundError("User", user_id)
        await db.commit()
        user = await db.get(User, user_id, populate_existing=True)
    if user is None:
        raise NotFoundError("User", user_id)
    logger.info(f"User {user_id} updated", extra={"entity_id": user_id})
    return UserResponse.model_validate(user)


@router.delete("")
@router.delete("/{user_id}")
async def delete_user(request: Request, db: AsyncSession = Depends(get_db)):
    """Delete a user by id."""
    body = await read_json_object(request)
    user_id = require_identifier(request, body, _ID_PARAM)
    if not is_storable_identifier(user_id):
        raise NotFoundError("User", user_id)

    async with storage_errors("delete user"):
        result = await db.execute(
            delete(User)
            .where(User.id == user_id)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await db.rollback()
            raise NotFoundError("User", user_id)
        await db.commit()
    logger.info(f"User {user_id} deleted", extra={"entity_id": user_id})
    return {"success": True, "message": "User deleted successfully"}
