"""User Routes — CRUD mirror for user records.

Invariants:
    - Request bodies validated by Pydantic before reaching the handler
    - Password never appears in any response
    - Duplicate email → 409 via DuplicateConstraintError
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from tasktrack.api.dependencies import get_user_service
from tasktrack.core.domain_types import UserId
from tasktrack.schemas.user import UserCreate, UserUpdate, serialize_user
from tasktrack.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/stats/count")
async def count_users(service: UserService = Depends(get_user_service)):
    return {"success": True, "count": service.count_users()}


@router.get("")
async def list_users(service: UserService = Depends(get_user_service)):
    users = service.list_users()
    return {
        "success": True,
        "count": len(users),
        "data": [serialize_user(u) for u in users],
    }


@router.get("/{user_id}")
async def get_user(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    return {"success": True, "data": serialize_user(service.get_user(UserId(user_id)))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    user = service.create_user(body)
    return {
        "success": True,
        "message": "User created successfully",
        "data": serialize_user(user),
    }


@router.put("/{user_id}")
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    service: UserService = Depends(get_user_service),
):
    user = service.update_user(UserId(user_id), body)
    return {
        "success": True,
        "message": "User updated successfully",
        "data": serialize_user(user),
    }


@router.delete("/{user_id}")
async def delete_user(
    user_id: UUID, service: UserService = Depends(get_user_service),
):
    service.delete_user(UserId(user_id))
    return {"success": True, "message": "User deleted successfully"}
