"""
VenueAtlas Backend — User Route Handlers
==========================================

Routes under /api/user. No authentication is required for user management.

    POST   /api/user
    GET    /api/user
    GET    /api/user/role/{role}
    GET    /api/user/location/{location_id}    includes every child location
    GET    /api/user/{user_id}
    PUT    /api/user/{user_id}
    DELETE /api/user/{user_id}
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import DataResponse, DeleteResponse, ErrorResponse, ListResponse
from app.schemas.user import UserCreate, UserOut, UserSubtreeListResponse, UserUpdate
from app.services.user_service import user_service

router = APIRouter(prefix="/api/user", tags=["User"])


@router.post(
    "",
    status_code=201,
    response_model=DataResponse[UserOut],
    responses={
        400: {"description": "Invalid fields or email already exists", "model": ErrorResponse},
        404: {"description": "Location not found", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[UserOut]:
    return await user_service.create_user(db, payload)


@router.get("", response_model=ListResponse[UserOut], summary="List all users")
async def list_users(db: AsyncSession = Depends(get_db_session)) -> ListResponse[UserOut]:
    return await user_service.list_users(db)


@router.get(
    "/role/{role}",
    response_model=ListResponse[UserOut],
    responses={400: {"description": "Invalid role", "model": ErrorResponse}},
    summary="List users by role",
)
async def list_users_by_role(
    role: str,
    db: AsyncSession = Depends(get_db_session),
) -> ListResponse[UserOut]:
    return await user_service.list_users_by_role(db, role)


@router.get(
    "/location/{location_id}",
    response_model=UserSubtreeListResponse,
    summary="List users by location",
    description="Users in the given location and in all of its descendant locations.",
)
async def list_users_by_location(
    location_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> UserSubtreeListResponse:
    return await user_service.list_users_by_location(db, location_id)


@router.get(
    "/{user_id}",
    response_model=DataResponse[UserOut],
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get a user by ID",
)
async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db_session)) -> DataResponse[UserOut]:
    return await user_service.get_user(db, user_id)


@router.put(
    "/{user_id}",
    response_model=DataResponse[UserOut],
    responses={
        400: {"description": "Invalid fields or email already exists", "model": ErrorResponse},
        404: {"description": "User or location not found", "model": ErrorResponse},
    },
    summary="Update a user",
)
async def update_user(
    user_id: UUID,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[UserOut]:
    return await user_service.update_user(db, user_id, payload)


@router.delete(
    "/{user_id}",
    response_model=DeleteResponse[UserOut],
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Delete a user",
)
async def delete_user(user_id: UUID, db: AsyncSession = Depends(get_db_session)) -> DeleteResponse[UserOut]:
    return await user_service.delete_user(db, user_id)
