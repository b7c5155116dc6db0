"""
VenueAtlas Backend — Venue Route Handlers
===========================================

Routes under /api/venue. Every route requires the x-user-id header.

    POST   /api/venue                         Admin or Organizer
    GET    /api/venue                         Organizers see only their own venues
    GET    /api/venue/organizer/{organizer_id}
    GET    /api/venue/location/{location_id}  includes every child location
    GET    /api/venue/{venue_id}
    PUT    /api/venue/{venue_id}              owner or Admin
    DELETE /api/venue/{venue_id}              owner or Admin
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.identity import Caller, get_current_user
from app.auth.policies import authorize, require_role, require_venue_owner
from app.database import get_db_session
from app.models.user import Role
from app.schemas.common import DataResponse, DeleteResponse, ErrorResponse, ListResponse
from app.schemas.venue import (
    VenueCreate,
    VenueOrganizerListResponse,
    VenueOut,
    VenueSubtreeListResponse,
    VenueUpdate,
)
from app.services.venue_service import venue_service

router = APIRouter(
    prefix="/api/venue",
    tags=["Venue"],
    responses={401: {"description": "Missing or invalid x-user-id", "model": ErrorResponse}},
)

can_create_venue = authorize(require_role(Role.ADMIN, Role.ORGANIZER))
can_modify_venue = authorize(require_venue_owner)


@router.post(
    "",
    status_code=201,
    response_model=DataResponse[VenueOut],
    responses={
        400: {"description": "Invalid fields", "model": ErrorResponse},
        403: {"description": "Caller is not an Admin or Organizer", "model": ErrorResponse},
        404: {"description": "Location not found", "model": ErrorResponse},
    },
    summary="Create a venue",
)
async def create_venue(
    payload: VenueCreate,
    caller: Caller = Depends(can_create_venue),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[VenueOut]:
    return await venue_service.create_venue(db, payload, caller)


@router.get("", response_model=ListResponse[VenueOut], summary="List venues visible to the caller")
async def list_venues(
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ListResponse[VenueOut]:
    return await venue_service.list_venues(db, caller)


@router.get(
    "/organizer/{organizer_id}",
    response_model=VenueOrganizerListResponse,
    responses={
        400: {"description": "User is not an organizer", "model": ErrorResponse},
        404: {"description": "Organizer not found", "model": ErrorResponse},
    },
    summary="List venues created by an organizer",
)
async def list_venues_by_organizer(
    organizer_id: UUID,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> VenueOrganizerListResponse:
    return await venue_service.list_venues_by_organizer(db, organizer_id)


@router.get(
    "/location/{location_id}",
    response_model=VenueSubtreeListResponse,
    responses={404: {"description": "Location not found", "model": ErrorResponse}},
    summary="List venues by location",
    description="Venues in the given location and in all of its descendant locations.",
)
async def list_venues_by_location(
    location_id: UUID,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> VenueSubtreeListResponse:
    return await venue_service.list_venues_by_location(db, location_id)


@router.get(
    "/{venue_id}",
    response_model=DataResponse[VenueOut],
    responses={404: {"description": "Venue not found", "model": ErrorResponse}},
    summary="Get a venue by ID",
)
async def get_venue(
    venue_id: UUID,
    caller: Caller = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[VenueOut]:
    return await venue_service.get_venue(db, venue_id)


@router.put(
    "/{venue_id}",
    response_model=DataResponse[VenueOut],
    responses={
        403: {"description": "Caller neither owns the venue nor is an Admin", "model": ErrorResponse},
        404: {"description": "Venue or location not found", "model": ErrorResponse},
    },
    summary="Update a venue",
)
async def update_venue(
    venue_id: UUID,
    payload: VenueUpdate,
    caller: Caller = Depends(can_modify_venue),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[VenueOut]:
    return await venue_service.update_venue(db, venue_id, payload)


@router.delete(
    "/{venue_id}",
    response_model=DeleteResponse[VenueOut],
    responses={
        403: {"description": "Caller neither owns the venue nor is an Admin", "model": ErrorResponse},
        404: {"description": "Venue not found", "model": ErrorResponse},
    },
    summary="Delete a venue",
)
async def delete_venue(
    venue_id: UUID,
    caller: Caller = Depends(can_modify_venue),
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse[VenueOut]:
    return await venue_service.delete_venue(db, venue_id)
