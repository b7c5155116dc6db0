"""
VenueAtlas Backend — Location Route Handlers
==============================================

What:  HTTP surface for the location tree under /api/location.
How:   Thin handlers: FastAPI validates path/body, LocationService applies the
       tree rules, global exception handlers format failures.

Routes:
    POST   /api/location                     create (root or under a parent)
    GET    /api/location                     list all
    GET    /api/location/parent/{parent}     children of parent; "root"/"null" = roots
    GET    /api/location/{location_id}       get one
    PUT    /api/location/{location_id}       partial update
    DELETE /api/location/{location_id}       delete (blocked while children exist)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import DataResponse, DeleteResponse, ErrorResponse, ListResponse
from app.schemas.location import LocationCreate, LocationOut, LocationUpdate
from app.services.location_service import location_service

router = APIRouter(prefix="/api/location", tags=["Location"])


@router.post(
    "",
    status_code=201,
    response_model=DataResponse[LocationOut],
    responses={
        400: {"description": "Missing fields or duplicate code", "model": ErrorResponse},
        404: {"description": "Parent location not found", "model": ErrorResponse},
    },
    summary="Create a location",
)
async def create_location(
    payload: LocationCreate,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[LocationOut]:
    return await location_service.create_location(db, payload)


@router.get(
    "",
    response_model=ListResponse[LocationOut],
    summary="List all locations",
)
async def list_locations(db: AsyncSession = Depends(get_db_session)) -> ListResponse[LocationOut]:
    return await location_service.list_locations(db)


@router.get(
    "/parent/{parent}",
    response_model=ListResponse[LocationOut],
    responses={400: {"description": "Malformed parent ID", "model": ErrorResponse}},
    summary="List locations by parent",
    description="Direct children of a location. Use `root` or `null` to list top-level locations.",
)
async def list_locations_by_parent(
    parent: str = Path(description="Parent location ID, or `root` / `null`"),
    db: AsyncSession = Depends(get_db_session),
) -> ListResponse[LocationOut]:
    return await location_service.list_locations_by_parent(db, parent)


@router.get(
    "/{location_id}",
    response_model=DataResponse[LocationOut],
    responses={404: {"description": "Location not found", "model": ErrorResponse}},
    summary="Get a location by ID",
)
async def get_location(
    location_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[LocationOut]:
    return await location_service.get_location(db, location_id)


@router.put(
    "/{location_id}",
    response_model=DataResponse[LocationOut],
    responses={
        400: {"description": "Self-parenting or duplicate code", "model": ErrorResponse},
        404: {"description": "Location or parent not found", "model": ErrorResponse},
    },
    summary="Update a location",
)
async def update_location(
    location_id: UUID,
    payload: LocationUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[LocationOut]:
    return await location_service.update_location(db, location_id, payload)


@router.delete(
    "/{location_id}",
    response_model=DeleteResponse[LocationOut],
    responses={
        400: {"description": "Location has child locations", "model": ErrorResponse},
        404: {"description": "Location not found", "model": ErrorResponse},
    },
    summary="Delete a location",
)
async def delete_location(
    location_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResponse[LocationOut]:
    return await location_service.delete_location(db, location_id)
