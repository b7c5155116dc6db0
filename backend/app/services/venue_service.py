"""
VenueAtlas Backend — Venue Service
====================================

What:  CRUD over venues, plus organizer- and location-subtree-scoped listing.
Who:   Called by the /api/venue route handlers after the access control chain
       has resolved the caller (and, for mutations, authorized them).

Visibility:
    list_venues shows an Organizer only the venues they created;
    Admin and Attend callers see every venue.

Ownership:
    `created_by` is taken from the authenticated caller at creation and is
    not part of VenueUpdate, so it can never be reassigned.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.identity import Caller
from app.exceptions import NotFoundError, ValidationError
from app.models.user import Role
from app.models.venue import Venue
from app.schemas.common import (
    DataResponse,
    DeleteResponse,
    ListResponse,
    LocationRef,
    OrganizerRef,
)
from app.schemas.venue import (
    VenueCreate,
    VenueOrganizerListResponse,
    VenueOut,
    VenueSubtreeListResponse,
    VenueUpdate,
)
from app.services.location_service import location_service
from app.services.location_tree import resolve_subtree
from app.services.persistence import flush_changes
from app.services.references import location_refs, user_refs
from app.services.user_service import user_service

logger = logging.getLogger(__name__)


class VenueService:

    async def get_or_404(self, db: AsyncSession, venue_id: UUID) -> Venue:
        venue = await db.get(Venue, venue_id)
        if venue is None:
            raise NotFoundError(resource="Venue", resource_id=str(venue_id))
        return venue

    async def _render(self, db: AsyncSession, venues: List[Venue]) -> List[VenueOut]:
        locations = await location_refs(db, (v.location_id for v in venues))
        creators = await user_refs(db, (v.created_by for v in venues))
        return [
            VenueOut(
                id=v.id,
                place_name=v.place_name,
                capacity=v.capacity,
                location=locations.get(v.location_id),
                created_by=creators.get(v.created_by),
                created_at=v.created_at,
                updated_at=v.updated_at,
            )
            for v in venues
        ]

    async def _list(self, db: AsyncSession, query) -> List[VenueOut]:
        result = await db.execute(query.order_by(Venue.created_at))
        return await self._render(db, list(result.scalars().all()))

    # ── Create ────────────────────────────────────────────────────────────

    async def create_venue(
        self, db: AsyncSession, payload: VenueCreate, caller: Caller
    ) -> DataResponse[VenueOut]:
        await location_service.get_or_404(db, payload.location)

        venue = Venue(
            place_name=payload.place_name,
            capacity=payload.capacity,
            location_id=payload.location,
            created_by=caller.id,
        )
        db.add(venue)
        await flush_changes(db)
        logger.info(
            "Venue created: %s '%s' by %s (%s)",
            venue.id, venue.place_name, caller.id, caller.role.value,
        )

        [out] = await self._render(db, [venue])
        return DataResponse[VenueOut](data=out)

    # ── Read ──────────────────────────────────────────────────────────────

    async def list_venues(self, db: AsyncSession, caller: Caller) -> ListResponse[VenueOut]:
        query = select(Venue)
        if caller.role == Role.ORGANIZER:
            query = query.where(Venue.created_by == caller.id)
        data = await self._list(db, query)
        return ListResponse[VenueOut](count=len(data), data=data)

    async def list_venues_by_organizer(
        self, db: AsyncSession, organizer_id: UUID
    ) -> VenueOrganizerListResponse:
        organizer = await user_service.get_or_404(db, organizer_id, label="Organizer")
        if organizer.role != Role.ORGANIZER:
            raise ValidationError(
                message="User is not an organizer",
                context={"user_id": str(organizer_id), "role": organizer.role.value},
            )

        data = await self._list(db, select(Venue).where(Venue.created_by == organizer.id))
        return VenueOrganizerListResponse(
            count=len(data),
            organizer=OrganizerRef(id=organizer.id, name=organizer.name, email=organizer.email),
            data=data,
        )

    async def list_venues_by_location(
        self, db: AsyncSession, location_id: UUID
    ) -> VenueSubtreeListResponse:
        """Venues located anywhere in the subtree rooted at an existing location."""
        location = await location_service.get_or_404(db, location_id)
        location_ids = await resolve_subtree(db, location.id)

        data = await self._list(db, select(Venue).where(Venue.location_id.in_(location_ids)))
        return VenueSubtreeListResponse(
            count=len(data),
            locations_searched=len(location_ids),
            location=LocationRef(id=location.id, name=location.name, code=location.code),
            data=data,
        )

    async def get_venue(self, db: AsyncSession, venue_id: UUID) -> DataResponse[VenueOut]:
        venue = await self.get_or_404(db, venue_id)
        [out] = await self._render(db, [venue])
        return DataResponse[VenueOut](data=out)

    # ── Update ────────────────────────────────────────────────────────────

    async def update_venue(
        self, db: AsyncSession, venue_id: UUID, payload: VenueUpdate
    ) -> DataResponse[VenueOut]:
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}

        if "location" in changes:
            await location_service.get_or_404(db, changes["location"])

        venue = await self.get_or_404(db, venue_id)
        if "place_name" in changes:
            venue.place_name = changes["place_name"]
        if "capacity" in changes:
            venue.capacity = changes["capacity"]
        if "location" in changes:
            venue.location_id = changes["location"]

        await flush_changes(db)
        logger.info("Venue updated: %s fields=%s", venue.id, sorted(changes))

        [out] = await self._render(db, [venue])
        return DataResponse[VenueOut](data=out)

    # ── Delete ────────────────────────────────────────────────────────────

    async def delete_venue(self, db: AsyncSession, venue_id: UUID) -> DeleteResponse[VenueOut]:
        venue = await self.get_or_404(db, venue_id)
        [out] = await self._render(db, [venue])

        await db.delete(venue)
        await flush_changes(db)
        logger.info("Venue deleted: %s '%s'", venue.id, venue.place_name)

        return DeleteResponse[VenueOut](message="Venue deleted successfully", data=out)


venue_service = VenueService()
