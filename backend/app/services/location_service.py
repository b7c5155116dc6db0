"""
VenueAtlas Backend — Location Service
=======================================

What:  CRUD over the location tree with the tree's integrity rules.
Who:   Called by the /api/location route handlers, and by the user and venue
       services to check that a referenced location exists.

Integrity rules:
    - code is unique (checked before write, backstopped by a unique index)
    - a parent, when given, must exist
    - a location may not be its own parent (update)
    - a location with direct children cannot be deleted

Known limitation:
    Parent reassignment only rejects direct self-parenting. Moving a location
    under one of its own descendants is NOT detected and creates a cycle.
    Subtree resolution guards against cycles on read (see location_tree.py).
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    ConflictError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)
from app.models.location import Location
from app.schemas.common import DataResponse, DeleteResponse, ListResponse, LocationRef
from app.schemas.location import LocationCreate, LocationOut, LocationUpdate
from app.services.persistence import flush_changes
from app.services.references import location_refs

logger = logging.getLogger(__name__)

# Path values of GET /api/location/parent/{parent} that select root locations
ROOT_SENTINELS = frozenset({"root", "null"})

DUPLICATE_CODE_MESSAGE = "Location code already exists"


def parse_location_id(raw: str, field: str = "id") -> UUID:
    """Parse a location ID taken from a URL path segment."""
    try:
        return UUID(raw)
    except (TypeError, ValueError):
        raise ValidationError(message=f"Invalid location ID '{raw}'", field=field) from None


def to_location_out(location: Location, refs: Dict[UUID, LocationRef]) -> LocationOut:
    return LocationOut(
        id=location.id,
        name=location.name,
        code=location.code,
        parent=refs.get(location.parent_id) if location.parent_id else None,
        created_at=location.created_at,
        updated_at=location.updated_at,
    )


class LocationService:
    """
    Business logic for the location tree.

    All methods take the request-scoped session as their first argument;
    the service itself holds no state.
    """

    async def get_or_404(
        self, db: AsyncSession, location_id: UUID, label: str = "Location"
    ) -> Location:
        """
        Fetch a location or raise NotFoundError labelled for the caller's context
        (e.g. "Parent location not found").
        """
        location = await db.get(Location, location_id)
        if location is None:
            raise NotFoundError(resource=label, resource_id=str(location_id))
        return location

    async def _ensure_code_available(
        self, db: AsyncSession, code: str, exclude_id: Optional[UUID] = None
    ) -> None:
        query = select(Location.id).where(Location.code == code)
        if exclude_id is not None:
            query = query.where(Location.id != exclude_id)
        result = await db.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise DuplicateKeyError(message=DUPLICATE_CODE_MESSAGE, field="code")

    async def _render(self, db: AsyncSession, locations: List[Location]) -> List[LocationOut]:
        refs = await location_refs(db, (loc.parent_id for loc in locations))
        return [to_location_out(loc, refs) for loc in locations]

    # ── Create ────────────────────────────────────────────────────────────

    async def create_location(
        self, db: AsyncSession, payload: LocationCreate
    ) -> DataResponse[LocationOut]:
        if payload.parent is not None:
            await self.get_or_404(db, payload.parent, label="Parent location")

        await self._ensure_code_available(db, payload.code)

        location = Location(name=payload.name, code=payload.code, parent_id=payload.parent)
        db.add(location)
        await flush_changes(db, DUPLICATE_CODE_MESSAGE, field="code")
        logger.info(
            "Location created: %s (%s) parent=%s", location.id, location.code, location.parent_id
        )

        [out] = await self._render(db, [location])
        return DataResponse[LocationOut](data=out)

    # ── Read ──────────────────────────────────────────────────────────────

    async def list_locations(self, db: AsyncSession) -> ListResponse[LocationOut]:
        result = await db.execute(select(Location).order_by(Location.created_at))
        locations = list(result.scalars().all())
        data = await self._render(db, locations)
        return ListResponse[LocationOut](count=len(data), data=data)

    async def list_locations_by_parent(
        self, db: AsyncSession, parent: str
    ) -> ListResponse[LocationOut]:
        """
        List the direct children of `parent`, or the root locations when
        `parent` is one of the sentinels "root" / "null".
        """
        query = select(Location).order_by(Location.created_at)
        if parent.strip().lower() in ROOT_SENTINELS:
            query = query.where(Location.parent_id.is_(None))
        else:
            query = query.where(Location.parent_id == parse_location_id(parent, field="parent"))

        result = await db.execute(query)
        locations = list(result.scalars().all())
        data = await self._render(db, locations)
        return ListResponse[LocationOut](count=len(data), data=data)

    async def get_location(self, db: AsyncSession, location_id: UUID) -> DataResponse[LocationOut]:
        location = await self.get_or_404(db, location_id)
        [out] = await self._render(db, [location])
        return DataResponse[LocationOut](data=out)

    # ── Update ────────────────────────────────────────────────────────────

    async def update_location(
        self, db: AsyncSession, location_id: UUID, payload: LocationUpdate
    ) -> DataResponse[LocationOut]:
        """
        Apply a partial update.

        Order of checks: self-parenting, parent existence, target existence,
        code uniqueness. Only direct self-parenting is rejected; see the
        module docstring.
        """
        changes = payload.model_dump(exclude_unset=True)

        if "parent" in changes and changes["parent"] is not None:
            new_parent = changes["parent"]
            if new_parent == location_id:
                raise ValidationError(message="Location cannot be its own parent", field="parent")
            await self.get_or_404(db, new_parent, label="Parent location")

        location = await self.get_or_404(db, location_id)

        if changes.get("name") is not None:
            location.name = changes["name"]
        if changes.get("code") is not None and changes["code"] != location.code:
            await self._ensure_code_available(db, changes["code"], exclude_id=location.id)
            location.code = changes["code"]
        if "parent" in changes:
            location.parent_id = changes["parent"]

        await flush_changes(db, DUPLICATE_CODE_MESSAGE, field="code")
        logger.info("Location updated: %s fields=%s", location.id, sorted(changes))

        [out] = await self._render(db, [location])
        return DataResponse[LocationOut](data=out)

    # ── Delete ────────────────────────────────────────────────────────────

    async def count_children(self, db: AsyncSession, location_id: UUID) -> int:
        result = await db.execute(
            select(func.count(Location.id)).where(Location.parent_id == location_id)
        )
        return result.scalar() or 0

    async def delete_location(
        self, db: AsyncSession, location_id: UUID
    ) -> DeleteResponse[LocationOut]:
        """
        Delete a childless location.

        Users and venues that reference it are left untouched (dangling).
        """
        children = await self.count_children(db, location_id)
        if children > 0:
            raise ConflictError(
                message="Cannot delete location with child locations",
                context={"location_id": str(location_id), "children": children},
            )

        location = await self.get_or_404(db, location_id)
        [out] = await self._render(db, [location])

        await db.delete(location)
        await flush_changes(db)
        logger.info("Location deleted: %s (%s)", location.id, location.code)

        return DeleteResponse[LocationOut](message="Location deleted successfully", data=out)


location_service = LocationService()
