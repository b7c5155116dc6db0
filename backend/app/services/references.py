"""
VenueAtlas Backend — Reference Expansion
==========================================

What:  Bulk loaders that turn stored reference IDs into embedded
       `{id, name, code}` / `{id, name, email, role}` objects for responses.
How:   One `WHERE id IN (...)` query per referenced table per response,
       regardless of how many records are being rendered.

References are weak. An ID with no matching row is simply absent from the
returned mapping, and callers render it as null.
"""

from typing import Dict, Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.location import Location
from app.models.user import User
from app.schemas.common import LocationRef, UserRef


def _distinct(ids: Iterable[Optional[UUID]]) -> set:
    return {i for i in ids if i is not None}


async def location_refs(
    db: AsyncSession, ids: Iterable[Optional[UUID]]
) -> Dict[UUID, LocationRef]:
    wanted = _distinct(ids)
    if not wanted:
        return {}
    result = await db.execute(
        select(Location.id, Location.name, Location.code).where(Location.id.in_(wanted))
    )
    return {
        row.id: LocationRef(id=row.id, name=row.name, code=row.code)
        for row in result.all()
    }


async def user_refs(
    db: AsyncSession, ids: Iterable[Optional[UUID]]
) -> Dict[UUID, UserRef]:
    wanted = _distinct(ids)
    if not wanted:
        return {}
    result = await db.execute(
        select(User.id, User.name, User.email, User.role).where(User.id.in_(wanted))
    )
    return {
        row.id: UserRef(id=row.id, name=row.name, email=row.email, role=row.role)
        for row in result.all()
    }
