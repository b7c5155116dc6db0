"""
VenueAtlas Backend — Venue Schemas
====================================

Request bodies for POST/PUT /api/venue and the venue response shapes.
`createdBy` is never accepted from the client; it comes from the caller.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from app.schemas.common import APIModel, LocationRef, OrganizerRef, UserRef

# Upper bound of the 32-bit integer column
MAX_CAPACITY = 2**31 - 1


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class VenueCreate(APIModel):
    place_name: str = Field(min_length=1, max_length=255, description="e.g. 'Conference Hall A'")
    capacity: int = Field(ge=1, le=MAX_CAPACITY, description="Maximum attendance, at least 1")
    location: uuid.UUID

    @field_validator("place_name", mode="before")
    @classmethod
    def strip_place_name(cls, v):
        return _strip(v)


class VenueUpdate(APIModel):
    place_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    capacity: Optional[int] = Field(default=None, ge=1, le=MAX_CAPACITY)
    location: Optional[uuid.UUID] = None

    @field_validator("place_name", mode="before")
    @classmethod
    def strip_place_name(cls, v):
        return _strip(v)


class VenueOut(APIModel):
    id: uuid.UUID
    place_name: str
    capacity: int
    location: Optional[LocationRef] = None
    created_by: Optional[UserRef] = None
    created_at: datetime
    updated_at: datetime


class VenueOrganizerListResponse(APIModel):
    success: bool = True
    count: int
    organizer: OrganizerRef
    data: List[VenueOut]


class VenueSubtreeListResponse(APIModel):
    success: bool = True
    count: int
    locations_searched: int
    location: LocationRef
    data: List[VenueOut]
