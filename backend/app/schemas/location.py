"""
VenueAtlas Backend — Location Schemas
=======================================

Request bodies for POST/PUT /api/location and the location response shape.
`code` is normalized to upper case; an empty-string `parent` is read as "no parent".
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.schemas.common import APIModel, LocationRef


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class LocationCreate(APIModel):
    name: str = Field(min_length=1, max_length=255, description="Display name, e.g. 'Kigali'")
    code: str = Field(min_length=1, max_length=64, description="Unique code, stored upper-case")
    parent: Optional[uuid.UUID] = Field(default=None, description="Parent location ID; omit for a root")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("parent", mode="before")
    @classmethod
    def blank_parent(cls, v):
        return _blank_to_none(v)


class LocationUpdate(APIModel):
    """
    Partial update. Only fields present in the body are applied;
    `"parent": null` explicitly moves the location to the root level.
    """
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    code: Optional[str] = Field(default=None, min_length=1, max_length=64)
    parent: Optional[uuid.UUID] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("parent", mode="before")
    @classmethod
    def blank_parent(cls, v):
        return _blank_to_none(v)


class LocationOut(APIModel):
    id: uuid.UUID
    name: str
    code: str
    parent: Optional[LocationRef] = Field(default=None, description="Expanded parent; null for roots")
    created_at: datetime
    updated_at: datetime
