"""
VenueAtlas Backend — User Schemas
===================================

Request bodies for POST/PUT /api/user, the user response shape, and the
subtree-scoped list envelope returned by GET /api/user/location/{id}.
"""

import re
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from app.models.user import Role
from app.schemas.common import APIModel, LocationRef

# ASCII word characters only; every separator is followed by a word run
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*(?:\.\w{2,3})+$", re.ASCII)


def normalize_email(v):
    if not isinstance(v, str):
        return v
    email = v.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Please provide a valid email address")
    return email


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class UserCreate(APIModel):
    name: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=1, max_length=320)
    role: Role = Field(description="One of Admin, Organizer, Attend")
    location: uuid.UUID = Field(description="ID of the user's location")

    @field_validator("name", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v)


class UserUpdate(APIModel):
    """Partial update; fields omitted from the body are left unchanged."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, min_length=1, max_length=64)
    email: Optional[str] = Field(default=None, min_length=1, max_length=320)
    role: Optional[Role] = None
    location: Optional[uuid.UUID] = None

    @field_validator("name", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _strip(v)

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v)


class UserOut(APIModel):
    id: uuid.UUID
    name: str
    phone: str
    email: str
    role: Role
    location: Optional[LocationRef] = Field(default=None, description="Expanded location; null if dangling")
    created_at: datetime
    updated_at: datetime


class UserSubtreeListResponse(APIModel):
    success: bool = True
    count: int
    locations_searched: int = Field(description="Number of locations in the resolved subtree")
    data: List[UserOut]
