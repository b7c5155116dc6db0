"""
VenueAtlas Backend — Shared Pydantic Schemas
==============================================

What:  Base model configuration, response envelopes, embedded references,
       and error/health payloads shared by every resource.
How:   Every schema inherits from `APIModel`, which serializes field names in
       camelCase (`placeName`, `createdAt`) while accepting snake_case input
       as well. FastAPI serializes response models by alias by default.

Envelope shapes:
    DataResponse     {success, data}                 create / get / update
    ListResponse     {success, count, data}          list endpoints
    DeleteResponse   {success, message, data}        delete endpoints
    ErrorResponse    {success: false, error, message, details, request_id}
"""

import uuid
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.user import Role

T = TypeVar("T")


class APIModel(BaseModel):
    """Base for all API schemas: camelCase aliases, ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Embedded references: how a related record appears inside another
# ══════════════════════════════════════════════════════════════════════════


class LocationRef(APIModel):
    id: uuid.UUID
    name: str
    code: str


class UserRef(APIModel):
    id: uuid.UUID
    name: str
    email: str
    role: Role


class OrganizerRef(APIModel):
    id: uuid.UUID
    name: str
    email: str


# ══════════════════════════════════════════════════════════════════════════
# Response envelopes
# ══════════════════════════════════════════════════════════════════════════


class DataResponse(APIModel, Generic[T]):
    success: bool = True
    data: T


class ListResponse(APIModel, Generic[T]):
    success: bool = True
    count: int = Field(description="Number of items in data")
    data: List[T]


class DeleteResponse(APIModel, Generic[T]):
    success: bool = True
    message: str
    data: T


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "success": false,
            "error": "duplicate_key",
            "message": "Email already exists",
            "details": {"field": "email"},
            "request_id": "a1b2c3d4"
        }
    """
    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer health checks."""
    status: str = Field(description="Overall service status: UP or DOWN")
    message: str
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
    checked_at: datetime
