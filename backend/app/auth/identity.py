"""
VenueAtlas Backend — Caller Identity Resolution
=================================================

What:  Resolves the caller from the identity header into a `Caller`.
How:   The header carries a User ID. There is no token or password: a request
       is authenticated if and only if the header names an existing user.

Failure modes (all → 401 UnauthenticatedError):
    - header missing or blank
    - header is not a well-formed ID
    - no user with that ID
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db_session
from app.exceptions import UnauthenticatedError
from app.models.location import Location
from app.models.user import Role, User

logger = logging.getLogger(__name__)

# Declared as a security scheme so the header shows up in the OpenAPI docs
user_id_header = APIKeyHeader(
    name=settings.user_id_header,
    auto_error=False,
    description="ID of the calling user",
)


@dataclass
class Caller:
    """The authenticated user for the current request, with its location loaded."""

    user: User
    location: Optional[Location] = None

    @property
    def id(self) -> UUID:
        return self.user.id

    @property
    def role(self) -> Role:
        return self.user.role


async def resolve_caller(db: AsyncSession, raw_user_id: Optional[str]) -> Caller:
    """
    Turn a raw header value into a Caller.

    Raises:
        UnauthenticatedError: header absent, malformed, or unknown user
    """
    if raw_user_id is None or not raw_user_id.strip():
        raise UnauthenticatedError(
            message=(
                f"Authentication required. Please provide {settings.user_id_header} header"
            )
        )

    try:
        user_id = UUID(raw_user_id.strip())
    except ValueError:
        logger.warning("Rejected malformed caller ID: %r", raw_user_id)
        raise UnauthenticatedError(message="Invalid user ID") from None

    user = await db.get(User, user_id)
    if user is None:
        logger.warning("Rejected unknown caller ID: %s", user_id)
        raise UnauthenticatedError(message="Invalid user ID")

    # Weak reference: a deleted location leaves the caller with location=None
    location = await db.get(Location, user.location_id)
    return Caller(user=user, location=location)


async def get_current_user(
    request: Request,
    raw_user_id: Optional[str] = Depends(user_id_header),
    db: AsyncSession = Depends(get_db_session),
) -> Caller:
    """
    FastAPI dependency: step 1 of the access control chain.

    Also stores the caller on `request.state.caller` for downstream consumers.
    """
    caller = await resolve_caller(db, raw_user_id)
    request.state.caller = caller
    return caller
