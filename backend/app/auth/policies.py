"""
VenueAtlas Backend — Access Policies
======================================

What:  Capability checks applied after identity resolution, and the policy
       object that sequences them.
How:   Each check is an async callable taking an AccessContext. It returns
       None to pass and raises an application exception to fail; the
       exception carries the reason and maps to the HTTP status.
       AccessPolicy runs its checks in the listed order and stops at the
       first failure. No retries, no backtracking.

Usage:
    @router.post("/venue")
    async def create_venue(caller: Caller = Depends(authorize(require_role(Role.ADMIN, Role.ORGANIZER)))):
        ...
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Mapping, Tuple
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.identity import Caller, get_current_user
from app.database import get_db_session
from app.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.models.user import Role
from app.models.venue import Venue

logger = logging.getLogger(__name__)


@dataclass
class AccessContext:
    """Everything a check may look at: who is calling, and what they are targeting."""

    caller: Caller
    db: AsyncSession
    path_params: Mapping[str, str] = field(default_factory=dict)


AccessCheck = Callable[[AccessContext], Awaitable[None]]


def require_role(*roles: Role) -> AccessCheck:
    """Build a check that passes only callers whose role is one of `roles`."""
    allowed = frozenset(roles)
    listed = ", ".join(role.value for role in roles)

    async def check(ctx: AccessContext) -> None:
        if ctx.caller.role not in allowed:
            logger.warning(
                "Caller %s (%s) denied: requires one of %s",
                ctx.caller.id, ctx.caller.role.value, listed,
            )
            raise ForbiddenError(
                message=f"Access denied. Required role(s): {listed}",
                context={"required_roles": [role.value for role in roles]},
            )

    check.__name__ = f"require_role({listed})"
    return check


async def require_venue_owner(ctx: AccessContext) -> None:
    """
    Pass Admins unconditionally; otherwise the caller must have created the
    venue named by the `venue_id` path parameter.
    """
    if ctx.caller.role == Role.ADMIN:
        return

    raw_id = ctx.path_params.get("venue_id")
    if not raw_id:
        raise ValidationError(message="Venue ID is required", field="venue_id")
    try:
        venue_id = UUID(str(raw_id))
    except ValueError:
        raise ValidationError(message=f"Invalid venue ID '{raw_id}'", field="venue_id") from None

    venue = await ctx.db.get(Venue, venue_id)
    if venue is None:
        raise NotFoundError(resource="Venue", resource_id=str(venue_id))

    if venue.created_by != ctx.caller.id:
        logger.warning(
            "Caller %s denied: venue %s belongs to %s",
            ctx.caller.id, venue.id, venue.created_by,
        )
        raise ForbiddenError(message="Access denied. You can only modify venues you created")


class AccessPolicy:
    """An ordered list of checks, enforced front to back."""

    def __init__(self, *checks: AccessCheck):
        self.checks: Tuple[AccessCheck, ...] = checks

    async def enforce(self, ctx: AccessContext) -> None:
        for check in self.checks:
            await check(ctx)

    def __repr__(self) -> str:
        names = ", ".join(getattr(c, "__name__", repr(c)) for c in self.checks)
        return f"AccessPolicy({names})"


def authorize(*checks: AccessCheck):
    """
    Build a route dependency: resolve the caller, then enforce `checks` in order.

    With no checks this is identity resolution alone.
    """
    policy = AccessPolicy(*checks)

    async def dependency(
        request: Request,
        caller: Caller = Depends(get_current_user),
        db: AsyncSession = Depends(get_db_session),
    ) -> Caller:
        await policy.enforce(
            AccessContext(caller=caller, db=db, path_params=request.path_params)
        )
        return caller

    return dependency
