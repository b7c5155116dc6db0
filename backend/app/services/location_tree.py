"""
VenueAtlas Backend — Location Subtree Resolution
==================================================

What:  Computes the set of location IDs made up of a root location and every
       location whose parent chain reaches it.
Who:   UserService.list_users_by_location and VenueService.list_venues_by_location,
       which use the result as an `IN` membership filter.

Algorithm:
    Explicit worklist (stack) traversal over the parent-pointer relation:

        stack = [root]
        while stack:
            node = stack.pop()
            emit node
            stack += children(node)      ← one "WHERE parent_id = :node" query

    Cost is one query per visited node: no batching, no memoization, and no
    parallel fan-out across siblings.

Cycle guard:
    The location tree is supposed to be acyclic, but parent reassignment only
    rejects direct self-parenting (see LocationService.update_location), so a
    cycle through an ancestor can be introduced. A visited set makes the walk
    skip any node it has already emitted and log a warning, so resolution
    always terminates and never returns duplicates.
"""

import logging
from typing import List, Set
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.location import Location

logger = logging.getLogger(__name__)


async def child_location_ids(db: AsyncSession, parent_id: UUID) -> List[UUID]:
    """Direct children of a location (one query)."""
    result = await db.execute(
        select(Location.id).where(Location.parent_id == parent_id)
    )
    return list(result.scalars().all())


async def resolve_subtree(db: AsyncSession, root_id: UUID) -> List[UUID]:
    """
    Resolve `root_id` and all of its transitive children.

    Returns:
        Location IDs in depth-first pre-order, root first, each exactly once.
        A location with no children resolves to `[root_id]`. The root is
        included even if no such location exists.
    """
    resolved: List[UUID] = []
    visited: Set[UUID] = set()
    stack: List[UUID] = [root_id]

    while stack:
        current = stack.pop()
        if current in visited:
            logger.warning(
                "Location %s reached twice while resolving subtree of %s; "
                "the parent graph contains a cycle",
                current,
                root_id,
            )
            continue
        visited.add(current)
        resolved.append(current)

        children = await child_location_ids(db, current)
        # Reversed so siblings are emitted in query order
        stack.extend(reversed(children))

    logger.debug("Resolved subtree of %s: %d locations", root_id, len(resolved))
    return resolved
