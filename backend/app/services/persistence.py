"""
VenueAtlas Backend — Write Helpers
====================================

What:  Flushes pending ORM changes and translates database failures into
       application exceptions.
How:   Uniqueness is checked up front by the services (so the common case gets
       a precise message), but check-then-insert is not transactional. The
       unique indexes on `locations.code` and `users.email` backstop the race;
       an IntegrityError surfacing here is reported as DuplicateKeyError.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, DuplicateKeyError

logger = logging.getLogger(__name__)


async def flush_changes(
    db: AsyncSession,
    duplicate_message: str = "Duplicate value",
    field: Optional[str] = None,
) -> None:
    """
    Flush the session so generated IDs and constraint violations surface now.

    Raises:
        DuplicateKeyError: a unique index rejected the write (→ 400)
        DatabaseError: any other database failure (→ 500, raw message)
    """
    try:
        await db.flush()
    except IntegrityError as e:
        logger.warning("Integrity error on flush: %s", e.orig)
        raise DuplicateKeyError(message=duplicate_message, field=field) from e
    except SQLAlchemyError as e:
        logger.error("Database error on flush: %s", str(e), exc_info=True)
        raise DatabaseError(message=str(e), context={"error_type": type(e).__name__}) from e
