"""
VenueAtlas Backend — Location SQLAlchemy Model
================================================

What:  ORM model representing the `locations` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by LocationService, the descendant resolver, and reference checks
       in the user and venue services.

Table Design:
    - parent_id: parent pointer forming the location tree; NULL marks a root.
      Stored as a plain UUID column without a foreign key constraint, so
      references stay weak (no cascading, no delete guard at the DB level).
    - code: globally unique, stored upper-cased.
    - Index on parent_id: every subtree walk issues one
      "WHERE parent_id = :id" query per visited node.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Location(Base):
    """
    A node in the geographic region tree (country → city → district ...).

    Lifecycle:
        1. Created standalone (root) or under an existing parent
        2. Updated in place; the parent may be reassigned
        3. Deleted only once it has no direct children
    """

    __tablename__ = "locations"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    code: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Unique upper-case location code",
    )

    parent_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        default=None,
        comment="Parent location; NULL for a root location",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("uq_locations_code", "code", unique=True),
        Index("idx_locations_parent_id", "parent_id"),
    )

    def __repr__(self) -> str:
        return f"<Location(id={self.id}, code='{self.code}', parent_id={self.parent_id})>"
