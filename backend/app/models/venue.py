"""
VenueAtlas Backend — Venue SQLAlchemy Model
=============================================

What:  ORM model representing the `venues` table.
Who:   Used by VenueService and the ownership gate of the access control chain.

Ownership:
    `created_by` is set once from the authenticated caller when the venue is
    created and is never reassigned. Update/delete authorization compares it
    against the caller's ID.
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.location import utcnow


class Venue(Base):
    __tablename__ = "venues"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    place_name: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)

    location_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)

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
        CheckConstraint("capacity >= 1", name="ck_venues_capacity_positive"),
        Index("idx_venues_location_id", "location_id"),
        Index("idx_venues_created_by", "created_by"),
        Index("idx_venues_place_name", "place_name"),
    )

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, place_name='{self.place_name}', created_by={self.created_by})>"
