"""
VenueAtlas Backend — User SQLAlchemy Model
============================================

What:  ORM model representing the `users` table.
Who:   Used by UserService, the identity resolution step of the access
       control chain, and VenueService (organizer lookups, creator expansion).

The `location_id` reference is weak: deleting the location leaves it dangling.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.location import utcnow


class Role(str, enum.Enum):
    """The three caller roles. Values are the wire/database representation."""

    ADMIN = "Admin"
    ORGANIZER = "Organizer"
    ATTEND = "Attend"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        comment="Unique lower-case email address",
    )

    # Stored as the enum *value* ("Admin") rather than the member name
    role: Mapped[Role] = mapped_column(
        Enum(
            Role,
            name="user_role",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            native_enum=False,
            length=32,
        ),
        nullable=False,
    )

    location_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)

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
        Index("uq_users_email", "email", unique=True),
        Index("idx_users_role", "role"),
        Index("idx_users_location_id", "location_id"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
