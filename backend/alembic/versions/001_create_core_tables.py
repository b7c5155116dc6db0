"""Create locations, users and venues tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the three core tables.
How:   Reference columns (parent_id, location_id, created_by) are plain UUID
       columns with lookup indexes and no foreign key constraints.

Rollback: downgrade() drops all three tables (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create the tables with their unique and lookup indexes."""
    op.create_table(
        "locations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "code",
            sa.String(64),
            nullable=False,
            comment="Unique upper-case location code",
        ),
        sa.Column(
            "parent_id",
            sa.Uuid(),
            nullable=True,
            comment="Parent location; NULL for a root location",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_locations_code", "locations", ["code"], unique=True)
    # Every subtree walk filters on parent_id once per visited node
    op.create_index("idx_locations_parent_id", "locations", ["parent_id"])

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(64), nullable=False),
        sa.Column(
            "email",
            sa.String(320),
            nullable=False,
            comment="Unique lower-case email address",
        ),
        sa.Column(
            "role",
            sa.Enum(
                "Admin",
                "Organizer",
                "Attend",
                name="user_role",
                native_enum=False,
                length=32,
            ),
            nullable=False,
        ),
        sa.Column("location_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("uq_users_email", "users", ["email"], unique=True)
    op.create_index("idx_users_role", "users", ["role"])
    op.create_index("idx_users_location_id", "users", ["location_id"])

    op.create_table(
        "venues",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("place_name", sa.String(255), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("location_id", sa.Uuid(), nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("capacity >= 1", name="ck_venues_capacity_positive"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_venues_location_id", "venues", ["location_id"])
    op.create_index("idx_venues_created_by", "venues", ["created_by"])
    op.create_index("idx_venues_place_name", "venues", ["place_name"])


def downgrade() -> None:
    """
    Drop all three tables.

    WARNING: This is destructive. All location, user and venue data is lost.
    """
    op.drop_index("idx_venues_place_name", table_name="venues")
    op.drop_index("idx_venues_created_by", table_name="venues")
    op.drop_index("idx_venues_location_id", table_name="venues")
    op.drop_table("venues")

    op.drop_index("idx_users_location_id", table_name="users")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_index("uq_users_email", table_name="users")
    op.drop_table("users")

    op.drop_index("idx_locations_parent_id", table_name="locations")
    op.drop_index("uq_locations_code", table_name="locations")
    op.drop_table("locations")
