"""
VenueAtlas Backend — User Service
===================================

What:  CRUD over users, plus role-filtered and location-subtree-scoped listing.
Who:   Called by the /api/user route handlers.

Integrity rules:
    - email is unique (checked before write, backstopped by a unique index)
    - the referenced location must exist on create and whenever it changes

Deleting a user does not touch venues they created; their `createdBy`
reference is left dangling.
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DuplicateKeyError, NotFoundError, ValidationError
from app.models.user import Role, User
from app.schemas.common import DataResponse, DeleteResponse, ListResponse, LocationRef
from app.schemas.user import UserCreate, UserOut, UserSubtreeListResponse, UserUpdate
from app.services.location_service import location_service
from app.services.location_tree import resolve_subtree
from app.services.persistence import flush_changes
from app.services.references import location_refs

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "Email already exists"


def parse_role(raw: str) -> Role:
    try:
        return Role(raw)
    except ValueError:
        raise ValidationError(
            message="Invalid role. Must be Admin, Organizer, or Attend",
            field="role",
            context={"allowed": Role.values()},
        ) from None


def to_user_out(user: User, refs: Dict[UUID, LocationRef]) -> UserOut:
    return UserOut(
        id=user.id,
        name=user.name,
        phone=user.phone,
        email=user.email,
        role=user.role,
        location=refs.get(user.location_id),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class UserService:

    async def get_or_404(self, db: AsyncSession, user_id: UUID, label: str = "User") -> User:
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError(resource=label, resource_id=str(user_id))
        return user

    async def _ensure_email_available(
        self, db: AsyncSession, email: str, exclude_id: Optional[UUID] = None
    ) -> None:
        query = select(User.id).where(User.email == email)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await db.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise DuplicateKeyError(message=DUPLICATE_EMAIL_MESSAGE, field="email")

    async def _render(self, db: AsyncSession, users: List[User]) -> List[UserOut]:
        refs = await location_refs(db, (u.location_id for u in users))
        return [to_user_out(u, refs) for u in users]

    async def _list(self, db: AsyncSession, query) -> List[UserOut]:
        result = await db.execute(query.order_by(User.created_at))
        return await self._render(db, list(result.scalars().all()))

    # ── Create ────────────────────────────────────────────────────────────

    async def create_user(self, db: AsyncSession, payload: UserCreate) -> DataResponse[UserOut]:
        await location_service.get_or_404(db, payload.location)
        await self._ensure_email_available(db, payload.email)

        user = User(
            name=payload.name,
            phone=payload.phone,
            email=payload.email,
            role=payload.role,
            location_id=payload.location,
        )
        db.add(user)
        await flush_changes(db, DUPLICATE_EMAIL_MESSAGE, field="email")
        logger.info("User created: %s (%s, role=%s)", user.id, user.email, user.role.value)

        [out] = await self._render(db, [user])
        return DataResponse[UserOut](data=out)

    # ── Read ──────────────────────────────────────────────────────────────

    async def list_users(self, db: AsyncSession) -> ListResponse[UserOut]:
        data = await self._list(db, select(User))
        return ListResponse[UserOut](count=len(data), data=data)

    async def list_users_by_role(self, db: AsyncSession, role: str) -> ListResponse[UserOut]:
        data = await self._list(db, select(User).where(User.role == parse_role(role)))
        return ListResponse[UserOut](count=len(data), data=data)

    async def list_users_by_location(
        self, db: AsyncSession, location_id: UUID
    ) -> UserSubtreeListResponse:
        """
        Users located anywhere in the subtree rooted at `location_id`.

        The location itself is not required to exist; an unknown ID resolves
        to a one-element subtree and matches nobody.
        """
        location_ids = await resolve_subtree(db, location_id)
        data = await self._list(db, select(User).where(User.location_id.in_(location_ids)))
        return UserSubtreeListResponse(
            count=len(data),
            locations_searched=len(location_ids),
            data=data,
        )

    async def get_user(self, db: AsyncSession, user_id: UUID) -> DataResponse[UserOut]:
        user = await self.get_or_404(db, user_id)
        [out] = await self._render(db, [user])
        return DataResponse[UserOut](data=out)

    # ── Update ────────────────────────────────────────────────────────────

    async def update_user(
        self, db: AsyncSession, user_id: UUID, payload: UserUpdate
    ) -> DataResponse[UserOut]:
        changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}

        if "location" in changes:
            await location_service.get_or_404(db, changes["location"])

        user = await self.get_or_404(db, user_id)

        if "email" in changes and changes["email"] != user.email:
            await self._ensure_email_available(db, changes["email"], exclude_id=user.id)
            user.email = changes["email"]
        for field in ("name", "phone", "role"):
            if field in changes:
                setattr(user, field, changes[field])
        if "location" in changes:
            user.location_id = changes["location"]

        await flush_changes(db, DUPLICATE_EMAIL_MESSAGE, field="email")
        logger.info("User updated: %s fields=%s", user.id, sorted(changes))

        [out] = await self._render(db, [user])
        return DataResponse[UserOut](data=out)

    # ── Delete ────────────────────────────────────────────────────────────

    async def delete_user(self, db: AsyncSession, user_id: UUID) -> DeleteResponse[UserOut]:
        user = await self.get_or_404(db, user_id)
        [out] = await self._render(db, [user])

        await db.delete(user)
        await flush_changes(db)
        logger.info("User deleted: %s (%s)", user.id, user.email)

        return DeleteResponse[UserOut](message="User deleted successfully", data=out)


user_service = UserService()
