"""User repository. Read-only for the task engine; implements IUserRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.domain.entities import UserEntity
from taskhub.domain.enums import Role
from taskhub.infrastructure.persistence.models.user import User


def user_to_entity(u: User) -> UserEntity:
    """Map ORM User to the domain UserEntity."""
    return UserEntity(
        id=u.id,
        email=u.email,
        role=Role(u.role),
        full_name=u.full_name,
        is_active=u.is_active,
    )


class UserRepository:
    """User lookups by id. Implements IUserRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_id(self, user_id: str) -> UserEntity | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        row = result.scalar_one_or_none()
        return user_to_entity(row) if row else None
