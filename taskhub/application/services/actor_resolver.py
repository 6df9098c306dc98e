"""Actor resolver: load the acting user before any policy check."""

from __future__ import annotations

from taskhub.application.interfaces.repositories import IUserRepository
from taskhub.domain.entities import UserEntity
from taskhub.domain.exceptions import ResourceNotFoundException


class ActorResolver:
    """Turn a caller-supplied user id into a UserEntity."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def resolve(self, actor_id: str) -> UserEntity:
        """Return the acting user. Raises ResourceNotFoundException when unknown."""
        return await self.resolve_user(actor_id)

    async def resolve_user(self, user_id: str) -> UserEntity:
        """Return any user by id (e.g. an assignee). Raises ResourceNotFoundException."""
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user
