"""User domain entity. Read-only for the task engine."""

from dataclasses import dataclass

from taskhub.domain.enums import Role
from taskhub.domain.exceptions import ValidationException


@dataclass(frozen=True)
class UserEntity:
    """Acting user or task participant. Validation runs on construction."""

    id: str
    email: str
    role: Role
    full_name: str | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("User ID is required", field="id")
        if not isinstance(self.role, Role):
            raise ValidationException(f"Unknown role: {self.role!r}", field="role")
