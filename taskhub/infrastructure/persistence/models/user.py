"""User ORM model. Users are managed outside the task engine; tasks only reference them."""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from taskhub.domain.enums import Role
from taskhub.infrastructure.persistence.database import Base
from taskhub.infrastructure.persistence.models.mixins import TaskhubModel


class User(TaskhubModel, Base):
    """User model. Table: app_user. Unique email."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=Role.CUSTOMER.value, server_default=Role.CUSTOMER.value
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
