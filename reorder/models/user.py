"""User model."""

import enum

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from reorder.models.base import Base, TimestampMixin, UUIDMixin


class UserRole(str, enum.Enum):
    """Roles, from most to least privileged."""

    ADMINISTRATOR = "administrator"
    EDITOR = "editor"
    AUTHOR = "author"
    CONTRIBUTOR = "contributor"
    SUBSCRIBER = "subscriber"


ROLE_CAPABILITIES: dict[UserRole, frozenset[str]] = {
    UserRole.ADMINISTRATOR: frozenset({"read", "edit_posts", "manage_options"}),
    UserRole.EDITOR: frozenset({"read", "edit_posts"}),
    UserRole.AUTHOR: frozenset({"read", "edit_posts"}),
    UserRole.CONTRIBUTOR: frozenset({"read", "edit_posts"}),
    UserRole.SUBSCRIBER: frozenset({"read"}),
}


class User(Base, UUIDMixin, TimestampMixin):
    """User model for authentication."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role_enum", values_callable=lambda x: [e.value for e in x]),
        default=UserRole.SUBSCRIBER,
        nullable=False,
    )

    def has_capability(self, capability: str) -> bool:
        """Check whether the user's role grants a capability."""
        return capability in ROLE_CAPABILITIES.get(self.role, frozenset())
