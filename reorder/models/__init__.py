from reorder.models.base import Base
from reorder.models.user import User, UserRole, ROLE_CAPABILITIES
from reorder.models.post import Post, PostStatus

__all__ = [
    "Base",
    "User",
    "UserRole",
    "ROLE_CAPABILITIES",
    "Post",
    "PostStatus",
]
