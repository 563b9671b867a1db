from reorder.api.routes.auth import router as auth_router
from reorder.api.routes.posts import router as posts_router
from reorder.api.routes.admin import router as admin_router

__all__ = [
    "auth_router",
    "posts_router",
    "admin_router",
]
