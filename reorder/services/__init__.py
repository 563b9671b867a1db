from reorder.services.auth import AuthService, auth_service
from reorder.services.nonce import NonceService, nonce_service
from reorder.services.post_service import PostService

__all__ = [
    "AuthService",
    "auth_service",
    "NonceService",
    "nonce_service",
    "PostService",
]
