"""Helpers shared by the HTTP tests."""

from httpx import AsyncClient

from reorder.models import User
from reorder.services.auth import auth_service
from reorder.services.nonce import SORT_ACTION, NonceScope, nonce_service


def login(client: AsyncClient, user: User) -> None:
    """Put a session cookie for the user on the client."""
    client.cookies.set("access_token", auth_service.create_access_token(user.id))


def sort_nonce(user: User, post_type: str = "post", post_status: str = "publish") -> str:
    """Issue the nonce a reorder page for the given list would embed."""
    return nonce_service.create(
        SORT_ACTION, user.id, NonceScope(post_type=post_type, post_status=post_status)
    )
