"""Anti-forgery tokens for admin actions.

A nonce is issued when an admin page is rendered and must accompany every
ajax call made from that page. It is bound to one action, one user and the
list (post type + status) the page shows, and expires after
``settings.nonce_ttl_seconds``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import JWTError, jwt

from reorder.config import settings
from reorder.services.errors import InvalidNonceError

logger = logging.getLogger(__name__)

SORT_ACTION = "post_sort"


@dataclass(frozen=True)
class NonceScope:
    """The list of posts a nonce authorizes writes to."""

    post_type: str
    post_status: str


@dataclass(frozen=True)
class NonceClaims:
    """Verified contents of a nonce."""

    action: str
    user_id: UUID
    scope: NonceScope
    expires_at: datetime


class NonceService:
    """Service for issuing and verifying action nonces."""

    def __init__(
        self,
        secret_key: str | None = None,
        ttl_seconds: int | None = None,
        algorithm: str = "HS256",
    ):
        self.secret_key = secret_key or settings.nonce_secret_key
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.nonce_ttl_seconds
        self.algorithm = algorithm

    def create(self, action: str, user_id: UUID, scope: NonceScope) -> str:
        """Create a nonce for an action performed by a user on a list."""
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + timedelta(seconds=self.ttl_seconds)
        to_encode: dict[str, Any] = {
            "act": action,
            "sub": str(user_id),
            "post_type": scope.post_type,
            "post_status": scope.post_status,
            "type": "nonce",
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str | None, action: str, user_id: UUID) -> NonceClaims:
        """Verify a nonce and return its claims.

        Raises:
            InvalidNonceError: if the token is missing, cannot be decoded, has
                expired, or was issued for another action or user.
        """
        if not token:
            raise InvalidNonceError("Missing nonce")

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"Rejected nonce for action {action}: {e}")
            raise InvalidNonceError("Invalid or expired nonce") from e

        if payload.get("type") != "nonce" or payload.get("act") != action:
            logger.warning(f"Rejected nonce issued for another action (expected {action})")
            raise InvalidNonceError("Nonce was not issued for this action")

        if payload.get("sub") != str(user_id):
            logger.warning(f"Rejected nonce issued for another user (user {user_id})")
            raise InvalidNonceError("Nonce was not issued for this user")

        post_type = payload.get("post_type")
        post_status = payload.get("post_status")
        if not post_type or not post_status:
            raise InvalidNonceError("Nonce has no scope")

        return NonceClaims(
            action=action,
            user_id=user_id,
            scope=NonceScope(post_type=post_type, post_status=post_status),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


nonce_service = NonceService()
