"""Authentication service with JWT session cookies and password hashing."""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import bcrypt
from jose import JWTError, jwt

from reorder.config import settings


class AuthService:
    """Service for authentication operations."""

    def __init__(self):
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.access_token_expire_minutes = settings.jwt_access_token_expire_minutes
        self.refresh_token_expire_days = settings.jwt_refresh_token_expire_days

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt()
        return bcrypt.hashpw(password.encode(), salt).decode()

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())

    def _create_token(self, user_id: UUID, token_type: str, lifetime: timedelta) -> str:
        to_encode: dict[str, Any] = {
            "sub": str(user_id),
            "type": token_type,
            "exp": datetime.now(timezone.utc) + lifetime,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def create_access_token(self, user_id: UUID) -> str:
        """Create a short-lived session token."""
        return self._create_token(
            user_id, "access", timedelta(minutes=self.access_token_expire_minutes)
        )

    def create_refresh_token(self, user_id: UUID) -> str:
        """Create a long-lived token used to renew the session."""
        return self._create_token(
            user_id, "refresh", timedelta(days=self.refresh_token_expire_days)
        )

    def decode_token(self, token: str, token_type: str) -> dict[str, Any] | None:
        """Decode a token and check its type. Returns None when invalid."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None
        if payload.get("type") != token_type:
            return None
        return payload


auth_service = AuthService()
