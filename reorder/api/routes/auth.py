"""Authentication routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Request, Response, status
from sqlalchemy import select

from reorder.api.deps import CurrentUser, DBSession
from reorder.config import settings
from reorder.models import User
from reorder.schemas.auth import UserLogin, UserResponse
from reorder.services.auth import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def set_auth_cookies(response: Response, user: User) -> None:
    """Set HTTP-only session cookies for a user."""
    response.set_cookie(
        key="access_token",
        value=auth_service.create_access_token(user.id),
        httponly=True,
        secure=not settings.is_development,
        samesite="lax",
        max_age=settings.jwt_access_token_expire_minutes * 60,
        path="/",
    )
    response.set_cookie(
        key="refresh_token",
        value=auth_service.create_refresh_token(user.id),
        httponly=True,
        secure=not settings.is_development,
        samesite="lax",
        max_age=settings.jwt_refresh_token_expire_days * 86400,
        path="/",
    )


def clear_auth_cookies(response: Response) -> None:
    """Clear authentication cookies."""
    response.delete_cookie(key="access_token", path="/")
    response.delete_cookie(key="refresh_token", path="/")


@router.post("/login", response_model=UserResponse)
async def login(user_data: UserLogin, response: Response, db: DBSession) -> User:
    """Login and set HTTP-only cookies."""
    result = await db.execute(select(User).where(User.email == user_data.email))
    user = result.scalar_one_or_none()

    if not user or not auth_service.verify_password(user_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    set_auth_cookies(response, user)
    return user


@router.post("/refresh", response_model=UserResponse)
async def refresh_token(request: Request, response: Response, db: DBSession) -> User:
    """Renew the session using the refresh token cookie."""
    refresh_token_value = request.cookies.get("refresh_token")

    if not refresh_token_value:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No refresh token provided",
        )

    payload = auth_service.decode_token(refresh_token_value, "refresh")
    user = None
    if payload is not None:
        try:
            result = await db.execute(select(User).where(User.id == UUID(payload.get("sub", ""))))
            user = result.scalar_one_or_none()
        except ValueError:
            user = None

    if user is None or not user.is_active:
        clear_auth_cookies(response)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    set_auth_cookies(response, user)
    return user


@router.post("/logout")
async def logout(response: Response) -> dict:
    """Logout and clear authentication cookies."""
    clear_auth_cookies(response)
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser) -> User:
    """Get the current user."""
    return current_user
