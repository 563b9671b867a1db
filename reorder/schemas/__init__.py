from reorder.schemas.auth import UserLogin, UserResponse
from reorder.schemas.post import (
    PostResponse,
    SortDirection,
    ReorderOutcome,
    FailedWrite,
    ReorderResult,
)

__all__ = [
    "UserLogin",
    "UserResponse",
    "PostResponse",
    "SortDirection",
    "ReorderOutcome",
    "FailedWrite",
    "ReorderResult",
]
