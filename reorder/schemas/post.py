"""Pydantic schemas for posts and reorder results."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field

from reorder.models.post import PostStatus


class SortDirection(str, Enum):
    """Direction used when listing by menu_order."""

    ASC = "ASC"
    DESC = "DESC"


class PostResponse(BaseModel):
    """Schema for post response."""

    id: int
    title: str
    post_type: str
    post_status: PostStatus
    menu_order: int
    parent_id: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ReorderOutcome(str, Enum):
    """How much of a submission reached the database."""

    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


class FailedWrite(BaseModel):
    """A single post whose menu_order could not be written."""

    id: int
    error: str


class ReorderResult(BaseModel):
    """Report of a persisted submission."""

    total: int = Field(..., ge=0)
    written: int = Field(..., ge=0)
    failed: list[FailedWrite] = Field(default_factory=list)

    @computed_field
    @property
    def outcome(self) -> ReorderOutcome:
        if self.written == self.total:
            return ReorderOutcome.FULL
        if self.written == 0:
            return ReorderOutcome.NONE
        return ReorderOutcome.PARTIAL

    @computed_field
    @property
    def success(self) -> bool:
        return self.outcome == ReorderOutcome.FULL
