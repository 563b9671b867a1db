"""Post model - the items being reordered."""

import enum
from typing import Optional

from sqlalchemy import Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reorder.models.base import Base, TimestampMixin


class PostStatus(str, enum.Enum):
    """Publication status of a post."""

    PUBLISH = "publish"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"


class Post(Base, TimestampMixin):
    """Post model. `menu_order` defines the default display position."""

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_type_status_order", "post_type", "post_status", "menu_order"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    post_type: Mapped[str] = mapped_column(String(20), nullable=False, default="post")
    post_status: Mapped[PostStatus] = mapped_column(
        Enum(PostStatus, name="post_status_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=PostStatus.PUBLISH,
    )
    menu_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    parent_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    parent: Mapped[Optional["Post"]] = relationship(
        "Post",
        remote_side=[id],
        back_populates="children",
    )
    children: Mapped[list["Post"]] = relationship(
        "Post",
        back_populates="parent",
    )
