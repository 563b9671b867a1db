"""Add posts table.

Revision ID: 002_add_posts
Revises: 001_initial
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "002_add_posts"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    post_status_enum = postgresql.ENUM(
        "publish", "draft", "pending", "private",
        name="post_status_enum",
        create_type=False,
    )
    post_status_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("post_type", sa.String(20), nullable=False, server_default="post"),
        sa.Column("post_status", post_status_enum, nullable=False, server_default="publish"),
        sa.Column("menu_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["parent_id"], ["posts.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_posts_parent_id", "posts", ["parent_id"], unique=False)
    op.create_index(
        "ix_posts_type_status_order",
        "posts",
        ["post_type", "post_status", "menu_order"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_posts_type_status_order", table_name="posts")
    op.drop_index("ix_posts_parent_id", table_name="posts")
    op.drop_table("posts")
    op.execute("DROP TYPE IF EXISTS post_status_enum")
