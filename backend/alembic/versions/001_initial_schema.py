"""Initial schema — users, follow edges, posts, tags, likes, comments, auth tokens.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _user_fk(column: str) -> sa.Column:
    return sa.Column(
        column, sa.Integer,
        sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )


def _post_fk() -> sa.Column:
    return sa.Column(
        "post_id", sa.Integer,
        sa.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False,
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True),
        nullable=False, server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(30), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_digest", sa.String(255), nullable=False),
        sa.Column("birthdate", sa.Date, nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        _created_at(),
    )

    op.create_table(
        "user_followings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _user_fk("user_id"),
        _user_fk("following_id"),
        _created_at(),
        sa.UniqueConstraint("user_id", "following_id", name="uq_user_followings_pair"),
        sa.CheckConstraint("user_id != following_id", name="ck_user_followings_no_self"),
    )
    op.create_index(
        "ix_user_followings_following_id", "user_followings",
        ["following_id", "user_id"],
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("text", sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _user_fk("author_id"),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image", sa.LargeBinary, nullable=False),
        sa.Column("image_content_type", sa.String(50), nullable=False),
        _created_at(),
    )
    op.create_index(
        "ix_posts_author_id_created_at", "posts", ["author_id", "created_at"],
    )

    op.create_table(
        "post_tags",
        sa.Column(
            "post_id", sa.Integer,
            sa.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "tag_id", sa.Integer,
            sa.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True,
        ),
    )

    op.create_table(
        "post_tagged_users",
        sa.Column(
            "post_id", sa.Integer,
            sa.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "user_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
        ),
    )

    op.create_table(
        "likes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        _user_fk("user_id"),
        _post_fk(),
        _created_at(),
        sa.UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),
    )
    op.create_index("ix_likes_post_id", "likes", ["post_id"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("comment", sa.Text, nullable=False),
        _user_fk("author_id"),
        _post_fk(),
        _created_at(),
    )
    op.create_index("ix_comments_post_id", "comments", ["post_id"])

    op.create_table(
        "auth_tokens",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("token", sa.String(64), nullable=False, unique=True),
        _user_fk("user_id"),
        _created_at(),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("auth_tokens")
    op.drop_index("ix_comments_post_id", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_likes_post_id", table_name="likes")
    op.drop_table("likes")
    op.drop_table("post_tagged_users")
    op.drop_table("post_tags")
    op.drop_index("ix_posts_author_id_created_at", table_name="posts")
    op.drop_table("posts")
    op.drop_table("tags")
    op.drop_index("ix_user_followings_following_id", table_name="user_followings")
    op.drop_table("user_followings")
    op.drop_table("users")
