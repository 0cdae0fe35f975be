"""Create users, feeds, posts and api_keys tables

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e9a7d2b40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

STYLE_COLUMNS = [
    "font_color",
    "secondary_text_color",
    "card_bg_color",
    "card_border_color",
    "feed_bg_color",
    "button_color",
    "button_secondary_color",
]


def timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("username", sa.String(20), nullable=True),
        sa.Column("last_username_change", sa.DateTime(timezone=True), nullable=True),
        *timestamp_columns(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "feeds",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "owner_id",
            sa.String(255),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("font_family", sa.String(100), nullable=True),
        *[sa.Column(name, sa.String(7), nullable=True) for name in STYLE_COLUMNS],
        *timestamp_columns(),
        sa.UniqueConstraint("owner_id", "slug", name="uq_feeds_owner_slug"),
    )
    op.create_index("ix_feeds_owner_id", "feeds", ["owner_id"])

    op.create_table(
        "posts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "feed_id",
            sa.String(36),
            sa.ForeignKey("feeds.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(10), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(2048), nullable=True),
        sa.Column("video_url", sa.String(2048), nullable=True),
        sa.Column("url", sa.String(2048), nullable=True),
        *timestamp_columns(),
    )
    op.create_index("ix_posts_feed_id", "posts", ["feed_id"])

    op.create_table(
        "api_keys",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "owner_id",
            sa.String(255),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("key", sa.String(255), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )
    op.create_index("ix_api_keys_owner_id", "api_keys", ["owner_id"], unique=True)
    op.create_index("ix_api_keys_key", "api_keys", ["key"], unique=True)


def downgrade() -> None:
    op.drop_table("api_keys")
    op.drop_table("posts")
    op.drop_table("feeds")
    op.drop_table("users")
