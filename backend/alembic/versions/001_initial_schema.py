"""Initial schema: users, containers and one table per media type.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MEDIA_ITEM_TABLES = ("movies", "books", "tv_shows", "videogames")


def _timestamped() -> list[sa.Column]:
    return [
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _media_item_columns() -> list[sa.Column]:
    return [
        *_timestamped(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("owner_id", UUID(as_uuid=True), nullable=False),
        sa.Column("category_id", UUID(as_uuid=True), nullable=False),
        sa.Column("group_id", UUID(as_uuid=True), nullable=True),
        sa.Column("order_in_group", sa.Integer, nullable=True),
        sa.Column("own_platform_id", UUID(as_uuid=True), nullable=True),
        sa.Column("importance", sa.Integer, nullable=False, server_default="100"),
        sa.Column("genres", sa.JSON, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("user_comment", sa.Text, nullable=True),
        sa.Column("completed_on", sa.JSON, nullable=False),
        sa.Column("completed_last_on", sa.Date, nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("marked_as_redo", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("release_date", sa.Date, nullable=True),
        sa.Column("catalog_id", sa.String(255), nullable=True),
        sa.Column("image_url", sa.String(2048), nullable=True),
    ]


def _index(table: str, *columns: str) -> None:
    for column in columns:
        op.create_index(f"ix_{table}_{column}", table, [column])


def upgrade() -> None:
    op.create_table(
        "users",
        *_timestamped(),
        sa.Column("name", sa.String(255), nullable=False),
    )
    _index("users", "name")

    op.create_table(
        "categories",
        *_timestamped(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("media_type", sa.String(20), nullable=False),
        sa.Column("owner_id", UUID(as_uuid=True), nullable=False),
        sa.Column("color", sa.String(20), nullable=True),
    )
    _index("categories", "owner_id")

    op.create_table(
        "groups",
        *_timestamped(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("owner_id", UUID(as_uuid=True), nullable=False),
        sa.Column("category_id", UUID(as_uuid=True), nullable=False),
    )
    _index("groups", "owner_id", "category_id")

    op.create_table(
        "own_platforms",
        *_timestamped(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("owner_id", UUID(as_uuid=True), nullable=False),
        sa.Column("category_id", UUID(as_uuid=True), nullable=False),
        sa.Column("color", sa.String(20), nullable=True),
        sa.Column("icon", sa.String(100), nullable=True),
    )
    _index("own_platforms", "owner_id", "category_id")

    op.create_table(
        "movies",
        *_media_item_columns(),
        sa.Column("directors", sa.JSON, nullable=False),
        sa.Column("duration_minutes", sa.Integer, nullable=True),
    )
    op.create_table(
        "books",
        *_media_item_columns(),
        sa.Column("authors", sa.JSON, nullable=False),
        sa.Column("pages_number", sa.Integer, nullable=True),
    )
    op.create_table(
        "tv_shows",
        *_media_item_columns(),
        sa.Column("creators", sa.JSON, nullable=False),
        sa.Column("average_episode_runtime_minutes", sa.Integer, nullable=True),
        sa.Column("seasons", sa.JSON, nullable=False),
        sa.Column("in_production", sa.Boolean, nullable=True),
        sa.Column("next_episode_air_date", sa.Date, nullable=True),
    )
    op.create_table(
        "videogames",
        *_media_item_columns(),
        sa.Column("developers", sa.JSON, nullable=False),
        sa.Column("publishers", sa.JSON, nullable=False),
        sa.Column("platforms", sa.JSON, nullable=False),
        sa.Column("average_length_hours", sa.Float, nullable=True),
    )
    for table in MEDIA_ITEM_TABLES:
        _index(table, "owner_id", "category_id", "group_id", "own_platform_id")


def downgrade() -> None:
    for table in reversed(MEDIA_ITEM_TABLES):
        op.drop_table(table)
    op.drop_table("own_platforms")
    op.drop_table("groups")
    op.drop_table("categories")
    op.drop_table("users")
