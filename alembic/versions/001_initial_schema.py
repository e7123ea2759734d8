"""Initial schema: days and day-scoped sections.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create days, top_priorities, discussion_items, time_blocks, quick_notes, daily_reviews."""
    op.create_table(
        "days",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    # One Day per (user, date); get_or_create_day relies on this for idempotency
    op.create_index("ix_days_user_id_date", "days", ["user_id", "date"], unique=True)

    op.create_table(
        "top_priorities",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "day_id",
            sa.String(36),
            sa.ForeignKey("days.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_top_priorities_day_id_order", "top_priorities", ["day_id", "order"])

    op.create_table(
        "discussion_items",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "day_id",
            sa.String(36),
            sa.ForeignKey("days.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_discussion_items_day_id", "discussion_items", ["day_id"])

    op.create_table(
        "time_blocks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "day_id",
            sa.String(36),
            sa.ForeignKey("days.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("type", sa.String(50), nullable=False, server_default="Deep Work"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_time_blocks_day_id_start", "time_blocks", ["day_id", "start_time"])

    op.create_table(
        "quick_notes",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "day_id",
            sa.String(36),
            sa.ForeignKey("days.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "daily_reviews",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "day_id",
            sa.String(36),
            sa.ForeignKey("days.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("went_well", sa.Text(), nullable=True),
        sa.Column("didnt_go_well", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )


def downgrade() -> None:
    """Drop day tables, children first."""
    op.drop_table("daily_reviews")
    op.drop_table("quick_notes")
    op.drop_index("ix_time_blocks_day_id_start", table_name="time_blocks")
    op.drop_table("time_blocks")
    op.drop_index("ix_discussion_items_day_id", table_name="discussion_items")
    op.drop_table("discussion_items")
    op.drop_index("ix_top_priorities_day_id_order", table_name="top_priorities")
    op.drop_table("top_priorities")
    op.drop_index("ix_days_user_id_date", table_name="days")
    op.drop_table("days")
