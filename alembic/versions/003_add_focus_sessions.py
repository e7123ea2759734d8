"""add focus_sessions table

Revision ID: 003
Revises: 002
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa

revision = "003"
down_revision = "002"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "focus_sessions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "time_block_id",
            sa.String(length=36),
            sa.ForeignKey("time_blocks.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("interrupted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("session_type", sa.String(length=20), nullable=False, server_default="focus"),
        sa.Column("target_duration", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(
        "ix_focus_sessions_time_block_id", "focus_sessions", ["time_block_id"]
    )
    op.create_index("ix_focus_sessions_started_at", "focus_sessions", ["started_at"])


def downgrade() -> None:
    op.drop_index("ix_focus_sessions_started_at", table_name="focus_sessions")
    op.drop_index("ix_focus_sessions_time_block_id", table_name="focus_sessions")
    op.drop_table("focus_sessions")
