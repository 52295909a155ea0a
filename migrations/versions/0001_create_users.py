"""create users table

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

One row per bot user. checkin_history is a JSON-encoded list of ISO dates
(Text); streak/best_streak/total_checkins are written on every check-in.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("display_name", sa.String(128), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_checkin_date", sa.Date(), nullable=True),
        sa.Column("checkin_history", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("best_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_checkins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("season", sa.String(32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_season", "users", ["season"])


def downgrade() -> None:
    op.drop_index("ix_users_season", table_name="users")
    op.drop_table("users")
