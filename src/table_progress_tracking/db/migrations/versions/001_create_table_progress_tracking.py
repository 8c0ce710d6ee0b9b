"""Create table_progress_tracking.

Revision ID: 001_create_table_progress_tracking
Revises:
Create Date: 2026-10-19 00:00:00.000000

One row per (page, table, user, checked entity).
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_create_table_progress_tracking"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the progress table and its lookup index."""
    op.create_table(
        "table_progress_tracking",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("page_id", sa.Integer(), nullable=False),
        sa.Column("table_id", sa.String(255), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("entity_id", sa.String(255), nullable=False),
        sa.Column(
            "tpt_timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_table_progress_tracking"),
        sa.UniqueConstraint(
            "page_id",
            "table_id",
            "user_id",
            "entity_id",
            name="uq_table_progress_tracking_entry",
        ),
    )
    op.create_index(
        "ix_table_progress_tracking_lookup",
        "table_progress_tracking",
        ["page_id", "table_id", "user_id"],
    )


def downgrade() -> None:
    """Drop the progress table."""
    op.drop_index("ix_table_progress_tracking_lookup", table_name="table_progress_tracking")
    op.drop_table("table_progress_tracking")
