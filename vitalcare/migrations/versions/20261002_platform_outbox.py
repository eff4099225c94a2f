"""add platform outbox table

Revision ID: 20261002_platform_outbox
Revises: 20261001_core_initial
Create Date: 2026-10-02
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261002_platform_outbox"
down_revision = "20261001_core_initial"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "platform_outbox",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), index=True),
        sa.Column("event_type", sa.String(length=128), nullable=False, index=True),
        sa.Column("payload", sa.JSON(), nullable=False, server_default=sa.text("'{}'")),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("available_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("last_error", sa.Text()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_platform_outbox_status_available_at",
        "platform_outbox",
        ["status", "available_at"],
    )


def downgrade():
    op.drop_index("ix_platform_outbox_status_available_at", table_name="platform_outbox")
    op.drop_table("platform_outbox")
