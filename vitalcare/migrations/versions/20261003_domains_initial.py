"""risk predictions, chat logs and messaging tables

Revision ID: 20261003_domains_initial
Revises: 20261002_platform_outbox
Create Date: 2026-10-03
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "20261003_domains_initial"
down_revision = "20261002_platform_outbox"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "risk_prediction",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False, index=True),
        sa.Column("indicators", sa.JSON(), nullable=False),
        sa.Column("risks", sa.JSON(), nullable=False),
        sa.Column("overall_risk_score", sa.Float(), nullable=False),
        sa.Column("alert_level", sa.String(length=16), nullable=False),
        sa.Column("preventive_plan", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_risk_prediction_user_created", "risk_prediction", ["user_id", "created_at"])
    op.create_index("ix_risk_prediction_alert_created", "risk_prediction", ["alert_level", "created_at"])

    op.create_table(
        "chat_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False, index=True),
        sa.Column("bot_type", sa.String(length=32), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("response", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_chat_log_user_created", "chat_log", ["user_id", "created_at"])

    op.create_table(
        "sms_subscription",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=True, index=True),
        sa.Column("phone_number", sa.String(length=32), nullable=False, unique=True),
        sa.Column("language", sa.String(length=8), nullable=False, server_default="en"),
        sa.Column("services", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now(), onupdate=sa.func.now()),
    )
    op.create_index("ix_sms_subscription_active_created", "sms_subscription", ["is_active", "created_at"])

    op.create_table(
        "sms_log",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("phone_number", sa.String(length=32), nullable=False, index=True),
        sa.Column("channel", sa.String(length=16), nullable=False, server_default="sms"),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("provider_sid", sa.String(length=64)),
        sa.Column("error_message", sa.Text()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_sms_log_created", "sms_log", ["created_at"])


def downgrade():
    op.drop_index("ix_sms_log_created", table_name="sms_log")
    op.drop_table("sms_log")
    op.drop_index("ix_sms_subscription_active_created", table_name="sms_subscription")
    op.drop_table("sms_subscription")
    op.drop_index("ix_chat_log_user_created", table_name="chat_log")
    op.drop_table("chat_log")
    op.drop_index("ix_risk_prediction_alert_created", table_name="risk_prediction")
    op.drop_index("ix_risk_prediction_user_created", table_name="risk_prediction")
    op.drop_table("risk_prediction")
