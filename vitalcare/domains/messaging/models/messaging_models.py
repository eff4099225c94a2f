"""SMS / WhatsApp subscription and delivery log models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from vitalcare.core.users.models import TimestampMixin
from vitalcare.extensions import db


class SmsSubscription(db.Model, TimestampMixin):
    __tablename__ = "sms_subscription"
    __table_args__ = (db.Index("ix_sms_subscription_active_created", "is_active", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int | None] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=True)
    phone_number: Mapped[str] = mapped_column(db.String(32), unique=True, nullable=False)
    language: Mapped[str] = mapped_column(db.String(8), nullable=False, default="en")
    services: Mapped[list] = mapped_column(db.JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(default=True)


class SmsLog(db.Model):
    __tablename__ = "sms_log"
    __table_args__ = (db.Index("ix_sms_log_created", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    phone_number: Mapped[str] = mapped_column(db.String(32), nullable=False, index=True)
    channel: Mapped[str] = mapped_column(db.String(16), nullable=False, default="sms")
    message: Mapped[str] = mapped_column(db.Text, nullable=False)
    status: Mapped[str] = mapped_column(db.String(16), nullable=False)
    provider_sid: Mapped[str | None] = mapped_column(db.String(64))
    error_message: Mapped[str | None] = mapped_column(db.Text)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
