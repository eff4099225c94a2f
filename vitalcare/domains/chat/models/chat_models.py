"""Chatbot conversation logs."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from vitalcare.extensions import db


class ChatLog(db.Model):
    __tablename__ = "chat_log"
    __table_args__ = (db.Index("ix_chat_log_user_created", "user_id", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    bot_type: Mapped[str] = mapped_column(db.String(32), nullable=False)
    message: Mapped[str] = mapped_column(db.Text, nullable=False)
    response: Mapped[str] = mapped_column(db.Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
