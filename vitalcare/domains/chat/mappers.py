"""DTO mappers for chat logs."""

from __future__ import annotations

from vitalcare.domains.chat.models.chat_models import ChatLog


def map_chat_log(c: ChatLog) -> dict:
    return {
        "id": c.id,
        "bot_type": c.bot_type,
        "message": c.message,
        "response": c.response,
        "created_at": c.created_at.isoformat() if c.created_at else None,
    }
