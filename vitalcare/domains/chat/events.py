"""Chat domain event catalog."""

from __future__ import annotations

CHAT_LOG_CREATED = "chat.log.created"

EVENT_CATALOG = {
    CHAT_LOG_CREATED: {
        "version": "v1",
        "payload": {"chat_log_id": "int", "user_id": "int", "bot_type": "str"},
    },
}
