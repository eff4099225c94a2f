"""Chat log persistence."""

from __future__ import annotations

from typing import List, Optional, Tuple

from vitalcare.core.utils.pagination import paginate
from vitalcare.domains.chat.events import CHAT_LOG_CREATED
from vitalcare.domains.chat.models.chat_models import ChatLog
from vitalcare.domains.chat.schemas.chat_schemas import BOT_TYPES
from vitalcare.extensions import db
from vitalcare.platform.outbox import enqueue as enqueue_outbox


def create_chat_log(user_id: int, bot_type: str, message: str, response: str) -> ChatLog:
    if bot_type not in BOT_TYPES:
        raise ValueError("validation_error")
    if not (message or "").strip() or not (response or "").strip():
        raise ValueError("validation_error")

    log = ChatLog(user_id=user_id, bot_type=bot_type, message=message, response=response)
    db.session.add(log)
    db.session.flush()
    enqueue_outbox(
        CHAT_LOG_CREATED,
        {"chat_log_id": log.id, "user_id": user_id, "bot_type": bot_type},
        user_id=user_id,
    )
    db.session.commit()
    return log


def list_chat_logs(
    user_id: int, bot_type: Optional[str] = None, page: int = 1, per_page: int = 20
) -> Tuple[List[ChatLog], int]:
    query = ChatLog.query.filter_by(user_id=user_id)
    if bot_type:
        query = query.filter_by(bot_type=bot_type)
    query = query.order_by(ChatLog.created_at.desc(), ChatLog.id.desc())
    return paginate(query, page, per_page)
