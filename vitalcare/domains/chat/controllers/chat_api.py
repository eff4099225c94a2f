"""Chat log API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from vitalcare.core.utils.decorators import csrf_protected, jsonable_errors
from vitalcare.core.utils.pagination import page_count
from vitalcare.domains.chat import services
from vitalcare.domains.chat.mappers import map_chat_log
from vitalcare.domains.chat.schemas.chat_schemas import ChatLogCreate, ChatLogFilter

chat_api_bp = Blueprint("chat_api", __name__)


@chat_api_bp.post("")
@jwt_required()
@csrf_protected
def create_chat_log():
    payload = request.get_json(silent=True) or {}
    try:
        data = ChatLogCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    user_id = int(get_jwt_identity())
    try:
        log = services.create_chat_log(user_id, data.bot_type, data.message, data.response)
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "chat_log": map_chat_log(log)}), 201


@chat_api_bp.get("")
@jwt_required()
def list_chat_logs():
    try:
        params = ChatLogFilter.model_validate(dict(request.args.items()))
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    user_id = int(get_jwt_identity())
    items, total = services.list_chat_logs(
        user_id, bot_type=params.bot_type, page=params.page, per_page=params.per_page
    )
    return jsonify(
        {
            "ok": True,
            "items": [map_chat_log(c) for c in items],
            "page": params.page,
            "pages": page_count(total, params.per_page),
            "total": total,
        }
    )
