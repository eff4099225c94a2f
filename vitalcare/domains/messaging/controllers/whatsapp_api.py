"""WhatsApp API controllers."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from vitalcare.core.auth.auth_service import ROLE_ADMIN
from vitalcare.core.utils.decorators import jsonable_errors, require_roles
from vitalcare.domains.messaging import services
from vitalcare.domains.messaging.mappers import map_sms_log
from vitalcare.domains.messaging.schemas.messaging_schemas import SendMessageRequest

whatsapp_api_bp = Blueprint("whatsapp_api", __name__)


@whatsapp_api_bp.post("/send")
@require_roles([ROLE_ADMIN])
def send_whatsapp():
    payload = request.get_json(silent=True) or {}
    try:
        data = SendMessageRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    try:
        log = services.send_message(data.phone_number, data.message, channel="whatsapp")
    except services.MessagingError as exc:
        return jsonify({"ok": False, "error": "send_failed", "details": str(exc)}), 502
    return jsonify({"ok": True, "log": map_sms_log(log)})


@whatsapp_api_bp.get("/link")
def whatsapp_link():
    """Click-to-chat link; the frontend renders it as a QR code."""
    phone = request.args.get("phone") or current_app.config.get("WHATSAPP_CONTACT_NUMBER", "")
    if not any(ch.isdigit() for ch in phone):
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "url": services.whatsapp_link(phone)})
