"""SMS subscription and delivery API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from vitalcare.core.auth.auth_service import ROLE_ADMIN
from vitalcare.core.utils.decorators import jsonable_errors, require_roles
from vitalcare.domains.messaging import services
from vitalcare.domains.messaging.mappers import map_sms_log, map_subscription
from vitalcare.domains.messaging.schemas.messaging_schemas import (
    LogsQuery,
    SendMessageRequest,
    SubscribeRequest,
    UnsubscribeRequest,
)

sms_api_bp = Blueprint("sms_api", __name__)


def _validation_error(exc: ValidationError):
    return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400


@sms_api_bp.post("/subscribe")
@jwt_required(optional=True)
def subscribe():
    payload = request.get_json(silent=True) or {}
    try:
        data = SubscribeRequest.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    identity = get_jwt_identity()
    subscription, created = services.subscribe(
        data.phone_number,
        language=data.language,
        services=data.services,
        user_id=int(identity) if identity else None,
    )
    message = "Successfully subscribed" if created else "Subscription updated successfully"
    return (
        jsonify({"ok": True, "created": created, "message": message, "subscription": map_subscription(subscription)}),
        201 if created else 200,
    )


@sms_api_bp.post("/unsubscribe")
def unsubscribe():
    payload = request.get_json(silent=True) or {}
    try:
        data = UnsubscribeRequest.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    if not services.unsubscribe(data.phone_number):
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "message": "Successfully unsubscribed from SMS notifications"})


@sms_api_bp.post("/send")
@require_roles([ROLE_ADMIN])
def send_sms():
    payload = request.get_json(silent=True) or {}
    try:
        data = SendMessageRequest.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    try:
        log = services.send_message(data.phone_number, data.message, channel="sms")
    except services.MessagingError as exc:
        return jsonify({"ok": False, "error": "send_failed", "details": str(exc)}), 502
    return jsonify({"ok": True, "log": map_sms_log(log)})


@sms_api_bp.get("/subscribers")
@require_roles([ROLE_ADMIN])
def list_subscribers():
    subscribers = services.list_subscribers()
    return jsonify(
        {"ok": True, "count": len(subscribers), "subscribers": [map_subscription(s) for s in subscribers]}
    )


@sms_api_bp.get("/logs")
@require_roles([ROLE_ADMIN])
def list_logs():
    try:
        params = LogsQuery.model_validate(dict(request.args.items()))
    except ValidationError as exc:
        return _validation_error(exc)
    logs = services.list_logs(limit=params.limit)
    return jsonify({"ok": True, "count": len(logs), "logs": [map_sms_log(log) for log in logs]})
