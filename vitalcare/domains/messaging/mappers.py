"""DTO mappers for messaging."""

from __future__ import annotations

from vitalcare.domains.messaging.models.messaging_models import SmsLog, SmsSubscription


def map_subscription(s: SmsSubscription) -> dict:
    return {
        "id": s.id,
        "phone_number": s.phone_number,
        "language": s.language,
        "services": s.services or [],
        "is_active": s.is_active,
        "created_at": s.created_at.isoformat() if s.created_at else None,
    }


def map_sms_log(log: SmsLog) -> dict:
    return {
        "id": log.id,
        "phone_number": log.phone_number,
        "channel": log.channel,
        "message": log.message,
        "status": log.status,
        "provider_sid": log.provider_sid,
        "error_message": log.error_message,
        "created_at": log.created_at.isoformat() if log.created_at else None,
    }
