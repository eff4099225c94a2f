"""Event subscriber that turns high-risk alerts into SMS notifications."""

from __future__ import annotations

import logging

from vitalcare.core.events.event_bus import DomainEvent
from vitalcare.domains.messaging.models.messaging_models import SmsSubscription
from vitalcare.domains.messaging.services.messaging_service import MessagingError, send_message

logger = logging.getLogger(__name__)

ALERT_SERVICE = "health_alerts"

ALERT_MESSAGES = {
    "en": "🩺 VitalCare alert: your latest risk assessment is {level} ({diseases}). {timeline}. Please consult a doctor.",
    "hi": "🩺 VitalCare अलर्ट: आपका नवीनतम जोखिम मूल्यांकन {level} है ({diseases})। {timeline}। कृपया डॉक्टर से परामर्श करें।",
}


def _alert_text(language: str, payload: dict) -> str:
    template = ALERT_MESSAGES.get(language, ALERT_MESSAGES["en"])
    diseases = ", ".join(d.replace("_", " ") for d in payload.get("diseases") or []) or "general"
    return template.format(
        level=payload.get("alert_level", "high"),
        diseases=diseases,
        timeline=payload.get("timeline", ""),
    )


def notify_risk_alert(event: DomainEvent) -> int:
    """Send an alert to the user's active subscriptions that opted into health alerts."""
    user_id = event.user_id or event.payload.get("user_id")
    if not user_id:
        return 0
    subscriptions = SmsSubscription.query.filter_by(user_id=user_id, is_active=True).all()
    sent = 0
    for sub in subscriptions:
        if ALERT_SERVICE not in (sub.services or []):
            continue
        try:
            send_message(sub.phone_number, _alert_text(sub.language, event.payload), commit=False)
            sent += 1
        except MessagingError as exc:
            logger.warning("Risk alert to %s failed: %s", sub.phone_number, exc)
    if sent:
        logger.info("Risk alert %s sent to %s subscription(s) of user %s", event.id, sent, user_id)
    return sent
