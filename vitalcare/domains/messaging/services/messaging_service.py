"""SMS / WhatsApp subscriptions and outbound delivery."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote

from vitalcare.domains.messaging.events import MESSAGING_SUBSCRIBED, MESSAGING_UNSUBSCRIBED
from vitalcare.domains.messaging.gateway import GatewayError, SendResult, get_gateway
from vitalcare.domains.messaging.models.messaging_models import SmsLog, SmsSubscription
from vitalcare.extensions import db
from vitalcare.platform.outbox import enqueue as enqueue_outbox

logger = logging.getLogger(__name__)

CHANNELS = ("sms", "whatsapp")

WELCOME_MESSAGES = {
    "en": (
        "🩺 Welcome to VitalCare! You've successfully subscribed to health alerts. "
        "We'll send you important health information and reminders."
    ),
    "hi": (
        "🩺 VitalCare में आपका स्वागत है! आपने सफलतापूर्वक स्वास्थ्य अलर्ट के लिए सदस्यता ले ली है। "
        "हम आपको महत्वपूर्ण स्वास्थ्य जानकारी भेजेंगे।"
    ),
}

WHATSAPP_GREETING = (
    "Hello VitalCare! I want to start using your health services. Please help me with:\n\n"
    "1. General health guidance\n"
    "2. Mental health support\n"
    "3. Medical image analysis\n"
    "4. Vaccination reminders\n"
    "5. Health alerts\n\n"
    "Thank you!"
)

_NON_DIGITS = re.compile(r"\D")


class MessagingError(Exception):
    """Raised when an outbound message could not be delivered."""


def format_phone_number(raw: str) -> str:
    """Normalize to E.164, assuming India for bare 10-digit numbers."""
    cleaned = _NON_DIGITS.sub("", raw or "")
    if cleaned.startswith("91") and len(cleaned) == 12:
        return f"+{cleaned}"
    if len(cleaned) == 10:
        return f"+91{cleaned}"
    if cleaned.startswith("1") and len(cleaned) == 11:
        return f"+{cleaned}"
    return raw if raw.startswith("+") else f"+{raw}"


def _deliver(phone: str, message: str, channel: str) -> Tuple[SmsLog, Optional[SendResult], Optional[Exception]]:
    result: Optional[SendResult] = None
    error: Optional[Exception] = None
    try:
        result = get_gateway().send(phone, message, channel=channel)
    except GatewayError as exc:
        error = exc
        logger.error("Failed to send %s to %s: %s", channel, phone, exc)

    log = SmsLog(
        phone_number=phone,
        channel=channel,
        message=message,
        status=result.status if result else "failed",
        provider_sid=result.sid if result else None,
        error_message=str(error) if error else None,
    )
    db.session.add(log)
    return log, result, error


def subscribe(
    phone: str,
    language: str = "en",
    services: Iterable[str] = (),
    user_id: Optional[int] = None,
) -> Tuple[SmsSubscription, bool]:
    """Create or reactivate a subscription. Returns (subscription, created)."""
    formatted = format_phone_number(phone)
    services_list = list(services)
    subscription = SmsSubscription.query.filter_by(phone_number=formatted).first()
    created = subscription is None

    if created:
        subscription = SmsSubscription(phone_number=formatted)
        db.session.add(subscription)
    subscription.language = language
    subscription.services = services_list
    subscription.is_active = True
    if user_id is not None:
        subscription.user_id = user_id
    db.session.flush()

    if created:
        welcome = WELCOME_MESSAGES.get(language, WELCOME_MESSAGES["en"])
        _, result, _ = _deliver(formatted, welcome, "sms")
        if result:
            logger.info("Welcome SMS sent to %s", formatted)
        enqueue_outbox(
            MESSAGING_SUBSCRIBED,
            {
                "subscription_id": subscription.id,
                "phone_number": formatted,
                "language": language,
                "services": services_list,
            },
            user_id=subscription.user_id,
        )
    db.session.commit()
    return subscription, created


def unsubscribe(phone: str) -> bool:
    formatted = format_phone_number(phone)
    subscription = SmsSubscription.query.filter_by(phone_number=formatted).first()
    if not subscription:
        return False
    subscription.is_active = False
    enqueue_outbox(
        MESSAGING_UNSUBSCRIBED,
        {"subscription_id": subscription.id, "phone_number": formatted},
        user_id=subscription.user_id,
    )
    db.session.commit()
    return True


def send_message(phone: str, message: str, channel: str = "sms", commit: bool = True) -> SmsLog:
    """Send through the gateway; the attempt is logged either way.

    With commit=False the log row is left on the session for the caller.
    """
    if channel not in CHANNELS:
        raise ValueError("validation_error")
    if not (message or "").strip():
        raise ValueError("validation_error")
    formatted = format_phone_number(phone)
    log, _, error = _deliver(formatted, message, channel)
    if commit:
        db.session.commit()
    if error is not None:
        raise MessagingError(str(error)) from error
    return log


def list_subscribers() -> List[SmsSubscription]:
    return (
        SmsSubscription.query.filter_by(is_active=True)
        .order_by(SmsSubscription.created_at.desc(), SmsSubscription.id.desc())
        .all()
    )


def list_logs(limit: int = 50) -> List[SmsLog]:
    return SmsLog.query.order_by(SmsLog.created_at.desc(), SmsLog.id.desc()).limit(limit).all()


def whatsapp_link(phone: str) -> str:
    digits = _NON_DIGITS.sub("", phone or "")
    text = quote(WHATSAPP_GREETING, safe="!~*'()")
    return f"https://wa.me/{digits}?text={text}"
