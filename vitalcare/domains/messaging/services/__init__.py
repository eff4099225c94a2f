from vitalcare.domains.messaging.services.alert_service import notify_risk_alert
from vitalcare.domains.messaging.services.messaging_service import (
    MessagingError,
    format_phone_number,
    list_logs,
    list_subscribers,
    send_message,
    subscribe,
    unsubscribe,
    whatsapp_link,
)

__all__ = [
    "MessagingError",
    "format_phone_number",
    "subscribe",
    "unsubscribe",
    "send_message",
    "list_subscribers",
    "list_logs",
    "whatsapp_link",
    "notify_risk_alert",
]
