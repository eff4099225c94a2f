"""Messaging domain event catalog."""

from __future__ import annotations

MESSAGING_SUBSCRIBED = "messaging.subscription.created"
MESSAGING_UNSUBSCRIBED = "messaging.subscription.cancelled"

EVENT_CATALOG = {
    MESSAGING_SUBSCRIBED: {
        "version": "v1",
        "payload": {"subscription_id": "int", "phone_number": "str", "language": "str", "services": "list[str]"},
    },
    MESSAGING_UNSUBSCRIBED: {
        "version": "v1",
        "payload": {"subscription_id": "int", "phone_number": "str"},
    },
}
