"""Outbox enqueue helper and bus adapter."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Set

from vitalcare.core.events.event_bus import DomainEvent, event_bus
from vitalcare.extensions import db
from vitalcare.platform.outbox.models import OutboxMessage

STATUS_PENDING = "pending"
STATUS_SENDING = "sending"
STATUS_SENT = "sent"
STATUS_RETRY = "retry"
STATUS_FAILED = "failed"


class EventBusAdapter:
    """Adapter to publish outbox messages to the in-process bus (swap for broker later)."""

    def __init__(self, bus=None) -> None:
        self.bus = bus or event_bus
        self._delivered: Set[int] = set()

    def dispatch(self, message: OutboxMessage) -> None:
        if message.id in self._delivered:
            return
        payload = dict(message.payload or {})
        payload.setdefault("external_id", f"{message.event_type}:{message.id}")
        payload.setdefault("event_id", message.id)

        self.bus.publish(
            DomainEvent(
                id=message.id,
                event_type=message.event_type,
                payload=payload,
                user_id=message.user_id,
                created_at=message.created_at,
            )
        )
        self._delivered.add(message.id)


def enqueue(
    event_name: str,
    payload: dict,
    user_id: Optional[int],
    available_at: Optional[datetime] = None,
) -> OutboxMessage:
    """
    Stage an event in the outbox. Caller should commit alongside domain changes.
    """
    message = OutboxMessage(
        event_type=event_name,
        payload=payload or {},
        user_id=user_id,
        available_at=available_at or datetime.utcnow(),
        status=STATUS_PENDING,
        attempts=0,
    )
    db.session.add(message)
    return message
