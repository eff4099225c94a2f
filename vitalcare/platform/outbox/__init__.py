"""Transactional outbox models and helpers."""

from vitalcare.platform.outbox.models import OutboxMessage
from vitalcare.platform.outbox.services import EventBusAdapter, enqueue

__all__ = ["OutboxMessage", "enqueue", "EventBusAdapter"]
