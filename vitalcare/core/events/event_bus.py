"""Simple in-process event bus."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional


@dataclass(frozen=True)
class DomainEvent:
    """Event as delivered to subscribers (built from an outbox message)."""

    id: int
    event_type: str
    payload: dict = field(default_factory=dict)
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None


EventHandler = Callable[[DomainEvent], None]


class EventBus:
    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._subscribers.setdefault(event_type, [])
        # create_app runs once per test; keep a single registration per handler
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: DomainEvent) -> None:
        for handler in list(self._subscribers.get(event.event_type, [])):
            handler(event)


# Global singleton
event_bus = EventBus()
