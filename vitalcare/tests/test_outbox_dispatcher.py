from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Query

pytestmark = pytest.mark.integration

from vitalcare.core.events.event_bus import event_bus
from vitalcare.domains.messaging.gateway import get_gateway
from vitalcare.domains.messaging.services import subscribe
from vitalcare.domains.risk.events import RISK_PREDICTION_CREATED
from vitalcare.domains.risk.schemas.risk_schemas import HealthIndicators
from vitalcare.domains.risk.services import create_prediction
from vitalcare.extensions import db
from vitalcare.platform.outbox.models import OutboxMessage
from vitalcare.platform.outbox.services import EventBusAdapter
from vitalcare.platform.worker import dispatcher
from vitalcare.platform.worker.config import DispatchConfig


def _config(**overrides) -> DispatchConfig:
    defaults = {
        "batch_size": 5,
        "poll_interval": 0,
        "max_attempts": 2,
        "backoff_seconds": 3,
        "backoff_multiplier": 2,
    }
    defaults.update(overrides)
    return DispatchConfig(**defaults)


def _enqueue(user_id: int | None = None, event_type: str = "test.event", available_at: datetime | None = None) -> OutboxMessage:
    msg = OutboxMessage(
        user_id=user_id,
        event_type=event_type,
        payload={"hello": "world"},
        status="pending",
        available_at=available_at or datetime.utcnow() - timedelta(seconds=1),
    )
    db.session.add(msg)
    db.session.commit()
    return msg


def test_successful_dispatch_marks_sent_and_increments_attempts(app):
    msg = _enqueue()
    sent_ids: list[int] = []

    processed = dispatcher.process_ready_batch(lambda m: sent_ids.append(m.id), _config())

    db.session.refresh(msg)
    assert processed == 1
    assert sent_ids == [msg.id]
    assert msg.status == "sent"
    assert msg.attempts == 1
    assert msg.last_error is None


def test_future_messages_are_not_claimed(app):
    _enqueue(available_at=datetime.utcnow() + timedelta(hours=1))
    assert dispatcher.process_ready_batch(lambda m: None, _config()) == 0


def test_claim_ready_messages_requests_skip_locked(app, monkeypatch):
    first = _enqueue()
    second = _enqueue(event_type="another.event")

    skip_locked_flags: list[bool | None] = []
    original_with_for_update = Query.with_for_update

    def _wrapped_with_for_update(self, *args, **kwargs):
        skip_locked_flags.append(kwargs.get("skip_locked"))
        return original_with_for_update(self, *args, **kwargs)

    monkeypatch.setattr(Query, "with_for_update", _wrapped_with_for_update)

    claimed = dispatcher.claim_ready_messages(db.session, batch_size=1)
    db.session.commit()
    assert [m.id for m in claimed] == [first.id]
    assert claimed[0].status == "sending"

    claimed_second = dispatcher.claim_ready_messages(db.session, batch_size=2)
    db.session.commit()
    assert [m.id for m in claimed_second] == [second.id]
    assert True in skip_locked_flags


def test_failed_dispatch_applies_backoff_and_honors_max_attempts(app):
    msg = _enqueue()
    cfg = _config(max_attempts=2, backoff_seconds=4, backoff_multiplier=2)

    def _send_fail(_):
        raise RuntimeError("boom")

    start = datetime.utcnow()
    dispatcher.process_ready_batch(_send_fail, cfg)
    db.session.refresh(msg)
    assert msg.attempts == 1
    assert msg.status == "retry"
    assert msg.available_at >= start + timedelta(seconds=cfg.backoff_seconds)
    assert msg.last_error == "boom"

    msg.available_at = datetime.utcnow() - timedelta(seconds=1)
    db.session.commit()

    dispatcher.process_ready_batch(_send_fail, cfg)
    db.session.refresh(msg)
    assert msg.attempts == 2
    assert msg.status == "failed"


def test_event_bus_adapter_publishes_domain_event(app):
    received = []

    def _handler(event):
        received.append(event)

    event_bus.subscribe("test.event", _handler)
    try:
        msg = _enqueue()
        dispatcher.process_ready_batch(EventBusAdapter().dispatch, _config())
    finally:
        event_bus.unsubscribe("test.event", _handler)

    assert len(received) == 1
    assert received[0].id == msg.id
    assert received[0].payload["hello"] == "world"
    assert received[0].payload["external_id"] == f"test.event:{msg.id}"


def test_high_risk_prediction_reaches_sms_subscriber(app, patient):
    subscribe("9876543210", services=["health_alerts"], user_id=patient.id)
    get_gateway().sent.clear()

    create_prediction(
        patient.id,
        HealthIndicators.model_validate(
            {"age": 70, "bmi": 32, "glucose": 130, "familyHistory": {"diabetes": True}, "lifestyle": {"exercise": "none"}}
        ),
    )
    total = dispatcher.drain(_config())

    assert total >= 2  # prediction created + alert raised
    assert OutboxMessage.query.filter(OutboxMessage.status != "sent").count() == 0
    assert OutboxMessage.query.filter_by(event_type=RISK_PREDICTION_CREATED).one().status == "sent"
    sent = get_gateway().sent
    assert [m.to for m in sent] == ["+919876543210"]
    assert "critical" in sent[0].body
