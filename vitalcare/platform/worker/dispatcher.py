"""Outbox dispatcher helpers and worker loop."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from vitalcare.extensions import db
from vitalcare.platform.outbox.models import OutboxMessage
from vitalcare.platform.outbox.services import (
    STATUS_FAILED,
    STATUS_PENDING,
    STATUS_RETRY,
    STATUS_SENDING,
    STATUS_SENT,
    EventBusAdapter,
)
from vitalcare.platform.worker.config import DispatchConfig

logger = logging.getLogger(__name__)


def _compute_backoff_seconds(attempts: int, config: DispatchConfig) -> float:
    """Exponential backoff based on attempt number (1-indexed)."""
    return config.backoff_seconds * config.backoff_multiplier ** max(attempts - 1, 0)


def claim_ready_messages(
    session,
    batch_size: int,
    now: Optional[datetime] = None,
) -> List[OutboxMessage]:
    """
    Lock and return ready messages ordered by available_at.
    Moves claimed rows to 'sending' and increments attempts.
    """
    now = now or datetime.utcnow()
    messages = (
        session.query(OutboxMessage)
        .filter(
            OutboxMessage.available_at <= now,
            OutboxMessage.status.in_((STATUS_PENDING, STATUS_RETRY)),
        )
        .order_by(OutboxMessage.available_at, OutboxMessage.id)
        .with_for_update(skip_locked=True)
        .limit(batch_size)
        .all()
    )
    for message in messages:
        message.status = STATUS_SENDING
        message.attempts = (message.attempts or 0) + 1
    return messages


def _apply_failure_backoff(message: OutboxMessage, exc: Exception, config: DispatchConfig) -> None:
    attempts = message.attempts or 1
    next_available = datetime.utcnow() + timedelta(seconds=_compute_backoff_seconds(attempts, config))

    message.last_error = str(exc)
    message.available_at = max(message.available_at or next_available, next_available)
    message.status = STATUS_FAILED if attempts >= config.max_attempts else STATUS_RETRY


def process_ready_batch(
    send_fn: Callable[[OutboxMessage], None],
    config: DispatchConfig,
    session=None,
) -> int:
    """
    Claim ready messages, dispatch via send_fn, and update statuses.
    Returns number of messages processed (sent or failed).
    """
    session = session or db.session
    try:
        messages = claim_ready_messages(session, batch_size=config.batch_size)
        if not messages:
            session.commit()
            return 0

        processed = 0
        for message in messages:
            try:
                send_fn(message)
                message.status = STATUS_SENT
                message.last_error = None
            except Exception as exc:
                logger.warning("Outbox message %s (%s) failed: %s", message.id, message.event_type, exc)
                _apply_failure_backoff(message, exc, config)
            processed += 1

        session.commit()
        return processed
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Database error while processing outbox batch")
        return 0


def drain(config: DispatchConfig, send_fn: Optional[Callable[[OutboxMessage], None]] = None) -> int:
    """Process batches until nothing is ready; returns the total processed."""
    dispatch_callable = send_fn or EventBusAdapter().dispatch
    total = 0
    while True:
        processed = process_ready_batch(dispatch_callable, config)
        if processed == 0:
            return total
        total += processed


def run_dispatcher(
    config: Optional[DispatchConfig] = None,
    send_fn: Optional[Callable[[OutboxMessage], None]] = None,
) -> None:
    """
    Run the dispatcher loop; defaults to publishing to the in-process bus via adapter.
    """
    cfg = config or DispatchConfig.from_env()
    dispatch_callable = send_fn or EventBusAdapter().dispatch

    logger.info(
        "Starting outbox dispatcher (batch_size=%s, poll_interval=%ss, max_attempts=%s, backoff=%ss x%s)",
        cfg.batch_size,
        cfg.poll_interval,
        cfg.max_attempts,
        cfg.backoff_seconds,
        cfg.backoff_multiplier,
    )

    try:
        while True:
            processed = process_ready_batch(dispatch_callable, cfg)
            time.sleep(cfg.poll_interval if processed == 0 else min(0.1, cfg.poll_interval))
    except KeyboardInterrupt:
        logger.info("Dispatcher stopped by user")
