"""Outbound message gateways.

Only the logging gateway ships; it records each message and reports a
mock delivery so the rest of the flow (logs, welcome messages, alerts)
behaves as it would against a real provider.
"""

from __future__ import annotations

import logging
import uuid
from collections import deque
from dataclasses import dataclass
from typing import Deque

from flask import current_app

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Raised when a provider rejects or fails to deliver a message."""


@dataclass(frozen=True)
class SendResult:
    sid: str
    status: str


@dataclass(frozen=True)
class OutboundMessage:
    to: str
    body: str
    channel: str


class LoggingGateway:
    """Logs messages instead of delivering them.

    Only the most recent `history` messages are kept in `sent`.
    """

    name = "mock"

    def __init__(self, history: int = 100) -> None:
        self.sent: Deque[OutboundMessage] = deque(maxlen=history)

    def send(self, to: str, body: str, channel: str = "sms") -> SendResult:
        self.sent.append(OutboundMessage(to=to, body=body, channel=channel))
        logger.info("MOCK %s to %s: %s", channel.upper(), to, body)
        return SendResult(sid=f"MOCK{uuid.uuid4().hex[:24]}", status="mock_sent")


_GATEWAYS = {"mock": LoggingGateway}


def get_gateway():
    """Gateway for the current app, created once per app."""
    gateway = current_app.extensions.get("messaging_gateway")
    if gateway is None:
        backend = current_app.config.get("MESSAGING_BACKEND", "mock")
        gateway_cls = _GATEWAYS.get(backend)
        if gateway_cls is None:
            raise GatewayError(f"unknown messaging backend: {backend}")
        gateway = gateway_cls(history=current_app.config.get("MESSAGING_MOCK_HISTORY", 100))
        current_app.extensions["messaging_gateway"] = gateway
    return gateway
