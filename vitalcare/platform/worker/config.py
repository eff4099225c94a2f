"""Dispatcher settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class DispatchConfig:
    batch_size: int = 50
    poll_interval: float = 5.0
    max_attempts: int = 5
    backoff_seconds: float = 5.0
    backoff_multiplier: float = 2.0

    @classmethod
    def from_env(cls) -> "DispatchConfig":
        defaults = cls()
        return cls(
            batch_size=int(os.environ.get("OUTBOX_BATCH_SIZE", defaults.batch_size)),
            poll_interval=float(os.environ.get("OUTBOX_POLL_INTERVAL", defaults.poll_interval)),
            max_attempts=int(os.environ.get("OUTBOX_MAX_ATTEMPTS", defaults.max_attempts)),
            backoff_seconds=float(os.environ.get("OUTBOX_BACKOFF_SECONDS", defaults.backoff_seconds)),
            backoff_multiplier=float(
                os.environ.get("OUTBOX_BACKOFF_MULTIPLIER", defaults.backoff_multiplier)
            ),
        )
