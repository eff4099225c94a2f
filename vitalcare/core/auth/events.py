"""Auth domain event catalog."""

from __future__ import annotations

AUTH_USER_REGISTERED = "auth.user.registered"
AUTH_USER_ROLE_GRANTED = "auth.user.role_granted"

EVENT_CATALOG = {
    AUTH_USER_REGISTERED: {
        "version": "v1",
        "payload": {"user_id": "int", "email": "str", "full_name": "str?"},
    },
    AUTH_USER_ROLE_GRANTED: {
        "version": "v1",
        "payload": {"user_id": "int", "role": "str"},
    },
}

__all__ = ["EVENT_CATALOG", "AUTH_USER_REGISTERED", "AUTH_USER_ROLE_GRANTED"]
