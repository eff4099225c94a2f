"""Typed schemas for user IO."""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from vitalcare.core.users.models import User


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    full_name: Optional[str] = None
    is_active: bool
    role_codes: List[str] = []

    model_config = ConfigDict(from_attributes=True)


def serialize_user(user: "User") -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        is_active=user.is_active,
        role_codes=user.role_codes,
    )
