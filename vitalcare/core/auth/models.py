"""Authentication and permission models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from vitalcare.core.users.models import TimestampMixin
from vitalcare.extensions import db


class Role(db.Model, TimestampMixin):
    __tablename__ = "role"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(db.String(255), default="")


class UserRole(db.Model):
    __tablename__ = "user_role"

    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), primary_key=True)
    role_id: Mapped[int] = mapped_column(db.ForeignKey("role.id"), primary_key=True)


class SessionToken(db.Model, TimestampMixin):
    __tablename__ = "session_token"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), nullable=False)
    jti: Mapped[str] = mapped_column(db.String(64), nullable=False, unique=True)
    revoked: Mapped[bool] = mapped_column(default=False)
    expires_at: Mapped[datetime | None] = mapped_column(nullable=True)


class JWTBlocklist(db.Model, TimestampMixin):
    __tablename__ = "jwt_blocklist"

    id: Mapped[int] = mapped_column(primary_key=True)
    jti: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)
