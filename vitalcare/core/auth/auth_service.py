"""Authentication service layer."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token
from sqlalchemy import func

from vitalcare.core.auth.events import AUTH_USER_REGISTERED, AUTH_USER_ROLE_GRANTED
from vitalcare.core.auth.models import JWTBlocklist, Role, SessionToken
from vitalcare.core.auth.password import hash_password, verify_password
from vitalcare.core.auth.schemas import RegisterRequest
from vitalcare.core.users.models import User
from vitalcare.extensions import db
from vitalcare.platform.outbox import enqueue as enqueue_outbox

# Roles granted to every new account by default.
DEFAULT_REGISTER_ROLES = ("user",)
ROLE_CLINICIAN = "clinician"
ROLE_ADMIN = "admin"


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid."""
    user = User.query.filter(func.lower(User.email) == email.strip().lower()).first()
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def issue_tokens(user: User) -> dict[str, str]:
    """Create access and refresh tokens for a user."""
    identity = str(user.id)
    access_token = create_access_token(identity=identity, additional_claims={"roles": user.role_codes})
    refresh_token = create_refresh_token(identity=identity)

    # Persist refresh jti for revocation checks
    decoded_refresh = decode_token(refresh_token)
    expires = decoded_refresh.get("exp")
    db.session.add(
        SessionToken(
            user_id=user.id,
            jti=decoded_refresh.get("jti"),
            expires_at=datetime.utcfromtimestamp(expires) if expires else None,
        )
    )
    db.session.commit()

    return {"access_token": access_token, "refresh_token": refresh_token}


def revoke_refresh_token(jti: str) -> None:
    """Revoke a refresh token by JTI."""
    token = SessionToken.query.filter_by(jti=jti).first()
    if token:
        token.revoked = True
    if not JWTBlocklist.query.filter_by(jti=jti).first():
        db.session.add(JWTBlocklist(jti=jti))
    db.session.commit()


def register_user(payload: RegisterRequest, auto_issue_tokens: bool = False) -> dict:
    """Create a user, assign default roles, and emit the registration event."""
    normalized_email = payload.email.strip().lower()
    existing = User.query.filter(func.lower(User.email) == normalized_email).first()
    if existing:
        raise ValueError("email_already_exists")

    user = User(
        email=normalized_email,
        full_name=payload.full_name,
        password_hash=hash_password(payload.password),
    )
    db.session.add(user)
    for code in DEFAULT_REGISTER_ROLES:
        _attach_role(user, code)
    db.session.flush()  # ensure user.id for events

    enqueue_outbox(
        AUTH_USER_REGISTERED,
        {"user_id": user.id, "email": user.email, "full_name": user.full_name},
        user_id=user.id,
    )
    db.session.commit()

    tokens = issue_tokens(user) if auto_issue_tokens else {}
    return {"user": user, **tokens}


def grant_role(email: str, role_name: str) -> User:
    """Attach a role (created on demand) to an existing user."""
    user = User.query.filter(func.lower(User.email) == email.strip().lower()).first()
    if not user:
        raise ValueError("not_found")
    _attach_role(user, role_name)
    enqueue_outbox(AUTH_USER_ROLE_GRANTED, {"user_id": user.id, "role": role_name}, user_id=user.id)
    db.session.commit()
    return user


def _attach_role(user: User, code: str) -> None:
    role = Role.query.filter_by(name=code).first()
    if not role:
        role = Role(name=code, description=f"Auto-created role {code}")
        db.session.add(role)
    if role not in user.roles:
        user.roles.append(role)
