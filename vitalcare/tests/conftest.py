import sys
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config as AlembicConfig
from flask_jwt_extended import create_access_token

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vitalcare import create_app
from vitalcare.core.auth.auth_service import grant_role
from vitalcare.core.auth.password import hash_password
from vitalcare.core.users.models import User
from vitalcare.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


def _alembic_config() -> AlembicConfig:
    cfg = AlembicConfig(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "vitalcare" / "migrations"))
    cfg.set_main_option("vitalcare_env", "testing")
    return cfg


@pytest.fixture(scope="session", autouse=True)
def migrated_db():
    """Apply migrations once per session to mirror production schema."""
    app = create_app("testing")
    uri = app.config["SQLALCHEMY_DATABASE_URI"]
    if uri.startswith("sqlite:///"):
        # Start from an empty file so an older schema never leaks in.
        Path(uri.replace("sqlite:///", "", 1)).unlink(missing_ok=True)
    command.upgrade(_alembic_config(), "head")
    yield


@pytest.fixture()
def app(migrated_db):
    """Per-test app; every table is emptied after the test."""
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()
    try:
        yield app
    finally:
        db.session.rollback()
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        db.session.remove()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


def make_user(email: str = "patient@example.com", password: str = "secret123", roles: tuple = ()) -> User:
    user = User(email=email, password_hash=hash_password(password), full_name=email.split("@")[0])
    db.session.add(user)
    db.session.commit()
    for code in roles:
        grant_role(email, code)
    return user


def bearer(user: User, roles=None) -> dict:
    token = create_access_token(
        identity=str(user.id),
        additional_claims={"roles": list(roles) if roles is not None else user.role_codes},
    )
    return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}


@pytest.fixture
def patient(app):
    return make_user()


@pytest.fixture
def auth_headers(app, patient):
    return bearer(patient)


@pytest.fixture
def clinician(app):
    return make_user("doctor@example.com", roles=("clinician",))


@pytest.fixture
def clinician_headers(app, clinician):
    return bearer(clinician)


@pytest.fixture
def admin(app):
    return make_user("admin@example.com", roles=("admin",))


@pytest.fixture
def admin_headers(app, admin):
    return bearer(admin)


@pytest.fixture
def user_factory(app):
    return make_user


@pytest.fixture
def headers_for(app):
    return bearer
