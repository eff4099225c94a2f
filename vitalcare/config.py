"""Application configuration for VitalCare."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Dict, Type

from dotenv import load_dotenv
from sqlalchemy.engine.url import make_url

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _engine_options_from_uri(uri: str) -> dict:
    url = make_url(uri)
    if url.get_backend_name() == "sqlite":
        return {"pool_pre_ping": True, "connect_args": {"timeout": 30}}
    if url.get_backend_name() in {"postgresql", "postgres"}:
        timeout = int(os.environ.get("DB_CONNECT_TIMEOUT_SECONDS", "10"))
        return {"pool_pre_ping": True, "connect_args": {"connect_timeout": timeout}}
    return {"pool_pre_ping": True}


class BaseConfig:
    """Base configuration loaded for all environments."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///instance/vitalcare.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_SECURE = _flag("SESSION_COOKIE_SECURE", "false")
    WTF_CSRF_ENABLED = True
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.environ.get("JWT_ACCESS_MINUTES", "30")))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.environ.get("JWT_REFRESH_DAYS", "14")))

    RATELIMIT_DEFAULT = "200/hour"
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    RATELIMIT_ENABLED = _flag("RATELIMIT_ENABLED", "true")

    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", str(2 * 1024 * 1024)))

    # Risk predictions
    HIGH_RISK_LIMIT = int(os.environ.get("HIGH_RISK_LIMIT", "50"))

    # Google Places proxy
    GOOGLE_MAPS_API_KEY = os.environ.get("GOOGLE_MAPS_API_KEY") or os.environ.get("GOOGLE_API_KEY", "")
    PLACES_API_URL = os.environ.get(
        "PLACES_API_URL",
        "https://maps.googleapis.com/maps/api/place/nearbysearch/json",
    )
    PLACES_TIMEOUT_SECONDS = float(os.environ.get("PLACES_TIMEOUT_SECONDS", "10"))

    # SMS / WhatsApp
    MESSAGING_BACKEND = os.environ.get("MESSAGING_BACKEND", "mock")
    WHATSAPP_CONTACT_NUMBER = os.environ.get("WHATSAPP_CONTACT_NUMBER", "+918527870864")
    MESSAGING_MOCK_HISTORY = int(os.environ.get("MESSAGING_MOCK_HISTORY", "100"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"


class TestingConfig(BaseConfig):
    TESTING = True
    # File-backed SQLite so Alembic migrations and the app share the same DB.
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite:///instance/test.db")
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    GOOGLE_MAPS_API_KEY = "test-maps-key"
    BCRYPT_LOG_ROUNDS = 4


class ProductionConfig(BaseConfig):
    ENV = "production"
    SESSION_COOKIE_SECURE = True


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}
