"""VitalCare application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask

from vitalcare.config import config_by_name
from vitalcare.core.events.event_bus import event_bus
from vitalcare.extensions import init_extensions, jwt


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the VitalCare Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(__name__, instance_path=str(instance_root), instance_relative_config=True)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    instance_root.mkdir(parents=True, exist_ok=True)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI")
    if db_uri and db_uri.startswith("sqlite:///") and db_uri != "sqlite:///:memory:":
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    _configure_logging(app)
    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)
    _register_event_subscribers(app)

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    @app.get("/api/v1/ping")
    def ping():
        """Lightweight endpoint for load-balancer health checks."""
        return {"pong": True}, 200

    from vitalcare.scripts.commands import register_commands

    register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO)
    app.logger.setLevel(level)
    logging.getLogger("vitalcare").setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from vitalcare.core.auth.controllers import auth_bp  # local import to avoid circulars
    from vitalcare.domains.chat.controllers.chat_api import chat_api_bp
    from vitalcare.domains.messaging.controllers.sms_api import sms_api_bp
    from vitalcare.domains.messaging.controllers.whatsapp_api import whatsapp_api_bp
    from vitalcare.domains.places.controllers.places_api import places_api_bp
    from vitalcare.domains.risk.controllers.prediction_api import prediction_api_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(prediction_api_bp, url_prefix="/api/predictions")
    app.register_blueprint(chat_api_bp, url_prefix="/api/chatlogs")
    app.register_blueprint(sms_api_bp, url_prefix="/api/sms")
    app.register_blueprint(whatsapp_api_bp, url_prefix="/api/whatsapp")
    app.register_blueprint(places_api_bp, url_prefix="/api/places")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """JWT revocation and error payloads."""
    from vitalcare.core.auth.models import JWTBlocklist

    @jwt.token_in_blocklist_loader
    def _token_revoked(_jwt_header, jwt_payload: dict) -> bool:
        jti = jwt_payload.get("jti")
        return bool(jti) and JWTBlocklist.query.filter_by(jti=jti).first() is not None

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return {"ok": False, "error": "unauthorized", "details": reason}, 401

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return {"ok": False, "error": "invalid_token", "details": reason}, 401

    @jwt.revoked_token_loader
    def _revoked_token(_jwt_header, _jwt_payload):
        return {"ok": False, "error": "token_revoked"}, 401


def _register_event_subscribers(app: Flask) -> None:
    from vitalcare.domains.messaging.services.alert_service import notify_risk_alert
    from vitalcare.domains.risk.events import RISK_ALERT_RAISED

    event_bus.subscribe(RISK_ALERT_RAISED, notify_risk_alert)
    app.extensions["event_bus"] = event_bus
