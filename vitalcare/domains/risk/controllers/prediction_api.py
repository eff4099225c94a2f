"""Risk prediction API controllers."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from vitalcare.core.auth.auth_service import ROLE_CLINICIAN
from vitalcare.core.utils.decorators import csrf_protected, jsonable_errors, require_roles
from vitalcare.core.utils.pagination import page_count
from vitalcare.domains.risk import services
from vitalcare.domains.risk.mappers import map_assessment, map_high_risk, map_prediction
from vitalcare.domains.risk.ml.preventive_plan import assess
from vitalcare.domains.risk.schemas.risk_schemas import (
    HealthIndicators,
    HighRiskQuery,
    HistoryFilter,
    TrendQuery,
)

prediction_api_bp = Blueprint("prediction_api", __name__)


def _parse_query(schema_cls):
    data = {k: v for k, v in request.args.items()}
    try:
        return schema_cls.model_validate(data), None
    except ValidationError as exc:
        return None, exc


def _parse_indicators():
    payload = request.get_json(silent=True) or {}
    raw = payload.get("indicators", payload) if isinstance(payload, dict) else payload
    try:
        return HealthIndicators.model_validate(raw), None
    except ValidationError as exc:
        return None, exc


def _validation_error(exc: ValidationError):
    return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400


@prediction_api_bp.post("/assess")
def assess_risk():
    """Stateless scoring; nothing is stored."""
    indicators, err = _parse_indicators()
    if err:
        return _validation_error(err)
    return jsonify({"ok": True, "assessment": map_assessment(assess(indicators))})


@prediction_api_bp.post("/predict")
@jwt_required()
@csrf_protected
def predict():
    indicators, err = _parse_indicators()
    if err:
        return _validation_error(err)
    user_id = int(get_jwt_identity())
    prediction, assessment = services.create_prediction(user_id, indicators)
    return (
        jsonify({"ok": True, "prediction": map_prediction(prediction), "assessment": map_assessment(assessment)}),
        201,
    )


@prediction_api_bp.get("/history")
@jwt_required()
def history():
    user_id = int(get_jwt_identity())
    params, err = _parse_query(HistoryFilter)
    if err:
        return _validation_error(err)
    items, total = services.list_predictions(user_id, page=params.page, per_page=params.per_page)
    return jsonify(
        {
            "ok": True,
            "items": [map_prediction(p) for p in items],
            "page": params.page,
            "pages": page_count(total, params.per_page),
            "total": total,
        }
    )


@prediction_api_bp.get("/high-risk")
@require_roles([ROLE_CLINICIAN])
def high_risk():
    data = dict(request.args.items())
    data.setdefault("limit", current_app.config.get("HIGH_RISK_LIMIT", 50))
    try:
        params = HighRiskQuery.model_validate(data)
    except ValidationError as exc:
        return _validation_error(exc)
    items = services.list_high_risk(limit=params.limit)
    return jsonify({"ok": True, "items": [map_high_risk(p) for p in items]})


@prediction_api_bp.get("/trends")
@jwt_required()
def my_trends():
    params, err = _parse_query(TrendQuery)
    if err:
        return _validation_error(err)
    trend = services.get_risk_trend(int(get_jwt_identity()), params.disease)
    return jsonify({"ok": True, **trend})


@prediction_api_bp.get("/trends/<int:user_id>")
@require_roles([ROLE_CLINICIAN])
def patient_trends(user_id: int):
    params, err = _parse_query(TrendQuery)
    if err:
        return _validation_error(err)
    trend = services.get_risk_trend(user_id, params.disease)
    return jsonify({"ok": True, **trend})


# Keeps GETs on the POST-only paths from landing on /<prediction_id>
@prediction_api_bp.get("/assess")
@prediction_api_bp.get("/predict")
def post_only():
    return jsonify({"ok": False, "error": "method_not_allowed"}), 405, {"Allow": "POST"}


@prediction_api_bp.get("/<prediction_id>")
@jwt_required()
def get_prediction(prediction_id: str):
    prediction = services.get_prediction(int(get_jwt_identity()), prediction_id)
    if not prediction:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "prediction": map_prediction(prediction)})
