"""Nearby doctor search controller."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from vitalcare.core.utils.decorators import jsonable_errors
from vitalcare.domains.places import services
from vitalcare.domains.places.schemas.places_schemas import NearbyQuery

places_api_bp = Blueprint("places_api", __name__)


@places_api_bp.get("/nearby")
def nearby():
    try:
        params = NearbyQuery.model_validate(dict(request.args.items()))
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    try:
        data = services.search_nearby(
            params.lat, params.lng, radius=params.radius, place_type=params.type, keyword=params.keyword
        )
    except services.PlacesNotConfigured:
        return jsonify({"ok": False, "error": "places_not_configured"}), 503
    except services.PlacesError as exc:
        return jsonify({"ok": False, "error": "places_unavailable", "details": str(exc)}), 502
    return jsonify({"ok": True, **data}) if isinstance(data, dict) else jsonify({"ok": True, "data": data})
