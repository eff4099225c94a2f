"""Google Places nearby-search proxy."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from flask import current_app

logger = logging.getLogger(__name__)


class PlacesNotConfigured(Exception):
    """No Maps API key is configured."""


class PlacesError(Exception):
    """The Places API could not be reached or returned an HTTP error."""


def search_nearby(
    lat: float,
    lng: float,
    radius: int = 5000,
    place_type: str = "doctor",
    keyword: Optional[str] = None,
) -> dict:
    api_key = current_app.config.get("GOOGLE_MAPS_API_KEY")
    if not api_key:
        raise PlacesNotConfigured("GOOGLE_MAPS_API_KEY not configured")

    params = {
        "location": f"{lat},{lng}",
        "radius": str(radius),
        "type": place_type,
        "key": api_key,
    }
    if keyword:
        params["keyword"] = keyword

    try:
        resp = requests.get(
            current_app.config["PLACES_API_URL"],
            params=params,
            timeout=current_app.config.get("PLACES_TIMEOUT_SECONDS", 10),
        )
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as e:
        logger.error("Places API request failed: %s", e)
        raise PlacesError(f"Places API request failed: {e}")
    except ValueError as e:
        logger.error("Places API returned invalid JSON: %s", e)
        raise PlacesError("Places API returned invalid JSON")

    status = data.get("status") if isinstance(data, dict) else None
    if status and status != "OK":
        logger.warning("Places API status: %s %s", status, data.get("error_message", ""))
    return data
