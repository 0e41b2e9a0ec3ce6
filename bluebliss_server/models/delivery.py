from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

import requests

from ..settings import env_float, env_str
from .combo_matcher import BlueBlissError, ValidationError

logger = logging.getLogger(__name__)

DISTANCE_MATRIX_URL: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
PREP_TIME_MIN: int = 15
MAX_DELIVERY_DISTANCE_M: int = 10000
_REQ_TIMEOUT_S: int = 10

# Hyderabad city centre
DEFAULT_LAT: float = 17.385044
DEFAULT_LNG: float = 78.486671


class DeliveryError(BlueBlissError):
    """The distance service failed or answered with a non-OK status."""


class RouteUnavailable(BlueBlissError):
    """The distance service has no route to the destination."""


def restaurant_location() -> Dict[str, float]:
    return {
        "lat": env_float("RESTAURANT_LAT", DEFAULT_LAT),
        "lng": env_float("RESTAURANT_LNG", DEFAULT_LNG),
    }


_SESSION: Optional[requests.Session] = None


def _get_session() -> requests.Session:
    global _SESSION
    if _SESSION is None:
        _SESSION = requests.Session()
    return _SESSION


def _coerce_coord(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_destination(destination: Any) -> Dict[str, float]:
    if not isinstance(destination, dict):
        raise ValidationError("Destination coordinates are required")
    lat = _coerce_coord(destination.get("lat"))
    lng = _coerce_coord(destination.get("lng"))
    if lat is None or lng is None:
        raise ValidationError("Destination coordinates are required")
    return {"lat": lat, "lng": lng}


def summarize_element(element: Dict[str, Any]) -> Dict[str, Any]:
    """Turn one Distance Matrix element into the delivery summary the storefront shows."""
    distance_m = element["distance"]["value"]
    duration_s = element["duration"]["value"]
    travel_min = math.ceil(duration_s / 60)
    return {
        "distance": f"{distance_m / 1000:.1f} km",
        "distanceInMeters": distance_m,
        "travelTime": f"{travel_min} mins",
        "deliveryTime": f"{PREP_TIME_MIN + travel_min} mins",
        "prepTime": f"{PREP_TIME_MIN} mins",
        "isDeliverable": distance_m <= MAX_DELIVERY_DISTANCE_M,
        "maxDistance": f"{MAX_DELIVERY_DISTANCE_M // 1000} km",
    }


def calculate_delivery(destination: Any) -> Dict[str, Any]:
    dest = parse_destination(destination)
    origin = restaurant_location()
    logger.info(f"Calculating delivery for lat={dest['lat']} lng={dest['lng']}")

    try:
        resp = _get_session().get(
            DISTANCE_MATRIX_URL,
            params={
                "origins": f"{origin['lat']},{origin['lng']}",
                "destinations": f"{dest['lat']},{dest['lng']}",
                "mode": "driving",
                "key": env_str("GOOGLE_MAPS_API_KEY", ""),
            },
            timeout=_REQ_TIMEOUT_S,
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Distance Matrix request failed: {e}")
        raise DeliveryError(f"Failed to calculate distance: {e}") from e

    if data.get("status") != "OK":
        logger.error(f"Distance Matrix API error: {data.get('status')} {data.get('error_message', '')}")
        raise DeliveryError(f"Failed to calculate distance: {data.get('status')}")

    try:
        element = data["rows"][0]["elements"][0]
    except (KeyError, IndexError, TypeError) as e:
        raise DeliveryError("Distance Matrix response had no elements") from e

    if element.get("status") != "OK":
        raise RouteUnavailable(f"Unable to calculate route to this address: {element.get('status')}")

    result = summarize_element(element)
    logger.info(f"Delivery calculated: distance={result['distance']} deliveryTime={result['deliveryTime']} isDeliverable={result['isDeliverable']}")
    return result
