"""
Validation of the query point coming in from the request.
"""

import math
from typing import Optional

from solar_snapshot.engine.errors import InvalidInputError
from solar_snapshot.models.solar import Location


def parse_location(lat: Optional[str], lng: Optional[str]) -> Location:
    """Parse raw lat/lng values, raising InvalidInputError if unusable."""
    if lat is None or lng is None or not str(lat).strip() or not str(lng).strip():
        raise InvalidInputError("lat/lng required")

    lat_val = _to_float(lat, "lat")
    lng_val = _to_float(lng, "lng")

    if not -90.0 <= lat_val <= 90.0:
        raise InvalidInputError(f"lat must be between -90 and 90, got {lat_val}")
    if not -180.0 <= lng_val <= 180.0:
        raise InvalidInputError(f"lng must be between -180 and 180, got {lng_val}")

    return Location(lat=lat_val, lng=lng_val)


def _to_float(raw, name: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be numeric, got {raw!r}")
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite number, got {raw!r}")
    return value
