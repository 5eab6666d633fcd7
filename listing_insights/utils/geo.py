"""Great-circle distance used to turn raw amenity coordinates into miles."""

from __future__ import annotations

import math

EARTH_RADIUS = {"miles": 3959.0, "km": 6371.0}


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float, unit: str = "miles") -> float:
    """Distance between two points, rounded to two decimal places.

    ``unit`` is ``"miles"`` (default) or ``"km"``.
    """

    if unit not in EARTH_RADIUS:
        raise ValueError(f"Unsupported distance unit '{unit}'")
    radius = EARTH_RADIUS[unit]

    lat_delta = math.radians(lat2 - lat1)
    lng_delta = math.radians(lng2 - lng1)
    a = (
        math.sin(lat_delta / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(lng_delta / 2) ** 2
    )
    # Clamp guards against a > 1 from floating point error on antipodal points.
    c = 2 * math.asin(math.sqrt(min(1.0, a)))
    return round(radius * c, 2)


__all__ = ["EARTH_RADIUS", "haversine_distance"]
