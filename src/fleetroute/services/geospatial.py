"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Iterable

EARTH_RADIUS_MILES = 3959.0


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in miles between two coordinates using the Haversine formula.

    Non-finite coordinates produce ``nan`` rather than a math domain error.
    """

    if not all(math.isfinite(value) for value in (lat1, lon1, lat2, lon2)):
        return math.nan

    d_lat = (lat2 - lat1) * math.pi / 180
    d_lon = (lon2 - lon1) * math.pi / 180

    a = math.sin(d_lat / 2) * math.sin(d_lat / 2) + math.cos(lat1 * math.pi / 180) * math.cos(
        lat2 * math.pi / 180
    ) * math.sin(d_lon / 2) * math.sin(d_lon / 2)
    # out-of-range latitudes can push a outside [0, 1]
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def path_length_miles(points: Iterable[tuple[float, float]]) -> float:
    """Sum the haversine legs along an ordered sequence of (lat, lng) points."""

    total = 0.0
    previous: tuple[float, float] | None = None
    for point in points:
        if previous is not None:
            total += haversine_miles(previous[0], previous[1], point[0], point[1])
        previous = point
    return total


def is_valid_coordinate(lat: float, lng: float) -> bool:
    """Return True when latitude and longitude fall inside their geographic ranges."""

    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0
