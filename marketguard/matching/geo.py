"""
Great-circle distance helpers.

Coordinates are (latitude, longitude) in degrees; distances are kilometres.
"""

import math
from typing import Optional, Sequence

import numpy as np

EARTH_RADIUS_KM = 6371.0

Coordinates = tuple[float, float]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine distance between two points.

    Args:
        lat1, lon1: First point in degrees
        lat2, lon2: Second point in degrees

    Returns:
        Distance in kilometres
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push antipodal points just past 1.0
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def haversine_km_many(
    origin: Coordinates,
    points: Sequence[Optional[Coordinates]],
) -> list[Optional[float]]:
    """
    Distances from one origin to many points in a single vectorised pass.

    Points with unknown coordinates (None) get a None distance.

    Args:
        origin: (latitude, longitude) of the viewer
        points: Listing coordinates, None where unknown

    Returns:
        One distance (or None) per point, in input order
    """
    known = [i for i, p in enumerate(points) if p is not None]
    result: list[Optional[float]] = [None] * len(points)
    if not known:
        return result

    coords = np.radians(np.array([points[i] for i in known], dtype=np.float64))
    lat1, lon1 = np.radians(origin[0]), np.radians(origin[1])
    lat2, lon2 = coords[:, 0], coords[:, 1]

    a = (
        np.sin((lat2 - lat1) / 2) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    )
    a = np.clip(a, 0.0, 1.0)
    distances = EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    for idx, dist in zip(known, distances):
        result[idx] = float(dist)
    return result
