"""
Great-circle helpers.

Distances are angular separations in degrees (spherical law of cosines), not
metres: the disambiguation threshold is expressed in the same unit. One
hundredth of a degree is roughly 1.11 km, so the default threshold of 0.05
covers about 5.5 km, which is enough to tell same-named places apart at
town/city granularity.
"""

from __future__ import annotations

import math

import numpy as np

NEARBY_THRESHOLD_DEGREES = 0.05


def angular_distance(lat_a: float, lon_a: float, lat_b: float, lon_b: float) -> float:
    """Angle between coordinate A and B, in degrees."""
    if lat_a == lat_b and lon_a == lon_b:
        return 0.0

    lat1 = math.radians(lat_a)
    lon1 = math.radians(lon_a)
    lat2 = math.radians(lat_b)
    lon2 = math.radians(lon_b)

    cos_angle = math.sin(lat1) * math.sin(lat2) + math.cos(lat1) * math.cos(lat2) * math.cos(lon1 - lon2)
    # Rounding can push identical or antipodal points just outside [-1, 1]
    cos_angle = max(-1.0, min(1.0, cos_angle))
    return math.degrees(math.acos(cos_angle))


def angular_distances(lat: float, lon: float, lats, lons) -> np.ndarray:
    """Vectorised `angular_distance` from one point to many candidates."""
    lat1 = np.radians(float(lat))
    lon1 = np.radians(float(lon))
    lat2 = np.radians(np.asarray(lats, dtype=np.float64))
    lon2 = np.radians(np.asarray(lons, dtype=np.float64))

    cos_angle = np.sin(lat1) * np.sin(lat2) + np.cos(lat1) * np.cos(lat2) * np.cos(lon1 - lon2)
    distances = np.degrees(np.arccos(np.clip(cos_angle, -1.0, 1.0)))
    return np.where((lat2 == lat1) & (lon2 == lon1), 0.0, distances)


def is_nearby(distance, threshold: float = NEARBY_THRESHOLD_DEGREES):
    """Strict `<` on a distance or an array of distances."""
    # NaN compares False, so it never counts as nearby
    return distance < threshold
