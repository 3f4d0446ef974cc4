# benigna-api/benigna/core/geo.py
"""Geospatial helpers."""
import math

import geohash2
from pydantic import BaseModel, Field

EARTH_RADIUS_KM = 6371.0


class Coordinate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


# São Paulo, used when an address cannot be resolved
DEFAULT_COORDINATE = Coordinate(latitude=-23.5505, longitude=-46.6333)


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in kilometers."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    delta_phi = math.radians(b.latitude - a.latitude)
    delta_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(delta_phi / 2) ** 2 + \
        math.cos(phi1) * math.cos(phi2) * \
        math.sin(delta_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def format_distance(distance_km: float) -> str:
    if distance_km < 1:
        return f"{int(distance_km * 1000 + 0.5)}m"
    return f"{distance_km:.1f}km"


def encode_geohash(point: Coordinate, precision: int = 9) -> str:
    # precision 9 is roughly 5 meters
    return geohash2.encode(point.latitude, point.longitude, precision=precision)
