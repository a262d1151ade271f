from __future__ import annotations

import math

import numpy as np

from .models import LatLong

EARTH_RADIUS_METERS = 6378137.0
EARTH_RADIUS_MILES = 3959.0


def offset_latlong(origin: LatLong, d_north_m: float, d_east_m: float) -> LatLong:
    """
    Move ``origin`` by the given meters north and east.

    Not hyper accurate, but good enough for boxes a few kilometers across.
    """
    d_lat = d_north_m / EARTH_RADIUS_METERS
    d_lon = d_east_m / (EARTH_RADIUS_METERS * math.cos(math.pi * origin.latitude / 180.0))

    return LatLong(
        latitude=origin.latitude + d_lat * (180.0 / math.pi),
        longitude=origin.longitude + d_lon * (180.0 / math.pi),
    )


def distance_miles(lat1, lng1, lat2, lng2):
    """
    Great-circle distance in miles between two (lat, lng) pairs.

    Any argument may be a numpy array, in which case the result is an array
    broadcast the usual way.
    """
    d_lat = np.radians(np.subtract(lat2, lat1))
    d_lng = np.radians(np.subtract(lng2, lng1))
    a = np.sin(d_lat / 2.0) ** 2 + np.cos(np.radians(lat1)) * np.cos(np.radians(lat2)) * np.sin(d_lng / 2.0) ** 2
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return EARTH_RADIUS_MILES * c
