"""
Geometry helpers shared by the scraper and the lookup service.

Flat-earth offsets are only good for a few kilometers and not near the poles;
distances are great-circle (haversine) in miles.
"""
from .distance import distance_miles, offset_latlong
from .models import BoundingBox, LatLong, Region

__all__ = ["BoundingBox", "LatLong", "Region", "distance_miles", "offset_latlong"]
