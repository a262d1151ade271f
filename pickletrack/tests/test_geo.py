import math

import numpy as np
import pytest

from pickletrack.geo import BoundingBox, LatLong, distance_miles, offset_latlong


@pytest.mark.parametrize(
    "origin",
    [LatLong(40.934688, -74.061693), LatLong(0.0, 0.0), LatLong(-33.86, 151.21)],
)
def test_offset_by_zero_is_identity(origin):
    assert offset_latlong(origin, 0, 0) == origin


def test_offset_north_and_east_moves_the_right_way():
    origin = LatLong(40.7, -74.0)
    moved = offset_latlong(origin, 1000, 1000)

    assert moved.latitude > origin.latitude
    assert moved.longitude > origin.longitude
    # 1 km north is roughly 0.009 degrees of latitude.
    assert abs((moved.latitude - origin.latitude) - 1000 / 6378137 * 180 / math.pi) < 1e-12


def test_offset_east_scales_with_latitude():
    equator = offset_latlong(LatLong(0.0, 0.0), 0, 1000)
    north = offset_latlong(LatLong(60.0, 0.0), 0, 1000)

    assert north.longitude == pytest.approx(2 * equator.longitude, rel=1e-9)


def test_distance_to_self_is_zero():
    assert distance_miles(40.73, -73.99, 40.73, -73.99) == 0.0


def test_distance_matches_haversine_formula():
    lat1, lng1, lat2, lng2 = 40.7128, -74.0060, 34.0522, -118.2437
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = math.sin(d_lat / 2) ** 2 + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    expected = 3959 * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    assert distance_miles(lat1, lng1, lat2, lng2) == pytest.approx(expected, rel=1e-12)
    # NYC to LA is about 2445 miles.
    assert 2400 < expected < 2500


def test_distance_broadcasts_over_arrays():
    lats = np.array([40.73, 40.74])
    lngs = np.array([-73.99, -73.99])

    result = distance_miles(40.73, -73.99, lats, lngs)

    assert result.shape == (2,)
    assert result[0] == 0.0
    # 0.01 degrees of latitude is about 0.69 miles.
    assert result[1] == pytest.approx(0.691, abs=0.01)


def test_bounding_box_rejects_inverted_corners():
    with pytest.raises(ValueError):
        BoundingBox(sw=LatLong(41.0, -74.0), ne=LatLong(40.0, -73.0))


def test_bounding_box_contains_its_edges():
    box = BoundingBox(sw=LatLong(40.0, -74.0), ne=LatLong(41.0, -73.0))

    assert box.contains(LatLong(40.0, -74.0))
    assert box.contains(LatLong(40.5, -73.5))
    assert not box.contains(LatLong(41.1, -73.5))
