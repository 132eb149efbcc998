import math

import pytest

from fittrack.services.geo import distance, haversine_km
from conftest import point


def test_same_point_is_zero():
    a = point(37.7749, -122.4194)
    assert distance(a, a) == 0.0


def test_symmetric():
    a = point(37.0, -122.0)
    b = point(40.7128, -74.006)
    assert distance(a, b) == distance(b, a)


def test_one_degree_of_latitude():
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(6371.0 * math.pi / 180, rel=1e-12)


def test_known_city_pair():
    # San Francisco -> New York, roughly 4130 km great-circle
    assert haversine_km(37.7749, -122.4194, 40.7128, -74.0060) == pytest.approx(4129, abs=5)


def test_reproducible():
    args = (51.5007, -0.1246, 48.8584, 2.2945)
    assert haversine_km(*args) == haversine_km(*args)
