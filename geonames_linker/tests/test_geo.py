"""
Tests for the great-circle helpers.
Pure math, no files required.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from geonames_linker.geo import (
    NEARBY_THRESHOLD_DEGREES,
    angular_distance,
    angular_distances,
    is_nearby,
)

POINTS = [
    (0.0, 0.0),
    (48.8566, 2.3522),
    (-33.87, 151.21),
    (39.78, -89.65),
    (89.99, 179.99),
    (-90.0, 0.0),
]


class TestAngularDistance:
    @pytest.mark.parametrize("lat,lon", POINTS)
    def test_identical_points_are_zero(self, lat, lon):
        assert angular_distance(lat, lon, lat, lon) == 0.0

    def test_symmetric(self):
        for a in POINTS:
            for b in POINTS:
                assert angular_distance(*a, *b) == pytest.approx(angular_distance(*b, *a))

    def test_one_degree_along_equator(self):
        assert angular_distance(0.0, 0.0, 0.0, 1.0) == pytest.approx(1.0)

    def test_one_degree_along_meridian(self):
        assert angular_distance(10.0, 20.0, 11.0, 20.0) == pytest.approx(1.0)

    def test_antipodal_points(self):
        assert angular_distance(0.0, 0.0, 0.0, 180.0) == pytest.approx(180.0)
        assert angular_distance(90.0, 0.0, -90.0, 0.0) == pytest.approx(180.0)

    def test_near_identical_points_do_not_produce_nan(self):
        d = angular_distance(48.8566, 2.3522, 48.8566, 2.35220000001)
        assert not math.isnan(d)
        assert 0.0 <= d < 1e-5

    def test_paris_candidates(self):
        near = angular_distance(48.85, 2.35, 48.8566, 2.3522)
        far = angular_distance(48.85, 2.35, 33.6610, -95.5555)
        assert near < NEARBY_THRESHOLD_DEGREES
        assert far > 10.0


class TestAngularDistances:
    def test_matches_scalar_version(self):
        lats = [p[0] for p in POINTS]
        lons = [p[1] for p in POINTS]
        vec = angular_distances(48.85, 2.35, lats, lons)
        assert isinstance(vec, np.ndarray)
        assert vec.shape == (len(POINTS),)
        for got, (lat, lon) in zip(vec, POINTS):
            assert got == pytest.approx(angular_distance(48.85, 2.35, lat, lon), abs=1e-9)

    def test_identical_candidate_is_zero(self):
        vec = angular_distances(39.78, -89.65, [39.78, 0.0], [-89.65, 0.0])
        assert vec[0] == 0.0
        assert vec[1] > 0.0

    def test_empty_candidates(self):
        assert angular_distances(1.0, 2.0, [], []).shape == (0,)


class TestIsNearby:
    def test_strictly_below_threshold(self):
        assert is_nearby(0.0)
        assert is_nearby(0.049)
        assert not is_nearby(NEARBY_THRESHOLD_DEGREES)
        assert not is_nearby(1.0)

    def test_nan_is_never_nearby(self):
        assert not is_nearby(float("nan"))

    def test_array_of_distances(self):
        mask = is_nearby(np.array([0.01, 0.05, float("nan"), 0.2, 0.0]))
        assert mask.tolist() == [True, False, False, False, True]

    def test_custom_threshold(self):
        assert is_nearby(0.5, threshold=1.0)
        assert not is_nearby(0.5, threshold=0.1)
