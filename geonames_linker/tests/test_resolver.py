"""
Tests for name + coordinate resolution.
These are pure unit tests over an in-memory index.
"""

from __future__ import annotations

import pytest

from geonames_linker.gazetteer import GazetteerIndex
from geonames_linker.models import CoordinatePair, GazetteerRecord, ResolvedLink
from geonames_linker.resolver import EntityResolver


@pytest.fixture(scope="module")
def resolver():
    index = GazetteerIndex.build([
        GazetteerRecord(id=1, name="Paris", latitude=48.8566, longitude=2.3522),
        GazetteerRecord(id=2, name="Paris", latitude=33.6610, longitude=-95.5555),
        GazetteerRecord(id=7, name="Springfield", latitude=39.78, longitude=-89.65),
        # both within threshold of (10.0, 10.0); 11 comes first in file order
        GazetteerRecord(id=11, name="Twin", latitude=10.03, longitude=10.0),
        GazetteerRecord(id=12, name="Twin", latitude=10.0, longitude=10.0),
    ])
    return EntityResolver(index)


class TestSingleCandidate:
    def test_without_coordinates(self, resolver):
        assert resolver.resolve("Springfield") == 7

    def test_coordinates_are_ignored(self, resolver):
        assert resolver.resolve("Springfield", CoordinatePair(-40.0, 170.0)) == 7


class TestAmbiguous:
    def test_no_coordinates(self, resolver):
        assert resolver.resolve("Paris") is None

    def test_disambiguation_success(self, resolver):
        assert resolver.resolve("Paris", CoordinatePair(48.85, 2.35)) == 1
        assert resolver.resolve("Paris", CoordinatePair(33.66, -95.55)) == 2

    def test_nothing_nearby(self, resolver):
        assert resolver.resolve("Paris", CoordinatePair(0.0, 0.0)) is None

    def test_first_match_not_nearest(self, resolver):
        assert resolver.resolve("Twin", CoordinatePair(10.0, 10.0)) == 11

    def test_threshold_is_strict(self):
        index = GazetteerIndex.build([
            GazetteerRecord(id=1, name="X", latitude=0.0, longitude=0.0),
            GazetteerRecord(id=2, name="X", latitude=0.0, longitude=1.0),
        ])
        assert EntityResolver(index, threshold_degrees=1.5).resolve("X", CoordinatePair(0.0, 1.0)) == 1
        assert EntityResolver(index, threshold_degrees=0.5).resolve("X", CoordinatePair(0.0, 1.0)) == 2

    def test_nan_coordinates_match_nothing(self, resolver):
        assert resolver.resolve("Paris", CoordinatePair(float("nan"), 2.35)) is None


class TestUnknownAndLinks:
    def test_unknown_name(self, resolver):
        assert resolver.resolve("Atlantis") is None
        assert resolver.resolve("Atlantis", CoordinatePair(48.85, 2.35)) is None

    def test_resolve_link(self, resolver):
        assert resolver.resolve_link("Paris", CoordinatePair(48.85, 2.35)) == ResolvedLink(
            entity_name="Paris", gazetteer_id=1
        )
        assert resolver.resolve_link("Paris") is None

    def test_default_threshold(self, resolver):
        assert resolver.threshold_degrees == pytest.approx(0.05)

    @pytest.mark.parametrize("threshold", [0.0, -1.0, float("nan")])
    def test_invalid_threshold(self, resolver, threshold):
        with pytest.raises(ValueError):
            EntityResolver(resolver.index, threshold_degrees=threshold)
