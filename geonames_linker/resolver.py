"""
Entity resolution against the gazetteer index.

  - unknown name: no match
  - one candidate: that candidate, coordinates are not consulted
  - several candidates: the first one, in gazetteer file order, lying
    strictly within the nearby threshold of the observed coordinates; no
    coordinates or nothing nearby means no match

The scan is first-match, not nearest-match.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from geonames_linker.config import get_settings
from geonames_linker.gazetteer import GazetteerIndex
from geonames_linker.geo import angular_distances, is_nearby
from geonames_linker.models import CoordinatePair, ResolvedLink

logger = logging.getLogger(__name__)


class EntityResolver:
    """Pure queries against an immutable GazetteerIndex."""

    def __init__(self, index: GazetteerIndex, threshold_degrees: Optional[float] = None):
        self.index = index
        if threshold_degrees is None:
            threshold_degrees = get_settings().linking.nearby_threshold_degrees
        if not threshold_degrees > 0:
            raise ValueError("threshold_degrees must be a positive number")
        self.threshold_degrees = float(threshold_degrees)

    def resolve(self, entity_name: str, pair: Optional[CoordinatePair] = None) -> Optional[int]:
        candidates = self.index.lookup(entity_name)
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]
        if pair is None:
            return None

        match = self._first_nearby(candidates, pair)
        if match is not None:
            logger.debug("Found geonames target for %r using disambiguation (%d candidates)",
                         entity_name, len(candidates))
        return match

    def resolve_link(self, entity_name: str, pair: Optional[CoordinatePair] = None) -> Optional[ResolvedLink]:
        geonames_id = self.resolve(entity_name, pair)
        if geonames_id is None:
            return None
        return ResolvedLink(entity_name=entity_name, gazetteer_id=geonames_id)

    def _first_nearby(self, candidates: tuple[int, ...], pair: CoordinatePair) -> Optional[int]:
        coords = np.array([self.index.coordinates_of(c) for c in candidates], dtype=np.float64)
        distances = angular_distances(pair.latitude, pair.longitude, coords[:, 0], coords[:, 1])
        hits = np.flatnonzero(is_nearby(distances, self.threshold_degrees))
        if hits.size == 0:
            return None
        return candidates[int(hits[0])]
