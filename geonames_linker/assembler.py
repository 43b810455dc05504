"""
Pairs independently observed latitude/longitude facts per entity name.

Each name is either EMPTY (no entry) or PENDING(axis, value). The first
half-coordinate moves a name to PENDING; the opposite half completes the pair
and returns the name to EMPTY, so every pair comes from one observation
episode. A repeated half on the same axis replaces the pending value (the most
recent half-coordinate wins).

Pairing is sequential: feed facts in their original order.
"""

from __future__ import annotations

import logging
from typing import Optional

from geonames_linker.config import get_settings
from geonames_linker.facts import relation_name
from geonames_linker.models import Axis, CoordinatePair

logger = logging.getLogger(__name__)


def axis_for_relation(
    relation: str,
    latitude_relation: Optional[str] = None,
    longitude_relation: Optional[str] = None,
) -> Optional[Axis]:
    """Map a (bare or bracketed) relation to the axis it carries, if any."""
    linking = get_settings().linking
    name = relation_name(relation)
    if name == relation_name(latitude_relation or linking.latitude_relation):
        return Axis.LATITUDE
    if name == relation_name(longitude_relation or linking.longitude_relation):
        return Axis.LONGITUDE
    return None


class CoordinatePairAssembler:
    def __init__(self) -> None:
        self._pending: dict[str, tuple[Axis, float]] = {}

    def observe(self, entity_name: str, axis: Axis, value: float) -> Optional[CoordinatePair]:
        """Record one half-coordinate; returns the pair once both halves are in."""
        pending = self._pending.get(entity_name)

        if pending is None or pending[0] is axis:
            if pending is not None:
                logger.debug("Replacing pending %s for %r: %s -> %s",
                             axis.value, entity_name, pending[1], value)
            self._pending[entity_name] = (axis, value)
            return None

        del self._pending[entity_name]
        if axis is Axis.LATITUDE:
            return CoordinatePair(latitude=value, longitude=pending[1])
        return CoordinatePair(latitude=pending[1], longitude=value)

    def is_pending(self, entity_name: str) -> bool:
        return entity_name in self._pending

    @property
    def pending_count(self) -> int:
        return len(self._pending)
