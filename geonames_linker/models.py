"""
Pydantic models used across the linker for validation and serialization.
These are pure data objects with no I/O.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field, field_validator

# Plain numeric text as written in GeoNames dumps; no whitespace or '_' separators
INTEGER_TEXT = re.compile(r"-?\d+")
DECIMAL_TEXT = re.compile(r"[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


# ── Enums ──────────────────────────────────────────────────────────────

class Axis(str, Enum):
    LATITUDE = "latitude"
    LONGITUDE = "longitude"


# ── Gazetteer models ──────────────────────────────────────────────────

class CoordinatePair(NamedTuple):
    latitude: float
    longitude: float


class GazetteerRecord(BaseModel):
    """One GeoNames line, reduced to the columns the linker needs."""
    id: int
    name: str
    latitude: float
    longitude: float

    model_config = {"frozen": True, "allow_inf_nan": False}

    @field_validator("id", mode="before")
    @classmethod
    def check_id_text(cls, v):
        """pydantic's lax mode would accept '7.0', ' 7' or '1_000'."""
        if isinstance(v, str) and not INTEGER_TEXT.fullmatch(v):
            raise ValueError("not an integer literal")
        return v

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def check_decimal_text(cls, v):
        if isinstance(v, str) and not DECIMAL_TEXT.fullmatch(v):
            raise ValueError("not a decimal literal")
        return v

    @property
    def coordinates(self) -> CoordinatePair:
        return CoordinatePair(self.latitude, self.longitude)


# ── Linking output ────────────────────────────────────────────────────

class ResolvedLink(BaseModel):
    """A confident entity -> gazetteer id match. Never mutated once emitted."""
    entity_name: str
    gazetteer_id: int

    model_config = {"frozen": True}


class RunStats(BaseModel):
    """Counters for one batch run, reported by the pipeline and the CLI."""
    records_indexed: int = 0
    distinct_names: int = 0
    ambiguous_names: int = 0
    facts_read: int = 0
    coordinate_facts: int = 0
    pairs_assembled: int = 0
    links_emitted: int = 0
    unmatched: int = 0
    unresolved_ambiguous: int = 0
    duration_seconds: Optional[float] = Field(None, ge=0.0)
