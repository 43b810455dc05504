"""
Central configuration loaded from environment variables with sensible defaults.
Everything is read once per process; the batch never reloads settings mid-run.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


@dataclass(frozen=True)
class GazetteerConfig:
    # GeoNames dump, e.g. allCountries.txt
    path: str = os.getenv("GAZETTEER_PATH", "allCountries.txt")
    encoding: str = os.getenv("GAZETTEER_ENCODING", "utf-8")
    # Log a progress line every N records while reading the dump
    progress_every: int = int(os.getenv("GAZETTEER_PROGRESS_EVERY", "1000000"))


@dataclass(frozen=True)
class LinkingConfig:
    # ~5.5 km; enough to tell same-named towns apart
    nearby_threshold_degrees: float = float(os.getenv("NEARBY_THRESHOLD_DEGREES", "0.05"))
    latitude_relation: str = os.getenv("LATITUDE_RELATION", "hasLatitude")
    longitude_relation: str = os.getenv("LONGITUDE_RELATION", "hasLongitude")
    output_relation: str = os.getenv("OUTPUT_RELATION", "hasGeonamesEntityId")
    output_theme: str = os.getenv("OUTPUT_THEME", "geonamesEntityIds")


@dataclass(frozen=True)
class Settings:
    gazetteer: GazetteerConfig = field(default_factory=GazetteerConfig)
    linking: LinkingConfig = field(default_factory=LinkingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    env: str = os.getenv("APP_ENV", "development")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
