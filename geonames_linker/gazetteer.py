"""
In-memory GeoNames index.

Built once per run from the full gazetteer dump and read-only afterwards:

  - name -> ids sharing that name, in file order (more than one id means the
    name is ambiguous and needs coordinates to resolve)
  - id -> (latitude, longitude)

Only columns 0 (id), 1 (name), 4 (latitude) and 5 (longitude) of the dump
are used.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from pydantic import ValidationError

from geonames_linker.config import get_settings
from geonames_linker.errors import MalformedRecordError
from geonames_linker.models import CoordinatePair, GazetteerRecord

logger = logging.getLogger(__name__)

ID_COLUMN = 0
NAME_COLUMN = 1
LATITUDE_COLUMN = 4
LONGITUDE_COLUMN = 5
MIN_COLUMNS = 6


def _validation_summary(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{field}: {err.get('msg')} (got {err.get('input')!r})")
    return "; ".join(parts)


def _as_record(raw: Any, position: Optional[int] = None) -> GazetteerRecord:
    if isinstance(raw, GazetteerRecord):
        return raw
    try:
        return GazetteerRecord.model_validate(raw)
    except ValidationError as e:
        raise MalformedRecordError(_validation_summary(e), position) from e


def parse_gazetteer_line(line: str, line_number: Optional[int] = None) -> GazetteerRecord:
    """Parse one tab-separated GeoNames line."""
    data = line.rstrip("\r\n").split("\t")
    if len(data) < MIN_COLUMNS:
        raise MalformedRecordError(
            f"expected at least {MIN_COLUMNS} tab-separated columns, got {len(data)}", line_number
        )
    return _as_record(
        {
            "id": data[ID_COLUMN],
            "name": data[NAME_COLUMN],
            "latitude": data[LATITUDE_COLUMN],
            "longitude": data[LONGITUDE_COLUMN],
        },
        line_number,
    )


def read_gazetteer(
    path: Path | str,
    encoding: Optional[str] = None,
    progress_every: Optional[int] = None,
) -> Iterator[GazetteerRecord]:
    """Stream records from a GeoNames dump. Blank lines are skipped.

    A progress line is logged every `progress_every` records; 0 or less
    turns progress logging off.
    """
    settings = get_settings().gazetteer
    encoding = encoding or settings.encoding
    if progress_every is None:
        progress_every = settings.progress_every
    path = Path(path)

    logger.info("Reading GeoNames entities from %s", path)
    count = 0
    with path.open("r", encoding=encoding) as f:
        for line_number, line in enumerate(f, 1):
            if not line.strip():
                continue
            yield parse_gazetteer_line(line, line_number)
            count += 1
            if progress_every > 0 and count % progress_every == 0:
                logger.info("... %d GeoNames records read", count)
    logger.info("Read %d GeoNames records from %s", count, path)


class GazetteerIndex:
    """
    Immutable name/coordinate lookup over gazetteer records.

    Takes ownership of the mappings it is given; they are wrapped read-only,
    not copied.
    """

    def __init__(
        self,
        name_to_ids: Mapping[str, tuple[int, ...]],
        coordinates: Mapping[int, CoordinatePair],
        record_count: int = 0,
    ):
        self._name_to_ids = MappingProxyType(name_to_ids)
        self._coordinates = MappingProxyType(coordinates)
        self._record_count = record_count
        self._ambiguous = sum(1 for ids in self._name_to_ids.values() if len(ids) > 1)

    @classmethod
    def build(cls, records: Iterable[Any]) -> "GazetteerIndex":
        """
        Index records in arrival order.

        Raises MalformedRecordError on the first record that does not
        validate; no partial index is returned. Duplicate ids are kept in the
        name list and the later record's coordinates win.
        """
        name_to_ids: dict[str, Any] = {}
        coordinates: dict[int, CoordinatePair] = {}
        count = 0
        for position, raw in enumerate(records, 1):
            record = _as_record(raw, position)
            name_to_ids.setdefault(record.name, []).append(record.id)
            coordinates[record.id] = record.coordinates
            count += 1

        # lists -> tuples in place
        for name, ids in name_to_ids.items():
            name_to_ids[name] = tuple(ids)

        index = cls(
            name_to_ids,
            coordinates,
            record_count=count,
        )
        logger.info(
            "Gazetteer index built: %d records, %d names (%d ambiguous)",
            count, len(index), index.ambiguous_name_count,
        )
        return index

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        encoding: Optional[str] = None,
        progress_every: Optional[int] = None,
    ) -> "GazetteerIndex":
        return cls.build(read_gazetteer(path, encoding=encoding, progress_every=progress_every))

    def lookup(self, name: str) -> tuple[int, ...]:
        """Candidate ids for an exact name, in file order; empty if unknown."""
        return self._name_to_ids.get(name, ())

    def coordinates_of(self, geonames_id: int) -> CoordinatePair:
        return self._coordinates[geonames_id]

    def __contains__(self, name: object) -> bool:
        return name in self._name_to_ids

    def __len__(self) -> int:
        return len(self._name_to_ids)

    @property
    def record_count(self) -> int:
        return self._record_count

    @property
    def ambiguous_name_count(self) -> int:
        return self._ambiguous

    def describe(self) -> dict:
        largest = max((len(ids) for ids in self._name_to_ids.values()), default=0)
        return {
            "records": self._record_count,
            "distinct_ids": len(self._coordinates),
            "names": len(self),
            "ambiguous_names": self.ambiguous_name_count,
            "max_candidates_per_name": largest,
        }
