"""CLI entrypoint for geonames_linker."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys

from geonames_linker.config import get_settings
from geonames_linker.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _threshold(value: str) -> float:
    try:
        threshold = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None
    if not threshold > 0 or math.isinf(threshold):
        raise argparse.ArgumentTypeError(f"threshold must be a positive number of degrees, got {value!r}")
    return threshold


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    settings = get_settings()

    parser = argparse.ArgumentParser(prog="geonames-linker")
    sub = parser.add_subparsers(dest="command", required=True)

    link_parser = sub.add_parser("link", help="Link coordinate facts to GeoNames ids")
    link_parser.add_argument("--gazetteer", default=settings.gazetteer.path)
    link_parser.add_argument("--facts", required=True)
    link_parser.add_argument("--output", required=True)
    link_parser.add_argument("--threshold", type=_threshold, default=None,
                             help="Nearby threshold in degrees")

    resolve_parser = sub.add_parser("resolve", help="Resolve a single name")
    resolve_parser.add_argument("name")
    resolve_parser.add_argument("--lat", type=float, default=None)
    resolve_parser.add_argument("--lon", type=float, default=None)
    resolve_parser.add_argument("--gazetteer", default=settings.gazetteer.path)
    resolve_parser.add_argument("--threshold", type=_threshold, default=None)

    inspect_parser = sub.add_parser("inspect", help="Print gazetteer index statistics")
    inspect_parser.add_argument("--gazetteer", default=settings.gazetteer.path)

    args = parser.parse_args(argv)

    try:
        if args.command == "link":
            _link(args.gazetteer, args.facts, args.output, args.threshold)
        elif args.command == "resolve":
            if (args.lat is None) != (args.lon is None):
                parser.error("--lat and --lon must be given together")
            _resolve(args.gazetteer, args.name, args.lat, args.lon, args.threshold)
        elif args.command == "inspect":
            _inspect(args.gazetteer)
    # GeonamesLinkerError is a ValueError; so is a bad NEARBY_THRESHOLD_DEGREES
    except (ValueError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


def _link(gazetteer: str, facts: str, output: str, threshold: float | None) -> None:
    from geonames_linker.pipeline import run_pipeline

    stats = run_pipeline(gazetteer, facts, output, threshold_degrees=threshold)
    print(json.dumps(stats.model_dump(), indent=2))


def _resolve(gazetteer: str, name: str, lat: float | None, lon: float | None,
             threshold: float | None) -> None:
    from geonames_linker.gazetteer import GazetteerIndex
    from geonames_linker.models import CoordinatePair
    from geonames_linker.resolver import EntityResolver

    resolver = EntityResolver(GazetteerIndex.from_file(gazetteer), threshold_degrees=threshold)
    pair = CoordinatePair(lat, lon) if lat is not None else None
    out = {
        "name": name,
        "candidates": list(resolver.index.lookup(name)),
        "geonames_id": resolver.resolve(name, pair),
    }
    print(json.dumps(out, ensure_ascii=False, indent=2))


def _inspect(gazetteer: str) -> None:
    from geonames_linker.gazetteer import GazetteerIndex

    print(json.dumps(GazetteerIndex.from_file(gazetteer).describe(), indent=2))


if __name__ == "__main__":
    sys.exit(main())
