"""
Pipeline orchestrator.
Ties together gazetteer indexing -> coordinate pairing -> resolution in a
single batch run. Called from the CLI.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, Iterator, Optional

from geonames_linker.assembler import CoordinatePairAssembler, axis_for_relation
from geonames_linker.config import get_settings
from geonames_linker.facts import Fact, number_literal, parse_number_literal, read_facts, write_facts
from geonames_linker.gazetteer import GazetteerIndex
from geonames_linker.models import RunStats
from geonames_linker.resolver import EntityResolver

logger = logging.getLogger(__name__)


def link_entities(
    facts: Iterable[Fact],
    resolver: EntityResolver,
    stats: Optional[RunStats] = None,
) -> Iterator[Fact]:
    """
    Yield one output fact per coordinate pair that resolves to a gazetteer id.

    Only latitude/longitude facts are consumed; everything else is ignored.
    A coordinate literal that is not numeric raises MalformedLiteralError.
    """
    linking = get_settings().linking
    output_relation = f"<{linking.output_relation}>"
    assembler = CoordinatePairAssembler()
    stats = stats if stats is not None else RunStats()

    for fact in facts:
        stats.facts_read += 1
        axis = axis_for_relation(fact.relation)
        if axis is None:
            continue

        stats.coordinate_facts += 1
        location = fact.subject
        pair = assembler.observe(location, axis, parse_number_literal(fact.object))
        if pair is None:
            continue

        # both coordinates are available, attempt matching
        stats.pairs_assembled += 1
        link = resolver.resolve_link(location, pair)
        if link is None:
            if location in resolver.index:
                stats.unresolved_ambiguous += 1
                logger.debug("No candidate for %r within %.3f degrees of %s",
                             location, resolver.threshold_degrees, tuple(pair))
            else:
                stats.unmatched += 1
            continue

        stats.links_emitted += 1
        yield Fact(link.entity_name, output_relation, number_literal(link.gazetteer_id))


def run_pipeline(
    gazetteer_path: Path | str,
    facts_path: Path | str,
    output_path: Path | str,
    threshold_degrees: Optional[float] = None,
) -> RunStats:
    """
    Execute the full batch:
      1. Index: read the whole gazetteer into a GazetteerIndex
      2. Link: stream the facts, pair coordinates and resolve names
      3. Write: store the output facts as TSV

    Any malformed gazetteer line or coordinate literal aborts the run.
    """
    stats = RunStats()
    start_time = time.monotonic()

    try:
        # ── Stage 1: Index ────────────────────────────────────────────
        logger.info("=== Stage 1: Indexing gazetteer ===")
        index = GazetteerIndex.from_file(gazetteer_path)
        stats.records_indexed = index.record_count
        stats.distinct_names = len(index)
        stats.ambiguous_names = index.ambiguous_name_count

        # ── Stage 2: Link ─────────────────────────────────────────────
        logger.info("=== Stage 2: Linking facts from %s ===", facts_path)
        resolver = EntityResolver(index, threshold_degrees=threshold_degrees)
        # Collected before writing so an aborted run leaves no partial output
        links = list(link_entities(read_facts(facts_path), resolver, stats))

        # ── Stage 3: Write ────────────────────────────────────────────
        logger.info("=== Stage 3: Writing %s ===", get_settings().linking.output_theme)
        written = write_facts(output_path, links)
        logger.info("Linking done: %d facts read, %d coordinate pairs, %d links written to %s",
                    stats.facts_read, stats.pairs_assembled, written, output_path)
        logger.info("Unlinked pairs: %d unknown names, %d ambiguous without a nearby candidate",
                    stats.unmatched, stats.unresolved_ambiguous)

        elapsed = time.monotonic() - start_time
        stats.duration_seconds = round(elapsed, 2)
        logger.info("=== Pipeline complete in %.1fs ===", elapsed)
        return stats

    except Exception as e:
        elapsed = time.monotonic() - start_time
        logger.error("Pipeline failed after %.1fs: %s", elapsed, e, exc_info=True)
        raise
