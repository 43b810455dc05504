"""
Fact triples and their tab-separated file form.

A fact file holds one triple per line, either

    subject<TAB>relation<TAB>object
    fact_id<TAB>subject<TAB>relation<TAB>object

Blank lines and lines starting with '#' or '@' (comments and prefix
declarations) are skipped. Relations may be written bare (hasLatitude) or
bracketed (<hasLatitude>). Literal objects look like "48.85" or
"48.85"^^<degrees>.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional

from geonames_linker.errors import MalformedLiteralError
from geonames_linker.models import DECIMAL_TEXT

logger = logging.getLogger(__name__)

INTEGER_DATATYPE = "xsd:integer"


@dataclass(frozen=True)
class Fact:
    subject: str
    relation: str
    object: str
    fact_id: Optional[str] = None

    @property
    def relation_name(self) -> str:
        return relation_name(self.relation)


# ── Literal helpers ───────────────────────────────────────────────────

def relation_name(relation: str) -> str:
    """'<hasLatitude>' -> 'hasLatitude'; bare names pass through."""
    if len(relation) >= 2 and relation.startswith("<") and relation.endswith(">"):
        return relation[1:-1]
    return relation


def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def literal_and_datatype(value: str) -> tuple[str, Optional[str]]:
    """Split '"48.85"^^<degrees>' into ('"48.85"', '<degrees>')."""
    if value.startswith('"'):
        idx = value.rfind('"^^')
        if idx > 0:
            return value[:idx + 1], value[idx + 3:]
    return value, None


def parse_number_literal(value: str) -> float:
    literal, _ = literal_and_datatype(value.strip())
    text = strip_quotes(literal).strip()
    if not DECIMAL_TEXT.fullmatch(text):
        raise MalformedLiteralError(value)
    number = float(text)
    # e.g. "1e999" overflows to inf
    if not math.isfinite(number):
        raise MalformedLiteralError(value)
    return number


def number_literal(number: int) -> str:
    return f'"{number}"^^{INTEGER_DATATYPE}'


# ── TSV reading / writing ─────────────────────────────────────────────

def parse_fact_line(line: str) -> Optional[Fact]:
    """Parse one line; returns None for blanks, comments and short lines."""
    stripped = line.rstrip("\r\n")
    if not stripped.strip() or stripped.lstrip().startswith(("#", "@")):
        return None

    parts = stripped.split("\t")
    if len(parts) == 3:
        return Fact(subject=parts[0], relation=parts[1], object=parts[2])
    if len(parts) >= 4:
        return Fact(subject=parts[1], relation=parts[2], object=parts[3], fact_id=parts[0] or None)
    return None


def read_facts(path: Path | str, encoding: str = "utf-8") -> Iterator[Fact]:
    """Stream facts from a TSV file in file order."""
    path = Path(path)
    with path.open("r", encoding=encoding) as f:
        for line_number, line in enumerate(f, 1):
            fact = parse_fact_line(line)
            if fact is None:
                if line.strip() and not line.lstrip().startswith(("#", "@")):
                    logger.warning("%s:%d: skipping line with fewer than 3 columns", path, line_number)
                continue
            yield fact


def format_fact(fact: Fact) -> str:
    columns = [fact.subject, fact.relation, fact.object]
    if fact.fact_id:
        columns.insert(0, fact.fact_id)
    return "\t".join(columns)


def write_facts(path: Path | str, facts: Iterable[Fact], encoding: str = "utf-8") -> int:
    """Write facts as TSV; returns the number written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding=encoding) as f:
        for fact in facts:
            f.write(format_fact(fact) + "\n")
            count += 1
    return count
