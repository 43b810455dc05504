"""Fatal input errors. Any of these aborts the batch."""

from __future__ import annotations

from typing import Optional


class GeonamesLinkerError(ValueError):
    pass


class MalformedRecordError(GeonamesLinkerError):
    """A gazetteer line whose id or coordinates cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedLiteralError(GeonamesLinkerError):
    """A coordinate literal in the fact stream that is not a number."""

    def __init__(self, literal: str):
        self.literal = literal
        super().__init__(f"not a numeric literal: {literal!r}")
