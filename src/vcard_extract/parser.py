"""The continuation accumulator and the driver loop around it.

A property value may span many physical lines, so decoding is deferred
until the next non-continuation line shows that the value is complete.
All mutable state lives in a ``ParserState`` owned by one ``CardParser``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .classify import (
    Continuation,
    EndOfRecord,
    FieldStart,
    StartOfRecord,
    classify_line,
)
from .decoders import decode_quoted_printable, decode_text
from .model import STRUCTURED_FIELDS, Encoding, Field, Record

logger = logging.getLogger(__name__)


@dataclass
class ParseStats:
    lines: int = 0
    records: int = 0
    ignored_lines: int = 0
    discarded_continuations: int = 0
    dropped_phones: int = 0


@dataclass
class ParserState:
    record: Record | None = None
    open_field: Field | None = None
    encoding: Encoding = Encoding.NONE
    buffer: list[str] = field(default_factory=list)
    phone_slots_used: int = 0

    @property
    def accumulating(self) -> bool:
        return self.encoding is not Encoding.NONE


class CardParser:
    def __init__(self, stats: ParseStats | None = None):
        self.state = ParserState()
        self.stats = stats if stats is not None else ParseStats()

    # ── Line handling ──────────────────────────────────────────────────────────

    def feed(self, line: str) -> Record | None:
        """Process one line; return a Record when this line completes one."""
        line = line.rstrip("\r\n")
        self.stats.lines += 1

        result = classify_line(line, self.state.phone_slots_used)

        if isinstance(result, Continuation):
            self._continue(line)
            return None

        # Any other line ends the open field.
        self._flush()

        if isinstance(result, StartOfRecord):
            if result.marker == "PRODID" and self.state.record is not None:
                return None
            self.state = ParserState(record=Record())
            return None

        if isinstance(result, EndOfRecord):
            record = self.state.record
            self.state = ParserState()
            if record is not None:
                self.stats.records += 1
            return record

        if isinstance(result, FieldStart):
            self._open(result)
            return None

        self.stats.ignored_lines += 1
        return None

    def finish(self) -> None:
        self._flush()
        if self.state.record is not None:
            logger.debug("Input ended inside an unterminated card (%s); not emitted",
                         self.state.record.label())
        self.state = ParserState()
        logger.debug(
            "%d line(s), %d record(s), %d ignored, %d stray continuation(s), %d dropped phone(s)",
            self.stats.lines, self.stats.records, self.stats.ignored_lines,
            self.stats.discarded_continuations, self.stats.dropped_phones,
        )

    # ── Accumulator ────────────────────────────────────────────────────────────

    def _open(self, start: FieldStart) -> None:
        if self.state.record is None:
            # data before any BEGIN:VCARD
            self.state = ParserState(record=Record())

        if start.uses_phone_slot:
            self.state.phone_slots_used += 1
            if start.field is None:
                self.stats.dropped_phones += 1
                logger.debug("No free phone slot; dropping %r", start.payload)

        self.state.open_field = start.field
        self.state.encoding = start.encoding
        self.state.buffer = [start.payload]

    def _continue(self, line: str) -> None:
        state = self.state
        if state.encoding is Encoding.TEXT and line.startswith(" "):
            state.buffer.append(line[1:])
        elif state.encoding is Encoding.HEX and line.startswith("="):
            state.buffer.append(line)
        else:
            self.stats.discarded_continuations += 1

    def _flush(self) -> None:
        state = self.state
        if not state.accumulating:
            return
        if state.open_field is not None and state.record is not None:
            raw = "".join(state.buffer)
            structured = state.open_field in STRUCTURED_FIELDS
            if state.encoding is Encoding.HEX:
                state.record[state.open_field] = decode_quoted_printable(raw, structured)
            else:
                state.record[state.open_field] = decode_text(raw, structured)
        state.open_field = None
        state.encoding = Encoding.NONE
        state.buffer = []


def parse_lines(lines: Iterable[str], stats: ParseStats | None = None) -> Iterator[Record]:
    """Lazily yield one Record per completed card, in input order."""
    parser = CardParser(stats)
    for line in lines:
        record = parser.feed(line)
        if record is not None:
            yield record
    parser.finish()
