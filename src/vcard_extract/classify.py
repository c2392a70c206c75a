"""Line classification: what a single raw vCard line means on its own.

Everything here is stateless apart from the unknown-phone slot count the
caller passes in; the parser decides what to do with the result.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from .model import Encoding, Field, UNKNOWN_PHONE_SLOTS

# Grouping labels seen in the wild (mostly iCloud exports):
#
#   item1.ADR    standard group prefix
#   item1..ADR   double-dot group prefix
#   .ADR         bare leading dot
_GROUP_PREFIX = re.compile(r"^(?:item\d+\.{1,2}|\.)", re.IGNORECASE)

CONTINUATION_MARKERS = (" ", "=")


# ── Classification results ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class StartOfRecord:
    marker: str = "BEGIN"     # BEGIN or PRODID


@dataclass(frozen=True)
class EndOfRecord:
    pass


@dataclass(frozen=True)
class Continuation:
    line: str


@dataclass(frozen=True)
class FieldStart:
    field: Field | None       # None: recognised, but never emitted
    encoding: Encoding
    payload: str
    uses_phone_slot: bool = False


@dataclass(frozen=True)
class Unrecognized:
    line: str


Classification = StartOfRecord | EndOfRecord | Continuation | FieldStart | Unrecognized


# ── Head parsing ───────────────────────────────────────────────────────────────

def split_head(head: str) -> tuple[str, list[str]]:
    """Return (property name, parameters), upper-cased, group prefix removed."""
    name, *params = head.split(";")
    name = _GROUP_PREFIX.sub("", name.strip())
    return name.upper(), [p.strip().upper() for p in params if p.strip()]


def param_values(params: list[str], key: str) -> set[str]:
    """Values given for ``key``; bare 2.1-style parameters count for any key."""
    values: set[str] = set()
    for param in params:
        k, sep, v = param.partition("=")
        if not sep:
            values.add(k)
        elif k == key:
            values.update(x.strip().strip('"') for x in v.split(","))
    return values


def resolve_encoding(params: list[str]) -> Encoding:
    if "QUOTED-PRINTABLE" in param_values(params, "ENCODING"):
        return Encoding.HEX
    return Encoding.TEXT


# ── Field resolvers ────────────────────────────────────────────────────────────

Resolver = Callable[[set[str], int], tuple[Field | None, bool]]


def _fixed(target: Field | None) -> Resolver:
    def resolve(types: set[str], slots_used: int) -> tuple[Field | None, bool]:
        return target, False
    return resolve


def _by_type(work: Field, home: Field, other: Field) -> Resolver:
    def resolve(types: set[str], slots_used: int) -> tuple[Field | None, bool]:
        if "WORK" in types:
            return work, False
        if "HOME" in types:
            return home, False
        return other, False
    return resolve


def _phone(types: set[str], slots_used: int) -> tuple[Field | None, bool]:
    if "CELL" in types:
        return Field.CELL_PHONE, False
    if "WORK" in types:
        return Field.WORK_PHONE, False
    if "HOME" in types:
        return Field.HOME_PHONE, False
    if slots_used < len(UNKNOWN_PHONE_SLOTS):
        return UNKNOWN_PHONE_SLOTS[slots_used], True
    # no slot left: the number is dropped
    return None, True


PROPERTY_TABLE: tuple[tuple[str, Resolver], ...] = (
    ("FN", _fixed(Field.FULL_NAME)),
    ("ORG", _fixed(Field.ORGANIZATION)),
    ("ADR", _by_type(Field.WORK_ADDRESS, Field.HOME_ADDRESS, Field.ADDRESS)),
    ("TEL", _phone),
    ("EMAIL", _by_type(Field.WORK_EMAIL, Field.HOME_EMAIL, Field.EMAIL)),
    ("NOTE", _fixed(Field.NOTE)),
    ("CATEGORIES", _fixed(Field.CATEGORIES)),
    ("PHOTO", _fixed(None)),
)


# ── Public API ─────────────────────────────────────────────────────────────────

def classify_line(line: str, phone_slots_used: int = 0) -> Classification:
    if line[:1] in CONTINUATION_MARKERS:
        return Continuation(line)

    head, sep, payload = line.partition(":")
    if not sep:
        return Unrecognized(line)

    name, params = split_head(head)

    if name == "BEGIN" and payload.strip().upper() == "VCARD":
        return StartOfRecord("BEGIN")
    if name == "END" and payload.strip().upper() == "VCARD":
        return EndOfRecord()
    if name == "PRODID":
        return StartOfRecord("PRODID")

    for prop, resolve in PROPERTY_TABLE:
        if name != prop:
            continue
        target, uses_slot = resolve(param_values(params, "TYPE"), phone_slots_used)
        return FieldStart(
            field=target,
            encoding=resolve_encoding(params),
            payload=payload,
            uses_phone_slot=uses_slot,
        )

    return Unrecognized(line)
