from __future__ import annotations

import logging

import phonenumbers
from phonenumbers import NumberParseException

from .model import PHONE_FIELDS, Record

logger = logging.getLogger(__name__)


# ── Phone formatting ───────────────────────────────────────────────────────────

def _format_spaced_e164(num: phonenumbers.PhoneNumber) -> str:
    """Format a parsed number as pretty international, e.g. +44 7980 220 220."""
    intl = phonenumbers.format_number(num, phonenumbers.PhoneNumberFormat.INTERNATIONAL)
    out = intl.replace("-", " ").replace("(", "").replace(")", "")
    out = " ".join(out.split())

    # GB mobile tweak: +44 7xxx xxx xxx
    region = phonenumbers.region_code_for_number(num)
    nsn = phonenumbers.national_significant_number(num)
    if region == "GB" and len(nsn) == 10 and nsn.startswith("7"):
        return f"+44 {nsn[0:4]} {nsn[4:7]} {nsn[7:]}"

    return out


def format_phone(raw: str, region: str) -> str:
    """Return the formatted number, or ``raw`` unchanged if it isn't valid."""
    try:
        parsed = phonenumbers.parse(raw, region)
    except NumberParseException:
        return raw
    if phonenumbers.is_possible_number(parsed) and phonenumbers.is_valid_number(parsed):
        return _format_spaced_e164(parsed)
    return raw


def normalize_phones_in_records(records: list[Record], region: str) -> int:
    """Reformat every phone field in place; returns how many values changed."""
    changed = 0
    for record in records:
        for f in PHONE_FIELDS:
            raw = record[f]
            if not raw:
                continue
            formatted = format_phone(raw, region)
            if formatted != raw:
                logger.debug("%s: %r → %r", record.label(), raw, formatted)
                record[f] = formatted
                changed += 1
    return changed
