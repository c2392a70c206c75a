"""Value decoders for the two content encodings a property can carry.

Both decoders turn the structural ``;`` separator into a newline, so a
multi-part value (address, organisation) comes out as one part per line.
"""
from __future__ import annotations

import re
import string

# ``;`` that is not escaped with a backslash
_BARE_SEMICOLON = re.compile(r"(?<!\\);")

_CARRIAGE_RETURN = 0x0D
_LINE_FEED = 0x0A


def join_subparts(text: str) -> str:
    """Drop blank components of a structured value; the rest are kept as-is."""
    return "\n".join(part for part in text.split("\n") if part.strip())


def unescape_text(raw: str) -> str:
    # Order matters: ``\;`` must survive the bare-semicolon rule.
    out = raw.replace("\\,", ",")
    out = out.replace("\\:", ":")
    out = out.replace("\\n", "\n").replace("\\N", "\n")
    out = _BARE_SEMICOLON.sub("\n", out)
    out = out.replace("\\;", ";")
    return out


def decode_text(raw: str, structured: bool = False) -> str:
    out = unescape_text(raw)
    return join_subparts(out) if structured else out


def unhex(raw: str) -> str:
    out: list[str] = []
    for token in raw.replace(";", "=0A").split("="):
        if len(token) != 2 or not all(c in string.hexdigits for c in token):
            continue
        byte = int(token, 16)
        if byte == _LINE_FEED:
            out.append("\n")
        elif byte == _CARRIAGE_RETURN:
            continue
        else:
            out.append(chr(byte))
    return "".join(out)


def decode_quoted_printable(raw: str, structured: bool = False) -> str:
    """Decode a run of ``=XX`` escapes; malformed tokens are skipped."""
    out = unhex(raw)
    return join_subparts(out) if structured else out
