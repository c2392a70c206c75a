from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from .model import Record
from .parser import ParseStats, parse_lines

logger = logging.getLogger(__name__)


def _iter_lines(path: Path, encoding: str) -> Iterator[str]:
    with path.open("r", encoding=encoding, errors="replace", newline="") as fh:
        for line in fh:
            yield line.rstrip("\r\n")


# ── Public API ─────────────────────────────────────────────────────────────────

def read_lines(path: Path, encoding: str = "utf-8-sig") -> Iterator[str]:
    """Return a lazy line iterator; raises FileNotFoundError up front."""
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    return _iter_lines(path, encoding)


def read_records(
    path: Path,
    encoding: str = "utf-8-sig",
    stats: ParseStats | None = None,
) -> Iterator[Record]:
    lines = read_lines(path, encoding)
    logger.debug("Parsing %s", path)
    return parse_lines(lines, stats)


def collect_sources(paths: list[Path]) -> list[Path]:
    """Expand directories to the .vcf files directly inside them, sorted by name.

    Plain file arguments are kept as given, in order; a missing path is kept
    too so the caller can report it.
    """
    out: list[Path] = []
    for p in paths:
        if p.is_dir():
            out.extend(sorted(c for c in p.iterdir() if c.suffix.lower() == ".vcf"))
        else:
            out.append(p)
    return out
