from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from .model import COLUMNS, Record


def export_csv(records: Iterable[Record], path: Path, delimiter: str = ",") -> int:
    """Write records as CSV with a header row; returns the number written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh, delimiter=delimiter)
        writer.writerow(COLUMNS)
        for record in records:
            writer.writerow(record.as_row())
            count += 1
    return count
