from __future__ import annotations

from pathlib import Path

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .model import Field, Record
from .parser import ParseStats

console = Console()

# ── Palette ────────────────────────────────────────────────────────────────────
_ACCENT  = "#4d9fff"
_GREEN   = "#3ecf8e"
_AMBER   = "#f0a500"
_TEXT    = "#c9d1e0"
_MID     = "#8896af"
_DIM     = "#546075"
_BORDER  = "#2a3347"


def _stat_panel(value: str, label: str, colour: str) -> Panel:
    body = Text()
    body.append(f"{value}\n", style=f"bold {colour}")
    body.append(label, style=f"dim {_DIM}")
    return Panel(body, border_style=_BORDER, padding=(0, 2), expand=True)


# ── Plain listing ──────────────────────────────────────────────────────────────

def print_records(records: list[Record], out: Console | None = None) -> None:
    """Print each record as ``Column: value`` lines, skipping empty fields."""
    out = out or console
    for idx, record in enumerate(records, start=1):
        header = Text()
        header.append(f"  #{idx}  ", style=f"dim {_DIM}")
        header.append(record.label(), style=f"bold {_TEXT}")
        out.print(header)
        for f in Field:
            value = record[f]
            if not value:
                continue
            lines = value.split("\n")
            out.print(Text(f"    {f.column:<13}{lines[0]}", style=_MID))
            for extra in lines[1:]:
                out.print(Text(f"    {'':<13}{extra}", style=_MID))
        out.print()


# ── Table view ─────────────────────────────────────────────────────────────────

def build_table(records: list[Record], include_empty: bool = False) -> Table:
    """Build a rich Table; columns empty in every record are hidden by default."""
    fields = [
        f for f in Field
        if include_empty or any(r[f] for r in records)
    ]
    table = Table(show_lines=True, header_style=f"bold {_ACCENT}", border_style=_BORDER)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    for f in fields:
        table.add_column(f.column, style="bold" if f is Field.FULL_NAME else None)
    for idx, record in enumerate(records, start=1):
        table.add_row(str(idx), *(record[f] for f in fields))
    return table


# ── Summary ────────────────────────────────────────────────────────────────────

def print_summary(
    *,
    records: list[Record],
    stats: ParseStats,
    out_path: Path | None = None,
    phones_reformatted: int = 0,
) -> None:
    with_phone = sum(1 for r in records if r.has_phone())
    with_email = sum(1 for r in records if r.has_email())

    console.print()
    console.print(Text("  EXTRACT SUMMARY", style=f"dim {_DIM}"))
    console.print()

    row1 = Columns([
        _stat_panel(str(len(records)), "contacts extracted", _ACCENT),
        _stat_panel(str(stats.lines), "lines read", _TEXT),
    ], equal=True, expand=True)
    row2 = Columns([
        _stat_panel(str(with_phone), "with a phone", _GREEN),
        _stat_panel(str(with_email), "with an email", _GREEN),
    ], equal=True, expand=True)
    console.print(row1)
    console.print(row2)

    if phones_reformatted:
        console.print(Text(f"  ✆ {phones_reformatted} phone number(s) reformatted", style=_GREEN))
    if stats.dropped_phones:
        console.print(Text(
            f"  ! {stats.dropped_phones} phone number(s) dropped "
            "(more than three without a HOME/WORK/CELL type)",
            style=_AMBER,
        ))
    console.print()

    if out_path is not None:
        body = Text()
        body.append("✓  Written successfully\n", style=f"bold {_GREEN}")
        body.append(str(out_path), style=f"dim {_MID}")
        console.print(Panel(body, border_style=_GREEN, padding=(0, 2)))
