from __future__ import annotations

import codecs
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from .config import Settings, conf_path, ensure_workspace, load_settings
from .exporter import export_csv
from .formatters import normalize_phones_in_records
from .io import collect_sources, read_records
from .model import Record
from .parser import ParseStats
from .report import build_table, print_records, print_summary

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="vcard-extract: flatten vCard files into one fixed-column row per contact.",
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log parser details"),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


# ── Shared pipeline ────────────────────────────────────────────────────────────

def _settings(encoding: str | None, delimiter: str | None = None) -> Settings:
    """Load config, apply command-line overrides and check them."""
    settings = load_settings(conf_path())
    if encoding:
        settings.encoding = encoding
    if delimiter:
        settings.delimiter = delimiter
    try:
        codecs.lookup(settings.encoding)
    except LookupError:
        raise typer.BadParameter(f"unknown encoding: {settings.encoding}", param_hint="--encoding")
    if len(settings.delimiter) != 1:
        raise typer.BadParameter(
            f"must be a single character, got {settings.delimiter!r}", param_hint="--delimiter",
        )
    return settings


def _sources(files: list[Path]) -> list[Path]:
    """Expand the file arguments; exits with code 2 if any input is missing."""
    sources = collect_sources(files)
    missing = [p for p in sources if not p.is_file()]
    if not sources or missing:
        listing = "\n".join(f"  [dim]{p}[/dim]" for p in missing) or "  [dim](none)[/dim]"
        console.print(Panel(
            f"[bold red]No readable .vcf input[/bold red]\n\n{listing}",
            title="Nothing to read",
            border_style="red",
        ))
        raise typer.Exit(code=2)
    return sources


def _load(
    sources: list[Path],
    settings: Settings,
    region: str | None,
) -> tuple[list[Record], ParseStats, int]:
    """Parse every source file and optionally reformat phone numbers."""
    effective_region = (region if region is not None else settings.default_region).upper()

    stats = ParseStats()
    records: list[Record] = []
    for path in sources:
        records.extend(read_records(path, settings.encoding, stats))

    reformatted = 0
    if effective_region:
        reformatted = normalize_phones_in_records(records, effective_region)
    return records, stats, reformatted


_FILES_ARG = typer.Argument(..., help=".vcf file(s) or folder(s) of .vcf files")
_ENCODING_OPT = typer.Option(None, "--encoding", "-e", help="Input encoding (default from config: utf-8-sig)")
_REGION_OPT = typer.Option(
    None, "--region", "-r",
    help="ISO-2 region to reformat phone numbers (e.g. GB). Falls back to local config.",
)


# ── Commands ───────────────────────────────────────────────────────────────────

@app.command()
def show(
    files: list[Path] = _FILES_ARG,
    encoding: str | None = _ENCODING_OPT,
    region: str | None = _REGION_OPT,
) -> None:
    """Print every contact as a block of Column: value lines."""
    records, _, _ = _load(_sources(files), _settings(encoding), region)
    if not records:
        console.print("[yellow]No contacts found.[/yellow]")
        return
    print_records(records, console)


@app.command()
def table(
    files: list[Path] = _FILES_ARG,
    encoding: str | None = _ENCODING_OPT,
    region: str | None = _REGION_OPT,
    all_columns: bool = typer.Option(False, "--all-columns", help="Show columns that are empty everywhere"),
) -> None:
    """Show contacts in a table."""
    records, _, _ = _load(_sources(files), _settings(encoding), region)
    if not records:
        console.print("[yellow]No contacts found.[/yellow]")
        return
    console.print(build_table(records, include_empty=all_columns))


@app.command()
def export(
    files: list[Path] = _FILES_ARG,
    output: Path | None = typer.Option(None, "--output", "-o", help="Explicit output .csv path"),
    delimiter: str | None = typer.Option(None, "--delimiter", "-d", help="CSV delimiter (default from config: ,)"),
    encoding: str | None = _ENCODING_OPT,
    region: str | None = _REGION_OPT,
) -> None:
    """Export contacts to CSV, one row per contact, with a header row."""
    settings = _settings(encoding, delimiter)
    sources = _sources(files)
    records, stats, reformatted = _load(sources, settings, region)

    out_path = output
    if out_path is None:
        stem = sources[0].stem if len(sources) == 1 else "contacts"
        out_path = Path(settings.export_dir) / f"{stem}.csv"

    count = export_csv(records, out_path, delimiter=settings.delimiter)
    console.print(f"\n[bold green]✓ Wrote {count} contact(s) → {out_path}[/bold green]")
    print_summary(
        records=records,
        stats=stats,
        out_path=out_path,
        phones_reformatted=reformatted,
    )


@app.command()
def init() -> None:
    """Write local/vcard-extract.conf with default settings if it doesn't exist."""
    conf, settings = ensure_workspace()
    console.print(f"[green]Config:[/green] {conf}")
    console.print(f"  delimiter      : [bold]{settings.delimiter!r}[/bold]")
    console.print(f"  encoding       : [bold]{settings.encoding}[/bold]")
    console.print(f"  default_region : [bold]{settings.default_region or '(off)'}[/bold]")
    console.print(f"  export_dir     : [bold]{settings.export_dir}[/bold]")


if __name__ == "__main__":
    app()
