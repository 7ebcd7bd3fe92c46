"""Rich output helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from savebackup.settings import KNOWN_KEYS

if TYPE_CHECKING:
    from savebackup.results import BackupResult
    from savebackup.settings import Settings


def print_settings(settings: Settings, path: Path, console: Console | None = None) -> None:
    """Print the effective settings, marking values that came from defaults."""
    con = console or Console()

    con.print()
    if path.is_file():
        con.print(f"[bold]Settings:[/bold] {escape(str(path))} [green](exists)[/green]")
    else:
        con.print(f"[bold]Settings:[/bold] {escape(str(path))} [yellow](missing)[/yellow]")

    table = Table(show_header=True, show_edge=False, pad_edge=False, box=None)
    table.add_column("Key", style="cyan", min_width=16)
    table.add_column("Value")
    table.add_column("Source")

    for key in KNOWN_KEYS:
        source = "file" if settings.values.get(key, "").strip() else "default"
        table.add_row(key, escape(settings.get(key)), source)

    con.print(table)


def print_backup_summary(
    results: list[BackupResult],
    dry_run: bool = False,
    console: Console | None = None,
) -> None:
    """Print a coloured summary of backup results."""
    con = console or Console()

    written = sum(1 for r in results if r.written)
    failed = sum(1 for r in results if not r.success)

    header = f"Backup complete: {written} file{'s' if written != 1 else ''} written"
    if failed:
        header += f", [red]{failed} failed[/red]"
    else:
        header += ", 0 failed"

    con.print()
    con.print(header)

    for r in results:
        if r.skipped:
            continue
        mark = "[green]✓[/green]" if r.success else "[red]✗[/red]"
        con.print(f"  {mark} {escape(r.source_path or '')} -> {escape(r.destination or '')}")
        if not r.success:
            con.print(f"      {escape(r.message)}")

    if dry_run:
        con.print()
        con.print("[yellow]DRY RUN: no backups were written[/yellow]")
