#!/usr/bin/env python3
"""
Browse and manage logged entries.

List, delete, clear, and review the level trend.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from anxietyjournal.core.config import Config
from anxietyjournal.core.utils import configure_logging, format_entry_date, level_color
from anxietyjournal.review.insights import chart_series, summarize
from anxietyjournal.storage import EntryStore, StoreError, sort_by_timestamp

app = typer.Typer(help="Browse and manage anxiety entries")
console = Console()


def _bootstrap() -> Config:
    config = Config.from_env()
    configure_logging(config.log_level)
    return config


async def _list(config: Config):
    # No eager open: list_all also fails closed when storage cannot be opened
    store = EntryStore(config)
    try:
        return await store.list_all()
    finally:
        await store.close()


async def _delete(config: Config, entry_id: str) -> None:
    async with EntryStore(config) as store:
        await store.delete_by_id(entry_id)


async def _clear(config: Config) -> None:
    async with EntryStore(config) as store:
        await store.clear_all()


@app.command("list")
def list_entries(
    limit: int = typer.Option(20, "--limit", "-n", help="Max entries to show"),
    sort: bool = typer.Option(False, "--sort", "-s", help="Order by timestamp, newest first"),
):
    """
    Show logged entries.

    Stored order is newest first as written. Use --sort to order by timestamp.
    """
    config = _bootstrap()
    entries = asyncio.run(_list(config))

    if not entries:
        console.print("[dim]No entries yet. Your recorded anxiety levels will appear here.[/dim]")
        return

    if sort:
        entries = sort_by_timestamp(entries)

    table = Table(title=f"Anxiety Entries ({len(entries)})")
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Level", justify="right")
    table.add_column("Trigger")
    table.add_column("Notes")

    for entry in entries[:limit]:
        color = level_color(entry.level)
        table.add_row(
            entry.id,
            format_entry_date(entry.timestamp, config.timezone),
            f"[{color}]{float(entry.level):.1f}[/]",
            escape(entry.category) or "-",
            escape(entry.notes),
        )

    console.print(table)


@app.command()
def delete(
    entry_id: str = typer.Argument(..., help="Entry ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """
    Delete one entry.
    """
    config = _bootstrap()

    if not yes and not Confirm.ask(
        "Are you sure you want to delete this entry?", console=console
    ):
        raise typer.Exit(0)

    try:
        asyncio.run(_delete(config, entry_id))
    except StoreError as e:
        console.print(f"[red]Failed to delete entry: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Entry {entry_id} deleted.[/green]")


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """
    Delete all entries.
    """
    config = _bootstrap()

    if not yes and not Confirm.ask(
        "This removes every entry. Continue?", console=console, default=False
    ):
        raise typer.Exit(0)

    try:
        asyncio.run(_clear(config))
    except StoreError as e:
        console.print(f"[red]Failed to clear entries: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print("[green]All entries cleared.[/green]")


@app.command()
def insights(
    days: int = typer.Option(None, "--days", "-d", help="Only the past N days"),
):
    """
    Show summary statistics and the recent level trend.
    """
    config = _bootstrap()
    entries = asyncio.run(_list(config))

    summary = summarize(entries, days=days)
    period = f"past {days} days" if days else "all time"

    console.print(f"\n[bold]Insights ({period})[/bold]\n")
    if summary.count == 0:
        console.print("[dim]No entries yet.[/dim]\n")
        return

    console.print(f"Entries:       {summary.count}")
    console.print(f"Average level: {summary.average_level:.1f}")
    console.print(f"Range:         {float(summary.min_level):.1f} - {float(summary.max_level):.1f}")
    console.print(f"Top trigger:   {escape(summary.top_category or '-')}")

    if summary.category_counts:
        console.print("\n[bold]Triggers[/bold]")
        for category, count in sorted(
            summary.category_counts.items(), key=lambda item: item[1], reverse=True
        ):
            console.print(f"  {escape(category):<15} {count}")

    series = chart_series(entries, window=config.chart_window, tz=config.timezone)
    console.print(f"\n[bold]Last {len(series.values)} entries[/bold]")
    for label, value in zip(series.labels, series.values):
        color = level_color(value)
        bar = "█" * int(round(value * 4))
        console.print(f"  {label:>5}  [{color}]{bar}[/] {float(value):.1f}")
    console.print("")


@app.command()
def settings():
    """Show current configuration."""
    config = _bootstrap()
    console.print(config.get_summary())


if __name__ == "__main__":
    app()
