#!/usr/bin/env python3
"""
Export entries to CSV.

Exports all anxiety entries to CSV format for external analysis.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import asyncio
import csv
from datetime import datetime, timezone

import typer
from rich.console import Console
from rich.markup import escape

from anxietyjournal.core.config import Config
from anxietyjournal.core.utils import configure_logging
from anxietyjournal.storage import EntryStore, StoreError, sort_by_timestamp

app = typer.Typer(help="Export entries to CSV")
console = Console()


async def _load(config: Config):
    async with EntryStore(config) as store:
        return await store.load()


@app.command()
def main(
    output: str = typer.Option(None, "--output", "-o", help="Output file path"),
):
    """
    Export all entries to CSV, oldest first.
    """
    config = Config.from_env()
    configure_logging(config.log_level)

    if not output:
        output = f"data/entries_export_{datetime.utcnow().strftime('%Y%m%d_%H%M%S')}.csv"

    # Strict load: an unreadable store must not export as an empty file
    try:
        entries = asyncio.run(_load(config))
    except StoreError as e:
        console.print(f"[red]Could not read entries: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    Path(output).parent.mkdir(parents=True, exist_ok=True)

    with open(output, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "id",
            "timestamp",
            "recorded_at",
            "level",
            "category",
            "notes",
        ])

        for entry in sort_by_timestamp(entries, newest_first=False):
            recorded_at = datetime.fromtimestamp(entry.timestamp / 1000, tz=timezone.utc)
            writer.writerow([
                entry.id,
                entry.timestamp,
                recorded_at.isoformat(),
                entry.level,
                entry.category,
                entry.notes,
            ])

    console.print(f"[green]Exported {len(entries)} entries to {output}[/green]")


if __name__ == "__main__":
    app()
