#!/usr/bin/env python3
"""
Log an anxiety entry.

Pass --level to log in one line, or omit it to be prompted
for level, trigger and notes.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from anxietyjournal.core.config import Config
from anxietyjournal.core.models import MAX_LEVEL, MIN_LEVEL, QUICK_LEVELS, NewEntry
from anxietyjournal.core.utils import configure_logging, level_color
from anxietyjournal.review.insights import is_empty_entry
from anxietyjournal.storage import EntryStore, StoreError

app = typer.Typer(help="Log an anxiety entry")
console = Console()


def prompt_entry(config: Config) -> NewEntry:
    """Ask for level, trigger and notes interactively."""
    console.print("\n[bold]Quick Levels[/bold]")
    for quick in QUICK_LEVELS:
        console.print(f"  {quick.value:>3}  {quick.label}")

    while True:
        raw_level = Prompt.ask("Anxiety level (0-5)", default="0", console=console)
        try:
            level = float(raw_level)
        except ValueError:
            console.print("[red]Please enter a number.[/red]")
            continue
        if MIN_LEVEL <= level <= MAX_LEVEL:
            break
        console.print(f"[red]Level must be between {MIN_LEVEL} and {MAX_LEVEL}.[/red]")

    console.print("\n[bold]What triggered it?[/bold]")
    category = Prompt.ask(
        "Trigger",
        choices=[*config.trigger_categories, "none"],
        default="none",
        console=console,
    )

    notes = Prompt.ask("Notes", default="", console=console)

    return NewEntry(
        level=int(level) if level.is_integer() else level,
        category="" if category == "none" else category,
        notes=notes.strip(),
    )


async def _save(config: Config, new_entry: NewEntry):
    async with EntryStore(config) as store:
        return await store.save(new_entry)


@app.command()
def main(
    level: Optional[float] = typer.Option(None, "--level", "-l", help="Anxiety level 0-5"),
    category: str = typer.Option("", "--category", "-c", help="Trigger category"),
    notes: str = typer.Option("", "--notes", "-n", help="Free-text notes"),
):
    """
    Log a new anxiety entry.

    Empty entries (level 0, no trigger, no notes) are refused.
    """
    config = Config.from_env()
    configure_logging(config.log_level)

    if level is None:
        new_entry = prompt_entry(config)
    else:
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            console.print(f"[red]Level must be between {MIN_LEVEL} and {MAX_LEVEL}.[/red]")
            raise typer.Exit(1)
        new_entry = NewEntry(
            level=int(level) if level.is_integer() else level,
            category=category,
            notes=notes.strip(),
        )

    if is_empty_entry(new_entry):
        console.print(
            "[yellow]Empty entry. Please add some information about your "
            "anxiety level, trigger, or notes.[/yellow]"
        )
        raise typer.Exit(1)

    try:
        entry = asyncio.run(_save(config, new_entry))
    except StoreError as e:
        console.print(f"[red]There was a problem saving your entry: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    color = level_color(entry.level)
    console.print(
        f"\n[green]Entry {entry.id} saved.[/green] "
        f"Level [{color}]{float(entry.level):.1f}[/{color}]"
        + (f", trigger {escape(entry.category)}" if entry.category else "")
        + "\n"
    )


if __name__ == "__main__":
    app()
