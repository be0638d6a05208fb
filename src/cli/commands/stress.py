"""Stress history CLI command."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()

LEVEL_BAR = {
    "very-low": "[green]█[/]",
    "low": "[green]██[/]",
    "moderate": "[yellow]███[/]",
    "high": "[red]████[/]",
    "very-high": "[red]█████[/]",
}


@click.command()
@click.option("-n", "--limit", default=14, help="Max entries to show")
def stress(limit: int):
    """Show recorded stress levels, newest first."""
    c = get_components(offline=True)
    entries = c["store"].stress_history[:limit]

    if not entries:
        console.print("[yellow]No stress entries yet. Tell PeacePulse how you feel with 'peacepulse chat'.[/]")
        return

    table = Table(show_header=True, title="Stress history")
    table.add_column("Date", style="dim")
    table.add_column("Level")
    table.add_column("Note")
    for entry in entries:
        level = str(entry.stress_level)
        table.add_row(entry.date[:16].replace("T", " "), LEVEL_BAR.get(level, "") + f" {level}", entry.note or "")
    console.print(table)

    today = c["store"].today_stress_level
    if today:
        console.print(f"\n[bold]Latest:[/] {today}")
