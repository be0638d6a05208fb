"""Habit tracker CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()


@click.group()
def habits():
    """Manage tracked habits."""
    pass


@habits.command("list")
def habits_list():
    """List tracked habits."""
    c = get_components(offline=True)
    records = c["store"].list_habits()
    if not records:
        console.print("[yellow]No habits tracked yet.[/]")
        return

    table = Table(show_header=True, title="Habits")
    table.add_column("Name")
    table.add_column("Category", style="dim")
    table.add_column("Streak", justify="right")
    table.add_column("Today")
    for habit in records:
        table.add_row(habit.name, str(habit.category), str(habit.streak), "[green]✓[/]" if habit.completed else "")
    console.print(table)


@habits.command("done")
@click.argument("name")
def habits_done(name: str):
    """Toggle today's completion for the habit matching NAME."""
    c = get_components(offline=True)
    store = c["store"]
    habit = store.find_habit_by_fuzzy_name(name)
    if not habit:
        console.print(f"[red]No habit matching[/] {name}")
        raise SystemExit(1)
    habit = store.toggle_habit(habit.id)
    state = "done" if habit.completed else "not done"
    console.print(f"[green]{habit.name}[/] marked {state} (streak {habit.streak})")


@habits.command("remove")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def habits_remove(name: str, yes: bool):
    """Remove the habit matching NAME."""
    c = get_components(offline=True)
    store = c["store"]
    habit = store.find_habit_by_fuzzy_name(name)
    if not habit:
        console.print(f"[red]No habit matching[/] {name}")
        raise SystemExit(1)
    if not yes and not click.confirm(f"Remove '{habit.name}'?"):
        console.print("[yellow]Cancelled[/]")
        return
    store.delete_habit(habit.id)
    console.print(f"[green]Removed[/] {habit.name}")
