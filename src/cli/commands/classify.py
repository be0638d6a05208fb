"""Inspect how a message would be classified, without changing any state."""

import asyncio

import click
from rich.console import Console
from rich.table import Table

from classifier import classify_fallback, classify_habit_intent_fallback, extract_activities
from classifier.rules import explicit_causes, is_crisis, is_exercise_request, off_topic_category
from cli.utils import get_components

console = Console()


async def _classify(classifier, text: str):
    intent = await classifier.classify_habit_intent(text)
    intent_failure = classifier.last_failure
    result = await classifier.classify(text)
    return intent, result, intent_failure or classifier.last_failure


def _activities(items) -> str:
    return "\n".join(f"{a.title} [dim]({a.category})[/]" for a in items) or "-"


@click.command()
@click.argument("text")
@click.option("--offline", is_flag=True, help="Rule-based only")
@click.option("--extract", is_flag=True, help="Treat TEXT as bot prose and list extracted activities")
def classify(text: str, offline: bool, extract: bool):
    """Show rule-based and active-strategy classification of TEXT."""
    if extract:
        found = extract_activities(text)
        console.print(_activities(found) if found else "[yellow]No activities found[/]")
        return

    c = get_components(offline=offline)
    classifier = c["classifier"]
    intent, result, failure = asyncio.run(_classify(classifier, text))

    rules_result = classify_fallback(text)
    rules_intent = classify_habit_intent_fallback(text)

    table = Table(show_header=True, title="Classification")
    table.add_column("", style="bold")
    table.add_column("rules")
    table.add_column(classifier.name)
    table.add_row("stress", str(rules_result.stress_level), str(result.stress_level))
    table.add_row("activities", _activities(rules_result.activities), _activities(result.activities))
    table.add_row(
        "intent",
        f"{rules_intent.action} ({rules_intent.confidence:.2f})",
        f"{intent.action} ({intent.confidence:.2f})",
    )
    console.print(table)

    console.print(f"[bold]Causes:[/] {', '.join(explicit_causes(text)) or '-'}")
    console.print(f"[bold]Off-topic:[/] {off_topic_category(text) or 'no'}")
    console.print(f"[bold]Exercise request:[/] {'yes' if is_exercise_request(text) else 'no'}")
    if is_crisis(text):
        console.print("[red bold]Crisis language detected[/]")
    if failure:
        console.print(f"[yellow]Model fallback:[/] {type(failure).__name__}: {failure}")
