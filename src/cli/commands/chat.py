"""Conversation CLI commands."""

import asyncio

import click
from rich.console import Console

from cli.utils import get_components, render_turn
from observability import log_run_summary
from wellness.store import GREETING

console = Console()

EXIT_WORDS = {"exit", "quit", "bye"}


async def _chat_loop(c) -> int:
    orchestrator = c["orchestrator"]
    turns = 0
    try:
        while True:
            try:
                text = await asyncio.to_thread(console.input, "[bold cyan]You:[/] ")
            except EOFError:
                break
            if text.strip().lower() in EXIT_WORDS:
                break
            if not text.strip():
                continue
            result = await orchestrator.handle_message(text)
            render_turn(result)
            turns += 1
    finally:
        await c["persister"].flush()
    return turns


@click.command()
@click.option("--offline", is_flag=True, help="Rule-based classifier and canned replies only")
def chat(offline: bool):
    """Chat about how you're feeling. Type 'exit' to leave."""
    c = get_components(offline=offline)
    console.print(f"[bold magenta]PeacePulse:[/] {GREETING}")

    try:
        turns = asyncio.run(_chat_loop(c))
    except KeyboardInterrupt:
        turns = None
    console.print("\n[dim]Take care of yourself.[/]" if turns is None else f"[dim]{turns} messages. Take care of yourself.[/]")
    log_run_summary()


async def _single_turn(c, message: str):
    try:
        return await c["orchestrator"].handle_message(message)
    finally:
        await c["persister"].flush()


@click.command()
@click.argument("message")
@click.option("--offline", is_flag=True, help="Rule-based classifier and canned replies only")
def say(message: str, offline: bool):
    """Send a single MESSAGE and print the reply."""
    if not message.strip():
        console.print("[red]Message must not be empty[/]")
        raise SystemExit(1)
    c = get_components(offline=offline)
    result = asyncio.run(_single_turn(c, message))
    render_turn(result)
