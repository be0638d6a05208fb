"""CLI entry point for PeacePulse."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import chat, classify, habits, say, stress
from cli.config import get_paths, load_config
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """PeacePulse - a supportive wellbeing companion with a habit tracker."""
    try:
        config = load_config()
    except ValueError as e:
        raise click.ClickException(str(e))
    log_cfg = config.get("logging", {})
    setup_logging(
        json_mode=log_cfg.get("json_mode", False),
        level="DEBUG" if verbose else log_cfg.get("level", "WARNING"),
        log_file=get_paths(config)["log_file"],
    )


cli.add_command(chat)
cli.add_command(say)
cli.add_command(classify)
cli.add_command(habits)
cli.add_command(stress)


if __name__ == "__main__":
    cli()
