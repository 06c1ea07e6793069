"""CLI entry point for the screening service."""

import click

from cli.commands import history, predict, serve
from cli.config import load_config_model
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit JSON log lines")
def cli(verbose: bool, json_logs: bool):
    """Cancer screening prediction service."""
    try:
        config = load_config_model()
    except ValueError as e:
        raise click.ClickException(str(e))
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(json_mode=json_logs or config.logging.json_mode, level=level)


cli.add_command(serve)
cli.add_command(predict)
cli.add_command(history)


if __name__ == "__main__":
    cli()
