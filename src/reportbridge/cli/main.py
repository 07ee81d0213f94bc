"""ReportBridge CLI - rbr command."""

import click

from reportbridge.cli.config import config_command
from reportbridge.cli.ingest import ingest_command
from reportbridge.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="rbr")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """ReportBridge - normalize coverage and lint reports into per-file findings."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(ingest_command, name="ingest")
cli.add_command(config_command, name="config")


if __name__ == "__main__":
    cli()
