"""rbr config command - show the effective configuration."""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from reportbridge.config.loader import load_config
from reportbridge.core.errors import ConfigError


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
def config_command(path: Path) -> None:
    """Print the effective configuration as YAML.

    PATH is the project base directory (default: current directory).
    """
    try:
        config = load_config(path.resolve())
    except ConfigError as e:
        raise click.ClickException(e.message) from e
    click.echo(yaml.safe_dump(config.model_dump(), default_flow_style=False, sort_keys=False), nl=False)
