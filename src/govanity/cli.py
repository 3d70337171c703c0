"""CLI interface for govanity.

Command-line tool for serving Go vanity import paths.
"""

import logging
from pathlib import Path

import click

from govanity.config import Config
from govanity.registry import Registry

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group()
def cli() -> None:
    """govanity - vanity import paths for Go packages."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover govanity.toml)",
)
@click.option(
    "--bind",
    default=None,
    help="Address to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    envvar="PORT",
    default=None,
    help="Port to bind to (overrides config, env: PORT)",
)
@click.option(
    "--host-override",
    envvar="HOST",
    default=None,
    help="Public domain used for every request (overrides config, env: HOST)",
)
@click.option(
    "--host-header",
    envvar="HOST_HEADER",
    default=None,
    help="Request header carrying the public domain (overrides config, env: HOST_HEADER)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def serve(
    config_path: Path | None,
    bind: str | None,
    port: int | None,
    host_override: str | None,
    host_header: str | None,
    verbose: bool,
) -> None:
    """Start the vanity import server."""
    from govanity.server import run_server

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        config = Config.load(config_path).with_overrides(
            bind=bind,
            port=port,
            host_override=host_override,
            host_header=host_header,
        )
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    if config.vanity.override:
        click.echo(f"Public host: {config.vanity.override}")
    else:
        click.echo(f"Public host: from {config.vanity.header} header or Host")

    try:
        run_server(config)
    except OSError as e:
        logger.critical(f"Cannot listen on {config.server.host}:{config.server.port}: {e}")
        raise click.ClickException(str(e)) from e


@cli.command()
def packages() -> None:
    """List the registered packages."""
    for pkg in Registry():
        click.echo(f"{pkg.path} {pkg.vcs} {pkg.repo}")
