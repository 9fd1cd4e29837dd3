"""CLI commands for avaxapi.

Single entry point: global options (node URI, timeout, chain, verbosity) are
resolved here, then the info/health/avm/config command groups are attached.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from avaxapi import __logo__, __version__
from avaxapi.cli.command_groups.avm_command import register_avm_commands
from avaxapi.cli.command_groups.config_commands import register_config_commands
from avaxapi.cli.command_groups.health_command import register_health_commands
from avaxapi.cli.command_groups.info_command import register_info_commands
from avaxapi.cli.shared.client_utils import CliState
from avaxapi.cli.shared.logging_utils import configure_cli_logging
from avaxapi.config.access import get_config
from avaxapi.config.schema import Config

app = typer.Typer(
    name="avaxapi",
    help=f"{__logo__} avaxapi - Avalanche node API client",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} avaxapi v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    uri: Optional[str] = typer.Option(None, "--uri", help="Node URI, e.g. http://127.0.0.1:9650"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Per-request timeout in seconds"),
    chain: Optional[str] = typer.Option(None, "--chain", help="AVM chain alias or ID"),
    verbose: bool = typer.Option(False, "--verbose", help="Print debug logs to stderr"),
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """avaxapi - query Avalanche node APIs."""
    try:
        config = get_config()
    except ValueError as e:
        console.print(f"[yellow]Warning:[/yellow] {escape(str(e))} Using defaults.")
        config = Config()

    configure_cli_logging(
        verbose=verbose,
        file_enabled=config.logging.file_enabled,
        level=config.logging.level,
    )
    if timeout is not None and timeout <= 0:
        raise typer.BadParameter("timeout must be positive", param_hint="--timeout")

    ctx.obj = CliState(
        uri=uri or config.node.uri,
        request_timeout=timeout if timeout is not None else config.node.request_timeout,
        chain=chain or config.avm.chain,
        health_checks=config.health.checks,
        health_interval=config.health.interval,
    )


register_info_commands(app, console)
register_health_commands(app, console)
register_avm_commands(app, console)
register_config_commands(app, console)


if __name__ == "__main__":
    app()
