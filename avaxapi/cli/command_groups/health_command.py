"""Health command group."""

from __future__ import annotations

import json
from typing import Optional

import typer
from rich.console import Console

from avaxapi.cli.shared.client_utils import get_state, rpc_errors, service_client
from avaxapi.health import HealthClient


def register_health_commands(app: typer.Typer, console: Console) -> None:
    """Register health command group."""
    health_app = typer.Typer(help="Node health API: liveness and wait-until-healthy")
    app.add_typer(health_app, name="health")

    @health_app.command("liveness")
    def health_liveness(
        ctx: typer.Context,
        show_checks: bool = typer.Option(False, "--checks", help="Print individual check results"),
    ) -> None:
        """Query liveness once; exit 0 when healthy, 2 otherwise."""
        with rpc_errors(console), service_client(get_state(ctx), HealthClient) as client:
            reply = client.get_liveness()
        if show_checks:
            console.print(json.dumps(reply.checks, indent=2, ensure_ascii=False), markup=False, highlight=False)
        if reply.healthy:
            console.print("[green]✓[/green] healthy")
            return
        console.print("[red]✗[/red] unhealthy")
        raise typer.Exit(2)

    @health_app.command("await")
    def health_await(
        ctx: typer.Context,
        checks: Optional[int] = typer.Option(None, "--checks", "-n", min=0, help="Number of liveness checks"),
        interval: Optional[float] = typer.Option(
            None, "--interval", "-i", min=0.0, help="Seconds to wait before each check"
        ),
    ) -> None:
        """Poll liveness until healthy or the check budget runs out."""
        state = get_state(ctx)
        n = state.health_checks if checks is None else checks
        wait = state.health_interval if interval is None else interval
        with console.status(f"Waiting for {state.uri} to become healthy..."):
            with service_client(state, HealthClient) as client:
                healthy = client.await_healthy(n, wait)
        if healthy:
            console.print("[green]✓[/green] healthy")
            return
        console.print(f"[red]✗[/red] not healthy after {n} check(s)")
        raise typer.Exit(2)
