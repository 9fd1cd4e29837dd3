"""Info command group: node identity, network and peers."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from avaxapi.cli.shared.client_utils import get_state, rpc_errors, service_client
from avaxapi.info import InfoClient


def register_info_commands(app: typer.Typer, console: Console) -> None:
    """Register info command group."""
    info_app = typer.Typer(help="Node info API: IDs, network, peers, bootstrap state")
    app.add_typer(info_app, name="info")

    @info_app.command("node-id")
    def info_node_id(ctx: typer.Context) -> None:
        """Print the node ID."""
        with rpc_errors(console), service_client(get_state(ctx), InfoClient) as client:
            console.print(client.get_node_id())

    @info_app.command("network-id")
    def info_network_id(ctx: typer.Context) -> None:
        """Print the network ID."""
        with rpc_errors(console), service_client(get_state(ctx), InfoClient) as client:
            console.print(str(client.get_network_id()))

    @info_app.command("network-name")
    def info_network_name(ctx: typer.Context) -> None:
        """Print the network name."""
        with rpc_errors(console), service_client(get_state(ctx), InfoClient) as client:
            console.print(client.get_network_name())

    @info_app.command("blockchain-id")
    def info_blockchain_id(
        ctx: typer.Context,
        alias: str = typer.Argument(..., help="Chain alias, e.g. X, P or C"),
    ) -> None:
        """Resolve a chain alias to its blockchain ID."""
        with rpc_errors(console), service_client(get_state(ctx), InfoClient) as client:
            console.print(client.get_blockchain_id(alias))

    @info_app.command("version")
    def info_version(ctx: typer.Context) -> None:
        """Print the node software version."""
        with rpc_errors(console), service_client(get_state(ctx), InfoClient) as client:
            console.print(client.get_node_version())

    @info_app.command("bootstrapped")
    def info_bootstrapped(
        ctx: typer.Context,
        chain: str = typer.Argument(..., help="Chain alias or ID"),
    ) -> None:
        """Exit 0 when the chain has finished bootstrapping, 2 otherwise."""
        with rpc_errors(console), service_client(get_state(ctx), InfoClient) as client:
            done = client.is_bootstrapped(chain)
        if done:
            console.print(f"[green]✓[/green] {chain} bootstrapped")
            return
        console.print(f"[yellow]{chain} still bootstrapping[/yellow]")
        raise typer.Exit(2)

    @info_app.command("peers")
    def info_peers(ctx: typer.Context) -> None:
        """List connected peers."""
        with rpc_errors(console), service_client(get_state(ctx), InfoClient) as client:
            peers = client.peers()
        if not peers:
            console.print("[yellow]No peers connected[/yellow]")
            return
        table = Table(title=f"Peers ({len(peers)})")
        table.add_column("Node ID", style="cyan")
        table.add_column("IP")
        table.add_column("Version")
        table.add_column("Last received", style="dim")
        for p in peers:
            table.add_row(p.node_id, p.ip, p.version, p.last_received)
        console.print(table)
