"""AVM command group: balances, assets, transaction status, keystore addresses."""

from __future__ import annotations

import getpass

import typer
from rich.console import Console
from rich.table import Table

from avaxapi.avm import AVMClient, Status
from avaxapi.cli.shared.client_utils import get_state, rpc_errors, service_client
from avaxapi.models import UserPass

_STATUS_STYLE = {
    Status.ACCEPTED: "green",
    Status.PROCESSING: "yellow",
    Status.REJECTED: "red",
    Status.UNKNOWN: "dim",
}


def register_avm_commands(app: typer.Typer, console: Console) -> None:
    """Register avm command group."""
    avm_app = typer.Typer(help="AVM chain API: balances, assets, tx status, keystore addresses")
    app.add_typer(avm_app, name="avm")

    def _client(ctx: typer.Context):
        state = get_state(ctx)
        return service_client(state, AVMClient, chain=state.chain)

    @avm_app.command("balance")
    def avm_balance(
        ctx: typer.Context,
        address: str = typer.Argument(..., help="Address, e.g. X-avax1..."),
        asset_id: str = typer.Argument("AVAX", help="Asset ID or alias"),
    ) -> None:
        """Show the balance of one asset held by an address."""
        with rpc_errors(console), _client(ctx) as client:
            reply = client.get_balance(address, asset_id)
        console.print(f"{asset_id}: [cyan]{reply.balance}[/cyan] ({len(reply.utxo_ids)} UTXOs)")

    @avm_app.command("balances")
    def avm_balances(
        ctx: typer.Context,
        address: str = typer.Argument(..., help="Address, e.g. X-avax1..."),
    ) -> None:
        """Show every asset balance held by an address."""
        with rpc_errors(console), _client(ctx) as client:
            balances = client.get_all_balances(address)
        if not balances:
            console.print("[yellow]No balances[/yellow]")
            return
        table = Table(title=f"Balances of {address}")
        table.add_column("Asset", style="cyan")
        table.add_column("Balance", justify="right")
        for b in balances:
            table.add_row(b.asset, str(b.balance))
        console.print(table)

    @avm_app.command("asset")
    def avm_asset(
        ctx: typer.Context,
        asset_id: str = typer.Argument(..., help="Asset ID or alias"),
    ) -> None:
        """Describe an asset."""
        with rpc_errors(console), _client(ctx) as client:
            desc = client.get_asset_description(asset_id)
        console.print(f"[cyan]{desc.name}[/cyan] ({desc.symbol})")
        console.print(f"ID: {desc.asset_id}")
        console.print(f"Denomination: {desc.denomination}")

    @avm_app.command("tx-status")
    def avm_tx_status(
        ctx: typer.Context,
        tx_id: str = typer.Argument(..., help="Transaction ID"),
    ) -> None:
        """Show the status of a transaction."""
        with rpc_errors(console), _client(ctx) as client:
            status = client.get_tx_status(tx_id)
        style = _STATUS_STYLE.get(status, "white")
        console.print(f"[{style}]{status.value}[/{style}]")

    @avm_app.command("addresses")
    def avm_addresses(
        ctx: typer.Context,
        username: str = typer.Option(..., "--username", "-u", help="Keystore user"),
    ) -> None:
        """List addresses controlled by a keystore user (prompts for the password)."""
        password = getpass.getpass(f"Password for {username}: ")
        user = UserPass(username=username, password=password)
        with rpc_errors(console), _client(ctx) as client:
            addresses = client.list_addresses(user)
        if not addresses:
            console.print("[yellow]No addresses[/yellow]")
            return
        for addr in addresses:
            console.print(addr)
