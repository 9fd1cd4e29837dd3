"""Config command group (show/get/set/unset)."""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.markup import escape

from avaxapi.cli.shared.config_utils import (
    deep_get,
    deep_set,
    deep_unset,
    load_config_json,
    parse_value,
    save_config_json,
)
from avaxapi.config.access import clear_config_cache
from avaxapi.config.loader import convert_to_camel, get_config_path, load_config


def register_config_commands(app: typer.Typer, console: Console) -> None:
    """Register config command group."""
    config_app = typer.Typer(help="Config helpers (show/get/set/unset)")
    app.add_typer(config_app, name="config")

    def _load_raw() -> dict:
        try:
            data = load_config_json()
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid config file {escape(str(get_config_path()))}:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        if not isinstance(data, dict):
            console.print(f"[red]Invalid config file {escape(str(get_config_path()))}:[/red] root must be a JSON object")
            raise typer.Exit(1)
        return data

    @config_app.command("show")
    def config_show() -> None:
        """Print the effective configuration (file + environment + defaults)."""
        path = get_config_path()
        try:
            cfg = load_config(path)
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)
        console.print(f"[dim]{path}[/dim]")
        console.print(json.dumps(convert_to_camel(cfg.model_dump()), indent=2), markup=False, highlight=False)

    @config_app.command("get")
    def config_get(
        key: str = typer.Argument(..., help="Dotted key path, e.g. node.uri"),
    ) -> None:
        data = _load_raw()
        try:
            value = deep_get(data, key)
        except KeyError:
            console.print(f"[red]Key not found:[/red] {key}")
            raise typer.Exit(1)
        console.print(json.dumps(value, indent=2, ensure_ascii=False), markup=False, highlight=False)

    @config_app.command("set")
    def config_set(
        key: str = typer.Argument(..., help="Dotted key path, e.g. node.requestTimeout"),
        value: str = typer.Argument(..., help="JSON value or plain string"),
    ) -> None:
        data = _load_raw()
        previous = json.loads(json.dumps(data))
        deep_set(data, key, parse_value(value))
        path = save_config_json(data)
        try:
            load_config(path)
        except ValueError as e:
            save_config_json(previous)
            console.print(f"[red]Rejected:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        clear_config_cache()
        console.print(f"[green]✓[/green] Set {key}")

    @config_app.command("unset")
    def config_unset(
        key: str = typer.Argument(..., help="Dotted key path"),
    ) -> None:
        data = _load_raw()
        if not deep_unset(data, key):
            console.print(f"[yellow]Key not found:[/yellow] {key}")
            raise typer.Exit(1)
        save_config_json(data)
        clear_config_cache()
        console.print(f"[green]✓[/green] Unset {key}")
