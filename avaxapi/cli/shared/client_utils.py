"""Client construction and error reporting shared by CLI command groups."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, TypeVar

import httpx
import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from avaxapi.utils.exceptions import AvaxApiError, sanitize_error_message

C = TypeVar("C")


@dataclass(frozen=True)
class CliState:
    """Resolved global options (flags over config file over defaults)."""
    uri: str
    request_timeout: float
    chain: str
    health_checks: int
    health_interval: float


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if not isinstance(state, CliState):
        raise typer.BadParameter("CLI state not initialised")
    return state


def make_http_client(request_timeout: float) -> httpx.Client:
    """Connection pool handed to service clients built by the CLI."""
    return httpx.Client(timeout=request_timeout)


@contextmanager
def service_client(state: CliState, factory: Callable[..., C], **kwargs) -> Iterator[C]:
    """Build a service client on a CLI-owned pool and close the pool afterwards."""
    http = make_http_client(state.request_timeout)
    try:
        yield factory(state.uri, request_timeout=state.request_timeout, client=http, **kwargs)
    finally:
        http.close()


@contextmanager
def rpc_errors(console: Console) -> Iterator[None]:
    """Turn avaxapi errors into a red one-line message and exit code 1."""
    try:
        yield
    except AvaxApiError as exc:
        message = sanitize_error_message(str(exc))
        logger.debug(f"command failed: {exc.to_dict()}")
        console.print(f"[red]Error:[/red] {escape(message)}")
        raise typer.Exit(1) from exc
