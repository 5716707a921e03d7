"""Helpers shared by krakenph CLI commands."""

from contextlib import contextmanager
from typing import Iterator

import click
from rich.console import Console
from rich.panel import Panel

from krakenph.client import KrakenClient, RequestsTransport
from krakenph.config import ConfigError, Settings, load_settings
from krakenph.errors import KrakenError

# Status and errors go to stderr; stdout carries the CSV output
console = Console(stderr=True)


def error_panel(message: str, title: str = "Error") -> None:
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def get_settings(ctx: click.Context) -> Settings:
    """Load settings for the current invocation, exiting on a bad file."""
    config_path = (ctx.obj or {}).get("config_path")
    try:
        return load_settings(config_path)
    except ConfigError as e:
        error_panel(str(e), title="Configuration Error")
        raise SystemExit(1)


@contextmanager
def open_client(settings: Settings, private: bool = False) -> Iterator[KrakenClient]:
    """Open a transport and yield a client, closing the transport after.
    
    Kraken errors raised inside the block are shown as an error panel
    and turned into exit status 1.
    """
    try:
        credentials = settings.credentials() if private else None
        with RequestsTransport(timeout=settings.timeout) as transport:
            yield KrakenClient(
                transport,
                credentials=credentials,
                url=settings.url,
                version=settings.version,
            )
    except KrakenError as e:
        error_panel(str(e), title=f"{type(e).__name__}")
        raise SystemExit(1)
