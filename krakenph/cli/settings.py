"""Configuration command for krakenph CLI."""

import click

from krakenph.cli.common import console
from krakenph.config import CONFIG_PATH, create_template_config


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Create a template config file.
    
    The file holds the API key and secret used for private calls and the
    default candle width and polling interval.
    """
    config_path = (ctx.obj or {}).get("config_path") or CONFIG_PATH

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists:[/yellow] {config_path}")
        console.print("[dim]Use --force to overwrite it.[/dim]")
        return

    path = create_template_config(config_path)
    console.print(f"[green]Created config:[/green] {path}")
    console.print("[dim]Add your api_key and api_secret to enable private calls.[/dim]")
