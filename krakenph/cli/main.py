"""Main CLI entry point for krakenph.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

from pathlib import Path

import click

from krakenph.logging_setup import setup_logging


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.
    
    Command modules are only imported when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.
        
        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib
        
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)
        
        attr = getattr(module, cmd_name, None)
        if not isinstance(attr, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")
        
        self.add_command(attr)
        return attr


LAZY_SUBCOMMANDS = {
    "candles": "krakenph.cli.candles",
    "trades": "krakenph.cli.candles",
    "assets": "krakenph.cli.market",
    "pairs": "krakenph.cli.market",
    "private": "krakenph.cli.private",
    "init": "krakenph.cli.settings",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="krakenph")
@click.option(
    "-c", "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/krakenph/config.toml)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """krakenph - Kraken price history as Heikin-Ashi candlesticks.
    
    Downloads trades from kraken.com, groups them into time buckets and
    prints the candlesticks as CSV.
    
    \b
    Quick Start:
      krakenph candles XXBTZEUR           # 15 minute Heikin-Ashi candles
      krakenph candles XXBTZEUR 3600 60   # hourly candles, poll every minute
      krakenph private Balance            # signed call (needs API keys)
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    setup_logging(verbose)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
