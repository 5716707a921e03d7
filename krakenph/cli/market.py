"""Reference data commands for krakenph CLI.

Lists the assets and asset pairs known to kraken.com.
"""

import click
from rich.console import Console
from rich.table import Table

from krakenph.cli.common import get_settings, open_client
from krakenph.models import Asset, AssetPair

PAIR_FIELDS = [
    "name",
    "altname",
    "aclass_base",
    "base",
    "aclass_quote",
    "quote",
    "lot",
    "pair_decimals",
    "lot_decimals",
    "lot_multiplier",
    "fee_volume_currency",
    "margin_call",
    "margin_stop",
]

ASSET_FIELDS = ["name", "altname", "aclass", "decimals", "display_decimals"]


def quoted_csv(model: Asset | AssetPair, fields: list[str]) -> str:
    """Format selected model fields as a line of quoted CSV."""
    values = []
    for field in fields:
        value = getattr(model, field)
        values.append("" if value is None else str(value))
    return ",".join(f'"{v}"' for v in values)


def _print_table(title: str, rows: list, fields: list[str]) -> None:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for field in fields:
        table.add_column(field.replace("_", " ").title())
    for row in rows:
        table.add_row(*["" if getattr(row, f) is None else str(getattr(row, f)) for f in fields])
    Console().print(table)


@click.command()
@click.option("--csv", "as_csv", is_flag=True, help="Print quoted CSV instead of a table")
@click.pass_context
def assets(ctx: click.Context, as_csv: bool) -> None:
    """List assets available on kraken.com."""
    settings = get_settings(ctx)

    with open_client(settings) as client:
        rows = client.assets()

    if as_csv:
        for row in rows:
            click.echo(quoted_csv(row, ASSET_FIELDS))
    else:
        _print_table(f"Assets ({len(rows)})", rows, ASSET_FIELDS)


@click.command()
@click.argument("pairs", nargs=-1)
@click.option("--csv", "as_csv", is_flag=True, help="Print quoted CSV instead of a table")
@click.pass_context
def pairs(ctx: click.Context, pairs: tuple[str, ...], as_csv: bool) -> None:
    """List tradable asset pairs.
    
    PAIRS optionally restricts the listing (e.g., XXBTZEUR XLTCZEUR).
    
    \b
    Examples:
      krakenph pairs
      krakenph pairs XXBTZEUR --csv
    """
    settings = get_settings(ctx)

    with open_client(settings) as client:
        rows = client.asset_pairs(list(pairs) or None)

    if as_csv:
        for row in rows:
            click.echo(quoted_csv(row, PAIR_FIELDS))
    else:
        _print_table(f"Asset Pairs ({len(rows)})", rows, PAIR_FIELDS[:10])
