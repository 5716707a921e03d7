"""Signed API call command for krakenph CLI."""

import json

import click

from krakenph.cli.common import error_panel, get_settings, open_client


def parse_params(items: tuple[str, ...]) -> dict[str, str]:
    """Parse ``KEY=VALUE`` items, keeping their order.
    
    Raises:
        click.BadParameter: If an item has no ``=``.
    """
    params = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", param_hint="PARAMS")
        params[key] = value
    return params


@click.command()
@click.argument("method")
@click.argument("params", nargs=-1)
@click.pass_context
def private(ctx: click.Context, method: str, params: tuple[str, ...]) -> None:
    """Call the private API METHOD and print its result as JSON.
    
    PARAMS are KEY=VALUE pairs sent after the nonce, in the given order.
    Requires api_key and api_secret in the config file or the
    KRAKEN_API_KEY / KRAKEN_API_SECRET environment variables.
    
    \b
    Examples:
      krakenph private Balance
      krakenph private TradesHistory start=1616663618
    """
    settings = get_settings(ctx)
    request_params = parse_params(params)

    if not settings.api_key:
        error_panel(
            "No API key configured.\n\n"
            "Run [cyan]krakenph init[/cyan] or set KRAKEN_API_KEY and KRAKEN_API_SECRET.",
            title="Configuration Error",
        )
        raise SystemExit(1)

    with open_client(settings, private=True) as client:
        envelope = client.call_private(method, request_params)
        envelope.raise_for_errors(method)

    click.echo(json.dumps(envelope.result, indent=2, sort_keys=True))
