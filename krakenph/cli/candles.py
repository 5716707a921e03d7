"""Candlestick and trade commands for krakenph CLI.

Fetches recent trades from kraken.com and prints them either as
candlesticks (plain or Heikin-Ashi) or as raw trades, in CSV format.
"""

from typing import Optional, Union

import click

from krakenph.cli.common import console, get_settings, open_client
from krakenph.feeds import SINCE_BEGINNING, TradeFetcher
from krakenph.indicators import CandleAggregator, HeikinAshiTransformer, tail_window
from krakenph.models import Candle, HeikinAshiCandle, Trade


def format_candle(candle: Union[Candle, HeikinAshiCandle]) -> str:
    """Format a candle as ``bucket_start,open,high,low,close,volume``."""
    return (
        f"{candle.bucket_start},"
        f"{candle.open:.5f},{candle.high:.5f},{candle.low:.5f},{candle.close:.5f},"
        f"{candle.volume:.9f}"
    )


def format_trade(trade: Trade) -> str:
    """Format a trade as quoted ``time,side,type,price,volume`` CSV."""
    order_type = trade.order_type.value if trade.order_type else ""
    return (
        f'"{trade.timestamp}","{trade.side.value}","{order_type}",'
        f'"{trade.price:.5f}","{trade.volume:.9f}"'
    )


class CandlePrinter:
    """Turns batches of trades into printed candles.

    In smoothed mode every candle goes through one HeikinAshiTransformer,
    so the smoothing state runs across polls.
    """

    def __init__(self, width: int, raw: bool = False):
        self.aggregator = CandleAggregator(width)
        self.transformer = None if raw else HeikinAshiTransformer()

    def convert(self, candles: list[Candle]) -> list[Union[Candle, HeikinAshiCandle]]:
        if self.transformer is None:
            return list(candles)
        return self.transformer.extend(candles)

    def add(self, trades: list[Trade]) -> list[Union[Candle, HeikinAshiCandle]]:
        """Candles closed by ``trades``."""
        return self.convert(self.aggregator.add(trades))

    def flush(self) -> list[Union[Candle, HeikinAshiCandle]]:
        """The still-open candle, closed."""
        return self.convert(self.aggregator.flush())


@click.command()
@click.argument("pair")
@click.argument("width", required=False, type=click.IntRange(min=1))
@click.argument("interval", required=False, type=click.FloatRange(min=0))
@click.argument("since", required=False, default=SINCE_BEGINNING)
@click.option("--raw", is_flag=True, help="Print plain OHLCV candles instead of Heikin-Ashi")
@click.option(
    "-l", "--last",
    "last_seconds",
    type=click.IntRange(min=0),
    default=None,
    help="Only print candles within this many seconds of the last one",
)
@click.pass_context
def candles(
    ctx: click.Context,
    pair: str,
    width: Optional[int],
    interval: Optional[float],
    since: str,
    raw: bool,
    last_seconds: Optional[int],
) -> None:
    """Print candlesticks for PAIR as CSV.
    
    PAIR is the Kraken pair name (e.g., XXBTZEUR, XLTCZEUR). WIDTH is the
    candle width in seconds (default: 900). INTERVAL is the polling
    interval in seconds; 0 fetches once (default). SINCE is the cursor to
    start from (default: "0", the beginning of available history).
    
    Each line is bucket_start,open,high,low,close,volume.
    
    \b
    Examples:
      krakenph candles XXBTZEUR                # 15 minute Heikin-Ashi candles
      krakenph candles XXBTZEUR 3600 --last 86400
      krakenph candles XXBTZEUR 60 30          # poll every 30 seconds
    """
    settings = get_settings(ctx)
    width = width or settings.width
    interval = settings.interval if interval is None else interval

    if last_seconds is not None and interval > 0:
        raise click.UsageError("--last can only be used without polling")

    printer = CandlePrinter(width, raw=raw)

    with open_client(settings) as client:
        fetcher = TradeFetcher(client, pair, since=since, interval=interval)

        if interval == 0:
            batch = fetcher.fetch_once()
            output = printer.add(batch.trades) + printer.flush()
            if last_seconds is not None:
                output = tail_window(output, last_seconds)
            for candle in output:
                click.echo(format_candle(candle))
            return

        console.print(f"[dim]Polling {pair} every {interval:g}s (Ctrl+C to stop)...[/dim]")
        try:
            for batch in fetcher.poll():
                for candle in printer.add(batch.trades):
                    click.echo(format_candle(candle))
        except KeyboardInterrupt:
            fetcher.stop()
            console.print("\n[dim]Stopped polling.[/dim]")


@click.command()
@click.argument("pair")
@click.argument("since", required=False, default=SINCE_BEGINNING)
@click.pass_context
def trades(ctx: click.Context, pair: str, since: str) -> None:
    """Print recent trades for PAIR as CSV.
    
    Each line is "time","side","type","price","volume". The cursor for the
    next call is printed to stderr.
    
    \b
    Examples:
      krakenph trades XXBTZEUR
      krakenph trades XXBTZEUR 1616663618857861234
    """
    settings = get_settings(ctx)

    with open_client(settings) as client:
        batch = TradeFetcher(client, pair, since=since).fetch_once()

    for trade in batch.trades:
        click.echo(format_trade(trade))
    console.print(f"[dim]last: {batch.cursor}[/dim]")
