"""Trade feeds for krakenph."""

from krakenph.feeds.trades import SINCE_BEGINNING, FetcherState, FetchOutcome, TradeFetcher

__all__ = [
    "FetchOutcome",
    "FetcherState",
    "SINCE_BEGINNING",
    "TradeFetcher",
]
