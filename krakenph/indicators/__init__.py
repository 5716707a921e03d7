"""Candlestick indicators module."""

from krakenph.indicators.candles import (
    CandleAggregator,
    HeikinAshiTransformer,
    aggregate_trades,
    bucket_start,
    heikin_ashi,
    tail_window,
)

__all__ = [
    "CandleAggregator",
    "HeikinAshiTransformer",
    "aggregate_trades",
    "bucket_start",
    "heikin_ashi",
    "tail_window",
]
