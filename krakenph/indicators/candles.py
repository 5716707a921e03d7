"""Candlestick construction from trades.

This module groups ordered trades into fixed-width time buckets (OHLCV
candles) and smooths candle series into Heikin-Ashi candles. Trades and
candles are expected in time order; nothing here sorts its input.

Heikin-Ashi values are plain float arithmetic. Over a long series the
recursive open accumulates rounding, so independent implementations may
differ in the last decimal digit.
"""

from typing import Iterable, Optional, TypeVar

from krakenph.models import Candle, HeikinAshiCandle, Trade

CandleT = TypeVar("CandleT", Candle, HeikinAshiCandle)


def bucket_start(timestamp: int, width: int) -> int:
    """Start of the ``width``-second bucket containing ``timestamp``."""
    return timestamp - (timestamp % width)


def _check_width(width: int) -> None:
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise ValueError(f"bucket width must be a positive integer, got {width!r}")


class _OpenBucket:
    """Fold state for the candle under construction."""

    __slots__ = ("start", "open", "high", "low", "close", "volume")

    def __init__(self, start: int, trade: Trade):
        self.start = start
        self.open = trade.price
        self.high = trade.price
        self.low = trade.price
        self.close = trade.price
        self.volume = trade.volume

    def add(self, trade: Trade) -> None:
        if trade.price > self.high:
            self.high = trade.price
        if trade.price < self.low:
            self.low = trade.price
        self.close = trade.price
        self.volume += trade.volume

    def to_candle(self) -> Candle:
        return Candle(
            bucket_start=self.start,
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.volume,
        )


class CandleAggregator:
    """Incrementally groups a trade stream into OHLCV candles.

    A candle is closed when the first trade of a different bucket arrives,
    and a closed candle is never reopened. The last candle stays pending
    until :meth:`flush` is called, since later trades may still belong to it.
    """

    def __init__(self, width: int):
        _check_width(width)
        self.width = width
        self._bucket: Optional[_OpenBucket] = None

    @property
    def pending(self) -> Optional[Candle]:
        """Snapshot of the candle still open, if any."""
        return self._bucket.to_candle() if self._bucket else None

    def add(self, trades: Iterable[Trade]) -> list[Candle]:
        """Feed trades in order and return the candles they closed."""
        closed = []
        for trade in trades:
            start = bucket_start(trade.timestamp, self.width)
            if self._bucket is None:
                self._bucket = _OpenBucket(start, trade)
            elif start == self._bucket.start:
                self._bucket.add(trade)
            else:
                closed.append(self._bucket.to_candle())
                self._bucket = _OpenBucket(start, trade)
        return closed

    def flush(self) -> list[Candle]:
        """Close and return the pending candle."""
        if self._bucket is None:
            return []
        candle = self._bucket.to_candle()
        self._bucket = None
        return [candle]


def aggregate_trades(trades: Iterable[Trade], width: int) -> list[Candle]:
    """Group ordered trades into OHLCV candles of ``width`` seconds.

    Only buckets containing at least one trade produce a candle; gaps are
    not filled.

    Args:
        trades: Trades in time order.
        width: Bucket width in seconds.

    Returns:
        Candles in the order their first trade was seen.

    Raises:
        ValueError: If ``width`` is not a positive integer.
    """
    aggregator = CandleAggregator(width)
    candles = aggregator.add(trades)
    candles.extend(aggregator.flush())
    return candles


class HeikinAshiTransformer:
    """Smooths one candle series into Heikin-Ashi candles.

    The previous smoothed candle is the only state and is held here
    explicitly, so each series needs its own transformer.
    """

    def __init__(self, prior: Optional[HeikinAshiCandle] = None):
        self.previous = prior

    def push(self, candle: Candle) -> HeikinAshiCandle:
        """Smooth the next candle of the series."""
        ha = HeikinAshiCandle.from_candle(candle, self.previous)
        self.previous = ha
        return ha

    def extend(self, candles: Iterable[Candle]) -> list[HeikinAshiCandle]:
        return [self.push(candle) for candle in candles]

    def reset(self) -> None:
        self.previous = None


def heikin_ashi(
    candles: Iterable[Candle],
    prior: Optional[HeikinAshiCandle] = None,
) -> list[HeikinAshiCandle]:
    """Convert a candle series to Heikin-Ashi candles.

    Args:
        candles: Raw candles in time order.
        prior: Smoothed candle preceding the series, if continuing one.

    Returns:
        One Heikin-Ashi candle per input candle.
    """
    return HeikinAshiTransformer(prior).extend(candles)


def tail_window(candles: list[CandleT], last_seconds: int) -> list[CandleT]:
    """Keep candles within ``last_seconds`` of the final candle's start."""
    if not candles:
        return []
    threshold = candles[-1].bucket_start - last_seconds
    return [c for c in candles if c.bucket_start >= threshold]
