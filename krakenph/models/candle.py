"""Candle (OHLCV) data models."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class Candle(BaseModel):
    """Represents a single OHLCV candle for one time bucket."""

    bucket_start: int = Field(..., description="Bucket start in seconds since epoch")
    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Closing price")
    volume: float = Field(..., ge=0, description="Traded volume")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_range(self) -> "Candle":
        if not (self.low <= min(self.open, self.close) and max(self.open, self.close) <= self.high):
            raise ValueError(
                f"inconsistent candle: low={self.low} open={self.open} "
                f"close={self.close} high={self.high}"
            )
        return self


class HeikinAshiCandle(BaseModel):
    """Represents a smoothed Heikin-Ashi candle.

    Only ``bucket_start`` and ``volume`` are taken from the source candle;
    the prices are derived from it and from the previous smoothed candle.
    """

    bucket_start: int = Field(..., description="Bucket start in seconds since epoch")
    open: float = Field(..., description="Heikin-Ashi open")
    high: float = Field(..., description="Heikin-Ashi high")
    low: float = Field(..., description="Heikin-Ashi low")
    close: float = Field(..., description="Heikin-Ashi close")
    volume: float = Field(..., ge=0, description="Traded volume")

    model_config = {"frozen": True}

    @classmethod
    def from_candle(
        cls,
        candle: Candle,
        prior: Optional["HeikinAshiCandle"] = None,
    ) -> "HeikinAshiCandle":
        """Build the smoothed candle for ``candle``.

        Args:
            candle: Raw candle of the current bucket.
            prior: Smoothed candle of the previous bucket, or None for the
                first candle of a series.

        Returns:
            The Heikin-Ashi candle.
        """
        ha_close = (candle.open + candle.close + candle.low + candle.high) / 4
        if prior is None:
            ha_open = (candle.open + candle.close) / 2
        else:
            ha_open = (prior.open + prior.close) / 2

        return cls(
            bucket_start=candle.bucket_start,
            open=ha_open,
            high=max(candle.high, ha_open, ha_close),
            low=min(candle.low, ha_open, ha_close),
            close=ha_close,
            volume=candle.volume,
        )
