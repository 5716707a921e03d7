"""Data models for krakenph."""

from krakenph.models.asset import Asset, AssetPair
from krakenph.models.candle import Candle, HeikinAshiCandle
from krakenph.models.credentials import Credentials
from krakenph.models.trade import OrderType, Trade, TradeBatch, TradeSide

__all__ = [
    "Asset",
    "AssetPair",
    "Candle",
    "Credentials",
    "HeikinAshiCandle",
    "OrderType",
    "Trade",
    "TradeBatch",
    "TradeSide",
]
