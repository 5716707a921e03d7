"""krakenph - Kraken REST client and Heikin-Ashi candlestick builder."""

__version__ = "0.1.0"
