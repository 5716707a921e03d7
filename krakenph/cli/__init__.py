"""CLI commands for krakenph.

This package provides the command-line interface for krakenph,
including candlestick output, trade listing and raw API calls.
"""

from krakenph.cli.main import cli, main

__all__ = ["cli", "main"]
