"""Configuration loading for krakenph.

Settings come from ``~/.config/krakenph/config.toml``; the
``KRAKEN_API_KEY`` and ``KRAKEN_API_SECRET`` environment variables fill in
credentials the file leaves empty.
"""

import os
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field

from krakenph.client.kraken import DEFAULT_URL, DEFAULT_VERSION
from krakenph.client.transport import DEFAULT_TIMEOUT
from krakenph.models import Credentials

CONFIG_DIR = Path.home() / ".config" / "krakenph"
CONFIG_PATH = CONFIG_DIR / "config.toml"

DEFAULT_WIDTH = 900


class ConfigError(Exception):
    """The configuration file exists but cannot be read."""


class Settings(BaseModel):
    """Effective configuration."""

    api_key: str = Field(default="", description="Kraken API key")
    api_secret: str = Field(default="", repr=False, description="Base64 API secret")
    url: str = Field(default=DEFAULT_URL, description="API base URL")
    version: str = Field(default=DEFAULT_VERSION, description="API version")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="HTTP timeout in seconds")
    width: int = Field(default=DEFAULT_WIDTH, gt=0, description="Default candle width in seconds")
    interval: float = Field(default=0, ge=0, description="Default polling interval in seconds")

    model_config = {"frozen": True}

    def credentials(self) -> Optional[Credentials]:
        """Build credentials, or None when no key is configured.
        
        Raises:
            InvalidCredentialsError: If the configured secret is invalid.
        """
        if not self.api_key:
            return None
        return Credentials(api_key=self.api_key, api_secret=self.api_secret)


def load_settings(config_path: Optional[Path] = None, environ: Optional[dict] = None) -> Settings:
    """Load settings from a TOML file and the environment.
    
    A missing file is not an error; defaults are used.
    
    Args:
        config_path: File to read, defaults to CONFIG_PATH.
        environ: Environment mapping, defaults to os.environ.
        
    Returns:
        Effective settings.
        
    Raises:
        ConfigError: If the file cannot be parsed.
    """
    config_path = config_path or CONFIG_PATH
    environ = os.environ if environ is None else environ

    data: dict = {}
    if config_path.exists():
        try:
            data = toml.load(config_path)
        except (toml.TomlDecodeError, OSError) as e:
            raise ConfigError(f"cannot read {config_path}: {e}") from e

    kraken = data.get("kraken", {})
    candles = data.get("candles", {})

    values = {
        "api_key": kraken.get("api_key") or environ.get("KRAKEN_API_KEY", ""),
        "api_secret": kraken.get("api_secret") or environ.get("KRAKEN_API_SECRET", ""),
        "url": kraken.get("url", DEFAULT_URL),
        "version": str(kraken.get("version", DEFAULT_VERSION)),
        "timeout": kraken.get("timeout", DEFAULT_TIMEOUT),
        "width": candles.get("width", DEFAULT_WIDTH),
        "interval": candles.get("interval", 0),
    }
    return Settings(**values)


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file and return its path."""
    config_path = config_path or CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "kraken": {
            "api_key": "",  # Leave empty to use KRAKEN_API_KEY env var
            "api_secret": "",  # Leave empty to use KRAKEN_API_SECRET env var
            "url": DEFAULT_URL,
            "version": DEFAULT_VERSION,
            "timeout": DEFAULT_TIMEOUT,
        },
        "candles": {
            "width": DEFAULT_WIDTH,
            "interval": 0,
        },
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path
