"""Tests for configuration loading.

**Feature: kraken-price-history**
"""

from pathlib import Path

import pytest

from krakenph.config import ConfigError, Settings, create_template_config, load_settings
from krakenph.errors import InvalidCredentialsError

SECRET = "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="


class TestLoadSettings:
    """Settings merge the TOML file with environment credentials."""

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        settings = load_settings(tmp_path / "missing.toml", environ={})

        assert settings.url == "https://api.kraken.com"
        assert settings.version == "0"
        assert settings.width == 900
        assert settings.interval == 0
        assert settings.credentials() is None

    def test_file_values(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[kraken]\n'
            'api_key = "file-key"\n'
            f'api_secret = "{SECRET}"\n'
            'url = "https://example.test"\n'
            'timeout = 5\n'
            '[candles]\n'
            'width = 3600\n'
            'interval = 30\n'
        )
        settings = load_settings(path, environ={"KRAKEN_API_KEY": "env-key"})

        assert settings.api_key == "file-key"
        assert settings.url == "https://example.test"
        assert settings.timeout == 5
        assert settings.width == 3600
        assert settings.interval == 30
        assert settings.credentials().api_key == "file-key"

    def test_environment_fills_missing_credentials(self, tmp_path: Path):
        settings = load_settings(
            tmp_path / "missing.toml",
            environ={"KRAKEN_API_KEY": "env-key", "KRAKEN_API_SECRET": SECRET},
        )

        assert settings.credentials().api_key == "env-key"

    def test_invalid_secret(self):
        settings = Settings(api_key="key", api_secret="***")

        with pytest.raises(InvalidCredentialsError):
            settings.credentials()

    def test_unparseable_file(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[kraken\napi_key = ")

        with pytest.raises(ConfigError):
            load_settings(path, environ={})

    def test_secret_hidden_from_repr(self):
        assert SECRET not in repr(Settings(api_key="key", api_secret=SECRET))


class TestTemplateConfig:
    """The template round-trips through load_settings."""

    def test_template_loads(self, tmp_path: Path):
        path = create_template_config(tmp_path / "nested" / "config.toml")
        settings = load_settings(path, environ={})

        assert path.exists()
        assert settings.width == 900
        assert settings.credentials() is None
