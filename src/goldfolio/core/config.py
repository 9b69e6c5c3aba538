"""
Hierarchical configuration management.

Loads configuration from multiple sources with this precedence (highest wins):
    1. Environment variables (GOLDFOLIO_SECTION__KEY)
    2. Config file (YAML or JSON)
    3. Built-in defaults

Usage:
    config = Config(config_file="~/.goldfolio/config.yaml")

    config.get("display.currency_symbol")   # dot-notation access
    config.get("paths.data_file")           # returns resolved path
    config.validated().portfolio.gst_rate   # typed, validated view
"""

import json
import os
from typing import Any

import yaml

from goldfolio.core.exceptions import ConfigurationError
from goldfolio.core.types import ConfigDict

_DEFAULT_ENV_PREFIX = "GOLDFOLIO_"
_DEFAULT_DATA_DIR_NAME = ".goldfolio-data"
_DEFAULT_DATA_FILE_NAME = "goldfolio_data.json"


class Config:
    """
    Central configuration manager.

    Loads and merges configuration from defaults, a config file, and
    environment variables. Env vars use double-underscore to denote nesting:
    GOLDFOLIO_DISPLAY__CURRENCY_SYMBOL=$ -> config["display"]["currency_symbol"] = "$"
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = _DEFAULT_ENV_PREFIX,
        data_dir: str | None = None,
        defaults: dict[str, Any] | None = None,
    ):
        """
        Args:
            config_file: Path to YAML or JSON configuration file.
            env_prefix: Prefix for environment variable overrides.
            data_dir: Base directory for data storage. Defaults to ~/.goldfolio-data.
            defaults: Additional default values to merge.
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""
        self._data_dir = data_dir or os.path.join("~", _DEFAULT_DATA_DIR_NAME)
        self._extra_defaults = defaults or {}
        self.config_data: ConfigDict = {}

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from all sources."""
        self.config_data = self._get_default_config()

        if self._extra_defaults:
            self._update_dict(self.config_data, self._extra_defaults)

        if self.config_file and os.path.exists(self.config_file):
            file_config = self._load_file(self.config_file)
            self._update_dict(self.config_data, file_config)

        # Env vars override everything
        self._load_from_env()

    def _get_default_config(self) -> ConfigDict:
        """Build default configuration."""
        data_dir = os.path.expanduser(self._data_dir)
        return {
            "paths": {
                "data_dir": data_dir,
                "data_file": os.path.join(data_dir, _DEFAULT_DATA_FILE_NAME),
                "backup_dir": os.path.join(data_dir, "backups"),
                "log_dir": os.path.join(data_dir, "logs"),
            },
            "display": {
                "currency_symbol": "₹",
            },
            "portfolio": {
                "default_provider": "SafeGold",
                "default_payment_mode": "UPI",
                "default_gold_rate": 6500.00,
                "gst_rate": 0.03,
            },
            "logging": {
                "level": "WARNING",
                "file": "",
            },
        }

    @staticmethod
    def _load_file(path: str) -> ConfigDict:
        """Load a YAML or JSON config file."""
        ext = os.path.splitext(path)[1].lower()
        try:
            with open(path) as f:
                if ext in (".yaml", ".yml"):
                    return yaml.safe_load(f) or {}
                elif ext == ".json":
                    return json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e
        return {}

    def _update_dict(self, target: dict, source: dict) -> None:
        """Recursively merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _load_from_env(self) -> None:
        """Override config values from environment variables."""
        if not self.env_prefix:
            return
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.env_prefix):
                continue
            config_key = env_key[len(self.env_prefix) :].lower()
            key_parts = config_key.split("__")

            current = self.config_data
            for part in key_parts[:-1]:
                if part not in current:
                    current[part] = {}
                current = current[part]
            current[key_parts[-1]] = env_value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dot-notation path.

        Args:
            key_path: e.g. "paths.data_file", "portfolio.gst_rate"
            default: Returned when key is not found.
        """
        parts = key_path.split(".")
        current = self.config_data
        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def get_data_file(self) -> str:
        """Return the resolved portfolio data file path."""
        return os.path.expanduser(self.get("paths.data_file"))

    def ensure_directories(self) -> None:
        """Create all configured directories if they don't exist."""
        for key, path_value in self.config_data.get("paths", {}).items():
            if key.endswith("_dir") and isinstance(path_value, str):
                os.makedirs(os.path.expanduser(path_value), exist_ok=True)

    def validated(self):
        """Return a typed GoldfolioConfig view of the merged configuration.

        Raises:
            ConfigurationError: If any section fails validation.
        """
        from pydantic import ValidationError as PydanticValidationError

        from goldfolio.core.config_schema import GoldfolioConfig

        try:
            return GoldfolioConfig.model_validate(self.config_data)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

