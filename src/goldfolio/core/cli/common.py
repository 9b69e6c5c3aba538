"""Shared setup logic for CLI commands."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from pathlib import Path

import click

from goldfolio.core.config import Config
from goldfolio.core.exceptions import GoldfolioError
from goldfolio.portfolio.models import PortfolioSettings, PortfolioState
from goldfolio.portfolio.store import PortfolioStore

GOLDFOLIO_DIR = Path.home() / ".goldfolio"
CONFIG_PATH = GOLDFOLIO_DIR / "config.yaml"


@dataclass
class CliContext:
    """What every command needs: merged config and the portfolio store."""

    config: Config
    store: PortfolioStore

    @property
    def settings(self) -> PortfolioSettings:
        """Entry and display settings from configuration."""
        cfg = self.config.validated()
        return PortfolioSettings(
            currency=cfg.display.currency_symbol,
            default_provider=cfg.portfolio.default_provider,
            default_payment_mode=cfg.portfolio.default_payment_mode,
            gst_rate=cfg.portfolio.gst_rate,
        )

    def load_state(self) -> PortfolioState:
        """Load the portfolio; configuration supplies its settings."""
        settings = self.settings
        default = PortfolioState(
            settings=settings,
            current_gold_rate=self.config.validated().portfolio.default_gold_rate,
        )
        state = self.store.load(default=default)
        state.settings = settings
        return state

    def save_state(self, state: PortfolioState) -> None:
        self.store.save(state)


def load_config(config_file: str | None = None) -> Config:
    """Load config from the given file, else ~/.goldfolio/config.yaml when present."""
    if config_file is None and CONFIG_PATH.exists():
        config_file = str(CONFIG_PATH)
    return Config(config_file=config_file)


def reports_errors(func):
    """Turn GoldfolioError into a clean CLI error (exit code 1)."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except GoldfolioError as e:
            raise click.ClickException(str(e)) from e

    return wrapper
