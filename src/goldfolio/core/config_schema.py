"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``GoldfolioConfig``
instance.  Dict-based access keeps working unchanged; environment overrides
arrive as strings and are coerced here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class PathsConfig(BaseModel):
    """File-system paths used by the application."""

    data_dir: Path
    data_file: Path | None = None
    backup_dir: Path | None = None
    log_dir: Path | None = None

    @field_validator("data_dir", "data_file", "backup_dir", "log_dir", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class DisplayConfig(BaseModel):
    """How amounts are rendered."""

    currency_symbol: str = "₹"

    @field_validator("currency_symbol")
    @classmethod
    def _non_empty_symbol(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("currency_symbol cannot be empty")
        return v


class PortfolioConfig(BaseModel):
    """Defaults applied when recording purchases."""

    default_provider: str = "SafeGold"
    default_payment_mode: str = "UPI"
    default_gold_rate: float = 6500.00
    gst_rate: float = 0.03

    @field_validator("default_gold_rate")
    @classmethod
    def _positive_rate(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("default_gold_rate must be positive")
        return v

    @field_validator("gst_rate")
    @classmethod
    def _gst_in_range(cls, v: float) -> float:
        if not 0 <= v < 1:
            raise ValueError(f"gst_rate must be in [0, 1), got {v}")
        return v


class LoggingConfig(BaseModel):
    """Log level and optional file sink."""

    level: str = "WARNING"
    file: str = ""

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class GoldfolioConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so callers can add their own sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    paths: PathsConfig = PathsConfig(data_dir=Path("~/.goldfolio-data"))
    display: DisplayConfig = DisplayConfig()
    portfolio: PortfolioConfig = PortfolioConfig()
    logging: LoggingConfig = LoggingConfig()
