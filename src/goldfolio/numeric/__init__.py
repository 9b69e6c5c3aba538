"""Numeric core: parsing, drift-free arithmetic and precision formatting."""

from .arithmetic import safe_add, safe_divide, safe_multiply, safe_subtract
from .formatting import (
    CURRENCY,
    GOLD_WEIGHT,
    RATE,
    PrecisionProfile,
    format_currency,
    format_gold,
    format_number,
    format_percent,
    format_rate,
    format_signed_currency,
    group_indian,
)
from .parsing import parse_number

__all__ = [
    "CURRENCY",
    "GOLD_WEIGHT",
    "RATE",
    "PrecisionProfile",
    "format_currency",
    "format_gold",
    "format_number",
    "format_percent",
    "format_rate",
    "format_signed_currency",
    "group_indian",
    "parse_number",
    "safe_add",
    "safe_divide",
    "safe_multiply",
    "safe_subtract",
]
