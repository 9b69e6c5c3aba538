"""Lenient number parsing for user-entered amounts.

Accepts plain decimals, comma-grouped numbers ("1,234.5"), scientific
notation ("1e-8") and simple fractions ("1/4"). Parsing is total: anything
that is not a finite number comes back as 0.0 rather than raising, so a blank
or garbled field never aborts a portfolio computation.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")
_SCIENTIFIC_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)[eE][+-]?\d+")


def _to_float(text: str, pattern: re.Pattern[str]) -> float | None:
    """Return the float for text when it fully matches pattern, else None."""
    text = text.strip()
    if not pattern.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def parse_number(value: object) -> float:
    """Convert heterogeneous input into a float.

    Args:
        value: Text, int, float, Decimal or None.

    Returns:
        The parsed value, or 0.0 when the input is empty or unparseable.
        Fractions with a zero denominator, more than one slash, or non-numeric
        parts resolve to 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, float | int) and not math.isfinite(value):
        return 0.0
    if isinstance(value, Decimal) and not value.is_finite():
        return 0.0

    text = str(value).strip().replace(",", "")
    if not text:
        return 0.0

    if "e" in text or "E" in text:
        parsed = _to_float(text, _SCIENTIFIC_RE)
        return parsed if parsed is not None else 0.0

    if text.count("/") == 1:
        numerator, denominator = text.split("/")
        num = _to_float(numerator, _DECIMAL_RE)
        den = _to_float(denominator, _DECIMAL_RE)
        if num is not None and den is not None and den != 0:
            return num / den

    parsed = _to_float(text, _DECIMAL_RE)
    return parsed if parsed is not None else 0.0
