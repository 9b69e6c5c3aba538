"""
Display formatting for gold weights, currency amounts and market rates.

Three precision profiles cover everything the tracker shows:
- GOLD_WEIGHT: 7 decimal places (0.0000001 g), trailing zeros trimmed but never
  below 3 places; trace amounts under 0.001 g keep all 7 digits.
- CURRENCY: 2 decimal places with Indian digit grouping (12,34,567.89);
  sub-paisa amounts fall back to 4 places or scientific notation.
- RATE: exactly 2 decimal places, no symbol.

Rounding to a fixed number of places is half-up on the shortest decimal
representation of the value, so 1.005 renders as "1.01" rather than the
binary-float "1.00". All formatting is locale-neutral apart from the Indian
grouping rule, which lives in group_indian().
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

from goldfolio.numeric.parsing import parse_number

DEFAULT_CURRENCY_SYMBOL = "₹"


@dataclass(frozen=True)
class PrecisionProfile:
    """Precision rules for one class of displayed quantity.

    Attributes:
        name: Profile identifier.
        decimal_places: Canonical number of fractional digits.
        near_zero_threshold: Non-zero magnitudes below this render in
            scientific notation.
        min_display_decimals: Fewest fractional digits shown after trimming.
        micro_threshold: Magnitudes below this get the micro-value treatment
            (full precision for gold, extended places for currency).
        micro_places: Fractional digits used for micro values.
    """

    name: str
    decimal_places: int
    near_zero_threshold: float = 0.0
    min_display_decimals: int = 0
    micro_threshold: float = 0.0
    micro_places: int = 0

    @property
    def zero_text(self) -> str:
        """The fixed rendering of zero for this profile."""
        return "0." + "0" * self.decimal_places if self.decimal_places else "0"


GOLD_WEIGHT = PrecisionProfile(
    name="gold_weight",
    decimal_places=7,
    near_zero_threshold=1e-7,
    min_display_decimals=3,
    micro_threshold=0.001,
    micro_places=7,
)

CURRENCY = PrecisionProfile(
    name="currency",
    decimal_places=2,
    near_zero_threshold=1e-4,
    min_display_decimals=2,
    micro_threshold=0.01,
    micro_places=4,
)

RATE = PrecisionProfile(
    name="rate",
    decimal_places=2,
    min_display_decimals=2,
)

PROFILES = {profile.name: profile for profile in (GOLD_WEIGHT, CURRENCY, RATE)}


def to_fixed(value: float, decimal_places: int) -> str:
    """Render value with exactly decimal_places fractional digits (half-up)."""
    number = Decimal(repr(float(value)))
    exponent = Decimal(1).scaleb(-decimal_places)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + decimal_places + 2)
        quantized = number.quantize(exponent, rounding=ROUND_HALF_UP)
    if quantized == 0:
        quantized = quantized.copy_abs()
    return f"{quantized:f}"


def _trim_trailing_zeros(text: str) -> str:
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def _fraction_digits(text: str) -> int:
    return len(text.split(".", 1)[1]) if "." in text else 0


def to_exponential(value: float, decimal_places: int) -> str:
    """Scientific notation with an unpadded exponent: 5e-08 -> "5.0000000e-8"."""
    mantissa, exponent = f"{value:.{decimal_places}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def group_indian(text: str) -> str:
    """Apply Indian digit grouping to a plain decimal string.

    The last three integer digits form one group and every two digits before
    that form another: "1234567.89" -> "12,34,567.89".
    """
    sign = ""
    if text.startswith(("-", "+")):
        sign, text = text[0], text[1:]
    integer, dot, fraction = text.partition(".")

    if len(integer) > 3:
        head, tail = integer[:-3], integer[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        integer = ",".join([*groups, tail])

    return f"{sign}{integer}{dot}{fraction}"


def format_number(value: object, decimal_places: int) -> str:
    """Fixed-point rendering with the generic trimming policy.

    Trailing zeros are trimmed only when more than 2 places are requested, so
    money-like precisions keep their canonical width. A bare trailing decimal
    point is dropped; 0 places rounds to an integer.
    """
    num = parse_number(value)
    places = max(decimal_places, 0)
    formatted = to_fixed(num, places)
    if places > 2:
        formatted = _trim_trailing_zeros(formatted)
    return formatted


def format_gold(value: object) -> str:
    """Format a gold weight in grams."""
    profile = GOLD_WEIGHT
    num = parse_number(value)

    if num == 0:
        return profile.zero_text

    # At or under the precision floor
    if abs(num) < profile.near_zero_threshold:
        return to_exponential(num, profile.decimal_places)

    formatted = to_fixed(num, profile.decimal_places)
    if abs(num) < profile.micro_threshold:
        return formatted

    trimmed = _trim_trailing_zeros(formatted)
    if _fraction_digits(trimmed) < profile.min_display_decimals:
        return to_fixed(num, profile.min_display_decimals)
    return trimmed


def format_currency(value: object, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format a currency amount, e.g. 1234567.89 -> "₹12,34,567.89"."""
    profile = CURRENCY
    num = parse_number(value)

    if num == 0:
        return f"{symbol}{profile.zero_text}"

    sign = "-" if num < 0 else ""
    magnitude = abs(num)

    if magnitude < profile.micro_threshold:
        if magnitude < profile.near_zero_threshold:
            return f"{sign}{symbol}{to_exponential(magnitude, profile.micro_places)}"
        return f"{sign}{symbol}{to_fixed(magnitude, profile.micro_places)}"

    return f"{sign}{symbol}{group_indian(to_fixed(magnitude, profile.decimal_places))}"


def format_rate(value: object) -> str:
    """Format a market rate per gram with exactly 2 decimals."""
    return format_number(value, RATE.decimal_places)


def format_signed_currency(value: object, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Currency with an explicit sign for gains: "+₹271.71" / "-₹80.00"."""
    num = parse_number(value)
    formatted = format_currency(num, symbol)
    return f"+{formatted}" if num > 0 else formatted


def format_percent(value: object) -> str:
    """Percentage with 2 decimals and a leading "+" for non-negative values."""
    num = parse_number(value)
    formatted = to_fixed(num, 2)
    return f"{formatted}%" if formatted.startswith("-") else f"+{formatted}%"
