"""Fixed-point arithmetic helpers that keep repeated accumulation drift-free.

Every operand is rounded onto a grid of 10^-10 (three digits finer than the
7-place gold precision) before it is combined. Summing hundreds of purchase
weights or totals this way lands exactly where decimal arithmetic would,
instead of wandering in the last binary digits.

Uses Decimal for the scaled integers, returns float.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

SCALE_DIGITS = 10
_SCALE = Decimal(10) ** SCALE_DIGITS
_ONE = Decimal(1)

# Wide enough that multiplying two scaled operands never rounds
_WORKING_PRECISION = 60


def _scaled(value: float | int | Decimal) -> Decimal:
    """Round value to the nearest integer at the 10^10 scale."""
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    if not number.is_finite():
        return Decimal(0)
    with localcontext() as ctx:
        # quantize needs every integer digit of the scaled value
        ctx.prec = max(ctx.prec, number.adjusted() + SCALE_DIGITS + 2)
        return (number * _SCALE).quantize(_ONE, rounding=ROUND_HALF_UP)


def safe_add(a: float | int | Decimal, b: float | int | Decimal) -> float:
    """Add two numbers after rounding both to 10 fractional digits."""
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        return float((_scaled(a) + _scaled(b)) / _SCALE)


def safe_subtract(a: float | int | Decimal, b: float | int | Decimal) -> float:
    """Subtract b from a after rounding both to 10 fractional digits."""
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        return float((_scaled(a) - _scaled(b)) / _SCALE)


def safe_multiply(a: float | int | Decimal, b: float | int | Decimal) -> float:
    """Multiply the rounded operands, then divide out both scales (10^20)."""
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        return float((_scaled(a) * _scaled(b)) / (_SCALE * _SCALE))


def safe_divide(a: float | int | Decimal, b: float | int | Decimal) -> float:
    """Divide a by b; returns 0.0 when b is zero.

    The two scaled integers are divided directly. Both carry the same 10^10
    factor, so the scale cancels and no rescale step follows.
    """
    if b == 0:
        return 0.0
    with localcontext() as ctx:
        ctx.prec = _WORKING_PRECISION
        denominator = _scaled(b)
        if denominator == 0:
            return 0.0
        return float(_scaled(a) / denominator)
