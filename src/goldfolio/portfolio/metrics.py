"""
Portfolio metrics: valuation and profit/loss over the purchase history.

Totals are folded with safe_add, never native "+", so a ledger of hundreds
of small purchases sums to exactly what decimal arithmetic would give.
Metrics are derived on demand from a transaction snapshot and the current
market rate; they are never persisted.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date

from loguru import logger

from goldfolio.numeric.arithmetic import safe_add, safe_divide, safe_multiply, safe_subtract
from goldfolio.numeric.formatting import GOLD_WEIGHT
from goldfolio.numeric.parsing import parse_number

from .models import JSON_KEYS, Transaction

TransactionLike = Transaction | Mapping


@dataclass(frozen=True)
class PortfolioMetrics:
    """Aggregate valuation of a gold portfolio."""

    total_gold: float = 0.0
    total_invested: float = 0.0
    total_gst: float = 0.0
    current_value: float = 0.0
    profit_loss: float = 0.0
    profit_loss_percent: float = 0.0
    average_buy_price: float = 0.0
    transaction_count: int = 0

    @property
    def is_gain(self) -> bool:
        """True when the holding is at or above its cost."""
        return self.profit_loss >= 0

    @property
    def is_micro_holding(self) -> bool:
        """True when the whole holding is a trace amount (under 0.001 g)."""
        return 0 < self.total_gold < GOLD_WEIGHT.micro_threshold

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_gold": self.total_gold,
            "total_invested": self.total_invested,
            "total_gst": self.total_gst,
            "current_value": self.current_value,
            "profit_loss": self.profit_loss,
            "profit_loss_percent": round(self.profit_loss_percent, 4),
            "average_buy_price": self.average_buy_price,
            "transaction_count": self.transaction_count,
        }


def _numeric_field(txn: TransactionLike, attr: str) -> float:
    """Read a numeric field from a Transaction or a raw JSON mapping."""
    if isinstance(txn, Mapping):
        return parse_number(txn.get(JSON_KEYS[attr]))
    return parse_number(getattr(txn, attr, None))


def compute_metrics(transactions: Sequence[TransactionLike], current_rate: object) -> PortfolioMetrics:
    """Fold a transaction collection into portfolio metrics.

    Args:
        transactions: Transaction objects or their camelCase JSON mappings.
            Malformed numeric fields contribute 0.
        current_rate: Market rate per gram, as a number or raw text.

    Returns:
        PortfolioMetrics; all zeros for an empty collection.
    """
    rate = parse_number(current_rate)

    total_gold = 0.0
    total_invested = 0.0
    total_gst = 0.0

    for txn in transactions:
        total_gold = safe_add(total_gold, _numeric_field(txn, "gold_weight_gram"))
        total_invested = safe_add(total_invested, _numeric_field(txn, "total_amount_paid"))
        total_gst = safe_add(total_gst, _numeric_field(txn, "gst"))

    current_value = safe_multiply(total_gold, rate)
    profit_loss = safe_subtract(current_value, total_invested)
    profit_loss_percent = profit_loss / total_invested * 100 if total_invested > 0 else 0.0
    average_buy_price = safe_divide(total_invested, total_gold) if total_gold > 0 else 0.0

    logger.debug(
        f"Metrics: {len(transactions)} txns, {total_gold}g @ {rate}/g "
        f"= {current_value} vs invested {total_invested}"
    )

    return PortfolioMetrics(
        total_gold=total_gold,
        total_invested=total_invested,
        total_gst=total_gst,
        current_value=current_value,
        profit_loss=profit_loss,
        profit_loss_percent=profit_loss_percent,
        average_buy_price=average_buy_price,
        transaction_count=len(transactions),
    )


def cumulative_investment(transactions: Iterable[Transaction]) -> list[tuple[date, float]]:
    """Running total of amount paid, in purchase-date order.

    One point per transaction; the series a value-over-time chart plots.
    """
    ordered = sorted(transactions, key=lambda txn: txn.purchase_date)
    series = []
    running = 0.0
    for txn in ordered:
        running = safe_add(running, txn.total_amount_paid)
        series.append((txn.purchase_date, running))
    return series
