"""Plain-text dashboard and transaction listing.

Every number shown here comes out of the precision formatters; nothing is
rendered with ad-hoc format specs.
"""

from __future__ import annotations

from collections.abc import Sequence

from goldfolio.numeric.arithmetic import safe_multiply
from goldfolio.numeric.formatting import (
    DEFAULT_CURRENCY_SYMBOL,
    GOLD_WEIGHT,
    format_currency,
    format_gold,
    format_percent,
    format_rate,
    format_signed_currency,
)

from .metrics import PortfolioMetrics, compute_metrics, cumulative_investment
from .models import PortfolioState, Transaction

_WIDTH = 72


def transaction_count_label(count: int) -> str:
    """Label such as "1 transaction" or "3 transactions"."""
    return f"{count} transaction{'' if count == 1 else 's'}"


def milligram_hint(total_gold: float) -> str:
    """Hint shown for trace holdings, e.g. "≈ 0.500 milligrams"; empty otherwise."""
    if not 0 < total_gold < GOLD_WEIGHT.micro_threshold:
        return ""
    return f"≈ {format_gold(safe_multiply(total_gold, 1000))} milligrams"


def format_dashboard(state: PortfolioState, metrics: PortfolioMetrics | None = None) -> str:
    """Render the portfolio summary card as text."""
    metrics = metrics or compute_metrics(state.transactions, state.current_gold_rate)
    symbol = state.settings.currency

    status = "Gain" if metrics.is_gain else "Loss"
    gold_line = f"{format_gold(metrics.total_gold)} g"
    hint = milligram_hint(metrics.total_gold)
    if hint:
        gold_line = f"{gold_line}  ({hint})"

    lines = [
        "=" * _WIDTH,
        "  Gold Portfolio",
        "=" * _WIDTH,
        f"{'Total Gold:':<18}{gold_line}",
        f"{'Total Invested:':<18}{format_currency(metrics.total_invested, symbol)}",
        f"{'Current Value:':<18}{format_currency(metrics.current_value, symbol)}",
        f"{'Current Rate:':<18}{symbol}{format_rate(state.current_gold_rate)}/g",
        f"{status + ':':<18}{format_signed_currency(metrics.profit_loss, symbol)}"
        f" ({format_percent(metrics.profit_loss_percent)})",
        f"{'GST Paid:':<18}{format_currency(metrics.total_gst, symbol)}",
        f"{'Avg Buy Price:':<18}{symbol}{format_rate(metrics.average_buy_price)}/g",
        "-" * _WIDTH,
        transaction_count_label(metrics.transaction_count),
    ]
    return "\n".join(lines)


def format_transaction_row(txn: Transaction, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """One listing line; micro purchases are flagged with "*"."""
    day = txn.purchase_date.strftime("%d %b %Y")
    weight = f"{format_gold(txn.gold_weight_gram)}g{'*' if txn.is_micro else ''}"
    rate = f"{symbol}{format_rate(txn.rate_per_gram)}/g"
    return (
        f"{day:<12} {txn.time or '':<5} {txn.provider[:12]:<12} {rate:>13} {weight:>13} "
        f"{format_currency(txn.gst, symbol):>12} {format_currency(txn.total_amount_paid, symbol):>14}  {txn.id}"
    )


def format_transaction_table(transactions: Sequence[Transaction], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Render a listing of transactions in the order given."""
    if not transactions:
        return "No transactions yet."

    header = f"{'Date':<12} {'Time':<5} {'Provider':<12} {'Rate':>13} {'Weight':>13} {'GST':>12} {'Total':>14}  Id"
    lines = [header, "-" * len(header)]
    lines.extend(format_transaction_row(txn, symbol) for txn in transactions)
    if any(txn.is_micro for txn in transactions):
        lines.append("* micro-purchase under 0.001 g, shown at full precision")
    return "\n".join(lines)


def format_investment_history(transactions: Sequence[Transaction], symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Running total invested, one line per purchase in date order."""
    series = cumulative_investment(transactions)
    if not series:
        return "No investment history yet."

    lines = ["Invested over time", "-" * 34]
    lines.extend(f"{day.strftime('%d %b %Y'):<12} {format_currency(total, symbol):>20}" for day, total in series)
    return "\n".join(lines)
