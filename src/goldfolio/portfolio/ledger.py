"""Transaction ledger, the boundary where raw purchase input is validated.

The numeric core accepts anything and resolves garbage to 0. This module is
where that leniency stops: a purchase is only committed with positive weight,
rate and total. Edits replace a transaction wholesale; nothing is patched in
place.
"""

from __future__ import annotations

import random
import string
import time as _time
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from loguru import logger

from goldfolio.core.exceptions import DataProcessingError, TransactionNotFoundError, ValidationError
from goldfolio.numeric.arithmetic import safe_add, safe_multiply
from goldfolio.numeric.formatting import GOLD_WEIGHT, format_gold, format_rate
from goldfolio.numeric.parsing import parse_number

from .models import DEFAULT_GST_RATE, PortfolioState, Transaction

SORT_KEYS = ("date-desc", "date-asc", "weight-desc", "weight-asc", "rate-desc", "rate-asc")
DEFAULT_SORT = "date-desc"
ALL_PROVIDERS = "all"

_ID_ALPHABET = string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class PurchasePreview:
    """Projected cost of a purchase before it is committed."""

    gold_value: float
    gst: float
    total: float


def generate_transaction_id() -> str:
    """Return an id like "txn_1714557600000_k3j9x0a2b"."""
    millis = int(_time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"txn_{millis}_{suffix}"


def preview_purchase(rate: object, weight: object, gst_rate: float = DEFAULT_GST_RATE) -> PurchasePreview:
    """Compute gold value, GST and total for a prospective purchase.

    Returns all zeros when rate or weight is not positive.
    """
    rate_value = parse_number(rate)
    weight_value = parse_number(weight)
    if rate_value <= 0 or weight_value <= 0:
        return PurchasePreview(gold_value=0.0, gst=0.0, total=0.0)

    gold_value = safe_multiply(rate_value, weight_value)
    gst = safe_multiply(gold_value, gst_rate)
    return PurchasePreview(gold_value=gold_value, gst=gst, total=safe_add(gold_value, gst))


def create_transaction(
    purchase_date: date | str | None,
    rate: object,
    weight: object,
    gst: object,
    total: object,
    *,
    time: str = "",
    provider: str = "",
    payment_mode: str = "",
    txn_id: str | None = None,
    created_at: datetime | None = None,
    updated_at: datetime | None = None,
) -> Transaction:
    """Parse and validate raw purchase input into a Transaction.

    Raises:
        ValidationError: If the date is missing or weight, rate or total is
            not greater than zero.
    """
    if not purchase_date:
        raise ValidationError("Purchase date is required")

    weight_value = parse_number(weight)
    rate_value = parse_number(rate)
    total_value = parse_number(total)

    if weight_value <= 0 or rate_value <= 0 or total_value <= 0:
        raise ValidationError(
            f"Weight, rate and total must all be greater than 0 "
            f"(weight={weight!r}, rate={rate!r}, total={total!r})"
        )

    if weight_value < GOLD_WEIGHT.near_zero_threshold:
        logger.warning(f"Recording {format_gold(weight_value)}g, below the 0.0000001g precision floor")

    try:
        return Transaction(
            id=txn_id or generate_transaction_id(),
            purchase_date=purchase_date,
            rate_per_gram=rate_value,
            gold_weight_gram=weight_value,
            gst=parse_number(gst),
            total_amount_paid=total_value,
            time=time,
            provider=provider,
            payment_mode=payment_mode,
            created_at=created_at or datetime.now(),
            updated_at=updated_at,
        )
    except DataProcessingError as e:
        raise ValidationError(str(e)) from e


def add_transaction(state: PortfolioState, txn: Transaction) -> Transaction:
    """Append a committed transaction to the portfolio."""
    state.transactions.append(txn)
    logger.info(f"Added {txn.id}: {format_gold(txn.gold_weight_gram)}g @ {format_rate(txn.rate_per_gram)}/g")
    return txn


def find_transaction(state: PortfolioState, txn_id: str) -> Transaction | None:
    """Return the transaction with txn_id, or None."""
    return next((txn for txn in state.transactions if txn.id == txn_id), None)


def _index_of(state: PortfolioState, txn_id: str) -> int:
    for index, txn in enumerate(state.transactions):
        if txn.id == txn_id:
            return index
    raise TransactionNotFoundError(txn_id)


def replace_transaction(
    state: PortfolioState,
    txn_id: str,
    purchase_date: date | str | None,
    rate: object,
    weight: object,
    gst: object,
    total: object,
    *,
    time: str = "",
    provider: str = "",
    payment_mode: str = "",
) -> Transaction:
    """Replace a transaction with freshly validated values.

    The id and creation time carry over; updated_at is stamped now.

    Raises:
        TransactionNotFoundError: If txn_id is not in the portfolio.
        ValidationError: If the new values fail validation.
    """
    index = _index_of(state, txn_id)
    previous = state.transactions[index]
    replacement = create_transaction(
        purchase_date,
        rate,
        weight,
        gst,
        total,
        time=time,
        provider=provider,
        payment_mode=payment_mode,
        txn_id=previous.id,
        created_at=previous.created_at,
        updated_at=datetime.now(),
    )
    state.transactions[index] = replacement
    logger.info(f"Updated {txn_id}")
    return replacement


def delete_transaction(state: PortfolioState, txn_id: str) -> bool:
    """Remove a transaction. Returns False when the id was not present."""
    remaining = [txn for txn in state.transactions if txn.id != txn_id]
    if len(remaining) == len(state.transactions):
        return False
    state.transactions = remaining
    logger.info(f"Deleted {txn_id}")
    return True


def set_gold_rate(state: PortfolioState, rate: object) -> float:
    """Update the market rate used for valuation.

    Raises:
        ValidationError: If the parsed rate is not positive.
    """
    new_rate = parse_number(rate)
    if new_rate <= 0:
        raise ValidationError(f"Gold rate must be positive, got {rate!r}")

    old_rate = state.current_gold_rate
    state.current_gold_rate = new_rate
    state.last_updated = datetime.now()

    logger.info(f"Gold rate updated: {format_rate(old_rate)}/g -> {format_rate(new_rate)}/g")
    return new_rate


def sort_transactions(transactions: Iterable[Transaction], sort_by: str = DEFAULT_SORT) -> list[Transaction]:
    """Return transactions ordered by one of SORT_KEYS.

    Unknown keys fall back to newest-first.
    """
    items = list(transactions)
    match sort_by:
        case "date-asc":
            return sorted(items, key=lambda t: t.purchase_date)
        case "weight-desc":
            return sorted(items, key=lambda t: t.gold_weight_gram, reverse=True)
        case "weight-asc":
            return sorted(items, key=lambda t: t.gold_weight_gram)
        case "rate-desc":
            return sorted(items, key=lambda t: t.rate_per_gram, reverse=True)
        case "rate-asc":
            return sorted(items, key=lambda t: t.rate_per_gram)
        case _:
            if sort_by != DEFAULT_SORT:
                logger.warning(f"Unknown sort key {sort_by!r}, using {DEFAULT_SORT}")
            return sorted(items, key=lambda t: t.purchase_date, reverse=True)


def filter_by_provider(transactions: Iterable[Transaction], provider: str = ALL_PROVIDERS) -> list[Transaction]:
    """Keep transactions from one provider; "all" keeps everything."""
    if not provider or provider == ALL_PROVIDERS:
        return list(transactions)
    return [txn for txn in transactions if txn.provider == provider]


def list_providers(transactions: Iterable[Transaction]) -> list[str]:
    """Distinct non-empty providers, alphabetically."""
    return sorted({txn.provider for txn in transactions if txn.provider})
