"""Portfolio data models.

A Transaction is one gold purchase. Numeric fields always pass through
parse_number, so values that were persisted as text ("1,234.50", "1e-7")
load the same as numbers, and gold_value is always re-derived from
rate × weight instead of being trusted from input.

The JSON document uses camelCase keys:

    {
      "config": {"currency": "₹", "defaultProvider": "SafeGold", ...},
      "user": {"currentGoldRate": 6500.0, "lastUpdated": "2024-05-01T10:00:00"},
      "transactions": [{"id": "txn_...", "date": "2024-05-01", ...}]
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from goldfolio.core.exceptions import DataProcessingError
from goldfolio.core.types import TransactionDict
from goldfolio.numeric.arithmetic import safe_multiply
from goldfolio.numeric.formatting import CURRENCY, DEFAULT_CURRENCY_SYMBOL, GOLD_WEIGHT, RATE
from goldfolio.numeric.parsing import parse_number

DEFAULT_GOLD_RATE = 6500.00
DEFAULT_GST_RATE = 0.03

_NUMERIC_FIELDS = ("rate_per_gram", "gold_weight_gram", "gst", "total_amount_paid")

# Maps Transaction attributes to their JSON keys
JSON_KEYS = {
    "id": "id",
    "purchase_date": "date",
    "time": "time",
    "provider": "provider",
    "payment_mode": "paymentMode",
    "rate_per_gram": "ratePerGram",
    "gold_weight_gram": "goldWeightGram",
    "gold_value": "goldValue",
    "gst": "gst",
    "total_amount_paid": "totalAmountPaid",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


def _parse_date(value: str | date | None) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise DataProcessingError("Transaction date is required")
    try:
        # Tolerate full ISO timestamps
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise DataProcessingError(f"Invalid transaction date: {value!r}") from e


def _parse_datetime(value: str | datetime | None) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise DataProcessingError(f"Invalid timestamp: {value!r}") from e


def _format_datetime(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    return dt.isoformat(timespec="seconds")


@dataclass(frozen=True)
class Transaction:
    """A single gold purchase.

    Attributes:
        id: Unique identifier, e.g. "txn_1714557600000_k3j9x0a2b".
        purchase_date: Day of purchase.
        rate_per_gram: Market rate paid per gram.
        gold_weight_gram: Grams purchased (7-place precision).
        gst: Tax charged on the purchase.
        total_amount_paid: Amount debited, tax included.
        time: Time of day as "HH:MM" (optional).
        provider: Seller, e.g. "SafeGold".
        payment_mode: e.g. "UPI", "Card".
        created_at: When the record was first committed.
        updated_at: When the record was last replaced by an edit.
        gold_value: rate × weight, derived with safe_multiply.
    """

    id: str
    purchase_date: date
    rate_per_gram: float
    gold_weight_gram: float
    gst: float
    total_amount_paid: float
    time: str = ""
    provider: str = ""
    payment_mode: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    gold_value: float = field(init=False)

    def __post_init__(self):
        # frozen: coerce through object.__setattr__
        object.__setattr__(self, "purchase_date", _parse_date(self.purchase_date))
        for field_name in _NUMERIC_FIELDS:
            object.__setattr__(self, field_name, parse_number(getattr(self, field_name)))
        object.__setattr__(self, "gold_value", safe_multiply(self.rate_per_gram, self.gold_weight_gram))

    @property
    def is_micro(self) -> bool:
        """True for purchases under 0.001 g, which get full-precision display."""
        return self.gold_weight_gram < GOLD_WEIGHT.micro_threshold

    @classmethod
    def from_dict(cls, data: TransactionDict) -> Transaction:
        """Build a Transaction from its JSON form, re-parsing numeric fields."""
        if not data.get("id"):
            raise DataProcessingError("Transaction is missing an id")
        return cls(
            id=str(data["id"]),
            purchase_date=data.get("date"),
            rate_per_gram=data.get("ratePerGram"),
            gold_weight_gram=data.get("goldWeightGram"),
            gst=data.get("gst"),
            total_amount_paid=data.get("totalAmountPaid"),
            time=data.get("time") or "",
            provider=data.get("provider") or "",
            payment_mode=data.get("paymentMode") or "",
            created_at=_parse_datetime(data.get("createdAt")),
            updated_at=_parse_datetime(data.get("updatedAt")),
        )

    def to_dict(self) -> TransactionDict:
        """Convert to the camelCase JSON form."""
        data: TransactionDict = {
            "id": self.id,
            "date": self.purchase_date.isoformat(),
            "time": self.time,
            "provider": self.provider,
            "paymentMode": self.payment_mode,
            "ratePerGram": self.rate_per_gram,
            "goldWeightGram": self.gold_weight_gram,
            "goldValue": self.gold_value,
            "gst": self.gst,
            "totalAmountPaid": self.total_amount_paid,
            "createdAt": _format_datetime(self.created_at),
        }
        if self.updated_at is not None:
            data["updatedAt"] = _format_datetime(self.updated_at)
        return data


@dataclass
class PortfolioSettings:
    """User-level display and entry defaults."""

    currency: str = DEFAULT_CURRENCY_SYMBOL
    default_provider: str = "SafeGold"
    default_payment_mode: str = "UPI"
    gst_rate: float = DEFAULT_GST_RATE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PortfolioSettings:
        defaults = cls()
        gst_rate = data.get("gstRate")
        return cls(
            currency=data.get("currency") or defaults.currency,
            default_provider=data.get("defaultProvider") or defaults.default_provider,
            default_payment_mode=data.get("defaultPaymentMode") or defaults.default_payment_mode,
            gst_rate=parse_number(gst_rate) if gst_rate is not None else defaults.gst_rate,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "currency": self.currency,
            "defaultProvider": self.default_provider,
            "defaultPaymentMode": self.default_payment_mode,
            "gstRate": self.gst_rate,
            "decimalSettings": {
                "goldDecimalPlaces": GOLD_WEIGHT.decimal_places,
                "currencyDecimalPlaces": CURRENCY.decimal_places,
                "rateDecimalPlaces": RATE.decimal_places,
            },
        }


@dataclass
class PortfolioState:
    """Everything the tracker owns: settings, the market rate, and purchases.

    Held by the caller and passed explicitly into the ledger, store and
    metrics functions; nothing in goldfolio keeps it in module state.
    """

    settings: PortfolioSettings = field(default_factory=PortfolioSettings)
    current_gold_rate: float = DEFAULT_GOLD_RATE
    last_updated: datetime = field(default_factory=datetime.now)
    transactions: list[Transaction] = field(default_factory=list)

    def __post_init__(self):
        self.current_gold_rate = parse_number(self.current_gold_rate)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PortfolioState:
        """Build state from the JSON document (or a backup export)."""
        if not isinstance(data, dict):
            raise DataProcessingError(f"Portfolio document must be an object, got {type(data).__name__}")

        user = data.get("user") or {}
        raw_transactions = data.get("transactions") or []
        if not isinstance(raw_transactions, list):
            raise DataProcessingError("'transactions' must be a list")

        rate = parse_number(user.get("currentGoldRate"))
        return cls(
            settings=PortfolioSettings.from_dict(data.get("config") or {}),
            current_gold_rate=rate if rate > 0 else DEFAULT_GOLD_RATE,
            last_updated=_parse_datetime(user.get("lastUpdated")) or datetime.now(),
            transactions=[Transaction.from_dict(txn) for txn in raw_transactions],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "config": self.settings.to_dict(),
            "user": {
                "currentGoldRate": self.current_gold_rate,
                "lastUpdated": _format_datetime(self.last_updated),
            },
            "transactions": [txn.to_dict() for txn in self.transactions],
        }
