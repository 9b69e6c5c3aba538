"""Gold portfolio: transactions, valuation metrics, persistence and reports."""

from .ledger import (
    PurchasePreview,
    add_transaction,
    create_transaction,
    delete_transaction,
    filter_by_provider,
    preview_purchase,
    replace_transaction,
    set_gold_rate,
    sort_transactions,
)
from .metrics import PortfolioMetrics, compute_metrics, cumulative_investment
from .models import PortfolioSettings, PortfolioState, Transaction
from .store import PortfolioStore, export_backup, import_backup

__all__ = [
    "PortfolioMetrics",
    "PortfolioSettings",
    "PortfolioState",
    "PortfolioStore",
    "PurchasePreview",
    "Transaction",
    "add_transaction",
    "compute_metrics",
    "create_transaction",
    "cumulative_investment",
    "delete_transaction",
    "export_backup",
    "filter_by_provider",
    "import_backup",
    "preview_purchase",
    "replace_transaction",
    "set_gold_rate",
    "sort_transactions",
]
