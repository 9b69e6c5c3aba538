"""Tests for goldfolio.portfolio.report."""

from goldfolio.portfolio.models import PortfolioSettings, PortfolioState, Transaction
from goldfolio.portfolio.report import (
    format_dashboard,
    format_investment_history,
    format_transaction_row,
    format_transaction_table,
    milligram_hint,
    transaction_count_label,
)


def _micro_purchase():
    return Transaction(
        id="txn_micro",
        purchase_date="2024-04-10",
        rate_per_gram=6500,
        gold_weight_gram=0.0005,
        gst=0.1,
        total_amount_paid=3.35,
        provider="SafeGold",
    )


class TestDashboard:
    def test_gain(self, sample_transactions):
        text = format_dashboard(PortfolioState(current_gold_rate=6500, transactions=sample_transactions))
        assert "3.750 g" in text
        assert "₹24,103.29" in text
        assert "₹24,375.00" in text
        assert "₹6500.00/g" in text
        assert "Gain:" in text
        assert "+₹271.71 (+1.13%)" in text
        assert "2 transactions" in text

    def test_loss(self, sample_transactions):
        text = format_dashboard(PortfolioState(current_gold_rate=6000, transactions=sample_transactions))
        assert "Loss:" in text
        assert "-₹1,603.29" in text

    def test_empty(self):
        text = format_dashboard(PortfolioState())
        assert "0.0000000 g" in text
        assert "₹0.00" in text
        assert "0 transactions" in text

    def test_custom_currency(self, sample_transactions):
        state = PortfolioState(settings=PortfolioSettings(currency="$"), transactions=sample_transactions)
        assert "$24,103.29" in format_dashboard(state)

    def test_micro_holding_shows_milligrams(self):
        text = format_dashboard(PortfolioState(transactions=[_micro_purchase()]))
        assert "0.0005000 g" in text
        assert "0.500 milligrams" in text


class TestHelpers:
    def test_count_label(self):
        assert transaction_count_label(1) == "1 transaction"
        assert transaction_count_label(3) == "3 transactions"

    def test_milligram_hint(self):
        assert milligram_hint(0.0005) == "≈ 0.500 milligrams"
        assert milligram_hint(1.5) == ""
        assert milligram_hint(0) == ""


class TestTransactionTable:
    def test_empty(self):
        assert format_transaction_table([]) == "No transactions yet."

    def test_rows(self, sample_transactions):
        text = format_transaction_table(sample_transactions)
        lines = text.splitlines()
        assert lines[0].startswith("Date")
        assert len(lines) == 4
        assert "txn_1" in lines[2]
        assert "15 Jan 2024" in lines[2]
        assert "₹16,095.04" in lines[2]
        assert "*" not in text

    def test_micro_row_is_flagged(self):
        txn = _micro_purchase()
        assert "0.0005000g*" in format_transaction_row(txn)
        assert "micro-purchase" in format_transaction_table([txn])


class TestInvestmentHistory:
    def test_running_total(self, sample_transactions):
        lines = format_investment_history(list(reversed(sample_transactions))).splitlines()
        assert lines[0] == "Invested over time"
        assert lines[2].startswith("15 Jan 2024")
        assert lines[2].endswith("₹16,095.04")
        assert lines[3].endswith("₹24,103.29")

    def test_empty(self):
        assert format_investment_history([]) == "No investment history yet."
