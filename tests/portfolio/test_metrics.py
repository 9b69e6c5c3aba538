"""Tests for goldfolio.portfolio.metrics."""

from datetime import date

import pytest

from goldfolio.portfolio.metrics import PortfolioMetrics, compute_metrics, cumulative_investment


@pytest.mark.smoke
class TestComputeMetrics:
    def test_two_purchases(self, sample_transactions):
        metrics = compute_metrics(sample_transactions, 6500)

        assert metrics.total_gold == 3.75
        assert metrics.total_invested == 24103.29
        assert metrics.current_value == 24375.00
        assert metrics.profit_loss == 271.71
        assert metrics.is_gain
        assert metrics.transaction_count == 2

    def test_empty_collection(self):
        metrics = compute_metrics([], 6500)
        assert metrics == PortfolioMetrics()
        assert metrics.transaction_count == 0
        assert metrics.profit_loss_percent == 0

    def test_percent_and_average(self, sample_transactions):
        metrics = compute_metrics(sample_transactions, 6500)
        assert metrics.profit_loss_percent == pytest.approx(271.71 / 24103.29 * 100)
        assert metrics.average_buy_price == pytest.approx(24103.29 / 3.75)
        assert metrics.total_gst == 702.04


class TestComputeMetricsInputs:
    def test_raw_json_mappings(self):
        raw = [
            {"goldWeightGram": "2.5", "totalAmountPaid": "16,095.04", "gst": "468.79"},
            {"goldWeightGram": 1.25, "totalAmountPaid": 8008.25, "gst": 233.25},
        ]
        metrics = compute_metrics(raw, "6,500")
        assert metrics.total_gold == 3.75
        assert metrics.profit_loss == 271.71

    def test_malformed_fields_contribute_zero(self):
        raw = [
            {"goldWeightGram": "abc", "totalAmountPaid": "", "gst": None},
            {"goldWeightGram": 1, "totalAmountPaid": 6000},
        ]
        metrics = compute_metrics(raw, 6500)
        assert metrics.total_gold == 1.0
        assert metrics.total_invested == 6000.0
        assert metrics.transaction_count == 2

    def test_loss(self, sample_transactions):
        metrics = compute_metrics(sample_transactions, 6000)
        assert metrics.current_value == 22500.0
        assert metrics.profit_loss == -1603.29
        assert not metrics.is_gain

    def test_garbage_rate(self, sample_transactions):
        metrics = compute_metrics(sample_transactions, "n/a")
        assert metrics.current_value == 0.0
        assert metrics.profit_loss == -24103.29

    def test_zero_weight_has_no_average(self):
        metrics = compute_metrics([{"goldWeightGram": 0, "totalAmountPaid": 100}], 6500)
        assert metrics.average_buy_price == 0.0

    def test_oversized_weight_does_not_raise(self):
        metrics = compute_metrics([{"goldWeightGram": "1e60", "totalAmountPaid": "100", "gst": "3"}], 6500)
        assert metrics.total_gold == 1e60
        assert metrics.current_value == pytest.approx(6.5e63)
        assert metrics.total_gst == 3.0
        assert metrics.transaction_count == 1

    def test_many_micro_purchases_do_not_drift(self):
        raw = [{"goldWeightGram": 0.0000001, "totalAmountPaid": 0.01}] * 1000
        metrics = compute_metrics(raw, 6500)
        assert metrics.total_gold == 0.0001
        assert metrics.total_invested == 10.0
        assert metrics.is_micro_holding


class TestPortfolioMetrics:
    def test_to_dict(self, sample_transactions):
        data = compute_metrics(sample_transactions, 6500).to_dict()
        assert data["total_gold"] == 3.75
        assert data["profit_loss"] == 271.71
        assert data["profit_loss_percent"] == 1.1273

    def test_break_even_is_gain(self):
        assert PortfolioMetrics(profit_loss=0.0).is_gain


class TestCumulativeInvestment:
    def test_sorted_running_total(self, sample_transactions):
        series = cumulative_investment(reversed(sample_transactions))
        assert series == [
            (date(2024, 1, 15), 16095.04),
            (date(2024, 3, 2), 24103.29),
        ]

    def test_empty(self):
        assert cumulative_investment([]) == []
