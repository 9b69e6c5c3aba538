"""Shared test fixtures for goldfolio."""

import os
import tempfile

import pytest


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file whose paths all live under tmp_dir."""
    import yaml

    data_dir = os.path.join(tmp_dir, "data")
    config_data = {
        "paths": {
            "data_dir": data_dir,
            "data_file": os.path.join(data_dir, "goldfolio_data.json"),
            "backup_dir": os.path.join(data_dir, "backups"),
            "log_dir": os.path.join(data_dir, "logs"),
        },
        "portfolio": {
            "default_provider": "SafeGold",
            "default_gold_rate": 6500.00,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def sample_transactions():
    """Two purchases whose totals are easy to check by hand."""
    from goldfolio.portfolio.models import Transaction

    return [
        Transaction(
            id="txn_1",
            purchase_date="2024-01-15",
            rate_per_gram=6250.00,
            gold_weight_gram=2.5,
            gst=468.79,
            total_amount_paid=16095.04,
            provider="SafeGold",
        ),
        Transaction(
            id="txn_2",
            purchase_date="2024-03-02",
            rate_per_gram=6220.00,
            gold_weight_gram=1.25,
            gst=233.25,
            total_amount_paid=8008.25,
            provider="MMTC-PAMP",
        ),
    ]
