"""Tests for the CLI entry point and commands."""

import json
import os
import sys

import pytest
import yaml
from click.testing import CliRunner
from loguru import logger

from goldfolio.core.cli import main


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def cli(tmp_config_file):
    """Invoke the CLI against a config whose data lives in a temp dir."""
    runner = CliRunner()

    def invoke(*args, input=None):
        return runner.invoke(main, ["--config", tmp_config_file, *args], input=input)

    return invoke


@pytest.fixture
def data_file(tmp_config_file):
    return os.path.join(os.path.dirname(tmp_config_file), "data", "goldfolio_data.json")


def _stored(data_file):
    with open(data_file, encoding="utf-8") as f:
        return json.load(f)


def _add_sample_purchases(cli):
    purchases = [
        ["--weight", "2.5", "--rate", "6250", "--gst", "468.79", "--total", "16,095.04", "--date", "2024-01-15"],
        ["--weight", "1.25", "--rate", "6220", "--gst", "233.25", "--total", "8008.25", "--date", "2024-03-02"],
    ]
    for args, provider in zip(purchases, ["SafeGold", "MMTC-PAMP"]):
        result = cli("add", *args, "--provider", provider)
        assert result.exit_code == 0, result.output


class TestCliGroup:
    def test_help(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Goldfolio" in result.output
        for command in ("init", "summary", "add", "edit", "delete", "export", "import"):
            assert command in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_invalid_config(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({"portfolio": {"gst_rate": 2}}, f)
        result = CliRunner().invoke(main, ["--config", config_path, "summary"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


@pytest.mark.smoke
class TestPortfolioCommands:
    def test_summary_empty(self, cli):
        result = cli("summary")
        assert result.exit_code == 0
        assert "0 transactions" in result.output
        assert "₹6500.00/g" in result.output

    def test_summary_after_purchases(self, cli):
        _add_sample_purchases(cli)
        result = cli("summary")
        assert result.exit_code == 0
        assert "3.750 g" in result.output
        assert "₹24,103.29" in result.output
        assert "+₹271.71" in result.output

    def test_rate(self, cli, data_file):
        result = cli("rate", "6,600")
        assert result.exit_code == 0
        assert "₹6600.00/g" in result.output
        assert _stored(data_file)["user"]["currentGoldRate"] == 6600.0

    def test_rate_rejects_garbage(self, cli):
        result = cli("rate", "abc")
        assert result.exit_code == 1
        assert "must be positive" in result.output

    def test_list(self, cli):
        _add_sample_purchases(cli)
        result = cli("list", "--sort", "date-asc")
        assert result.exit_code == 0
        assert result.output.index("15 Jan 2024") < result.output.index("02 Mar 2024")

    def test_list_by_provider(self, cli):
        _add_sample_purchases(cli)
        result = cli("list", "--provider", "MMTC-PAMP")
        assert "02 Mar 2024" in result.output
        assert "15 Jan 2024" not in result.output

    def test_list_empty(self, cli):
        assert "No transactions yet." in cli("list").output


class TestTransactionCommands:
    def test_add_fills_gst_and_total(self, cli, data_file):
        result = cli("add", "--weight", "1")
        assert result.exit_code == 0, result.output

        txn = _stored(data_file)["transactions"][0]
        assert txn["ratePerGram"] == 6500.0
        assert txn["gst"] == 195.0
        assert txn["totalAmountPaid"] == 6695.0
        assert txn["provider"] == "SafeGold"
        assert txn["paymentMode"] == "UPI"

    def test_add_rejects_zero_weight(self, cli):
        result = cli("add", "--weight", "0")
        assert result.exit_code == 1
        assert "greater than 0" in result.output

    def test_add_micro_purchase(self, cli, data_file):
        result = cli("add", "--weight", "0.0000001", "--total", "0.01")
        assert result.exit_code == 0, result.output
        assert "0.0000001g" in result.output
        assert _stored(data_file)["transactions"][0]["goldWeightGram"] == 0.0000001

    def test_edit(self, cli, data_file):
        _add_sample_purchases(cli)
        txn_id = _stored(data_file)["transactions"][0]["id"]

        result = cli("edit", txn_id, "--weight", "3", "--total", "19000")
        assert result.exit_code == 0, result.output

        txn = _stored(data_file)["transactions"][0]
        assert txn["id"] == txn_id
        assert txn["goldWeightGram"] == 3.0
        assert txn["ratePerGram"] == 6250.0
        assert txn["provider"] == "SafeGold"
        assert "updatedAt" in txn

    def test_edit_missing(self, cli):
        result = cli("edit", "txn_nope", "--weight", "1")
        assert result.exit_code == 1
        assert "Transaction not found: txn_nope" in result.output

    def test_delete_confirmed(self, cli, data_file):
        _add_sample_purchases(cli)
        txn_id = _stored(data_file)["transactions"][0]["id"]

        result = cli("delete", txn_id, input="y\n")
        assert result.exit_code == 0
        assert txn_id not in [t["id"] for t in _stored(data_file)["transactions"]]
        assert len(_stored(data_file)["transactions"]) == 1

    def test_delete_declined(self, cli, data_file):
        _add_sample_purchases(cli)
        txn_id = _stored(data_file)["transactions"][0]["id"]

        result = cli("delete", txn_id, input="n\n")
        assert result.exit_code == 1
        assert len(_stored(data_file)["transactions"]) == 2

    def test_delete_missing(self, cli):
        result = cli("delete", "txn_nope", "--yes")
        assert result.exit_code == 1
        assert "Transaction not found" in result.output

    def test_preview(self, cli):
        result = cli("preview", "--weight", "2.5")
        assert result.exit_code == 0
        assert "₹16,250.00" in result.output
        assert "₹487.50" in result.output
        assert "₹16,737.50" in result.output


class TestBackupCommands:
    def test_export_and_import(self, cli, tmp_dir, data_file):
        _add_sample_purchases(cli)
        backup_path = os.path.join(tmp_dir, "backup.json")

        result = cli("export", backup_path)
        assert result.exit_code == 0
        assert "Exported 2 transactions" in result.output
        assert _stored(backup_path)["metadata"]["version"] == "2.0"

        os.remove(data_file)
        result = cli("import", backup_path)
        assert result.exit_code == 0, result.output
        assert "Imported 2 transactions" in result.output
        assert len(_stored(data_file)["transactions"]) == 2

    def test_export_to_backup_dir(self, cli, tmp_dir):
        result = cli("export")
        assert result.exit_code == 0
        assert os.listdir(os.path.join(tmp_dir, "data", "backups"))[0].startswith("goldfolio-backup-")

    def test_import_merge(self, cli, tmp_dir, data_file):
        _add_sample_purchases(cli)
        backup_path = os.path.join(tmp_dir, "backup.json")
        cli("export", backup_path)
        cli("add", "--weight", "1")

        result = cli("import", backup_path, "--merge")
        assert result.exit_code == 0
        assert "Merged 0 new transactions" in result.output
        assert len(_stored(data_file)["transactions"]) == 3

    def test_import_replace_needs_confirmation(self, cli, tmp_dir, data_file):
        _add_sample_purchases(cli)
        backup_path = os.path.join(tmp_dir, "backup.json")
        cli("export", backup_path)
        cli("add", "--weight", "1")

        result = cli("import", backup_path, input="n\n")
        assert result.exit_code == 1
        assert len(_stored(data_file)["transactions"]) == 3

        result = cli("import", backup_path, "--yes")
        assert result.exit_code == 0
        assert len(_stored(data_file)["transactions"]) == 2


class TestFormatCommand:
    @pytest.mark.parametrize(
        "kind, value, expected",
        [
            ("gold", "2.5", "2.500"),
            ("gold", "0.0005", "0.0005000"),
            ("currency", "1234567.89", "₹12,34,567.89"),
            ("rate", "6,525.5", "6525.50"),
        ],
    )
    def test_format(self, cli, kind, value, expected):
        result = cli("format", kind, value)
        assert result.exit_code == 0
        assert result.output.strip() == expected


class TestInitCommand:
    def test_init_help(self):
        result = CliRunner().invoke(main, ["init", "--help"])
        assert result.exit_code == 0
        assert "Set up" in result.output

    def test_writes_config(self, cli, tmp_dir):
        path = os.path.join(tmp_dir, "new", "config.yaml")
        result = cli("init", "--path", path, input="$\nAugmont\nCard\n7,100\n")
        assert result.exit_code == 0, result.output

        with open(path, encoding="utf-8") as f:
            written = yaml.safe_load(f)
        assert written["display"]["currency_symbol"] == "$"
        assert written["portfolio"]["default_provider"] == "Augmont"
        assert written["portfolio"]["default_gold_rate"] == 7100.0

    def test_keeps_existing(self, cli, tmp_dir):
        path = os.path.join(tmp_dir, "config.yaml")
        result = cli("init", "--path", path)
        assert "already exists" in result.output


class TestDataFileOption:
    def test_data_file_override(self, tmp_config_file, tmp_dir):
        other = os.path.join(tmp_dir, "elsewhere.json")
        result = CliRunner().invoke(main, ["--config", tmp_config_file, "--data-file", other, "rate", "7000"])
        assert result.exit_code == 0
        assert os.path.exists(other)


class TestSummaryHistory:
    def test_history_flag(self, cli):
        _add_sample_purchases(cli)
        result = cli("summary", "--history")
        assert result.exit_code == 0
        assert "Invested over time" in result.output
        assert "₹24,103.29" in result.output

    def test_unknown_provider_lists_known_ones(self, cli):
        _add_sample_purchases(cli)
        result = cli("list", "--provider", "Nobody")
        assert result.exit_code == 0
        assert "Providers: MMTC-PAMP, SafeGold" in result.output


class TestInitReconfigure:
    def test_force_keeps_other_sections(self, cli, tmp_config_file):
        result = cli("init", "--path", tmp_config_file, "--force", input="\n\nNetBanking\n\n")
        assert result.exit_code == 0, result.output
        assert "Reconfiguring" in result.output

        with open(tmp_config_file, encoding="utf-8") as f:
            written = yaml.safe_load(f)
        assert written["portfolio"]["default_payment_mode"] == "NetBanking"
        assert written["portfolio"]["default_provider"] == "SafeGold"
        assert written["portfolio"]["default_gold_rate"] == 6500.0
        assert written["paths"]["data_dir"].endswith("data")
