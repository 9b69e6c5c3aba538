"""goldfolio init: write a starter config file."""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from goldfolio.core.cli.common import CONFIG_PATH


def _load_existing_config(path: Path) -> dict:
    """Load an existing config so re-running init offers current values as defaults."""
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError:
        return {}


@click.command()
@click.option("--path", "config_path", type=click.Path(dir_okay=False), default=None, help="Where to write it.")
@click.option("--force", is_flag=True, help="Reconfigure an existing config file.")
def init(config_path: str | None, force: bool) -> None:
    """Set up goldfolio: currency, default provider and market rate."""
    from rich.console import Console
    from rich.panel import Panel

    from goldfolio.numeric.formatting import format_rate
    from goldfolio.numeric.parsing import parse_number

    target = Path(config_path) if config_path else CONFIG_PATH
    if target.exists() and not force:
        click.echo(f"Config already exists at {target}. Use --force to reconfigure.")
        return

    console = Console()
    existing = _load_existing_config(target)
    if existing:
        console.print(Panel("Reconfiguring goldfolio. Existing values shown as defaults.", title="Goldfolio Setup"))
    else:
        console.print(Panel("Let's set up your gold portfolio.", title="Welcome to Goldfolio"))

    display = existing.get("display", {})
    portfolio = existing.get("portfolio", {})

    currency = click.prompt("Currency symbol", default=display.get("currency_symbol", "₹"))
    provider = click.prompt("Default provider", default=portfolio.get("default_provider", "SafeGold"))
    payment_mode = click.prompt("Default payment mode", default=portfolio.get("default_payment_mode", "UPI"))
    gold_rate = parse_number(
        click.prompt("Current gold rate per gram", default=format_rate(portfolio.get("default_gold_rate", 6500.00)))
    )
    if gold_rate <= 0:
        raise click.BadParameter("Gold rate must be positive", param_hint="gold rate")

    config = dict(existing)
    config["display"] = {**display, "currency_symbol": currency}
    config["portfolio"] = {
        **portfolio,
        "default_provider": provider,
        "default_payment_mode": payment_mode,
        "default_gold_rate": gold_rate,
    }

    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f, sort_keys=False, allow_unicode=True)
    console.print(Panel(f"Config written to {target}", title="Setup complete"))
