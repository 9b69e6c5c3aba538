"""goldfolio summary / list / rate: view the portfolio and update the market rate."""

from __future__ import annotations

import click

from goldfolio.core.cli.common import CliContext, reports_errors
from goldfolio.portfolio.ledger import ALL_PROVIDERS, DEFAULT_SORT, SORT_KEYS


@click.command()
@click.option("--history", is_flag=True, help="Also show the running total invested by date.")
@click.pass_obj
@reports_errors
def summary(ctx: CliContext, history: bool) -> None:
    """Show holdings, value and profit/loss at the current rate."""
    from goldfolio.portfolio.report import format_dashboard, format_investment_history

    state = ctx.load_state()
    click.echo(format_dashboard(state))
    if history:
        click.echo()
        click.echo(format_investment_history(state.transactions, state.settings.currency))


@click.command(name="list")
@click.option("--sort", "sort_by", type=click.Choice(SORT_KEYS), default=DEFAULT_SORT, show_default=True)
@click.option("--provider", default=ALL_PROVIDERS, show_default=True, help="Only show one provider.")
@click.pass_obj
@reports_errors
def list_(ctx: CliContext, sort_by: str, provider: str) -> None:
    """List purchases."""
    from goldfolio.portfolio.ledger import filter_by_provider, list_providers, sort_transactions
    from goldfolio.portfolio.report import format_transaction_table

    state = ctx.load_state()
    transactions = sort_transactions(filter_by_provider(state.transactions, provider), sort_by)
    if state.transactions and not transactions:
        click.echo(f"No transactions from {provider}. Providers: {', '.join(list_providers(state.transactions))}")
        return
    click.echo(format_transaction_table(transactions, state.settings.currency))


@click.command()
@click.argument("value")
@click.pass_obj
@reports_errors
def rate(ctx: CliContext, value: str) -> None:
    """Set the current market rate per gram (e.g. 6,525.50)."""
    from goldfolio.numeric.formatting import format_rate
    from goldfolio.portfolio.ledger import set_gold_rate

    state = ctx.load_state()
    new_rate = set_gold_rate(state, value)
    ctx.save_state(state)
    click.echo(f"Gold rate set to {state.settings.currency}{format_rate(new_rate)}/g")
