"""goldfolio add / edit / delete / preview: manage purchase transactions.

Numeric options accept anything the parser does: "1,234.50", "1e-7", "1/4".
"""

from __future__ import annotations

from datetime import date, datetime

import click

from goldfolio.core.cli.common import CliContext, reports_errors
from goldfolio.core.exceptions import TransactionNotFoundError
from goldfolio.numeric.formatting import format_currency, format_gold, format_rate
from goldfolio.numeric.parsing import parse_number


def _autofill(raw: str | None, computed: float) -> str:
    """Use the entered value unless it is blank or zero, else the computed one at 2 places."""
    if raw is not None and parse_number(raw) != 0:
        return raw
    return format_rate(computed)


def _echo_transaction(txn, symbol: str) -> None:
    click.echo(f"  Id:     {txn.id}")
    click.echo(f"  Weight: {format_gold(txn.gold_weight_gram)}g")
    click.echo(f"  Rate:   {symbol}{format_rate(txn.rate_per_gram)}/g")
    click.echo(f"  Amount: {format_currency(txn.total_amount_paid, symbol)}")


@click.command()
@click.option("--weight", required=True, help="Grams purchased.")
@click.option("--rate", "rate_value", default=None, help="Rate per gram. Defaults to the current market rate.")
@click.option("--gst", default=None, help="Tax paid. Computed from the GST rate when omitted.")
@click.option("--total", default=None, help="Total paid. Computed as value + GST when omitted.")
@click.option("--date", "purchase_date", default=None, help="Purchase date (YYYY-MM-DD). Defaults to today.")
@click.option("--time", "purchase_time", default=None, help="Purchase time (HH:MM). Defaults to now.")
@click.option("--provider", default=None, help="Seller. Defaults to the configured provider.")
@click.option("--payment-mode", default=None, help="Payment mode. Defaults to the configured mode.")
@click.pass_obj
@reports_errors
def add(
    ctx: CliContext,
    weight: str,
    rate_value: str | None,
    gst: str | None,
    total: str | None,
    purchase_date: str | None,
    purchase_time: str | None,
    provider: str | None,
    payment_mode: str | None,
) -> None:
    """Record a gold purchase."""
    from goldfolio.portfolio.ledger import add_transaction, create_transaction, preview_purchase

    state = ctx.load_state()
    settings = state.settings
    rate_input = rate_value if rate_value is not None else str(state.current_gold_rate)

    computed = preview_purchase(rate_input, weight, settings.gst_rate)
    txn = create_transaction(
        purchase_date or date.today().isoformat(),
        rate_input,
        weight,
        _autofill(gst, computed.gst),
        _autofill(total, computed.total),
        time=purchase_time or datetime.now().strftime("%H:%M"),
        provider=provider or settings.default_provider,
        payment_mode=payment_mode or settings.default_payment_mode,
    )
    add_transaction(state, txn)
    ctx.save_state(state)

    click.echo("Transaction added.")
    _echo_transaction(txn, settings.currency)


@click.command()
@click.argument("txn_id")
@click.option("--weight", default=None, help="Grams purchased.")
@click.option("--rate", "rate_value", default=None, help="Rate per gram.")
@click.option("--gst", default=None, help="Tax paid.")
@click.option("--total", default=None, help="Total paid.")
@click.option("--date", "purchase_date", default=None, help="Purchase date (YYYY-MM-DD).")
@click.option("--time", "purchase_time", default=None, help="Purchase time (HH:MM).")
@click.option("--provider", default=None)
@click.option("--payment-mode", default=None)
@click.pass_obj
@reports_errors
def edit(
    ctx: CliContext,
    txn_id: str,
    weight: str | None,
    rate_value: str | None,
    gst: str | None,
    total: str | None,
    purchase_date: str | None,
    purchase_time: str | None,
    provider: str | None,
    payment_mode: str | None,
) -> None:
    """Replace a purchase; options not given keep their current values."""
    from goldfolio.portfolio.ledger import find_transaction, replace_transaction

    state = ctx.load_state()
    current = find_transaction(state, txn_id)
    if current is None:
        raise TransactionNotFoundError(txn_id)

    txn = replace_transaction(
        state,
        txn_id,
        purchase_date or current.purchase_date,
        rate_value if rate_value is not None else current.rate_per_gram,
        weight if weight is not None else current.gold_weight_gram,
        gst if gst is not None else current.gst,
        total if total is not None else current.total_amount_paid,
        time=purchase_time if purchase_time is not None else current.time,
        provider=provider if provider is not None else current.provider,
        payment_mode=payment_mode if payment_mode is not None else current.payment_mode,
    )
    ctx.save_state(state)

    click.echo("Transaction updated.")
    _echo_transaction(txn, state.settings.currency)


@click.command()
@click.argument("txn_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
@reports_errors
def delete(ctx: CliContext, txn_id: str, yes: bool) -> None:
    """Delete a purchase."""
    from goldfolio.portfolio.ledger import delete_transaction, find_transaction

    state = ctx.load_state()
    if find_transaction(state, txn_id) is None:
        raise TransactionNotFoundError(txn_id)
    if not yes:
        click.confirm(f"Delete transaction {txn_id}?", abort=True)

    delete_transaction(state, txn_id)
    ctx.save_state(state)
    click.echo("Transaction deleted.")


@click.command()
@click.option("--weight", required=True, help="Grams to buy.")
@click.option("--rate", "rate_value", default=None, help="Rate per gram. Defaults to the current market rate.")
@click.pass_obj
@reports_errors
def preview(ctx: CliContext, weight: str, rate_value: str | None) -> None:
    """Show gold value, GST and total for a prospective purchase."""
    from goldfolio.portfolio.ledger import preview_purchase

    state = ctx.load_state()
    symbol = state.settings.currency
    result = preview_purchase(
        rate_value if rate_value is not None else state.current_gold_rate,
        weight,
        state.settings.gst_rate,
    )
    click.echo(f"Gold value: {format_currency(result.gold_value, symbol)}")
    click.echo(f"GST:        {format_currency(result.gst, symbol)}")
    click.echo(f"Total:      {format_currency(result.total, symbol)}")
