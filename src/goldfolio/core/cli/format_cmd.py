"""goldfolio format: render a number the way the dashboard would."""

from __future__ import annotations

import click

from goldfolio.core.cli.common import CliContext


@click.command(name="format")
@click.argument("kind", type=click.Choice(["gold", "currency", "rate"]))
@click.argument("value")
@click.pass_obj
def format_(ctx: CliContext, kind: str, value: str) -> None:
    """Format VALUE as a gold weight, currency amount or rate."""
    from goldfolio.numeric.formatting import format_currency, format_gold, format_rate

    if kind == "gold":
        click.echo(format_gold(value))
    elif kind == "currency":
        click.echo(format_currency(value, ctx.config.get("display.currency_symbol", "₹")))
    else:
        click.echo(format_rate(value))
