"""goldfolio export / import: JSON backups of the whole portfolio."""

from __future__ import annotations

import click

from goldfolio.core.cli.common import CliContext, reports_errors


@click.command()
@click.argument("path", required=False, type=click.Path())
@click.pass_obj
@reports_errors
def export(ctx: CliContext, path: str | None) -> None:
    """Write a dated backup (to PATH, or the configured backup directory)."""
    import os

    from goldfolio.portfolio.store import export_backup

    state = ctx.load_state()
    if path is None:
        ctx.config.ensure_directories()
        path = os.path.expanduser(ctx.config.get("paths.backup_dir"))
    written = export_backup(state, path)
    click.echo(f"Exported {len(state.transactions)} transactions to {written}")


@click.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--merge", is_flag=True, help="Add transactions whose ids are new instead of replacing.")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_obj
@reports_errors
def import_(ctx: CliContext, path: str, merge: bool, yes: bool) -> None:
    """Load a backup file into the portfolio."""
    from goldfolio.portfolio.store import import_backup

    imported = import_backup(path)
    state = ctx.load_state()

    if merge:
        known = {txn.id for txn in state.transactions}
        new = [txn for txn in imported.transactions if txn.id not in known]
        state.transactions.extend(new)
        ctx.save_state(state)
        click.echo(f"Merged {len(new)} new transactions ({len(imported.transactions) - len(new)} already present)")
        return

    if state.transactions and not yes:
        click.confirm(f"Replace {len(state.transactions)} existing transactions?", abort=True)

    state.transactions = imported.transactions
    state.current_gold_rate = imported.current_gold_rate
    state.last_updated = imported.last_updated
    ctx.save_state(state)
    click.echo(f"Imported {len(imported.transactions)} transactions")
