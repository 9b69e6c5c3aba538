"""Goldfolio CLI: entry point for portfolio, transaction and backup commands."""

import click

from goldfolio import __version__


@click.group()
@click.version_option(version=__version__, package_name="goldfolio")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (YAML or JSON). Defaults to ~/.goldfolio/config.yaml.",
)
@click.option("--data-file", type=click.Path(dir_okay=False), default=None, help="Portfolio JSON file.")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_file: str | None, verbose: bool) -> None:
    """Goldfolio: track gold purchases and what they are worth today."""
    from goldfolio.core.cli.common import CliContext, load_config
    from goldfolio.core.exceptions import ConfigurationError
    from goldfolio.core.utils.logging import setup_logging
    from goldfolio.portfolio.store import PortfolioStore

    try:
        config = load_config(config_file)
        logging_cfg = config.validated().logging
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(level="DEBUG" if verbose else logging_cfg.level, log_file=logging_cfg.file or None)

    ctx.obj = CliContext(
        config=config,
        store=PortfolioStore(data_file or config.get_data_file(), backup_dir=config.get("paths.backup_dir")),
    )


# Register subcommands
from .backup_cmd import export, import_
from .format_cmd import format_
from .init_cmd import init
from .portfolio_cmd import list_, rate, summary
from .transaction_cmd import add, delete, edit, preview

main.add_command(init)
main.add_command(summary)
main.add_command(list_)
main.add_command(rate)
main.add_command(add)
main.add_command(edit)
main.add_command(delete)
main.add_command(preview)
main.add_command(export)
main.add_command(import_)
main.add_command(format_)
