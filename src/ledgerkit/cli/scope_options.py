"""Options shared by the commands that aggregate over a transaction scope."""

import click

from ledgerkit.cli.date_filters import resolve_cli_date_range
from ledgerkit.domain.entities import SUPPORTED_CURRENCIES
from ledgerkit.domain.filters import TransactionScope, scope_for_inclusive_range
from ledgerkit.utils.date_parser import PERIODS

_PERIOD_HELP = {
    "this-month": "Filter to current month",
    "this-year": "Filter to current year",
    "this-week": "Filter to current week",
    "last-month": "Filter to previous month",
    "last-year": "Filter to previous year",
    "last-week": "Filter to previous week",
}


def scope_options(func):
    """Attach the shared scope options to a click command."""
    options = [
        click.option("--start-date", help="First day, inclusive (YYYY-MM-DD or relative like 'last month')"),
        click.option("--end-date", help="Last day, inclusive (YYYY-MM-DD or relative like 'today')"),
        *(click.option(f"--{period}", is_flag=True, help=_PERIOD_HELP[period]) for period in PERIODS),
        click.option("--account", "accounts", multiple=True, help="Account id (repeatable)"),
        click.option("--category", "categories", multiple=True, help="Category id (repeatable)"),
        click.option("--merchant", "merchants", multiple=True, help="Merchant id (repeatable)"),
        click.option(
            "--currency",
            type=click.Choice(SUPPORTED_CURRENCIES, case_sensitive=False),
            help="Only transactions in this currency",
        ),
        click.option("--include-archived", is_flag=True, help="Include archived transactions"),
        click.option("--exclude-pending", is_flag=True, help="Exclude pending transactions"),
    ]

    for option in reversed(options):
        func = option(func)
    return func


def scope_from_options(ctx: click.Context, options: dict) -> TransactionScope:
    """Build a TransactionScope from the values of ``scope_options``.

    Raises:
        ValidationError: If the resolved range is inverted
    """
    period_flags = {period: options[period.replace("-", "_")] for period in PERIODS}
    start, end = resolve_cli_date_range(
        ctx,
        start_date=options["start_date"],
        end_date=options["end_date"],
        period_flags=period_flags,
    )
    return scope_for_inclusive_range(
        ctx.obj["workspace"],
        start,
        end,
        account_ids=options["accounts"],
        category_ids=options["categories"],
        merchant_ids=options["merchants"],
        currency=options["currency"],
        include_archived=options["include_archived"],
        include_pending=not options["exclude_pending"],
    )
