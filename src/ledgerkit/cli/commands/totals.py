"""Totals, balance and currency commands."""

from datetime import timedelta

import click

from ledgerkit.cli.date_filters import parse_cli_date
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.cli.formatting import format_amount
from ledgerkit.cli.scope_options import scope_from_options, scope_options
from ledgerkit.domain.aggregation import AggregationService
from ledgerkit.domain.filters import exclusive_end


@click.command("totals")
@scope_options
@click.pass_context
def totals(ctx, **options):
    """Show income, expense and balance per currency."""
    service = AggregationService(ctx.obj["db"])

    try:
        scope = scope_from_options(ctx, options)
        results = service.sum_by_kind_and_currency(scope)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not results:
        click.echo("No transactions found.")
        return

    click.echo(f"{'Currency':<10} {'Income':>16} {'Expense':>16} {'Balance':>16} {'Count':>7}")
    click.echo("-" * 69)
    for currency, entry in results.items():
        count = entry.income_count + entry.expense_count
        click.echo(
            f"{currency.value:<10} "
            f"{format_amount(entry.income_minor, currency):>16} "
            f"{format_amount(entry.expense_minor, currency):>16} "
            f"{format_amount(entry.balance_minor, currency):>16} "
            f"{count:>7}"
        )


@click.command("balance")
@scope_options
@click.option("--as-of", help="Last day included in the balance (defaults to --end-date, else all history)")
@click.pass_context
def balance(ctx, as_of: str | None, **options):
    """Show the balance per currency as of a day."""
    service = AggregationService(ctx.obj["db"])
    as_of_day = parse_cli_date(ctx, as_of, "as-of date")

    try:
        scope = scope_from_options(ctx, options)
        as_of_exclusive = exclusive_end(as_of_day) if as_of_day else scope.end
        balances = service.balance_as_of(scope, as_of_exclusive)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not balances:
        click.echo("No transactions found.")
        return

    if as_of_day is not None:
        label = f"as of {as_of_day.isoformat()}"
    elif scope.end is not None:
        label = f"as of {(scope.end - timedelta(days=1)).isoformat()}"
    else:
        label = "all history"
    click.echo(f"Balance ({label}):")
    for currency, amount in balances.items():
        click.echo(f"  {currency.value:<6} {format_amount(amount, currency):>16}")


@click.command("currencies")
@scope_options
@click.pass_context
def currencies(ctx, **options):
    """List currencies that appear in the selected transactions."""
    service = AggregationService(ctx.obj["db"])

    try:
        scope = scope_from_options(ctx, options)
        codes = service.distinct_currencies(scope)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not codes:
        click.echo("No transactions found.")
        return

    for code in sorted(code.value for code in codes):
        click.echo(code)


def register_commands(cli):
    """Register totals commands with main CLI."""
    cli.add_command(totals)
    cli.add_command(balance)
    cli.add_command(currencies)
