"""Dashboard summary command."""

import click

from ledgerkit.cli.commands.top import print_ranked
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.cli.formatting import format_money
from ledgerkit.cli.scope_options import scope_from_options, scope_options
from ledgerkit.domain.aggregation import DEFAULT_TOP_LIMIT, AggregationService
from ledgerkit.domain.entities import TransactionKind


@click.command("summary")
@scope_options
@click.option("--limit", type=int, default=DEFAULT_TOP_LIMIT, help="Entries per ranked list")
@click.pass_context
def summary(ctx, limit: int, **options):
    """Show totals, balance, change and top breakdowns for a period."""
    service = AggregationService(ctx.obj["db"])

    try:
        scope = scope_from_options(ctx, options)
        dashboard = service.summarize(scope, limit)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not dashboard.totals and not dashboard.balance_as_of_end:
        click.echo("No transactions found.")
        return

    click.echo("Totals:")
    for currency, entry in dashboard.totals.items():
        click.echo(
            f"  income {format_money(entry.income_minor, currency)}"
            f"  expense {format_money(entry.expense_minor, currency)}"
            f"  balance {format_money(entry.balance_minor, currency)}"
        )

    click.echo("\nBalance at end of period:")
    for currency, amount in dashboard.balance_as_of_end.items():
        click.echo(f"  {format_money(amount, currency)}")

    click.echo("\nChange over period:")
    for currency, amount in dashboard.total_change.items():
        click.echo(f"  {format_money(amount, currency)}")

    sections = [
        ("Top expense categories", dashboard.top_categories[TransactionKind.EXPENSE]),
        ("Top expense merchants", dashboard.top_merchants[TransactionKind.EXPENSE]),
        ("Top expense groups", dashboard.top_groups[TransactionKind.EXPENSE]),
        ("Top income categories", dashboard.top_categories[TransactionKind.INCOME]),
    ]
    for title, entries in sections:
        if not entries:
            continue
        click.echo(f"\n{title}:")
        print_ranked(list(entries), indent=2)


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
