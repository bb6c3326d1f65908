"""Ranked breakdown command."""

import click

from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.cli.formatting import format_amount
from ledgerkit.cli.scope_options import scope_from_options, scope_options
from ledgerkit.domain.aggregation import DEFAULT_TOP_LIMIT, AggregationService
from ledgerkit.domain.entities import Dimension, RankedEntry, TransactionKind


def print_ranked(entries: list[RankedEntry], indent: int = 0) -> None:
    """Print ranked entries as a numbered table."""
    prefix = " " * indent
    for rank, entry in enumerate(entries, start=1):
        amount = format_amount(entry.amount_minor, entry.currency)
        click.echo(
            f"{prefix}{rank:>2}. {entry.name:<32} {amount:>16} {entry.currency.value:<4} ({entry.count})"
        )


@click.command("top")
@scope_options
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in TransactionKind], case_sensitive=False),
    default=TransactionKind.EXPENSE.value,
    help="Transaction kind to rank (default: expense)",
)
@click.option(
    "--by",
    "dimension",
    type=click.Choice([dimension.slug for dimension in Dimension], case_sensitive=False),
    default=Dimension.CATEGORY.slug,
    help="Dimension to group by (default: category)",
)
@click.option("--limit", type=int, default=DEFAULT_TOP_LIMIT, help=f"Number of entries (default: {DEFAULT_TOP_LIMIT})")
@click.pass_context
def top(ctx, kind: str, dimension: str, limit: int, **options):
    """Rank categories, merchants or category groups by amount."""
    service = AggregationService(ctx.obj["db"])

    try:
        scope = scope_from_options(ctx, options)
        entries = service.top_n(scope, TransactionKind(kind.lower()), Dimension.from_slug(dimension.lower()), limit)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No transactions found.")
        return

    click.echo(f"Top {dimension.lower()} by {kind.lower()}:")
    print_ranked(entries, indent=2)


def register_commands(cli):
    """Register top command with main CLI."""
    cli.add_command(top)
