"""Budget commands."""

import click

from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.cli.formatting import format_amount, format_pct
from ledgerkit.domain import errors
from ledgerkit.domain.budget import BudgetSummaryService
from ledgerkit.domain.entities import BudgetCurrencySection
from ledgerkit.domain.errors import NotFoundError


def print_section(section: BudgetCurrencySection) -> None:
    """Print one currency section of a budget summary."""
    currency = section.currency
    click.echo(f"\n{currency.value}")
    header = f"  {'Category':<28} {'Planned':>14} {'Actual':>14} {'Remaining':>14} {'Progress':>9}"
    click.echo(header)
    click.echo("  " + "-" * (len(header) - 2))
    for row in section.rows:
        click.echo(
            f"  {row.category_name:<28} "
            f"{format_amount(row.planned_minor, currency):>14} "
            f"{format_amount(row.actual_minor, currency):>14} "
            f"{format_amount(row.remaining_minor, currency):>14} "
            f"{format_pct(row.progress_pct):>9}"
        )
    totals = section.totals
    click.echo(
        f"  {'Total':<28} "
        f"{format_amount(totals.planned_minor, currency):>14} "
        f"{format_amount(totals.actual_minor, currency):>14} "
        f"{format_amount(totals.remaining_minor, currency):>14} "
        f"{format_pct(totals.progress_pct):>9}"
    )


@click.group()
def budget_group():
    """Compare budgets with actual spending."""
    pass


@budget_group.command("show")
@click.argument("budget_id")
@click.pass_context
def show_budget(ctx, budget_id: str):
    """Show planned, actual and remaining amounts per category."""
    service = BudgetSummaryService(ctx.obj["db"])

    try:
        summary = service.get_budget_summary(budget_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Budget: {summary.budget_name} "
        f"({summary.start.isoformat()} to {summary.end.isoformat()}, {summary.budget_currency.value})"
    )
    for section in summary.sections:
        print_section(section)


@budget_group.command("progress")
@click.argument("budget_id")
@click.pass_context
def budget_progress(ctx, budget_id: str):
    """Show overall progress per currency."""
    db = ctx.obj["db"]
    service = BudgetSummaryService(db)

    try:
        budget = db.get_budget(budget_id)
        if budget is None:
            raise NotFoundError(errors.budget_not_found(budget_id))
        progress = service.budget_progress(budget)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Budget: {budget.name}")
    for currency, entry in progress.items():
        click.echo(
            f"  {currency.value:<4} "
            f"spent {format_amount(entry.actual_minor, currency)} "
            f"of {format_amount(entry.planned_minor, currency)} "
            f"({format_pct(entry.progress_pct)}), "
            f"remaining {format_amount(entry.remaining_minor, currency)}"
        )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
