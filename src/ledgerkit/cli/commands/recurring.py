"""Recurring definition commands."""

from datetime import date

import click

from ledgerkit.cli.date_filters import parse_cli_date
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.cli.formatting import format_money
from ledgerkit.domain.entities import SUPPORTED_CURRENCIES
from ledgerkit.domain.recurrence import DUE_HORIZON_DAYS, RecurrenceService


@click.group()
def recurring_group():
    """Inspect recurring transaction schedules."""
    pass


@recurring_group.command("due")
@click.option("--today", "today_str", help="Reference day (default: today)")
@click.option(
    "--currency",
    type=click.Choice(SUPPORTED_CURRENCIES, case_sensitive=False),
    help="Only definitions in this currency",
)
@click.pass_context
def due(ctx, today_str: str | None, currency: str | None):
    """List definitions due within the look-ahead window."""
    service = RecurrenceService(ctx.obj["db"])
    today = parse_cli_date(ctx, today_str, "date") or date.today()

    try:
        items = service.due_items(ctx.obj["workspace"], today, currency)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not items:
        click.echo(f"No recurring items due in the next {DUE_HORIZON_DAYS} days.")
        return

    for item in items:
        refs = " / ".join(name for name in (item.category_name, item.merchant_name) if name)
        line = (
            f"{item.next_run_on.isoformat()}  {item.name:<28} "
            f"{format_money(item.amount_minor, item.currency):>18}  {item.kind.value:<7}"
        )
        click.echo(f"{line}  {refs}" if refs else line)


@recurring_group.command("next")
@click.argument("definition_id")
@click.option("--from", "from_str", help="Compute the occurrence after this day (default: stored next run)")
@click.pass_context
def next_run(ctx, definition_id: str, from_str: str | None):
    """Show the occurrence that follows the current one."""
    service = RecurrenceService(ctx.obj["db"])
    from_date = parse_cli_date(ctx, from_str, "from date")

    try:
        definition = service.get_definition(definition_id)
        click.echo(service.next_run_on(definition, from_date).isoformat())
    except ValueError as e:
        handle_domain_error(ctx, e)


@recurring_group.command("upcoming")
@click.argument("definition_id")
@click.option("--count", type=int, default=5, help="Number of dates to show (default: 5)")
@click.pass_context
def upcoming(ctx, definition_id: str, count: int):
    """Preview the next occurrence dates, starting with the stored next run."""
    service = RecurrenceService(ctx.obj["db"])

    try:
        definition = service.get_definition(definition_id)
        dates = service.upcoming(definition, count)
    except ValueError as e:
        handle_domain_error(ctx, e)

    for day in dates:
        click.echo(day.isoformat())


@recurring_group.command("pending")
@click.argument("definition_id")
@click.option("--today", "today_str", help="Reference day (default: today)")
@click.pass_context
def pending(ctx, definition_id: str, today_str: str | None):
    """List occurrences up to today that have not been posted yet."""
    service = RecurrenceService(ctx.obj["db"])
    today = parse_cli_date(ctx, today_str, "date") or date.today()

    try:
        definition = service.get_definition(definition_id)
        run = service.pending_occurrences(definition, today)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not run.occurrences:
        click.echo("No pending occurrences.")
    for day in run.occurrences:
        click.echo(day.isoformat())
    click.echo(f"Next run: {run.next_run_on.isoformat()}")


def register_commands(cli):
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
