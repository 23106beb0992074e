"""Monthly report commands for Invers Wealth CLI.

Handles editing, locking and deleting monthly profit/loss reports,
and the storage view of locked records.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from invers.cli.session import MONTH, console, format_currency, get_app
from invers.ledger import MONTHS
from invers.models import MonthlyReport


def _describe(month: int, report: Optional[MonthlyReport]) -> str:
    if report is None:
        return f"[dim]No report for {MONTHS[month]} yet.[/dim]"
    profit = f"+{report.profit:,.2f}" if report.profit else "-"
    loss = f"-{report.loss:,.2f}" if report.loss else "-"
    lines = [
        f"Status: {'[green]Locked[/green]' if report.locked else '[yellow]Draft[/yellow]'}",
        f"Profit: [green]{profit}[/green]",
        f"Loss:   [red]{loss}[/red]",
    ]
    if report.note:
        lines.append(f'Note:   [italic]"{report.note}"[/italic]')
    return "\n".join(lines)


def _fail(action: str, error: Exception) -> None:
    console.print(Panel(
        f"[red]Failed to {action}:[/red]\n\n{str(error)}",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


@click.group()
def report() -> None:
    """Monthly profit/loss reports.

    A report is a draft until saved. Saving locks it: a locked report
    can no longer be edited, only deleted.

    \b
    Commands:
      show    - Show a month's report
      edit    - Edit a draft report
      save    - Lock a report
      delete  - Delete a report
    """
    pass


@report.command()
@click.argument("month", type=MONTH)
def show(month: int) -> None:
    """Show a month's report."""
    try:
        app = get_app()
    except Exception as e:
        _fail("load report", e)
    console.print(Panel(
        _describe(month, app.report(month)),
        title=f"[bold]{MONTHS[month]} Report[/bold]",
        border_style="cyan",
    ))


@report.command()
@click.argument("month", type=MONTH)
@click.option("--profit", default=None, help="Profit for the month (blank to clear).")
@click.option("--loss", default=None, help="Loss for the month (blank to clear).")
@click.option("--note", default=None, help="Free text note.")
def edit(month: int, profit: Optional[str], loss: Optional[str], note: Optional[str]) -> None:
    """Edit a month's draft report.

    \b
    Examples:
      invers report edit 3 --profit 500 --loss 100
      invers report edit march --note "Held through the dip"
    """
    changes = {"profit": profit, "loss": loss, "note": note}
    changes = {field: value for field, value in changes.items() if value is not None}
    if not changes:
        console.print("[yellow]Nothing to change. Use --profit, --loss or --note.[/yellow]")
        return

    try:
        app = get_app()
        if app.reports.is_locked(month):
            console.print(f"[yellow]{MONTHS[month]} report is locked and cannot be edited.[/yellow]")
            return
        app.update_report_fields(month, changes)
    except ValueError as e:
        console.print(f"[red]Invalid value: {e}[/red]")
        raise SystemExit(1)
    except Exception as e:
        _fail("edit report", e)

    console.print(Panel(
        _describe(month, app.report(month)),
        title=f"[bold]{MONTHS[month]} Report[/bold]",
        border_style="yellow",
    ))


@report.command()
@click.argument("month", type=MONTH)
def save(month: int) -> None:
    """Save and lock a month's report."""
    try:
        app = get_app()
        locked = app.save_report(month)
    except Exception as e:
        _fail("save report", e)

    if locked:
        console.print(f"[green]✓ {MONTHS[month]} report saved and locked[/green]")
    else:
        console.print(f"[dim]{MONTHS[month]} report is already locked[/dim]")


@report.command()
@click.argument("month", type=MONTH)
@click.option("--yes", "confirm", is_flag=True, help="Skip confirmation prompt.")
def delete(month: int, confirm: bool) -> None:
    """Delete a month's report, locked or not."""
    try:
        app = get_app()
        if app.report(month) is None:
            console.print(f"[yellow]No report for {MONTHS[month]}[/yellow]")
            return
        if not confirm and not click.confirm(f"Delete the {MONTHS[month]} report?"):
            console.print("[dim]Cancelled.[/dim]")
            return
        app.delete_report(month)
    except Exception as e:
        _fail("delete report", e)

    console.print(f"[green]✓ Deleted {MONTHS[month]} report[/green]")


@click.command()
def storage() -> None:
    """Show locked monthly records and the net balance.

    Only saved (locked) reports count toward the net balance.
    """
    try:
        app = get_app()
    except Exception as e:
        _fail("load storage", e)

    balance = app.net_balance()
    console.print(Panel(
        f"[bold]{format_currency(balance.net)}[/bold]\n\n"
        f"[green]▲ {format_currency(balance.total_profit)}[/green]   "
        f"[red]▼ {format_currency(balance.total_loss)}[/red]",
        title="[bold]Net Balance[/bold]",
        border_style="magenta",
    ))

    records = app.reports.locked_reports()
    if not records:
        console.print("[dim]No locked data recorded yet.[/dim]")
        return

    table = Table(title="Monthly Records", show_header=True, header_style="bold cyan")
    table.add_column("Month", style="bold")
    table.add_column("Profit", justify="right", style="green")
    table.add_column("Loss", justify="right", style="red")
    table.add_column("Note", style="italic")
    for month, record in records:
        table.add_row(
            MONTHS[month],
            f"+{record.profit:,.2f}" if record.profit else "-",
            f"-{record.loss:,.2f}" if record.loss else "-",
            record.note or "",
        )
    console.print(table)
