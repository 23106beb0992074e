"""Planner commands for Invers Wealth CLI.

Marks invested days and shows a month's contribution grid.
"""

from datetime import date
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from invers.cli.session import MONTH, console, format_currency, get_app
from invers.ledger import MONTHS
from invers.stats import DAILY_BTC_AMOUNT, DAILY_GOLD_AMOUNT


@click.command()
@click.argument("month", type=MONTH)
@click.argument("day", type=click.IntRange(1, 31))
def mark(month: int, day: int) -> None:
    """Toggle a day as invested.

    MONTH is 1-12 or a month name, DAY is the day of month.
    Running it again on the same day clears the mark.

    \b
    Examples:
      invers mark 3 14
      invers mark march 14
    """
    try:
        app = get_app()
        invested = app.toggle_day(month, day)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    except Exception as e:
        console.print(Panel(
            f"[red]Failed to update planner:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    label = f"{MONTHS[month]} {day}"
    if invested:
        console.print(f"[green]✓ {label} marked as invested "
                      f"(₹{DAILY_BTC_AMOUNT} BTC + ₹{DAILY_GOLD_AMOUNT} gold)[/green]")
    else:
        console.print(f"[yellow]○ {label} cleared[/yellow]")
    if not app.last_save_ok:
        console.print("[yellow]Warning: could not save data, changes are not stored[/yellow]")


@click.command("month")
@click.argument("month", type=MONTH, required=False)
def show_month(month: Optional[int]) -> None:
    """Show the contribution grid for a month.

    MONTH defaults to the current month.

    \b
    Examples:
      invers month
      invers month feb
    """
    if month is None:
        month = date.today().month - 1

    try:
        app = get_app()
    except Exception as e:
        console.print(Panel(
            f"[red]Failed to load planner:[/red]\n\n{str(e)}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    table = Table(title=f"{MONTHS[month]} {app.year}", show_header=False, show_lines=True)
    for _ in range(7):
        table.add_column(justify="center", width=4)

    row = []
    for day in range(1, app.days_in_month(month) + 1):
        if app.ledger.is_contributed(month, day):
            row.append(f"[bold green]{day}✓[/bold green]")
        else:
            row.append(f"[dim]{day}[/dim]")
        if len(row) == 7:
            table.add_row(*row)
            row = []
    if row:
        table.add_row(*row, *[""] * (7 - len(row)))

    console.print(table)

    days = len(app.ledger.contributed_days(month))
    console.print(
        f"\n[bold]{days}[/bold] day(s) invested this month: "
        f"{format_currency(days * DAILY_BTC_AMOUNT)} BTC, "
        f"{format_currency(days * DAILY_GOLD_AMOUNT)} gold"
    )

    report = app.report(month)
    if report is not None:
        state = "[green]locked[/green]" if report.locked else "[yellow]draft[/yellow]"
        console.print(f"[dim]Monthly report: {state}. See 'invers report show {month + 1}'.[/dim]")
